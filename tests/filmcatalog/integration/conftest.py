import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient
from protean.integrations.fastapi import register_exception_handlers

from filmcatalog.api import (
    moderation_router,
    register_error_handlers,
    review_router,
    watch_router,
    watchlist_router,
)


@pytest.fixture()
def client():
    from filmcatalog.domain import filmcatalog

    app = FastAPI()

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        with filmcatalog.domain_context():
            return await call_next(request)

    app.include_router(watch_router)
    app.include_router(review_router)
    app.include_router(moderation_router)
    app.include_router(watchlist_router)
    register_exception_handlers(app)
    register_error_handlers(app)
    return TestClient(app)
