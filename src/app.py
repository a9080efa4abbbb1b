"""Film Catalog FastAPI application.

Processes commands synchronously via HTTP. Every request runs inside the
filmcatalog domain context.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied (e.g. "production"
# switches the default database to PostgreSQL).
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from filmcatalog.domain import filmcatalog  # noqa: E402
from filmcatalog.moderation.policy import auto_hide_threshold
from filmcatalog.utils.logging import add_context, clear_context

filmcatalog.init()

_DOMAIN_PREFIXES = ("/users", "/reviews", "/moderation", "/watchlists")


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Film Catalog API",
    description="Watched movies, reviews, moderation and watchlists",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the filmcatalog domain context and bind request details to log lines."""
    if request.url.path.startswith(_DOMAIN_PREFIXES):
        add_context(method=request.method, path=request.url.path)
        try:
            with filmcatalog.domain_context():
                response = await call_next(request)
        finally:
            clear_context()
        return response
    # Health check, docs, etc.
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers and error mapping
# ---------------------------------------------------------------------------
from filmcatalog.api import (  # noqa: E402
    moderation_router,
    register_error_handlers,
    review_router,
    watch_router,
    watchlist_router,
)

app.include_router(watch_router)
app.include_router(review_router)
app.include_router(moderation_router)
app.include_router(watchlist_router)

register_exception_handlers(app)
register_error_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    with filmcatalog.domain_context():
        threshold = auto_hide_threshold()
    return JSONResponse(
        content={
            "status": "ok",
            "domain": {"name": filmcatalog.name},
            "moderation": {"auto_hide_threshold": threshold},
        }
    )
