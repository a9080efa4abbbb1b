"""HTTP mapping for the film catalog error kinds.

Registered after Protean's own handlers. Starlette resolves handlers along the
exception's MRO, so each subclass below gets its own status code and any other
``ValidationError`` stays a 400. A failed optimistic version check reaches the
caller as a 409, like any other conflict.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ExpectedVersionError, ValidationError

from filmcatalog.shared.errors import (
    ConflictError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    PreconditionFailedError,
)

ERROR_STATUS = {
    ValidationError: 400,
    NotFoundError: 404,
    ConflictError: 409,
    ExpectedVersionError: 409,
    PreconditionFailedError: 422,
    ForbiddenError: 403,
    InvalidStateError: 409,
}


def error_messages(exc: Exception):
    messages = getattr(exc, "messages", None)
    if messages is None:
        return {"version": [str(exc)]}
    return messages


def register_error_handlers(app: FastAPI) -> None:
    for exc_class, status_code in ERROR_STATUS.items():

        async def handler(request: Request, exc: Exception, status_code=status_code) -> JSONResponse:
            return JSONResponse(status_code=status_code, content={"error": error_messages(exc)})

        app.add_exception_handler(exc_class, handler)
