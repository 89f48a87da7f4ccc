import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from homebite.errors import Internal, ServiceError, ValidationError

log = logging.getLogger(__name__)


def _describe(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = ".".join(str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path"))
    msg = first.get("msg", "invalid value")
    return f"{field}: {msg}" if field else msg


def register_exception_handlers(app: FastAPI) -> None:
    """Render every failure, expected or not, as {"detail": {"kind", "code", "message"}}."""

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.to_dict()})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        err = ValidationError(_describe(exc))
        return JSONResponse(status_code=err.status_code, content={"detail": err.to_dict()})

    @app.exception_handler(SQLAlchemyError)
    async def storage_error_handler(request: Request, exc: SQLAlchemyError):
        log.exception("storage failure on %s %s", request.method, request.url.path)
        err = Internal("Storage is temporarily unavailable")
        return JSONResponse(status_code=err.status_code, content={"detail": err.to_dict()})

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        log.exception("unhandled error on %s %s", request.method, request.url.path)
        err = Internal()
        return JSONResponse(status_code=err.status_code, content={"detail": err.to_dict()})
