from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from app.core.logger import logger


class BookingAPIError(Exception):
    """Base error carrying an HTTP status and a message that is safe to show clients."""
    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(BookingAPIError):
    status_code = 400


class NotFoundError(BookingAPIError):
    status_code = 404


class PersistenceError(BookingAPIError):
    """
    Raised by the stores when the database call fails.
    The driver error is kept as __cause__ for logging; `message` stays generic.
    """
    status_code = 500

    def __init__(self, message: str = "Database operation failed."):
        super().__init__(message)


def _error_body(message: str, **extra: Any) -> Dict[str, Any]:
    body = {"error": message}
    body.update(extra)
    return body


def register_error_handlers(app: FastAPI) -> None:

    @app.exception_handler(BookingAPIError)
    async def booking_api_error_handler(request: Request, exc: BookingAPIError):
        if isinstance(exc, PersistenceError):
            logger.opt(exception=exc).error(f"❌ DB Error ({request.method} {request.url.path}): {exc.__cause__ or exc}")
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc.message))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.info(f"⚠️ Malformed request body on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=400,
            content=_error_body("Invalid request body.", detail=jsonable_encoder(exc.errors())),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"🔥 UNHANDLED ERROR: {str(exc)}", exc_info=True)
        return JSONResponse(status_code=500, content=_error_body("Internal Server Error"))
