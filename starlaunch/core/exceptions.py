import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

# Body-validation messages for routes that word them differently.
VALIDATION_MESSAGES = {
    "/projects/create": "Validation failed",
}
DEFAULT_VALIDATION_MESSAGE = "Invalid request data"


def validation_message(path: str) -> str:
    for suffix, message in VALIDATION_MESSAGES.items():
        if path.endswith(suffix):
            return message
    return DEFAULT_VALIDATION_MESSAGE


class AppException(Exception):
    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ValidationFailed(AppException):
    def __init__(self, message: str, details: list[Any] | None = None):
        super().__init__(message, status_code=400)
        self.details = details


class NotFoundError(AppException):
    def __init__(self, message: str = "Not found"):
        super().__init__(message, status_code=404)


class ConflictError(AppException):
    def __init__(self, message: str = "Already exists"):
        super().__init__(message, status_code=409)


class ContractsNotDeployedError(AppException):
    def __init__(self, message: str = "Contracts not yet deployed. Please deploy Soroban contracts first."):
        super().__init__(message, status_code=501)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppException)
    async def _app_exception_handler(_: Request, exc: AppException):
        content: dict[str, Any] = {"error": exc.message}
        details = getattr(exc, "details", None)
        if details is not None:
            content["details"] = jsonable_encoder(details)
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(RequestValidationError)
    async def _request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"error": validation_message(request.url.path), "details": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"error": str(exc) or "Internal server error"},
        )
