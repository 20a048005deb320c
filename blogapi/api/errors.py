# blogapi/api/errors.py
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from blogapi.core.exceptions import (
    AppException,
    ConflictError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from blogapi.core.logger import logger
from blogapi.core.settings import settings

# Conflictos de slug -> 400, igual que los errores de validación
STATUS_BY_ERROR = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    ConflictError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_body(message: str, errors=None, error=None) -> dict:
    body = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    if error is not None and settings.debug:
        body["error"] = error
    return body


def _field_message(err: dict) -> str:
    loc = ".".join(str(part) for part in err.get("loc", ()) if part not in ("body", "query"))
    return f"{loc}: {err.get('msg')}" if loc else str(err.get("msg"))


def register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException):
        code = next(
            (c for cls, c in STATUS_BY_ERROR.items() if isinstance(exc, cls)),
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
        if code >= 500:
            logger.error("%s on %s %s", type(exc).__name__, request.method, request.url.path, exc_info=exc)
            return JSONResponse(
                status_code=code,
                content=error_body("Internal server error", error=exc.message),
            )
        return JSONResponse(status_code=code, content=error_body(exc.message, exc.errors))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body(
                "Validation failed",
                [_field_message(err) for err in exc.errors()],
            ),
        )

    # ------------------------------------------------------------------
    # Global exception handler
    # ------------------------------------------------------------------
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error("Unhandled error", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body("Internal server error", error=str(exc)),
        )
