# path: unitrack/core/api/errors.py
from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse

from unitrack.app_logging import get_logger
from unitrack.core.exceptions import ServerError, UnitrackError

log = get_logger("api.errors")


def _body(message: str, details: Any = None) -> dict[str, Any]:
    body: dict[str, Any] = {"error": message}
    if details:
        body["details"] = details
    return body


async def unitrack_error_handler(request: Request, exc: UnitrackError) -> ORJSONResponse:
    log.info(
        {
            "event": "request_rejected",
            "path": request.url.path,
            "method": request.method,
            "error": type(exc).__name__,
            "status": exc.status_code,
        }
    )
    return ORJSONResponse(_body(exc.message, exc.details), status_code=exc.status_code)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> ORJSONResponse:
    """Ошибки pydantic по телу/query отдаём в том же формате, что и доменные (400)."""
    errors = [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")}
        for e in exc.errors()
    ]
    log.info({"event": "request_invalid", "path": request.url.path, "errors": errors})
    return ORJSONResponse(
        _body("Validation failed", {"errors": errors}),
        status_code=status.HTTP_400_BAD_REQUEST,
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> ORJSONResponse:
    """
    Всё неожиданное (БД недоступна и т.п.): пишем трейс в лог, клиенту — одинаковый
    непрозрачный ответ, без деталей реализации.
    """
    log.error(
        {"event": "unhandled_error", "path": request.url.path, "method": request.method, "error": repr(exc)},
        exc_info=exc,
    )
    return ORJSONResponse(_body(ServerError.message), status_code=ServerError.status_code)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(UnitrackError, unitrack_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)
