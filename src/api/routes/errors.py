"""Serialização de erros no envelope `{"error": {code, message, details?}}`.

Handlers registrados no app:
- ApiError → status e código já decididos pelo use case
- RequestValidationError → 400 bad_request (JSON malformado ou tipo errado)
- Exception → 500 internal_error (sem detalhes internos); o RequestIdMiddleware
  captura antes para manter X-Request-Id e correlation_id no log
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.domain.api_error import BAD_REQUEST, INTERNAL_ERROR, ApiError

if TYPE_CHECKING:
    from fastapi import FastAPI, Request

logger = logging.getLogger(__name__)

INVALID_JSON_MESSAGE = "invalid JSON payload"


def error_response(error: ApiError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content=error.to_payload())


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return error_response(exc)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Body ilegível ou com tipos errados (ex: número no lugar de string)."""
    details = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg', '')}"
        for error in exc.errors()
    )
    logger.info(
        "request_body_rejected",
        extra={"route": request.url.path, "error_count": len(exc.errors())},
    )
    return error_response(
        ApiError(
            status_code=400,
            code=BAD_REQUEST,
            message=INVALID_JSON_MESSAGE,
            details=details or None,
        )
    )


def internal_error_response() -> JSONResponse:
    """500 internal_error sem detalhes internos."""
    return error_response(
        ApiError(status_code=500, code=INTERNAL_ERROR, message="internal server error")
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Último recurso para erros fora do RequestIdMiddleware."""
    logger.exception(
        "unhandled_error",
        extra={"route": request.url.path, "error_type": type(exc).__name__},
    )
    return internal_error_response()


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
