"""Middleware de X-Request-Id + log de acesso.

Para cada request:
1. Lê X-Request-Id (sem espaços nas bordas) ou gera UUID4
2. Define o correlation_id do contexto (aparece em todos os logs)
3. Devolve o mesmo valor no header X-Request-Id da resposta, inclusive em 500
4. Emite `http_request` com método, rota, status e latência
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware

from api.routes.errors import internal_error_response
from app.observability import reset_correlation_id, set_correlation_id
from app.observability.correlation import REQUEST_ID_HEADER, get_correlation_id

if TYPE_CHECKING:
    from starlette.middleware.base import RequestResponseEndpoint
    from starlette.requests import Request
    from starlette.responses import Response

logger = logging.getLogger(__name__)


def _route_path(request: Request) -> str:
    # Template da rota quando resolvida (ex: /api/v1/send-message)
    path = request.url.path
    route_path = getattr(request.scope.get("route"), "path", None)
    if not route_path:
        return path
    root_path = request.scope.get("root_path", "")
    if root_path and not route_path.startswith(root_path):
        route_path = f"{root_path}{route_path}"
    # Template sem o prefixo do router incluído: usa o path real
    if route_path.count("/") != path.count("/"):
        return path
    return route_path


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Propaga X-Request-Id e registra cada request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        token = set_correlation_id(request.headers.get(REQUEST_ID_HEADER))
        request_id = get_correlation_id()
        started = time.perf_counter()
        status_code = 500
        try:
            try:
                response = await call_next(request)
            except Exception as exc:
                logger.exception(
                    "unhandled_error",
                    extra={"route": _route_path(request), "error_type": type(exc).__name__},
                )
                response = internal_error_response()
            status_code = response.status_code
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            logger.info(
                "http_request",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "route": _route_path(request),
                    "status": status_code,
                    "latency_ms": round((time.perf_counter() - started) * 1000, 2),
                },
            )
            reset_correlation_id(token)
