"""Erro terminal devolvido ao cliente do gateway."""

from __future__ import annotations

from typing import Any

VALIDATION_ERROR = "validation_error"
UPSTREAM_ERROR = "upstream_error"
BAD_REQUEST = "bad_request"
INTERNAL_ERROR = "internal_error"


class ApiError(Exception):
    """Erro com status HTTP, código da taxonomia e detalhes opcionais.

    Nunca é re-tentado depois de construído.
    """

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details

    def to_payload(self) -> dict[str, Any]:
        """Serializa no envelope `{"error": {code, message, details?}}`."""
        error: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details is not None:
            error["details"] = self.details
        return {"error": error}

    def __repr__(self) -> str:
        return f"ApiError(status_code={self.status_code}, code={self.code!r}, message={self.message!r})"
