"""Exceções de domínio para falhas de infraestrutura."""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura (rede, upstream)."""


class UpstreamError(InfrastructureError):
    """Falha ao falar com o upstream, sem dados sensíveis na mensagem.

    A causa original fica em `__cause__` (via `raise ... from exc`) e é
    inspecionada pelo mapeador de erros.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        detail = str(cause) if cause is not None else ""
        text = f"{message}: {detail}" if detail else message
        super().__init__(text)
        self.message = message
        if cause is not None:
            self.__cause__ = cause
