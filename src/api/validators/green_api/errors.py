"""Reexport do erro de validação canônico para a camada api/.

O contrato reside em app/protocols/validator.py.
"""

from __future__ import annotations

from app.protocols.validator import ValidationError

__all__ = ["ValidationError"]
