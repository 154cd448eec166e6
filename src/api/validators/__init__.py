"""Validators — validação de campos antes de qualquer chamada externa.

Estrutura:
- green_api/: campos dos requests do gateway Green-API
"""

__all__: list[str] = []
