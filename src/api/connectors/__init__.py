"""Connectors — adapters de borda para APIs externas.

Estrutura:
- green_api/: cliente HTTP da Green-API (retry + circuit breaker)
"""

__all__: list[str] = []
