"""API — camada de borda do gateway.

Responsabilidades:
- Receber requests JSON simplificados
- Validar e normalizar campos antes de qualquer chamada de rede
- Chamar o upstream (Green-API) com retry e circuit breaker
- Devolver a resposta do upstream sem modificação

Subpastas:
- connectors/: cliente HTTP do upstream
- normalizers/: canonicalização de chatId e fileName
- validators/: validação estrutural de campos
- middleware/: request id e log de requests
- routes/: endpoints HTTP (gateway, health, docs)

NÃO PODE conter: orquestração de use cases, mapeamento de erros.
"""
