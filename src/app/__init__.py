"""App — coração do gateway: orquestração, casos de uso e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- use_cases/: casos de uso (normaliza → chama upstream → mapeia erros)
- services/: serviços de aplicação puros (mapeamento de erros)
- infra/: implementações concretas (circuit breaker)
- protocols/: contratos/interfaces
- domain/: erros terminais devolvidos ao cliente
- observability/: correlation_id e métricas via logs

Padrão: app executa; api adapta; config parametriza; utils apoia.
"""
