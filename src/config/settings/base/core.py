"""Settings base do gateway.

Configurações comuns: ambiente, nome do serviço e nível de log.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

from config.logging.config import DEFAULT_SERVICE_NAME, VALID_LOG_LEVELS
from config.settings.base.sources import env_str, get_config_section

Environment = Literal["development", "staging", "production"]


@dataclass(frozen=True)
class BaseSettings:
    """Configurações base do sistema.

    Attributes:
        environment: Ambiente de execução (development|staging|production)
        service_name: Nome do serviço para logs
        log_level: Nível do logger raiz
    """

    environment: Environment = "development"
    service_name: str = DEFAULT_SERVICE_NAME
    log_level: str = "INFO"

    @property
    def is_strict(self) -> bool:
        """Ambientes onde configuração inválida impede o boot."""
        return self.environment in ("staging", "production")

    def validate(self) -> list[str]:
        """Valida configurações base.

        Returns:
            Lista de erros (vazia = OK).
        """
        errors: list[str] = []

        valid_envs = {"development", "staging", "production"}
        if self.environment not in valid_envs:
            errors.append(f"ENVIRONMENT inválido: {self.environment}")

        if not self.service_name:
            errors.append("SERVICE_NAME não pode ser vazio")

        if self.log_level not in VALID_LOG_LEVELS:
            errors.append(f"LOG_LEVEL inválido: {self.log_level}")

        return errors


def _parse_environment(env_str_value: str) -> Environment:
    """Converte string de ambiente para tipo Environment."""
    env_lower = env_str_value.lower()
    if env_lower in ("production", "prod"):
        return "production"
    if env_lower in ("staging", "stage"):
        return "staging"
    return "development"


def _parse_log_level(raw: str) -> str:
    level = raw.strip().upper()
    # YAML herdado usa "warn"
    return "WARNING" if level == "WARN" else level


def _load_base_from_env() -> BaseSettings:
    """Carrega BaseSettings do YAML (seção logging) e de variáveis de ambiente."""
    logging_section = get_config_section("logging")
    return BaseSettings(
        environment=_parse_environment(env_str("ENVIRONMENT", "development")),
        service_name=env_str("SERVICE_NAME", DEFAULT_SERVICE_NAME),
        log_level=_parse_log_level(
            env_str("LOG_LEVEL", logging_section.get("level", "INFO"))
        ),
    )


@lru_cache(maxsize=1)
def get_base_settings() -> BaseSettings:
    """Retorna instância cacheada de BaseSettings."""
    return _load_base_from_env()
