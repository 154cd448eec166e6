"""Settings do servidor HTTP (uvicorn) e CORS."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from config.settings.base.sources import (
    env_int,
    env_list,
    env_str,
    get_config_section,
)

DEFAULT_CORS_ORIGINS: tuple[str, ...] = ("http://localhost:5000",)


@dataclass(frozen=True)
class ServerSettings:
    """Configurações do servidor.

    Attributes:
        host: Interface de escuta
        port: Porta TCP
        shutdown_timeout_seconds: Prazo do graceful shutdown
        cors_allowed_origins: Origens aceitas pelo CORS
    """

    host: str = "0.0.0.0"
    port: int = 8080
    shutdown_timeout_seconds: int = 10
    cors_allowed_origins: tuple[str, ...] = DEFAULT_CORS_ORIGINS

    def validate(self) -> list[str]:
        errors: list[str] = []

        if not self.host:
            errors.append("SERVER_HOST não pode ser vazio")

        if not 1 <= self.port <= 65535:
            errors.append("SERVER_PORT deve estar entre 1 e 65535")

        if self.shutdown_timeout_seconds < 1:
            errors.append("SERVER_SHUTDOWN_TIMEOUT_SECONDS deve ser >= 1")

        if not self.cors_allowed_origins:
            errors.append("CORS_ALLOWED_ORIGINS deve ter ao menos uma origem")

        return errors


def _load_from_env() -> ServerSettings:
    """Carrega ServerSettings das seções server/cors do YAML e de env vars."""
    server = get_config_section("server")
    cors = get_config_section("cors")
    return ServerSettings(
        host=env_str("SERVER_HOST", server.get("host", "0.0.0.0")),
        port=env_int("SERVER_PORT", server.get("port", 8080)),
        shutdown_timeout_seconds=env_int(
            "SERVER_SHUTDOWN_TIMEOUT_SECONDS",
            server.get("shutdown_timeout_seconds", 10),
        ),
        cors_allowed_origins=env_list(
            "CORS_ALLOWED_ORIGINS",
            cors.get("allowed_origins", DEFAULT_CORS_ORIGINS),
        ),
    )


@lru_cache(maxsize=1)
def get_server_settings() -> ServerSettings:
    """Retorna instância cacheada de ServerSettings."""
    return _load_from_env()
