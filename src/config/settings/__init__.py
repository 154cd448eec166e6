"""Agregador de settings do gateway.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    CONFIG_FILE_ENV,
    DEFAULT_SERVICE_NAME,
    BaseSettings,
    Environment,
    get_base_settings,
    load_config_file,
)

# Upstream settings
from config.settings.green_api import (
    GREEN_API_BASE_URL,
    CircuitBreakerSettings,
    GreenApiSettings,
    RetrySettings,
    get_green_api_settings,
)

# Server settings
from config.settings.server import ServerSettings, get_server_settings


def clear_settings_cache() -> None:
    """Descarta settings cacheadas (recarrega YAML e env na próxima leitura)."""
    load_config_file.cache_clear()
    get_base_settings.cache_clear()
    get_server_settings.cache_clear()
    get_green_api_settings.cache_clear()


__all__ = [
    # Constants
    "CONFIG_FILE_ENV",
    "DEFAULT_SERVICE_NAME",
    "GREEN_API_BASE_URL",
    # Base
    "BaseSettings",
    # Upstream
    "CircuitBreakerSettings",
    "Environment",
    "GreenApiSettings",
    "RetrySettings",
    # Server
    "ServerSettings",
    "clear_settings_cache",
    "get_base_settings",
    "get_green_api_settings",
    "get_server_settings",
]
