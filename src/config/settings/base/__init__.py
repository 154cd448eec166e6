"""Agregador de settings base.

Re-exporta settings base e helpers de fontes para uso externo.
"""

from __future__ import annotations

from config.settings.base.core import (
    DEFAULT_SERVICE_NAME,
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.base.sources import (
    CONFIG_FILE_ENV,
    get_config_section,
    load_config_file,
)

__all__ = [
    "CONFIG_FILE_ENV",
    "DEFAULT_SERVICE_NAME",
    "BaseSettings",
    "Environment",
    "get_base_settings",
    "get_config_section",
    "load_config_file",
]
