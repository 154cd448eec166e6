"""Fontes de configuração: arquivo YAML opcional + variáveis de ambiente.

Precedência (maior primeiro):
1. Variável de ambiente (ex: GREEN_API_RETRY_MAX_RETRIES)
2. Chave no YAML apontado por GATEWAY_CONFIG_FILE (ex: green_api.retry.max_retries)
3. Default do dataclass de settings

O nome da env var é o caminho da chave no YAML em maiúsculas, com "_"
no lugar de ".".
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

CONFIG_FILE_ENV = "GATEWAY_CONFIG_FILE"


@lru_cache(maxsize=1)
def load_config_file(path: str | None = None) -> Mapping[str, Any]:
    """Lê o YAML de configuração (vazio se nenhum arquivo configurado).

    Args:
        path: Caminho explícito. Se None, usa GATEWAY_CONFIG_FILE.

    Raises:
        FileNotFoundError: Arquivo configurado não existe.
        ValueError: Raiz do YAML não é um mapeamento.
    """
    config_path = path or os.getenv(CONFIG_FILE_ENV, "")
    if not config_path:
        return {}

    with Path(config_path).open(encoding="utf-8") as handle:
        data = yaml.safe_load(handle)

    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ValueError(f"{config_path}: raiz do YAML deve ser um mapeamento")
    return data


def get_config_section(*keys: str) -> Mapping[str, Any]:
    """Retorna uma seção aninhada do YAML ({} se ausente).

    Exemplo: get_config_section("green_api", "retry")
    """
    section: Any = load_config_file()
    for key in keys:
        section = section.get(key) if isinstance(section, Mapping) else None
        if section is None:
            return {}
    return section if isinstance(section, Mapping) else {}


def env_str(name: str, default: Any) -> str:
    value = os.getenv(name)
    if value is None or value == "":
        return "" if default is None else str(default)
    return value


def env_int(name: str, default: Any) -> int:
    return int(env_str(name, default))


def env_float(name: str, default: Any) -> float:
    return float(env_str(name, default))


def env_list(name: str, default: Any) -> tuple[str, ...]:
    """Lista separada por vírgulas na env var, ou lista YAML."""
    value = os.getenv(name)
    if value:
        items: Any = value.split(",")
    elif isinstance(default, str):
        items = default.split(",")
    else:
        items = default or ()
    return tuple(str(item).strip() for item in items if str(item).strip())
