"""YAML and environment loading for :class:`ContractsConfig`."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from ..utils.env import ENV_PREFIX, read_env
from .schemas import ContractsConfig, build_contracts_config

CONFIG_PATH_ENV = f"{ENV_PREFIX}CONFIG"
LOG_LEVEL_ENV = f"{ENV_PREFIX}LOG_LEVEL"
TRACE_ENV = f"{ENV_PREFIX}TRACE"

_ACTIVE: Optional[ContractsConfig] = None


def load_contracts_config(path: Optional[Union[str, Path]] = None) -> ContractsConfig:
    """Load configuration from YAML, then apply environment overrides.

    ``path`` falls back to ``$CALLBACK_CONTRACTS_CONFIG``. When neither is set
    the defaults are used. ``CALLBACK_CONTRACTS_LOG_LEVEL`` and
    ``CALLBACK_CONTRACTS_TRACE`` take precedence over file values.
    """

    payload: Dict[str, Any] = {}
    source = path if path is not None else read_env("config")
    if source:
        config_path = Path(source)
        if not config_path.exists():
            raise ValueError(f"Contracts config file not found: {config_path}")
        with config_path.open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Contracts config {config_path} must contain a mapping at top level.")
        section = loaded.get("callback_contracts", loaded)
        if not isinstance(section, dict):
            raise ValueError("The 'callback_contracts' section must be a mapping.")
        payload.update(section)
    level = read_env("log_level")
    if level:
        payload["log_level"] = level
    trace = read_env("trace")
    if trace is not None:
        payload["trace_invocations"] = trace
    return build_contracts_config(payload)


def get_config() -> ContractsConfig:
    """Return the active configuration, loading it on first use."""

    global _ACTIVE
    if _ACTIVE is None:
        _ACTIVE = load_contracts_config()
    return _ACTIVE


def tracing_enabled() -> bool:
    """Whether an installed configuration asks for per-invocation tracing.

    Never loads configuration: until :func:`get_config` or :func:`set_config`
    installs one, tracing is off.
    """

    return _ACTIVE is not None and _ACTIVE.trace_invocations


def set_config(config: Optional[ContractsConfig]) -> None:
    """Install ``config`` as the active configuration; ``None`` forces a reload."""

    global _ACTIVE
    _ACTIVE = config


__all__ = [
    "CONFIG_PATH_ENV",
    "LOG_LEVEL_ENV",
    "TRACE_ENV",
    "get_config",
    "load_contracts_config",
    "set_config",
    "tracing_enabled",
]
