"""Configuration helpers for callback contract enforcement."""

from .schemas import ContractsConfig, build_contracts_config
from .loader import get_config, load_contracts_config, set_config

__all__ = [
    "ContractsConfig",
    "build_contracts_config",
    "get_config",
    "load_contracts_config",
    "set_config",
]
