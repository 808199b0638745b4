"""Runtime configuration for callback contract enforcement."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional, Union

_LEVEL_NAMES = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(slots=True)
class ContractsConfig:
    """Ambient settings shared by every handle and operation."""

    log_level: str = "WARNING"
    trace_invocations: bool = False  # DEBUG line per callback invocation
    logger_name: str = "callback contracts"

    def __post_init__(self) -> None:
        level = str(self.log_level).strip().upper()
        if level not in _LEVEL_NAMES:
            raise ValueError(
                f"Unsupported log level {self.log_level!r}; expected one of {', '.join(_LEVEL_NAMES)}."
            )
        self.log_level = level
        if not self.logger_name or not str(self.logger_name).strip():
            raise ValueError("logger_name must be a non-empty string.")
        self.trace_invocations = _coerce_bool(self.trace_invocations)

    @property
    def level(self) -> int:
        return logging.getLevelName(self.log_level)

    def as_dict(self) -> dict[str, Any]:
        return {
            "log_level": self.log_level,
            "trace_invocations": self.trace_invocations,
            "logger_name": self.logger_name,
        }


def build_contracts_config(
    overrides: Optional[Union[Mapping[str, Any], ContractsConfig]] = None,
    **extra: Any,
) -> ContractsConfig:
    """Build a :class:`ContractsConfig` from a mapping, an instance, or keywords.

    Unknown keys are rejected so that typos in YAML files surface immediately.
    """

    if isinstance(overrides, ContractsConfig):
        payload = overrides.as_dict()
    elif isinstance(overrides, Mapping):
        payload = dict(overrides)
    elif overrides is None:
        payload = {}
    else:
        raise TypeError("overrides must be a Mapping, ContractsConfig, or None.")
    payload.update(extra)
    known = {item.name for item in fields(ContractsConfig)}
    unknown = sorted(set(payload) - known)
    if unknown:
        raise ValueError(f"Unknown contracts config keys: {', '.join(unknown)}.")
    return ContractsConfig(**payload)


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off", ""}:
            return False
    raise ValueError(f"Cannot interpret {value!r} as a boolean flag.")


__all__ = ["ContractsConfig", "build_contracts_config"]
