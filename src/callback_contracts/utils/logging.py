"""Logging setup for the callback contract loggers."""

from __future__ import annotations

import logging
from logging import Logger
from typing import TYPE_CHECKING, Iterable, Optional, Union

if TYPE_CHECKING:
    from ..config.schemas import ContractsConfig


def configure_logging(
    level: Optional[Union[int, str]] = None,
    *,
    name: Optional[str] = None,
    propagate: bool = False,
    extra_loggers: Optional[Iterable[str]] = None,
    config: Optional["ContractsConfig"] = None,
) -> Logger:
    """Configure and return the package logger, optionally binding child loggers.

    Parameters
    ----------
    level:
        Logging verbosity. Defaults to ``config.log_level``.
    name:
        Logical logger namespace. Defaults to ``config.logger_name``.
    config:
        Source of defaults; the active configuration when omitted.
    """

    if config is None and (level is None or name is None):
        from ..config.loader import get_config

        config = get_config()
    resolved_level = level if level is not None else config.level  # type: ignore[union-attr]
    if isinstance(resolved_level, str):
        resolved_level = logging.getLevelName(resolved_level.upper())
    resolved_name = name if name is not None else config.logger_name  # type: ignore[union-attr]

    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    handler.setFormatter(formatter)

    def _attach(target: Logger) -> None:
        if not any(isinstance(existing, logging.StreamHandler) for existing in target.handlers):
            target.addHandler(handler)
        target.setLevel(resolved_level)
        target.propagate = propagate

    logger = logging.getLogger(resolved_name)
    _attach(logger)

    if extra_loggers:
        for logger_name in extra_loggers:
            _attach(logging.getLogger(logger_name))

    return logger


__all__ = ["configure_logging"]
