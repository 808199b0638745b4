"""Small invocation combinators for each capability tier."""

from __future__ import annotations

from typing import Any, Optional, TypeVar

from ..contracts.handles import Callback, as_handle
from ..contracts.tiers import CapabilityTier

T = TypeVar("T")
R = TypeVar("R")


def repeat(action: Callback[R], times: int) -> Optional[R]:
    """Invoke a mutating ``action`` exactly ``times`` times; return the last result."""

    if times < 0:
        raise ValueError("times must be non-negative.")
    handle = as_handle(action, CapabilityTier.MUTATING)
    result: Optional[R] = None
    for _ in range(times):
        result = handle()
    return result


def transform(value: T, transformer: Callback[R]) -> R:
    """Apply a read-only ``transformer`` to ``value``."""

    return as_handle(transformer, CapabilityTier.READ_ONLY)(value)


def call_once(callback: Callback[R], *args: Any, **kwargs: Any) -> R:
    """Invoke ``callback`` under the consuming contract and return its result."""

    return as_handle(callback, CapabilityTier.CONSUMING)(*args, **kwargs)


__all__ = ["call_once", "repeat", "transform"]
