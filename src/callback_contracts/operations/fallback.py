"""Lazy fallbacks for optional values and success/failure results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterable, List, Optional, TypeVar, Union

from ..contracts.handles import Callback, as_handle
from ..contracts.tiers import CapabilityTier

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success branch of a :data:`Result`."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failure branch of a :data:`Result`, carrying the cause."""

    error: E

    @property
    def is_ok(self) -> bool:
        return False


Result = Union[Ok[T], Err[E]]


def resolve_option(value: Optional[T], fallback: Callback[T]) -> T:
    """Return ``value`` unless it is ``None``; only then call ``fallback`` once."""

    if value is not None:
        return value
    return as_handle(fallback, CapabilityTier.CONSUMING)()


def resolve_result(value: Result[T, E], fallback: Callback[T]) -> T:
    """Return the success value, or ``fallback(error)`` on the failure branch."""

    if isinstance(value, Ok):
        return value.value
    if isinstance(value, Err):
        return as_handle(fallback, CapabilityTier.CONSUMING)(value.error)
    raise TypeError(f"resolve_result expects Ok or Err, got {type(value).__name__}.")


def resolve_each(values: Iterable[Optional[T]], fallback: Callback[T]) -> List[T]:
    """Resolve a stream of optionals, calling ``fallback`` once per missing entry.

    Because the fallback may run several times it must satisfy the mutating
    tier; calls happen in input order, so stateful fallbacks see a
    deterministic sequence.
    """

    handle = as_handle(fallback, CapabilityTier.MUTATING)
    resolved: List[T] = []
    for value in values:
        resolved.append(value if value is not None else handle())
    return resolved


__all__ = ["Err", "Ok", "Result", "resolve_each", "resolve_option", "resolve_result"]
