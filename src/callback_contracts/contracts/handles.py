"""Callback handles tagged with the capability tier they grant.

Python cannot infer how a closure captures its environment, so the tier is
declared explicitly by wrapping the behavior in one of three handle classes:

``ReadOnlyCallback``
    Callable any number of times. Bound state is held through a shared lease.
``MutatingCallback``
    Callable any number of times, never reentrantly. Bound state is held
    through an exclusive lease for the handle's lifetime.
``ConsumingCallback``
    Callable at most once. Bound state is moved into the handle on
    construction and handed to the behavior on the single invocation.

Handles bound to a :class:`CapturedState` pass the lease (read-only and
mutating tiers) or the moved value (consuming tier) as the first positional
argument of the behavior.
"""

from __future__ import annotations

import logging
import weakref
from abc import ABC, abstractmethod
from typing import Any, Callable, ClassVar, Dict, Generic, Optional, Type, TypeVar, Union

from ..config.loader import tracing_enabled
from .errors import (
    AliasingViolation,
    CallbackContractError,
    CapabilityMismatch,
    ReuseOfConsumedCallback,
)
from .state import CapturedState, StateLease
from .tiers import CapabilityTier, UsageState

R = TypeVar("R")

LOGGER = logging.getLogger("callback contracts.handles")


class CallbackHandle(ABC, Generic[R]):
    """Behavior plus the capability tier it was declared with."""

    tier: ClassVar[CapabilityTier]

    def __init__(
        self,
        behavior: Callable[..., R],
        *,
        name: Optional[str] = None,
        state: Optional[CapturedState[Any]] = None,
    ) -> None:
        if isinstance(behavior, CallbackHandle):
            raise TypeError("Wrap the underlying behavior, not another CallbackHandle.")
        if not callable(behavior):
            raise TypeError(f"{type(self).__name__} requires a callable, got {type(behavior).__name__}.")
        self._behavior = behavior
        self.name = name or getattr(behavior, "__name__", type(behavior).__name__)
        self._calls = 0
        self._bound = state is not None
        self._lease: Optional[StateLease[Any]] = None
        self._finalizer: Optional[weakref.finalize] = None
        if state is not None:
            lease = self._bind(state)
            if lease is not None:
                self._lease = lease
                # The lease lives exactly as long as the handle.
                self._finalizer = weakref.finalize(self, lease.release)

    @property
    def call_count(self) -> int:
        return self._calls

    @property
    def bound(self) -> bool:
        return self._bound

    def release(self) -> None:
        """Give captured state back to its owner; a bound handle is unusable afterwards."""

        if self._finalizer is not None:
            self._finalizer()
            self._finalizer = None
        self._lease = None

    def __enter__(self) -> "CallbackHandle[R]":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.release()

    def __call__(self, *args: Any, **kwargs: Any) -> R:
        return self._dispatch(args, kwargs)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, calls={self._calls})"

    @abstractmethod
    def _bind(self, state: CapturedState[Any]) -> Optional[StateLease[Any]]:
        """Claim ``state`` for this handle; return the lease to hold, if any."""

    def _dispatch(self, args: tuple, kwargs: Dict[str, Any]) -> R:
        if self._bound and self._lease is None:
            raise CallbackContractError(f"{self.name!r} was released and no longer holds its state.")
        self._calls += 1
        if tracing_enabled() and LOGGER.isEnabledFor(logging.DEBUG):
            LOGGER.debug("Invoking %s callback %r (call %d).", self.tier.label, self.name, self._calls)
        if self._lease is not None:
            return self._behavior(self._lease, *args, **kwargs)
        return self._behavior(*args, **kwargs)


class ReadOnlyCallback(CallbackHandle[R]):
    """Observes captured state; any number of invocations."""

    tier = CapabilityTier.READ_ONLY

    def _bind(self, state: CapturedState[Any]) -> StateLease[Any]:
        return state.borrow()


class MutatingCallback(CallbackHandle[R]):
    """May mutate captured state between calls; never invoked reentrantly."""

    tier = CapabilityTier.MUTATING

    def __init__(
        self,
        behavior: Callable[..., R],
        *,
        name: Optional[str] = None,
        state: Optional[CapturedState[Any]] = None,
    ) -> None:
        self._active = False
        super().__init__(behavior, name=name, state=state)

    def _bind(self, state: CapturedState[Any]) -> StateLease[Any]:
        return state.borrow_mut()

    def __call__(self, *args: Any, **kwargs: Any) -> R:
        if self._active:
            LOGGER.error("Reentrant invocation of mutating callback %r.", self.name)
            raise AliasingViolation(
                f"Mutating callback {self.name!r} was invoked while a previous call was still running."
            )
        self._active = True
        try:
            return self._dispatch(args, kwargs)
        finally:
            self._active = False


class ConsumingCallback(CallbackHandle[R]):
    """Invocable at most once; invocation hands captured state to the behavior.

    Exactly-once is a runtime contract: the ``spent`` flag is set before the
    behavior runs, so both later and reentrant invocations fail with
    :class:`ReuseOfConsumedCallback`.
    """

    tier = CapabilityTier.CONSUMING

    def __init__(
        self,
        behavior: Callable[..., R],
        *,
        name: Optional[str] = None,
        state: Optional[CapturedState[Any]] = None,
    ) -> None:
        self._usage = UsageState.UNUSED
        self._captured: Any = None
        super().__init__(behavior, name=name, state=state)

    @property
    def usage(self) -> UsageState:
        return self._usage

    @property
    def spent(self) -> bool:
        return self._usage is UsageState.SPENT

    def _bind(self, state: CapturedState[Any]) -> None:
        self._captured = state.take()

    def release(self) -> None:
        """Drop the handle and its captured value without invoking it."""

        self._usage = UsageState.SPENT
        self._captured = None

    def __call__(self, *args: Any, **kwargs: Any) -> R:
        if self._usage is UsageState.SPENT:
            LOGGER.error("Consuming callback %r invoked after it was spent.", self.name)
            raise ReuseOfConsumedCallback(
                f"Consuming callback {self.name!r} may only be invoked once.", name=self.name
            )
        self._usage = UsageState.SPENT
        self._calls += 1
        if tracing_enabled() and LOGGER.isEnabledFor(logging.DEBUG):
            LOGGER.debug("Invoking consuming callback %r.", self.name)
        if not self._bound:
            return self._behavior(*args, **kwargs)
        captured, self._captured = self._captured, None
        return self._behavior(captured, *args, **kwargs)


_HANDLE_TYPES: Dict[CapabilityTier, Type[CallbackHandle[Any]]] = {
    CapabilityTier.READ_ONLY: ReadOnlyCallback,
    CapabilityTier.MUTATING: MutatingCallback,
    CapabilityTier.CONSUMING: ConsumingCallback,
}

Callback = Union[CallbackHandle[R], Callable[..., R]]


def as_handle(callback: Callback[R], required: CapabilityTier) -> CallbackHandle[R]:
    """Coerce ``callback`` into a handle usable where ``required`` is expected.

    Bare callables are declared at the required tier. Handles are accepted when
    their tier satisfies ``required`` and rejected otherwise.
    """

    if isinstance(callback, CallbackHandle):
        if not callback.tier.satisfies(required):
            LOGGER.error(
                "Callback %r has tier %s but %s is required.",
                callback.name,
                callback.tier.label,
                required.label,
            )
            raise CapabilityMismatch(
                f"{callback.tier.label} callback {callback.name!r} cannot be used where a "
                f"{required.label} callback is required."
            )
        return callback
    if not callable(callback):
        raise TypeError(f"Expected a callable or CallbackHandle, got {type(callback).__name__}.")
    return _HANDLE_TYPES[required](callback)


def invoke_readonly(handle: Callback[R], *args: Any, **kwargs: Any) -> R:
    return as_handle(handle, CapabilityTier.READ_ONLY)(*args, **kwargs)


def invoke_mutating(handle: Callback[R], *args: Any, **kwargs: Any) -> R:
    return as_handle(handle, CapabilityTier.MUTATING)(*args, **kwargs)


def invoke_consuming(handle: Callback[R], *args: Any, **kwargs: Any) -> R:
    """Invoke ``handle`` under the consuming contract.

    Exactly-once is enforced by :class:`ConsumingCallback` instances only. A
    bare callable is wrapped in a fresh handle on every call, so reusing the
    same function object is not detected; wrap it once and pass the handle.
    """

    return as_handle(handle, CapabilityTier.CONSUMING)(*args, **kwargs)


__all__ = [
    "Callback",
    "CallbackHandle",
    "ConsumingCallback",
    "MutatingCallback",
    "ReadOnlyCallback",
    "as_handle",
    "invoke_consuming",
    "invoke_mutating",
    "invoke_readonly",
]
