"""Guard cells enforcing the aliasing discipline on captured callback state."""

from __future__ import annotations

import logging
from typing import Any, Generic, Optional, TypeVar

from .errors import AliasingViolation, CallbackContractError, StateMovedError

T = TypeVar("T")

LOGGER = logging.getLogger("callback contracts.state")


class StateLease(Generic[T]):
    """A live shared or exclusive borrow of a :class:`CapturedState`."""

    __slots__ = ("_state", "_exclusive", "_live")

    def __init__(self, state: "CapturedState[T]", *, exclusive: bool) -> None:
        self._state = state
        self._exclusive = exclusive
        self._live = True

    @property
    def exclusive(self) -> bool:
        return self._exclusive

    @property
    def live(self) -> bool:
        return self._live

    @property
    def value(self) -> T:
        self._ensure_live()
        return self._state._value

    @value.setter
    def value(self, new_value: T) -> None:
        self._ensure_live()
        if not self._exclusive:
            raise AliasingViolation(
                f"Cannot write {self._state.label} through a shared lease."
            )
        self._state._value = new_value

    def release(self) -> None:
        """Return the borrow to the owning cell. Releasing twice is a no-op."""

        if not self._live:
            return
        self._live = False
        self._state._release(self)

    def __enter__(self) -> "StateLease[T]":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.release()

    def __repr__(self) -> str:
        mode = "exclusive" if self._exclusive else "shared"
        status = "live" if self._live else "released"
        return f"StateLease({self._state.label}, {mode}, {status})"

    def _ensure_live(self) -> None:
        if not self._live:
            raise CallbackContractError(f"Lease on {self._state.label} was already released.")


class CapturedState(Generic[T]):
    """Caller-owned data that callbacks borrow or take ownership of.

    The cell tracks outstanding leases so that the single-threaded ownership
    rules hold at runtime:

    * any number of shared leases may coexist,
    * an exclusive lease excludes every other lease and direct owner reads,
    * :meth:`take` moves the value out and leaves the cell unusable.
    """

    __slots__ = ("name", "_value", "_shared", "_exclusive", "_moved")

    def __init__(self, value: T, *, name: Optional[str] = None) -> None:
        self.name = name
        self._value = value
        self._shared = 0
        self._exclusive = False
        self._moved = False

    @property
    def label(self) -> str:
        return repr(self.name) if self.name else "captured state"

    @property
    def moved(self) -> bool:
        return self._moved

    @property
    def shared_count(self) -> int:
        return self._shared

    @property
    def exclusively_borrowed(self) -> bool:
        return self._exclusive

    def get(self) -> T:
        """Read the value directly as its owner."""

        self._ensure_present()
        if self._exclusive:
            self._violation("read", "an exclusive lease is live")
        return self._value

    def set(self, value: T) -> None:
        """Replace the value directly as its owner."""

        self._ensure_present()
        if self._exclusive or self._shared:
            self._violation("write", "it is currently borrowed")
        self._value = value

    def borrow(self) -> StateLease[T]:
        self._ensure_present()
        if self._exclusive:
            self._violation("share", "an exclusive lease is live")
        self._shared += 1
        return StateLease(self, exclusive=False)

    def borrow_mut(self) -> StateLease[T]:
        self._ensure_present()
        if self._exclusive:
            self._violation("borrow mutably", "an exclusive lease is live")
        if self._shared:
            self._violation("borrow mutably", f"{self._shared} shared lease(s) are live")
        self._exclusive = True
        return StateLease(self, exclusive=True)

    def take(self) -> T:
        """Move the value out; the cell rejects every later access."""

        self._ensure_present()
        if self._exclusive or self._shared:
            self._violation("move", "it is currently borrowed")
        value = self._value
        self._value = None  # type: ignore[assignment]
        self._moved = True
        return value

    def __repr__(self) -> str:
        if self._moved:
            status = "moved"
        elif self._exclusive:
            status = "exclusive"
        elif self._shared:
            status = f"shared x{self._shared}"
        else:
            status = "owned"
        return f"CapturedState({self.label}, {status})"

    def _release(self, lease: StateLease[T]) -> None:
        if lease.exclusive:
            self._exclusive = False
        else:
            self._shared = max(0, self._shared - 1)

    def _ensure_present(self) -> None:
        if self._moved:
            raise StateMovedError(f"{self.label} was moved into a consuming callback.")

    def _violation(self, action: str, reason: str) -> None:
        LOGGER.error("Aliasing violation: cannot %s %s because %s.", action, self.label, reason)
        raise AliasingViolation(f"Cannot {action} {self.label} because {reason}.")


__all__ = ["CapturedState", "StateLease"]
