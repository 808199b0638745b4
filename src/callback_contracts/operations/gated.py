"""Single-attempt gated consumption of a secret-protected resource."""

from __future__ import annotations

import logging
from typing import Any, Generic, Optional, TypeVar

from ..contracts.errors import ResourceConsumedError
from ..contracts.handles import Callback, as_handle
from ..contracts.tiers import CapabilityTier, UsageState

S = TypeVar("S")
P = TypeVar("P")

LOGGER = logging.getLogger("callback contracts.gated")


class Resource(Generic[S, P]):
    """A payload protected by a secret, unlockable exactly once.

    The resource is consumed by its first :meth:`unlock` whatever the outcome.
    Afterwards both fields are cleared and any access raises
    :class:`ResourceConsumedError` instead of returning stale data.
    """

    __slots__ = ("name", "_secret", "_payload", "_usage")

    def __init__(self, secret: S, payload: P, *, name: Optional[str] = None) -> None:
        self.name = name
        self._secret: Optional[S] = secret
        self._payload: Optional[P] = payload
        self._usage = UsageState.UNUSED

    @property
    def usage(self) -> UsageState:
        return self._usage

    @property
    def consumed(self) -> bool:
        return self._usage is UsageState.SPENT

    @property
    def secret(self) -> S:
        self._ensure_unused()
        return self._secret  # type: ignore[return-value]

    @property
    def payload(self) -> P:
        self._ensure_unused()
        return self._payload  # type: ignore[return-value]

    def unlock(self, procedure: Callback[Any]) -> Optional[P]:
        """Run ``procedure`` once and trade the resource for its payload on a match.

        Returns ``None`` on a mismatch; the payload is discarded with the
        resource. The resource is spent before ``procedure`` runs, so an
        exception raised by the procedure also consumes it.
        """

        self._ensure_unused()
        handle = as_handle(procedure, CapabilityTier.CONSUMING)
        secret, payload = self._secret, self._payload
        self._secret = None
        self._payload = None
        self._usage = UsageState.SPENT
        candidate = handle()
        if candidate == secret:
            LOGGER.debug("Resource %s unlocked; payload released to caller.", self._label())
            return payload
        LOGGER.debug("Resource %s rejected its credential; payload discarded.", self._label())
        return None

    def __repr__(self) -> str:
        return f"Resource({self._label()}, {self._usage.value})"

    def _label(self) -> str:
        return repr(self.name) if self.name else f"at 0x{id(self):x}"

    def _ensure_unused(self) -> None:
        if self._usage is UsageState.SPENT:
            LOGGER.error("Access to consumed resource %s.", self._label())
            raise ResourceConsumedError(f"Resource {self._label()} was already consumed.")


def unlock(resource: Resource[S, P], procedure: Callback[Any]) -> Optional[P]:
    """Consume ``resource``, returning its payload iff ``procedure()`` yields its secret."""

    return resource.unlock(procedure)


__all__ = ["Resource", "unlock"]
