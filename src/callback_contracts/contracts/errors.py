"""Exception taxonomy for callback capability contracts."""

from __future__ import annotations

from typing import Optional


class CallbackContractError(RuntimeError):
    """Base class for violations of a callback capability contract."""


class ReuseOfConsumedCallback(CallbackContractError):
    """Raised when a consuming callback is invoked after it has been spent."""

    def __init__(self, message: str, *, name: Optional[str] = None) -> None:
        super().__init__(message)
        self.name = name


class AliasingViolation(CallbackContractError):
    """Raised when captured state is accessed while an exclusive lease is live."""


class StateMovedError(CallbackContractError):
    """Raised when captured state is accessed after ownership moved out of it."""


class StructuralMutationError(CallbackContractError):
    """Raised when a sequence is resized while it is being traversed."""

    def __init__(self, message: str, *, expected: int, observed: int) -> None:
        super().__init__(message)
        self.expected = expected
        self.observed = observed


class ResourceConsumedError(CallbackContractError):
    """Raised when a gated resource is read or unlocked after consumption."""


class CapabilityMismatch(CallbackContractError, TypeError):
    """Raised when a handle's tier does not satisfy the tier an operation requires."""


__all__ = [
    "AliasingViolation",
    "CallbackContractError",
    "CapabilityMismatch",
    "ReuseOfConsumedCallback",
    "ResourceConsumedError",
    "StateMovedError",
    "StructuralMutationError",
]
