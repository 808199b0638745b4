"""Capability tiers, captured-state guards, and callback handles."""

from __future__ import annotations

import importlib
from types import ModuleType
from typing import Dict, Iterable, Tuple

__all__ = [
    "AliasingViolation",
    "Callback",
    "CallbackContractError",
    "CallbackHandle",
    "CapabilityMismatch",
    "CapabilityTier",
    "CapturedState",
    "ConsumingCallback",
    "MutatingCallback",
    "ReadOnlyCallback",
    "ResourceConsumedError",
    "ReuseOfConsumedCallback",
    "StateLease",
    "StateMovedError",
    "StructuralMutationError",
    "UsageState",
    "as_handle",
    "invoke_consuming",
    "invoke_mutating",
    "invoke_readonly",
]

_EXPORTS: Dict[str, Tuple[str, ...]] = {
    "errors": (
        "AliasingViolation",
        "CallbackContractError",
        "CapabilityMismatch",
        "ResourceConsumedError",
        "ReuseOfConsumedCallback",
        "StateMovedError",
        "StructuralMutationError",
    ),
    "handles": (
        "Callback",
        "CallbackHandle",
        "ConsumingCallback",
        "MutatingCallback",
        "ReadOnlyCallback",
        "as_handle",
        "invoke_consuming",
        "invoke_mutating",
        "invoke_readonly",
    ),
    "state": ("CapturedState", "StateLease"),
    "tiers": ("CapabilityTier", "UsageState"),
}


def _load_module(name: str) -> ModuleType:
    return importlib.import_module(f"callback_contracts.contracts.{name}")


def __getattr__(name: str):
    for module_name, symbols in _EXPORTS.items():
        if name in symbols:
            module = _load_module(module_name)
            return getattr(module, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> Iterable[str]:
    return sorted(set(__all__))
