"""Generic operations driven by injected callbacks."""

from __future__ import annotations

import importlib
from types import ModuleType
from typing import Dict, Iterable, Tuple

__all__ = [
    "CharBuffer",
    "ElementView",
    "Err",
    "Ok",
    "PartitionResult",
    "Resource",
    "Result",
    "call_once",
    "diverting",
    "explore",
    "partition_retain",
    "repeat",
    "resolve_each",
    "resolve_option",
    "resolve_result",
    "retain",
    "retain_chars",
    "transform",
    "traverse",
    "unlock",
]

_EXPORTS: Dict[str, Tuple[str, ...]] = {
    "fallback": ("Err", "Ok", "Result", "resolve_each", "resolve_option", "resolve_result"),
    "filtering": (
        "CharBuffer",
        "PartitionResult",
        "diverting",
        "partition_retain",
        "retain",
        "retain_chars",
    ),
    "gated": ("Resource", "unlock"),
    "invocation": ("call_once", "repeat", "transform"),
    "traversal": ("ElementView", "explore", "traverse"),
}


def _load_module(name: str) -> ModuleType:
    return importlib.import_module(f"callback_contracts.operations.{name}")


def __getattr__(name: str):
    for module_name, symbols in _EXPORTS.items():
        if name in symbols:
            module = _load_module(module_name)
            return getattr(module, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> Iterable[str]:
    return sorted(set(__all__))
