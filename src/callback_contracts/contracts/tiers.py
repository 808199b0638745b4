"""Capability tiers granted to injected callbacks."""

from __future__ import annotations

from enum import Enum, IntEnum


class UsageState(str, Enum):
    """Lifecycle of single-use objects: consuming callbacks and gated resources."""

    UNUSED = "unused"
    SPENT = "spent"


class CapabilityTier(IntEnum):
    """Usability lattice READ_ONLY <= MUTATING <= CONSUMING.

    A lower tier places fewer demands on its caller, so a read-only callback
    may be used wherever a mutating or consuming one is expected, and a
    mutating callback wherever a consuming one is expected.
    """

    READ_ONLY = 0
    MUTATING = 1
    CONSUMING = 2

    def satisfies(self, required: "CapabilityTier") -> bool:
        return self <= required

    @property
    def label(self) -> str:
        return self.name.lower().replace("_", "-")


__all__ = ["CapabilityTier", "UsageState"]
