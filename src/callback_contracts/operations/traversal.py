"""Ordered traversal of owned sequences with a mutating callback."""

from __future__ import annotations

import logging
from typing import Any, Generic, MutableSequence, Sequence, TypeVar

from ..contracts.errors import CallbackContractError, StructuralMutationError
from ..contracts.handles import Callback, as_handle
from ..contracts.tiers import CapabilityTier

T = TypeVar("T")

LOGGER = logging.getLogger("callback contracts.traversal")


class ElementView(Generic[T]):
    """Mutable view of one sequence slot, valid only during its callback."""

    __slots__ = ("_sequence", "_index", "_live")

    def __init__(self, sequence: MutableSequence[T], index: int) -> None:
        self._sequence = sequence
        self._index = index
        self._live = True

    @property
    def index(self) -> int:
        return self._index

    @property
    def value(self) -> T:
        self._ensure_live()
        return self._sequence[self._index]

    @value.setter
    def value(self, new_value: T) -> None:
        self._ensure_live()
        self._sequence[self._index] = new_value

    def close(self) -> None:
        self._live = False

    def __repr__(self) -> str:
        if not self._live:
            return f"ElementView(index={self._index}, closed)"
        return f"ElementView(index={self._index}, value={self._sequence[self._index]!r})"

    def _ensure_live(self) -> None:
        if not self._live:
            raise CallbackContractError(
                f"ElementView for index {self._index} escaped the callback that received it."
            )


def traverse(sequence: MutableSequence[T], op: Callback[Any]) -> None:
    """Invoke ``op`` once per element in ascending index order.

    ``op`` receives an :class:`ElementView`; assigning to ``view.value``
    replaces the element in place. The view is closed as soon as ``op``
    returns. Resizing ``sequence`` from inside ``op`` raises
    :class:`StructuralMutationError`.
    """

    handle = as_handle(op, CapabilityTier.MUTATING)
    expected = len(sequence)
    for index in range(expected):
        view = ElementView(sequence, index)
        try:
            handle(view)
        finally:
            view.close()
        _check_length(sequence, expected, index)


def explore(sequence: Sequence[T], action: Callback[Any]) -> None:
    """Hand each element to ``action`` by reference, in order, without write-back."""

    handle = as_handle(action, CapabilityTier.MUTATING)
    expected = len(sequence)
    for index in range(expected):
        handle(sequence[index])
        _check_length(sequence, expected, index)


def _check_length(sequence: Sequence[Any], expected: int, index: int) -> None:
    observed = len(sequence)
    if observed != expected:
        LOGGER.error(
            "Sequence resized from %d to %d while visiting index %d.", expected, observed, index
        )
        raise StructuralMutationError(
            f"Sequence length changed from {expected} to {observed} during traversal.",
            expected=expected,
            observed=observed,
        )


__all__ = ["ElementView", "explore", "traverse"]
