"""In-place retention filters with optional diversion of rejected elements."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Generic, Iterable, List, MutableSequence, Optional, TypeVar, Union, overload

from ..contracts.errors import StructuralMutationError
from ..contracts.handles import Callback, MutatingCallback, as_handle
from ..contracts.tiers import CapabilityTier

T = TypeVar("T")

LOGGER = logging.getLogger("callback contracts.filtering")


class CharBuffer(MutableSequence[str]):
    """Mutable text buffer addressed by code point."""

    __slots__ = ("_chars",)

    def __init__(self, text: Union[str, Iterable[str]] = "") -> None:
        self._chars: List[str] = []
        for char in text:
            self._chars.append(_check_char(char))

    @overload
    def __getitem__(self, index: int) -> str: ...

    @overload
    def __getitem__(self, index: slice) -> "CharBuffer": ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return CharBuffer(self._chars[index])
        return self._chars[index]

    def __setitem__(self, index, value) -> None:
        if isinstance(index, slice):
            self._chars[index] = [_check_char(char) for char in value]
        else:
            self._chars[index] = _check_char(value)

    def __delitem__(self, index) -> None:
        del self._chars[index]

    def __len__(self) -> int:
        return len(self._chars)

    def insert(self, index: int, value: str) -> None:
        self._chars.insert(index, _check_char(value))

    def __str__(self) -> str:
        return "".join(self._chars)

    def __repr__(self) -> str:
        return f"CharBuffer({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CharBuffer):
            return self._chars == other._chars
        if isinstance(other, str):
            return str(self) == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]


@dataclass(frozen=True, slots=True)
class PartitionResult(Generic[T]):
    """Outcome of :func:`partition_retain`."""

    kept: MutableSequence[T]
    diverted: Optional[MutableSequence[T]]
    rejected_count: int

    @property
    def original_length(self) -> int:
        return len(self.kept) + self.rejected_count


def retain(sequence: MutableSequence[T], predicate: Callback[Any]) -> None:
    """Keep only the elements for which ``predicate`` returns truthy.

    The predicate runs exactly once per original element, in order. Survivors
    are compacted toward the front in a single pass and the tail is truncated,
    so relative order is preserved and no second collection is built. If the
    predicate raises, the elements already rejected are removed and every
    element not yet visited is left in place before the error propagates.
    """

    handle = as_handle(predicate, CapabilityTier.MUTATING)
    total = len(sequence)
    write = 0
    read = 0
    completed = False
    try:
        while read < total:
            item = sequence[read]
            keep = handle(item)
            if len(sequence) != total:
                LOGGER.error("Sequence resized by predicate while filtering index %d.", read)
                raise StructuralMutationError(
                    f"Sequence length changed from {total} to {len(sequence)} during retain.",
                    expected=total,
                    observed=len(sequence),
                )
            if keep:
                if write != read:
                    sequence[write] = item
                write += 1
            read += 1
        completed = True
    finally:
        if completed:
            del sequence[write:]
        elif len(sequence) == total and write < read:
            del sequence[write:read]


def retain_chars(buffer: Union[CharBuffer, str], predicate: Callback[Any]) -> CharBuffer:
    """Run :func:`retain` over a character buffer, wrapping ``str`` input first."""

    target = CharBuffer(buffer) if isinstance(buffer, str) else buffer
    retain(target, predicate)
    return target


def diverting(keep: Callback[Any], sink: MutableSequence[T]) -> MutatingCallback[bool]:
    """Build a predicate that appends rejected elements to ``sink`` before rejecting them."""

    keep_handle = as_handle(keep, CapabilityTier.MUTATING)

    def _divert(item: T) -> bool:
        if keep_handle(item):
            return True
        sink.append(item)
        return False

    return MutatingCallback(_divert, name=f"divert[{keep_handle.name}]")


def partition_retain(
    sequence: MutableSequence[T],
    predicate: Callback[Any],
    sink: Optional[MutableSequence[T]] = None,
) -> PartitionResult[T]:
    """Filter ``sequence`` in place and report what was rejected.

    Rejected elements are appended to ``sink`` in traversal order when one
    is supplied; otherwise they are dropped and only counted.
    """

    handle = as_handle(predicate, CapabilityTier.MUTATING)
    rejected = 0

    def _tally(item: T) -> bool:
        nonlocal rejected
        if handle(item):
            return True
        rejected += 1
        if sink is not None:
            sink.append(item)
        return False

    retain(sequence, _tally)
    LOGGER.debug("Retained %d element(s), rejected %d.", len(sequence), rejected)
    return PartitionResult(kept=sequence, diverted=sink, rejected_count=rejected)


def _check_char(value: Any) -> str:
    if not isinstance(value, str) or len(value) != 1:
        raise ValueError(f"CharBuffer elements must be single characters, got {value!r}.")
    return value


__all__ = ["CharBuffer", "PartitionResult", "diverting", "partition_retain", "retain", "retain_chars"]
