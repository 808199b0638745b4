"""In-place retention and diversion tests."""

from __future__ import annotations

import pytest

from callback_contracts.contracts import CapturedState, MutatingCallback, StructuralMutationError
from callback_contracts.operations import (
    CharBuffer,
    diverting,
    partition_retain,
    retain,
    retain_chars,
)


def test_retain_keeps_odd_numbers_in_order() -> None:
    numbers = list(range(1, 11))
    original = numbers

    result = partition_retain(numbers, lambda n: n % 2 != 0)

    assert numbers == [1, 3, 5, 7, 9]
    assert numbers is original
    assert result.kept is numbers
    assert result.rejected_count == 5
    assert result.original_length == 10
    assert result.diverted is None


def test_retain_chars_diverts_rejected_characters() -> None:
    deleted = CharBuffer()
    game_console = CharBuffer("PLaY STaTION")

    retain(game_console, diverting(lambda ch: ch != "a", deleted))

    assert str(game_console) == "PLY STTION"
    assert deleted == "aa"


def test_retain_chars_wraps_plain_strings() -> None:
    messy = retain_chars("H3llo W0rld! 123", str.islower)
    spaced = retain_chars(CharBuffer("  h e l l o   w o r l d  "), lambda ch: not ch.isspace())

    assert messy == "llorld"
    assert str(spaced) == "helloworld"


def test_predicate_runs_once_per_element_in_traversal_order() -> None:
    names = ["nde", "a", "simon", "bo", "alexander"]
    seen: list[str] = []

    def long_enough(name: str) -> bool:
        seen.append(name)
        return len(name) > 2

    retain(names, long_enough)

    assert seen == ["nde", "a", "simon", "bo", "alexander"]
    assert names == ["nde", "simon", "alexander"]


def test_stateful_predicate_counts_failures() -> None:
    scores = [95, 42, 88, 31, 76, 15, 99, 60]
    removed = CapturedState(0, name="removed_count")

    def passing(lease, score: int) -> bool:
        if score >= 50:
            return True
        lease.value += 1
        return False

    with MutatingCallback(passing, state=removed) as predicate:
        retain(scores, predicate)

    assert scores == [95, 88, 76, 99, 60]
    assert removed.get() == 3


def test_partition_retain_collects_sink_in_traversal_order() -> None:
    inventory = ["sword", "potion", "shield", "potion", "bow", "potion"]
    used_potions: list[str] = []

    result = partition_retain(inventory, lambda item: item != "potion", used_potions)

    assert inventory == ["sword", "shield", "bow"]
    assert result.diverted is used_potions
    assert used_potions == ["potion", "potion", "potion"]
    assert len(inventory) + result.rejected_count == 6


def test_retain_handles_empty_and_all_rejected_sequences() -> None:
    empty: list[int] = []
    retain(empty, lambda item: pytest.fail("must not be called"))
    assert empty == []

    everything = [1, 2, 3]
    result = partition_retain(everything, lambda item: False)
    assert everything == []
    assert result.rejected_count == 3


def test_predicate_failure_leaves_unvisited_elements_in_place() -> None:
    values = [1, 2, 3, 4, 5, 6]

    def odd_until_five(item: int) -> bool:
        if item == 5:
            raise RuntimeError("stop")
        return item % 2 == 1

    with pytest.raises(RuntimeError, match="stop"):
        retain(values, odd_until_five)

    assert values == [1, 3, 5, 6]


def test_retain_rejects_resizing_predicate() -> None:
    values = [1, 2, 3]
    with pytest.raises(StructuralMutationError):
        retain(values, lambda item: values.append(item) or True)


def test_char_buffer_accepts_single_characters_only() -> None:
    buffer = CharBuffer("ab")
    buffer.append("c")
    buffer[0] = "z"

    assert str(buffer) == "zbc"
    assert buffer[1:] == "bc"
    with pytest.raises(ValueError):
        buffer.append("de")
    with pytest.raises(ValueError):
        buffer[1] = 7  # type: ignore[assignment]
