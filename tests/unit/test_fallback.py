"""Lazy fallback resolution tests."""

from __future__ import annotations

import pytest

from callback_contracts.contracts import CapturedState, ConsumingCallback, MutatingCallback
from callback_contracts.operations import Err, Ok, resolve_each, resolve_option, resolve_result


def _explode() -> str:
    raise AssertionError("fallback must not run when a value is present")


def test_present_option_never_invokes_fallback() -> None:
    fallback = ConsumingCallback(_explode)

    assert resolve_option("nde boy", fallback) == "nde boy"
    assert resolve_option(0, _explode) == 0
    assert resolve_option("", _explode) == ""
    assert not fallback.spent
    assert fallback.call_count == 0


def test_absent_option_invokes_fallback_exactly_once() -> None:
    calls: list[str] = []

    def best_beans() -> str:
        calls.append("called")
        return "i love black beans"

    assert resolve_option(None, best_beans) == "i love black beans"
    assert calls == ["called"]


def test_moved_fallback_value_is_returned() -> None:
    fallback = CapturedState("default user")
    name = resolve_option(None, ConsumingCallback(lambda value: value, state=fallback))

    assert name == "default user"
    assert fallback.moved


def test_result_success_skips_fallback() -> None:
    assert resolve_result(Ok(42), lambda err: pytest.fail(f"unexpected {err}")) == 42


def test_result_failure_passes_payload_to_fallback() -> None:
    causes: list[str] = []

    def recover(err: str) -> int:
        causes.append(err)
        return -1

    assert resolve_result(Err("connection failed"), recover) == -1
    assert causes == ["connection failed"]
    assert Ok(1).is_ok and not Err("x").is_ok


def test_resolve_result_rejects_unwrapped_values() -> None:
    with pytest.raises(TypeError, match="Ok or Err"):
        resolve_result(42, lambda err: 0)  # type: ignore[arg-type]


def test_resolve_each_runs_mutating_fallback_per_missing_entry() -> None:
    counter = CapturedState(0)

    def next_default(lease) -> int:
        lease.value += 1
        return lease.value * 100

    with MutatingCallback(next_default, state=counter) as fallback:
        results = resolve_each([10, None, 30, None, None], fallback)
        assert fallback.call_count == 3

    assert results == [10, 100, 30, 200, 300]
    assert counter.get() == 3


def test_resolve_each_refuses_single_use_fallback() -> None:
    with pytest.raises(TypeError):
        resolve_each([None, None], ConsumingCallback(lambda: 0))
