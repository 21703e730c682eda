# tests/test_debounce.py

from __future__ import annotations

import asyncio

import pytest

from tasktrack.core.debounce import Debouncer


@pytest.mark.asyncio
async def test_rapid_burst_settles_on_final_value_only() -> None:
    settled: list[str] = []
    d: Debouncer[str] = Debouncer(0.05, initial="", on_settle=settled.append)

    for term in ("b", "bu", "buy"):
        d.observe(term)

    assert d.value == ""
    assert d.pending

    await asyncio.sleep(0.2)

    assert d.value == "buy"
    assert settled == ["buy"]
    assert not d.pending


@pytest.mark.asyncio
async def test_intermediate_values_never_observed() -> None:
    settled: list[str] = []
    d: Debouncer[str] = Debouncer(0.2, initial="", on_settle=settled.append)

    for term in ("m", "mi", "mil", "milk"):
        d.observe(term)
        await asyncio.sleep(0.02)
        assert d.value == ""

    await asyncio.sleep(0.4)

    assert d.value == "milk"
    assert settled == ["milk"]


@pytest.mark.asyncio
async def test_separate_bursts_each_settle() -> None:
    settled: list[str] = []
    d: Debouncer[str] = Debouncer(0.02, initial="", on_settle=settled.append)

    d.observe("a")
    await asyncio.sleep(0.1)
    d.observe("b")
    await asyncio.sleep(0.1)

    assert settled == ["a", "b"]


@pytest.mark.asyncio
async def test_cancel_drops_pending_update() -> None:
    settled: list[str] = []
    d: Debouncer[str] = Debouncer(0.02, initial="start", on_settle=settled.append)

    d.observe("never")
    d.cancel()
    await asyncio.sleep(0.1)

    assert d.value == "start"
    assert settled == []
    assert not d.pending


@pytest.mark.asyncio
async def test_flush_applies_pending_value_immediately() -> None:
    settled: list[str] = []
    d: Debouncer[str] = Debouncer(10.0, initial="", on_settle=settled.append)

    d.observe("now")
    d.flush()

    assert d.value == "now"
    assert settled == ["now"]
    assert not d.pending


def test_flush_without_pending_is_noop() -> None:
    d: Debouncer[str] = Debouncer(0.1, initial="a")
    d.flush()
    assert d.value == "a"


@pytest.mark.asyncio
async def test_callback_failure_does_not_break_debouncer() -> None:
    def boom(_: str) -> None:
        raise RuntimeError("listener failed")

    d: Debouncer[str] = Debouncer(0.01, initial="", on_settle=boom)
    d.observe("x")
    await asyncio.sleep(0.05)

    assert d.value == "x"
