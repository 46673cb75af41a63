"""Unit tests for the keyed Debouncer."""

import asyncio

import pytest

from storefront_admin.application.table.debounce import Debouncer


def _recorder(calls: list, value):
    async def action():
        calls.append(value)

    return action


@pytest.mark.asyncio
async def test_burst_collapses_into_last_call():
    calls: list[str] = []
    debouncer = Debouncer(0.05)

    for text in ["s", "sh", "sho", "shop"]:
        debouncer.schedule("title", _recorder(calls, text))
        await asyncio.sleep(0.01)

    assert calls == []
    await debouncer.wait_idle()
    assert calls == ["shop"]


@pytest.mark.asyncio
async def test_keys_are_debounced_independently():
    calls: list[str] = []
    debouncer = Debouncer(0.02)

    debouncer.schedule("title", _recorder(calls, "t"))
    debouncer.schedule("status", _recorder(calls, "s"))
    assert debouncer.pending == 2

    await debouncer.wait_idle()
    assert sorted(calls) == ["s", "t"]


@pytest.mark.asyncio
async def test_flush_fires_immediately():
    calls: list[str] = []
    debouncer = Debouncer(10)

    debouncer.schedule("title", _recorder(calls, "now"))
    await debouncer.flush()

    assert calls == ["now"]
    assert debouncer.pending == 0


@pytest.mark.asyncio
async def test_cancel_drops_pending_calls():
    calls: list[str] = []
    debouncer = Debouncer(0.02)

    debouncer.schedule("title", _recorder(calls, "never"))
    debouncer.cancel()
    await asyncio.sleep(0.05)

    assert calls == []
    assert debouncer.pending == 0


@pytest.mark.asyncio
async def test_failing_action_is_logged_not_raised(caplog):
    async def boom():
        raise RuntimeError("boom")

    debouncer = Debouncer(0)
    with caplog.at_level("ERROR", logger="storefront_admin.application.table.debounce"):
        debouncer.schedule("x", boom)
        await debouncer.wait_idle()

    assert "Debounced action failed" in caplog.text
