"""Unit tests for concurrent fetch helpers"""

import asyncio
import pytest
from ledger_gateway.domain.exceptions import NotFoundError
from ledger_gateway.utils.async_utils import gather_or_cancel


async def test_results_keep_argument_order():
    async def value(v, delay):
        await asyncio.sleep(delay)
        return v

    assert await gather_or_cancel(value("a", 0.02), value("b", 0), value("c", 0.01)) == ["a", "b", "c"]


async def test_first_failure_cancels_the_rest():
    cancelled = []

    async def slow_fetch(name):
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.append(name)
            raise

    async def missing_party():
        await asyncio.sleep(0)
        raise NotFoundError("parties not found: /api/parties/999")

    with pytest.raises(NotFoundError):
        await gather_or_cancel(missing_party(), slow_fetch("transactions"), slow_fetch("bnpl_limits"))

    assert sorted(cancelled) == ["bnpl_limits", "transactions"]
