"""Concurrent joins over store calls."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Awaitable


async def join_pair[TFirst, TSecond](
    first: Awaitable[TFirst],
    second: Awaitable[TSecond],
) -> tuple[TFirst, TSecond]:
    """Run both awaitables concurrently and wait for both.

    The first failure propagates unchanged and the sibling is cancelled.
    """

    first_task = asyncio.ensure_future(first)
    second_task = asyncio.ensure_future(second)
    try:
        return await asyncio.gather(first_task, second_task)
    except BaseException:
        first_task.cancel()
        second_task.cancel()
        raise


async def join_all[TResult](*awaitables: Awaitable[TResult]) -> list[TResult]:
    """Like ``join_pair`` for any number of awaitables of one result type."""

    tasks = [asyncio.ensure_future(awaitable) for awaitable in awaitables]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        raise
