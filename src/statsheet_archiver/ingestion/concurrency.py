"""Task scopes used by the pipeline.

Both scopes own their child tasks through an ``asyncio.TaskGroup``, so
cancelling the caller cancels every child. They differ in what a failing
child does to its siblings.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Iterable
from typing import TypeVar

T = TypeVar("T")


async def settle(aws: Iterable[Awaitable[T]]) -> list[T]:
    """Run every awaitable to completion, then raise the first failure.

    A failing child does not cancel its siblings. Failures are ranked by
    completion order. Results are returned in input order.
    """
    errors: list[Exception] = []

    async def _guard(aw: Awaitable[T]) -> T | None:
        try:
            return await aw
        except Exception as exc:
            errors.append(exc)
            return None

    async with asyncio.TaskGroup() as tg:
        tasks = [tg.create_task(_guard(aw)) for aw in aws]

    if errors:
        raise errors[0]
    return [task.result() for task in tasks]  # type: ignore[misc]


async def fail_fast(aws: Iterable[Awaitable[T]]) -> list[T]:
    """Run awaitables concurrently; the first failure cancels the rest and is re-raised."""
    try:
        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(_as_coroutine(aw)) for aw in aws]
    except BaseExceptionGroup as eg:
        raise _first_leaf(eg) from None
    return [task.result() for task in tasks]


async def _as_coroutine(aw: Awaitable[T]) -> T:
    return await aw


def _first_leaf(eg: BaseExceptionGroup) -> BaseException:
    exc: BaseException = eg
    while isinstance(exc, BaseExceptionGroup):
        exc = exc.exceptions[0]
    return exc
