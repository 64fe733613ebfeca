"""Helpers for running independent async operations together."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Iterable

from .result import Err, Result, collect

__all__ = ["gather_results"]


async def gather_results[T, E](
    operations: Iterable[Awaitable[Result[T, E]]],
) -> Result[list[T], E]:
    """Run operations concurrently and join their Results.

    Values come back in submission order regardless of completion order.
    The first failure to complete is returned as soon as it arrives (ties go
    to the earliest-submitted). Siblings still in flight are not cancelled;
    they keep running on the loop and their results are dropped.
    """
    tasks = [asyncio.ensure_future(op) for op in operations]
    pending = set(tasks)
    while pending:
        done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)
        for task in tasks:
            if task in done:
                result = task.result()
                if isinstance(result, Err):
                    return result
    return collect(task.result() for task in tasks)
