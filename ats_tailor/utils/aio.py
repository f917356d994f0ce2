"""Cooperative scheduling helpers.

The pipeline runs on a single task. These helpers hand control back to the
event loop between stages and inside long loops so that a host UI sharing the
loop stays responsive. They carry no ordering obligations.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable
from typing import TypeVar

T = TypeVar("T")
R = TypeVar("R")


async def yield_control() -> None:
    """Suspend the current task for one event-loop iteration."""
    await asyncio.sleep(0)


async def process_with_yield(
    items: Iterable[T],
    processor: Callable[[T], R],
    yield_interval: int = 10,
) -> list[R]:
    """Apply ``processor`` to each item, yielding every ``yield_interval`` items."""
    results: list[R] = []
    for index, item in enumerate(items):
        results.append(processor(item))
        if yield_interval > 0 and index > 0 and index % yield_interval == 0:
            await yield_control()
    return results
