"""Sequential traversal of asynchronous steps.

The remote service is addressed one request at a time; this keeps the request
rate low and makes every result list line up with its input list.
"""

from __future__ import annotations

from typing import Awaitable, Callable, Iterable, List, TypeVar

T = TypeVar("T")
R = TypeVar("R")


async def traverse(items: Iterable[T], step: Callable[[T], Awaitable[R]]) -> List[R]:
    results: List[R] = []
    for item in items:
        results.append(await step(item))
    return results
