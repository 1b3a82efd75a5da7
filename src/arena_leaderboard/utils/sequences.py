"""Small ordered-sequence helpers."""

from __future__ import annotations

from typing import Hashable, Iterable, List, Optional, TypeVar

T = TypeVar("T", bound=Hashable)


def dedupe(seq: Iterable[T]) -> List[T]:
    seen: set[T] = set()
    out: List[T] = []
    for item in seq:
        if item not in seen:
            seen.add(item)
            out.append(item)
    return out


def present(seq: Iterable[Optional[T]]) -> List[T]:
    return [item for item in seq if item]
