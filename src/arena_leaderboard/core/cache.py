"""Persistent filesystem cache for remote responses.

Entries are keyed by a relative path (``tournaments/<id>.json``,
``games/<id>`` ...) and mirrored one-to-one onto files below the cache root.
An entry is written once, on the first miss, and served from disk from then
on; nothing here ever expires or overwrites an entry.
"""

from __future__ import annotations

import logging
import os
import posixpath
from typing import Awaitable, Callable

from arena_leaderboard.config import settings
from . import filesystem

_log = logging.getLogger(__name__)

Loader = Callable[[], Awaitable[str]]


class CacheWriteError(RuntimeError):
    pass


def _check_key(key: str) -> str:
    if not key or key.startswith("/") or "\\" in key:
        raise ValueError(f"Invalid cache key: {key!r}")
    parts = key.split("/")
    if any(p in ("", ".", "..") for p in parts):
        raise ValueError(f"Invalid cache key: {key!r}")
    return posixpath.normpath(key)


class FetchCache:
    def __init__(self, root: str | None = None) -> None:
        self.root = root or settings.CACHE_DIR

    def path_for(self, key: str) -> str:
        return os.path.join(self.root, *_check_key(key).split("/"))

    def contains(self, key: str) -> bool:
        return os.path.isfile(self.path_for(key))

    def read(self, key: str) -> str:
        return filesystem.read_text(self.path_for(key))

    def _store(self, key: str, content: str) -> None:
        path = self.path_for(key)
        if os.path.exists(path):
            return
        try:
            filesystem.write_text_atomic(path, content)
        except OSError as e:
            raise CacheWriteError(f"Failed to persist cache entry {key}: {e}") from e

    async def fetch_cached(self, key: str, loader: Loader) -> str:
        """Return the cached content for ``key``, running ``loader`` on a miss."""
        if self.contains(key):
            _log.debug("cache hit %s", key)
            return self.read(key)
        _log.debug("cache miss %s", key)
        content = await loader()
        self._store(key, content)
        return content
