"""Async HTTP access to the Lichess API using httpx."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from arena_leaderboard.config import settings

_log = logging.getLogger(__name__)


class AsyncHttpError(RuntimeError):
    pass


def build_client(token: Optional[str] = None, **kwargs) -> httpx.AsyncClient:
    headers = {"User-Agent": settings.DEFAULT_USER_AGENT}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return httpx.AsyncClient(
        base_url=settings.BASE_URL,
        headers=headers,
        timeout=settings.DEFAULT_TIMEOUT,
        follow_redirects=True,
        **kwargs,
    )


async def fetch(client: httpx.AsyncClient, url: str, *, params: dict | None = None) -> str:
    """GET ``url`` and return the body text. Any failure is fatal."""
    try:
        resp = await client.get(url, params=params)
        resp.raise_for_status()
    except httpx.HTTPError as e:
        raise AsyncHttpError(f"Request for {url} failed: {e}") from e
    return resp.text


class LichessClient:
    """Thin wrapper exposing the four resources the pipeline consumes."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def user_games(self, user_id: str) -> str:
        _log.info("Fetching games from %s", user_id)
        return await fetch(self._client, f"/api/games/user/{user_id}", params={"moves": "false"})

    async def game_page(self, game_id: str) -> str:
        _log.info("Fetching game %s", game_id)
        return await fetch(self._client, f"/{game_id}")

    async def tournament(self, tournament_id: str) -> str:
        _log.info("Fetching tournament %s", tournament_id)
        return await fetch(self._client, f"/api/tournament/{tournament_id}")

    async def tournament_results(self, tournament_id: str) -> str:
        _log.info("Fetching tournament results %s", tournament_id)
        return await fetch(self._client, f"/api/tournament/{tournament_id}/results")
