"""High-level orchestration: discovery, results retrieval, aggregation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

import httpx

from arena_leaderboard.config.leaderboard import LeaderboardConfig
from arena_leaderboard.core import async_http
from arena_leaderboard.core.async_http import LichessClient
from arena_leaderboard.core.cache import FetchCache
from arena_leaderboard.core.traversal import traverse
from arena_leaderboard.domain.models import Leaderboard, TournamentMeta, TournamentResult
from arena_leaderboard.parsing.results_parser import parse_tournament_results
from . import aggregation, report
from .discovery import DiscoveryPipeline, tournament_results_key

_log = logging.getLogger(__name__)


@dataclass(slots=True)
class RunResult:
    tournaments: List[TournamentMeta]
    leaderboard: Leaderboard


async def fetch_results(
    client: LichessClient, cache: FetchCache, tournament_id: str, config: LeaderboardConfig
) -> TournamentResult:
    payload = await cache.fetch_cached(
        tournament_results_key(tournament_id), lambda: client.tournament_results(tournament_id)
    )
    return parse_tournament_results(tournament_id, payload, config.points)


async def run(
    client: LichessClient,
    cache: FetchCache,
    config: LeaderboardConfig,
    on_tournaments: Optional[Callable[[str], None]] = None,
) -> RunResult:
    """Run discovery and aggregation against an open client.

    ``on_tournaments`` receives the rendered tournament list as soon as the
    canonical order is known, before any result is fetched.
    """
    discovery = DiscoveryPipeline(client, cache, config)
    tournaments = await discovery.discover()
    if on_tournaments is not None:
        on_tournaments(report.render_tournament_list(tournaments))
    results = await traverse(
        [t.id for t in tournaments], lambda tid: fetch_results(client, cache, tid, config)
    )
    board = aggregation.aggregate(tournaments, results, config)
    _log.info("Leaderboard built: %d tournaments, %d players", len(tournaments), len(board.rows))
    return RunResult(tournaments=tournaments, leaderboard=board)


async def run_with_token(
    config: LeaderboardConfig,
    cache_dir: str | None = None,
    token: str | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    on_tournaments: Optional[Callable[[str], None]] = None,
) -> RunResult:
    """Open a client for the duration of one run."""
    kwargs = {"transport": transport} if transport is not None else {}
    async with async_http.build_client(token, **kwargs) as http:
        return await run(LichessClient(http), FetchCache(cache_dir), config, on_tournaments)
