"""Tournament discovery: roster users -> games -> tournaments.

Stage A reads every roster user's game export, Stage B scans each game page
for the arena it was played in, Stage C resolves tournament metadata and
applies the exclusion list, chronological ordering and creator allow-list.
The list returned by ``discover`` is the canonical tournament order used for
every later step.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from arena_leaderboard.config.leaderboard import LeaderboardConfig
from arena_leaderboard.core.async_http import LichessClient
from arena_leaderboard.core.cache import FetchCache
from arena_leaderboard.core.traversal import traverse
from arena_leaderboard.domain.models import TournamentMeta
from arena_leaderboard.parsing import game_export_parser, link_extractor, tournament_parser
from arena_leaderboard.utils.sequences import dedupe, present

_log = logging.getLogger(__name__)


def user_games_key(user_id: str) -> str:
    return f"user_games/{user_id}.txt"


def game_key(game_id: str) -> str:
    return f"games/{game_id}"


def tournament_key(tournament_id: str) -> str:
    return f"tournaments/{tournament_id}.json"


def tournament_results_key(tournament_id: str) -> str:
    return f"tournaments_results/{tournament_id}.json"


def remove_excluded(tournament_ids: Iterable[str], excluded: Iterable[str]) -> List[str]:
    excluded_set = set(excluded)
    return [tid for tid in tournament_ids if tid not in excluded_set]


def order_and_filter(
    tournaments: Iterable[TournamentMeta], config: LeaderboardConfig
) -> List[TournamentMeta]:
    """Sort by start time (stable) and keep allow-listed creators only."""
    ordered = sorted(tournaments, key=lambda t: t.starts_at)
    return [t for t in ordered if config.is_allowed_creator(t.created_by)]


class DiscoveryPipeline:
    def __init__(self, client: LichessClient, cache: FetchCache, config: LeaderboardConfig) -> None:
        self.client = client
        self.cache = cache
        self.config = config

    # Stage A -----------------------------------------------------------
    async def game_ids_for_user(self, user_id: str) -> List[str]:
        text = await self.cache.fetch_cached(
            user_games_key(user_id), lambda: self.client.user_games(user_id)
        )
        return game_export_parser.extract_game_ids(text)

    async def game_ids_for_users(self, user_ids: Iterable[str]) -> List[str]:
        per_user = await traverse(list(user_ids), self.game_ids_for_user)
        return dedupe(gid for ids in per_user for gid in ids)

    # Stage B -----------------------------------------------------------
    async def tournament_id_for_game(self, game_id: str) -> Optional[str]:
        html = await self.cache.fetch_cached(game_key(game_id), lambda: self.client.game_page(game_id))
        return link_extractor.extract_tournament_id(html)

    async def tournament_ids_for_games(self, game_ids: Iterable[str]) -> List[str]:
        found = await traverse(list(game_ids), self.tournament_id_for_game)
        return dedupe(present(found))

    # Stage C -----------------------------------------------------------
    async def fetch_tournament(self, tournament_id: str) -> TournamentMeta:
        payload = await self.cache.fetch_cached(
            tournament_key(tournament_id), lambda: self.client.tournament(tournament_id)
        )
        return tournament_parser.parse_tournament(payload)

    async def resolve_tournaments(self, tournament_ids: Iterable[str]) -> List[TournamentMeta]:
        remaining = remove_excluded(dedupe(tournament_ids), self.config.exclude_tournaments)
        metas = await traverse(remaining, self.fetch_tournament)
        kept = order_and_filter(metas, self.config)
        _log.info("%d of %d tournaments kept after creator filtering", len(kept), len(metas))
        return kept

    async def discover(self, user_ids: Iterable[str] | None = None) -> List[TournamentMeta]:
        users = list(user_ids) if user_ids is not None else list(self.config.users_to_fetch)
        game_ids = await self.game_ids_for_users(users)
        _log.info("%d games found for %d users", len(game_ids), len(users))
        tournament_ids = await self.tournament_ids_for_games(game_ids)
        _log.info("%d tournaments linked from games", len(tournament_ids))
        return await self.resolve_tournaments(tournament_ids)
