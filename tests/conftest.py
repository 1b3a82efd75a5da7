"""Shared fixtures: an in-memory stand-in for the Lichess HTTP API."""

from __future__ import annotations

import json
from typing import Dict, List, Optional

import httpx
import pytest

from arena_leaderboard.config.leaderboard import LeaderboardConfig


class FakeLichess:
    """Serves canned bodies by URL path and records every request path."""

    def __init__(self, routes: Dict[str, str] | None = None) -> None:
        self.routes: Dict[str, str] = dict(routes or {})
        self.calls: List[str] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.calls.append(path)
        if path not in self.routes:
            return httpx.Response(404, text="Not found")
        return httpx.Response(200, text=self.routes[path])

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url="https://lichess.org/", transport=self.transport())

    # Route helpers --------------------------------------------------------
    def add_user_games(self, user: str, games: List[tuple[str, str]]) -> None:
        blocks = [
            f'[Event "Rated Blitz game"]\n[Site "https://lichess.org/{gid}"]\n[Date "{date}"]\n'
            f'[White "{user}"]\n[Black "someone"]\n\n1. e4 e5 1-0\n'
            for date, gid in games
        ]
        self.routes[f"/api/games/user/{user}"] = "\n".join(blocks)

    def add_game(self, game_id: str, tournament_id: str | None) -> None:
        link = f'<a class="tour" href="/tournament/{tournament_id}">Arena</a>' if tournament_id else ""
        self.routes[f"/{game_id}"] = f"<html><body><a href=\"/@/someone\">someone</a>{link}</body></html>"

    def add_tournament(
        self, tournament_id: str, starts_at: str, created_by: str = "jfilho_AS", name: str | None = None
    ) -> None:
        self.routes[f"/api/tournament/{tournament_id}"] = json.dumps(
            {
                "id": tournament_id,
                "fullName": name or f"Arena {tournament_id}",
                "createdBy": created_by,
                "startsAt": starts_at,
            }
        )

    def add_results(
        self, tournament_id: str, rows: List[tuple[str, int, Optional[int]]]
    ) -> None:
        """A performance of None leaves the key out, as for players who never played."""
        lines = []
        for user, rank, perf in rows:
            record = {"rank": rank, "score": 10, "rating": 1500, "username": user}
            if perf is not None:
                record["performance"] = perf
            lines.append(json.dumps(record))
        self.routes[f"/api/tournament/{tournament_id}/results"] = "\n".join(lines) + "\n"


@pytest.fixture
def fake_lichess() -> FakeLichess:
    return FakeLichess()


@pytest.fixture
def club_config() -> LeaderboardConfig:
    return LeaderboardConfig(
        users_to_fetch=("A",),
        exclude_tournaments=frozenset({"TX"}),
        exclude_users=frozenset({"banned"}),
        allowed_tournament_creators=frozenset({"jfilho_as"}),
        user_aliases={"alice_alt": "alice"},
        points=(10, 8, 6, 3, 2),
        medals=("🥇", "🥈", "🥉"),
    )
