"""Parsing of tournament results (NDJSON) into ``PlayerResult`` entries."""

from __future__ import annotations

import json
from typing import Optional, Sequence

from arena_leaderboard.domain.models import PlayerResult, TournamentResult
from .errors import ResultParseError

CONSOLATION_POINTS = 1


def points_for_rank(rank: int, table: Sequence[int]) -> int:
    index = rank - 1
    if 0 <= index < len(table):
        return table[index]
    return CONSOLATION_POINTS


def _require_int(record: dict, key: str, context: dict, *, optional: bool = False) -> Optional[int]:
    value = record.get(key)
    if value is None and optional:
        return None
    if not isinstance(value, int) or isinstance(value, bool):
        raise ResultParseError(f"Field {key!r} must be an integer, got {value!r}", context=context)
    return value


def parse_tournament_results(
    tournament_id: str, payload: str, points_table: Sequence[int]
) -> TournamentResult:
    players: list[PlayerResult] = []
    lines = [ln for ln in payload.strip().split("\n") if ln.strip()]
    for lineno, line in enumerate(lines, start=1):
        context = {"tournament_id": tournament_id, "line": lineno}
        try:
            record = json.loads(line)
        except json.JSONDecodeError as e:
            raise ResultParseError(f"Malformed result record: {e}", context=context) from e
        if not isinstance(record, dict):
            raise ResultParseError("Result record is not an object", context=context)
        username = record.get("username")
        if not isinstance(username, str) or not username:
            raise ResultParseError("Result record without username", context=context)
        rank = _require_int(record, "rank", context)
        # players who joined but never played carry no performance
        performance = _require_int(record, "performance", context, optional=True)
        players.append(
            PlayerResult(
                tournament_id=tournament_id,
                username=username,
                rank=rank,
                performance=performance,
                points=points_for_rank(rank, points_table),
            )
        )
    return TournamentResult(id=tournament_id, players=players)
