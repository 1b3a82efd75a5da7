"""Aggregation of tournament results into leaderboard rows.

Usernames are normalized through the alias table before anything is keyed on
them, so one person playing under several accounts is scored once. When two
raw names collapse onto the same alias inside one tournament, the later
record wins.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from arena_leaderboard.config.leaderboard import LeaderboardConfig
from arena_leaderboard.domain.models import (
    Leaderboard,
    LeaderboardRow,
    PlayerResult,
    TournamentMeta,
    TournamentResult,
    TournamentTables,
)


def normalize_username(username: str, aliases: Mapping[str, str]) -> str:
    return aliases.get(username, username)


def build_tournament_tables(
    results: Iterable[TournamentResult], aliases: Mapping[str, str]
) -> TournamentTables:
    tables: Dict[str, Mapping[str, PlayerResult]] = {}
    for result in results:
        table: Dict[str, PlayerResult] = {}
        for player in result.players:
            table[normalize_username(player.username, aliases)] = player
        tables[result.id] = MappingProxyType(table)
    return MappingProxyType(tables)


def derive_roster(tables: TournamentTables, excluded_users: Iterable[str]) -> List[str]:
    excluded = set(excluded_users)
    users = {user for table in tables.values() for user in table}
    return sorted((u for u in users if u not in excluded), key=lambda u: (u.lower(), u))


def _entries(user: str, tournament_ids: Sequence[str], tables: TournamentTables):
    for tid in tournament_ids:
        entry = tables.get(tid, {}).get(user)
        if entry is not None:
            yield entry


def _performance(user: str, tournament_id: str, tables: TournamentTables) -> Optional[int]:
    entry = tables.get(tournament_id, {}).get(user)
    return entry.performance if entry is not None else None


def total_points(user: str, tournament_ids: Sequence[str], tables: TournamentTables) -> int:
    return sum(entry.points for entry in _entries(user, tournament_ids, tables))


def medal_tally(
    user: str, tournament_ids: Sequence[str], tables: TournamentTables, medals: Sequence[str]
) -> Dict[str, int]:
    tally: Dict[str, int] = {}
    for entry in _entries(user, tournament_ids, tables):
        if 1 <= entry.rank <= len(medals):
            symbol = medals[entry.rank - 1]
            tally[symbol] = tally.get(symbol, 0) + 1
    return tally


def format_medals(tally: Mapping[str, int], medals: Sequence[str], placeholder: str = "-") -> str:
    if not tally:
        return placeholder
    parts = []
    for symbol in medals:
        count = tally.get(symbol, 0)
        if count == 1:
            parts.append(symbol)
        elif count > 1:
            parts.append(f"{symbol}({count}x)")
    return " ".join(parts)


def aggregate(
    tournaments: Sequence[TournamentMeta],
    results: Iterable[TournamentResult],
    config: LeaderboardConfig,
) -> Leaderboard:
    tournament_ids = [t.id for t in tournaments]
    tables = build_tournament_tables(results, config.user_aliases)
    rows: List[LeaderboardRow] = []
    for user in derive_roster(tables, config.exclude_users):
        performances = tuple(_performance(user, tid, tables) for tid in tournament_ids)
        rows.append(
            LeaderboardRow(
                username=user,
                performances=performances,
                total_points=total_points(user, tournament_ids, tables),
                medals=medal_tally(user, tournament_ids, tables, config.medals),
            )
        )
    return Leaderboard(
        tournaments=list(tournaments),
        rows=rows,
        medal_symbols=tuple(config.medals),
        placeholder=config.placeholder,
    )
