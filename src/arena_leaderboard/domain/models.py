"""Domain models for the leaderboard pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Mapping, Optional, Tuple

from arena_leaderboard.config.leaderboard import DEFAULT_MEDALS


@dataclass(slots=True)
class GameRecord:
    date: Optional[str]
    game_id: Optional[str]


@dataclass(slots=True, frozen=True)
class TournamentMeta:
    id: str
    full_name: str
    created_by: str
    starts_at: datetime


@dataclass(slots=True, frozen=True)
class PlayerResult:
    tournament_id: str
    username: str
    rank: int
    performance: Optional[int]
    points: int


@dataclass(slots=True)
class TournamentResult:
    id: str
    players: List[PlayerResult] = field(default_factory=list)


# tournament id -> normalized username -> result
TournamentTables = Mapping[str, Mapping[str, PlayerResult]]


@dataclass(slots=True, frozen=True)
class LeaderboardRow:
    username: str
    performances: Tuple[Optional[int], ...]
    total_points: int
    medals: Dict[str, int]


@dataclass(slots=True)
class Leaderboard:
    tournaments: List[TournamentMeta]
    rows: List[LeaderboardRow]
    medal_symbols: Tuple[str, ...] = DEFAULT_MEDALS
    placeholder: str = "-"

    @property
    def tournament_ids(self) -> List[str]:
        return [t.id for t in self.tournaments]
