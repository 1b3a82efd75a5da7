"""Leaderboard configuration: roster, filters, alias table and scoring tables.

The defaults reproduce the club setup the tool was written for. A JSON file
with the same keys can replace any subset of them (see ``load_config``).
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Tuple


class ConfigError(ValueError):
    """Raised when a configuration file is unreadable or inconsistent."""


DEFAULT_POINTS: Tuple[int, ...] = (10, 8, 6, 3, 2)
DEFAULT_MEDALS: Tuple[str, ...] = ("🥇", "🥈", "🥉")

DEFAULT_ALIASES: Dict[str, str] = {
    "Allan33a": "allan_AS",
    "Drelielson": "Drelielson_AS",
    "EduHnrq_AS": "eduardohenrique_AS",
    "eyshi": "Eyshi_AS",
    "Jfilho_torn": "Jfilho_AS",
    "LucasMax": "LucasMax_AS",
    "manoelquirinoneto": "manoelquirinoneto_AS",
    "Mr-Jonas009": "Jonas07_AS",
    "Nkbdohaojsdk": "CarlosHenrique_AS",
    "Ton_aprendiz": "Tonsall_AS",
    "Tonsall": "Tonsall_AS",
    "VegetaSama13": "VegetaSama_AS",
    "vicc70": "ViicAS",
    "Vick7": "ViicAS",
    "xoxocould": "Jfilho_AS",
    "andrehenrique_AS": "andrehenriq_AS",
    "fernandomarx": "Fernandomarx_AS",
}

_FILE_KEYS = frozenset(
    {
        "users_to_fetch",
        "exclude_tournaments",
        "exclude_users",
        "allowed_tournament_creators",
        "user_aliases",
        "points",
        "medals",
        "placeholder",
    }
)


@dataclass(frozen=True)
class LeaderboardConfig:
    users_to_fetch: Tuple[str, ...] = ("EduHnrq_AS", "Jfilho_AS", "eduardohenrique_AS")
    exclude_tournaments: frozenset[str] = frozenset(
        {"J2EGtXiN", "oBRtdCrN", "sGMpNkje", "fLK31eke"}
    )
    exclude_users: frozenset[str] = frozenset(
        {"Seifador_de_Manoel", "marshmall0ew", "Nielison_AS", "Pedro_AS"}
    )
    # Stored lower-cased; creator comparison is case-insensitive.
    allowed_tournament_creators: frozenset[str] = frozenset(
        {"jfilho_as", "lucasmax_as", "eduhnrq_as", "lucasmax", "eduardohenrique_as"}
    )
    user_aliases: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_ALIASES))
    points: Tuple[int, ...] = DEFAULT_POINTS
    medals: Tuple[str, ...] = DEFAULT_MEDALS
    placeholder: str = "-"

    def __post_init__(self) -> None:
        validate(self)

    def is_allowed_creator(self, creator: str) -> bool:
        return creator.lower() in self.allowed_tournament_creators


def validate(cfg: LeaderboardConfig) -> None:
    if any(a < b for a, b in zip(cfg.points, cfg.points[1:])):
        raise ConfigError(f"points table must be non-increasing: {list(cfg.points)}")
    if len(cfg.medals) != 3:
        raise ConfigError(f"medal table needs exactly 3 entries, got {len(cfg.medals)}")
    chained = sorted(t for t in cfg.user_aliases.values() if cfg.user_aliases.get(t, t) != t)
    if chained:
        raise ConfigError(f"alias targets must not be aliases themselves: {chained}")
    lowered = {c.lower() for c in cfg.allowed_tournament_creators}
    if lowered != set(cfg.allowed_tournament_creators):
        raise ConfigError("allowed_tournament_creators must be lower-case")


def _coerce(key: str, value: Any) -> Any:
    if key == "user_aliases":
        if not isinstance(value, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in value.items()
        ):
            raise ConfigError("user_aliases must map strings to strings")
        return dict(value)
    if key == "placeholder":
        if not isinstance(value, str):
            raise ConfigError("placeholder must be a string")
        return value
    if not isinstance(value, list):
        raise ConfigError(f"{key} must be a list")
    if key == "points":
        if not all(isinstance(v, int) and not isinstance(v, bool) for v in value):
            raise ConfigError("points must be a list of integers")
        return tuple(value)
    if not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{key} must be a list of strings")
    if key in ("users_to_fetch", "medals"):
        return tuple(value)
    if key == "allowed_tournament_creators":
        return frozenset(v.lower() for v in value)
    return frozenset(value)


def from_dict(raw: Dict[str, Any], base: LeaderboardConfig | None = None) -> LeaderboardConfig:
    unknown = sorted(set(raw) - _FILE_KEYS)
    if unknown:
        raise ConfigError(f"unknown configuration keys: {unknown}")
    overrides = {k: _coerce(k, v) for k, v in raw.items()}
    return replace(base or LeaderboardConfig(), **overrides)


def load_config(path: str | None = None) -> LeaderboardConfig:
    """Load configuration from a JSON file, falling back to the defaults."""
    if path is None:
        return LeaderboardConfig()
    try:
        with open(path, "r", encoding="utf-8") as fh:
            raw = json.load(fh)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"cannot read configuration {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"configuration {path} must contain a JSON object")
    return from_dict(raw)
