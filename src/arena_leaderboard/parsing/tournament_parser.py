"""Parsing of tournament metadata JSON into ``TournamentMeta``."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

from arena_leaderboard.domain.models import TournamentMeta
from .errors import TournamentMetadataError


def parse_starts_at(value: Any) -> datetime:
    """Accept ISO-8601 strings (``2021-03-20T21:00:00Z``) or epoch milliseconds."""
    if isinstance(value, bool):
        raise ValueError(f"unsupported startsAt value: {value!r}")
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt
    raise ValueError(f"unsupported startsAt value: {value!r}")


def parse_tournament(payload: str) -> TournamentMeta:
    try:
        raw = json.loads(payload)
    except json.JSONDecodeError as e:
        raise TournamentMetadataError(f"Invalid tournament JSON: {e}") from e
    if not isinstance(raw, dict):
        raise TournamentMetadataError("Tournament payload is not an object")
    missing = [k for k in ("id", "fullName", "createdBy", "startsAt") if k not in raw]
    if missing:
        raise TournamentMetadataError(
            f"Tournament payload missing {missing}", context={"id": raw.get("id")}
        )
    try:
        starts_at = parse_starts_at(raw["startsAt"])
    except ValueError as e:
        raise TournamentMetadataError(str(e), context={"id": raw["id"]}) from e
    return TournamentMeta(
        id=str(raw["id"]),
        full_name=str(raw["fullName"]),
        created_by=str(raw["createdBy"]),
        starts_at=starts_at,
    )
