"""Parsing of a user's PGN game export into (date, game id) records."""

from __future__ import annotations

from typing import Dict, List

from arena_leaderboard.domain.models import GameRecord

EVENT_TAG = "[Event"
DATE_TAG = "[Date"
SITE_TAG = "[Site"


def _tag_value(line: str) -> str:
    # [Date "2021.03.20"] -> 2021.03.20
    start = line.find('"')
    end = line.rfind('"')
    if start == -1 or end <= start:
        return ""
    return line[start + 1 : end]


def _game_id_from_site(site: str) -> str | None:
    segment = site.rstrip("/").rsplit("/", 1)[-1]
    return segment or None


def parse_game_export(text: str) -> List[GameRecord]:
    records: List[GameRecord] = []
    current: GameRecord | None = None
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if line.startswith(EVENT_TAG):
            current = GameRecord(date=None, game_id=None)
            records.append(current)
        elif current is None:
            continue
        elif line.startswith(DATE_TAG):
            current.date = _tag_value(line)
        elif line.startswith(SITE_TAG):
            current.game_id = _game_id_from_site(_tag_value(line))
    return records


def latest_game_per_date(records: List[GameRecord]) -> List[str]:
    """Game id of the last record seen for each distinct date."""
    by_date: Dict[str | None, str] = {}
    for rec in records:
        if rec.game_id:
            by_date[rec.date] = rec.game_id
    return list(by_date.values())


def extract_game_ids(text: str) -> List[str]:
    return latest_game_per_date(parse_game_export(text))
