"""CSV-shaped text rendering of a ``Leaderboard``."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

from arena_leaderboard.config import settings
from arena_leaderboard.domain.models import Leaderboard, TournamentMeta
from .aggregation import format_medals

MEMBERS_HEADER = "Membros"
STANDINGS_HEADER = ("Membros", "Pontuação", "Medalhas")


def render_tournament_list(tournaments: Iterable[TournamentMeta], base_url: str | None = None) -> str:
    base = (base_url or settings.BASE_URL).rstrip("/")
    return "\n".join(f"{base}/tournament/{t.id} - {t.full_name}" for t in tournaments)


def render_performance_table(board: Leaderboard) -> str:
    header = [MEMBERS_HEADER] + [f"Tournament {i}" for i in range(1, len(board.tournaments) + 1)]
    lines = [",".join(header)]
    for row in board.rows:
        cells = [row.username] + [
            board.placeholder if perf is None else str(perf) for perf in row.performances
        ]
        lines.append(",".join(cells))
    return "\n".join(lines)


def render_standings_header() -> str:
    return ",".join(STANDINGS_HEADER)


def render_standings(board: Leaderboard) -> str:
    return "\n".join(
        ",".join(
            [
                row.username,
                str(row.total_points),
                format_medals(row.medals, board.medal_symbols, board.placeholder),
            ]
        )
        for row in board.rows
    )


def render_report(board: Leaderboard) -> str:
    blocks: List[str] = [
        render_performance_table(board),
        render_standings_header(),
        render_standings(board),
    ]
    return "\n".join(blocks) + "\n"


def to_summary(board: Leaderboard) -> Dict[str, Any]:
    """JSON-serializable view used by ``--json``."""
    return {
        "tournaments": [
            {
                "label": f"Tournament {i}",
                "id": t.id,
                "full_name": t.full_name,
                "created_by": t.created_by,
                "starts_at": t.starts_at.isoformat(),
            }
            for i, t in enumerate(board.tournaments, start=1)
        ],
        "standings": [
            {
                "username": row.username,
                "performances": list(row.performances),
                "total_points": row.total_points,
                "medals": format_medals(row.medals, board.medal_symbols, board.placeholder),
            }
            for row in board.rows
        ],
    }
