"""Global configuration and constants for the leaderboard pipeline."""

from __future__ import annotations

import os
from typing import Final

BASE_URL: Final = "https://lichess.org/"
DEFAULT_USER_AGENT: Final = "arena-leaderboard/0.1 (+https://lichess.org/api)"
DEFAULT_TIMEOUT: Final = 30  # seconds
CACHE_DIR: Final = os.environ.get("ARENA_LEADERBOARD_CACHE_DIR", "cache")

TOKEN_ENV_VAR: Final = "LICHESS_TOKEN"


def api_token() -> str | None:
    """Personal API token (https://lichess.org/account/oauth/token)."""
    return os.environ.get(TOKEN_ENV_VAR) or None
