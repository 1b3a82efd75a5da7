"""Tournament link extraction from game pages (BeautifulSoup version)."""

from __future__ import annotations

import re
from typing import Optional

from bs4 import BeautifulSoup

TOURNAMENT_HREF_RE = re.compile(r"^(?:https?://(?:www\.)?lichess\.org)?/tournament/([^\"/?#]+)$")


def extract_tournament_id(html: str) -> Optional[str]:
    """Id of the first arena tournament linked from ``html`` (or None)."""
    soup = BeautifulSoup(html, "html.parser")
    for a in soup.find_all("a", href=True):
        m = TOURNAMENT_HREF_RE.match(a["href"])
        if m:
            return m.group(1)
    return None
