"""Command line entrypoint for the arena leaderboard.

Discovers the club's arena tournaments from the roster's game history,
fetches their results (through the on-disk cache) and prints the
leaderboard as CSV blocks.

Example:
  LICHESS_TOKEN=... arena-leaderboard --config club.json --cache-dir ./cache
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Sequence

from arena_leaderboard.config import settings
from arena_leaderboard.config.leaderboard import ConfigError, load_config
from arena_leaderboard.core.async_http import AsyncHttpError
from arena_leaderboard.core.cache import CacheWriteError
from arena_leaderboard.core import filesystem
from arena_leaderboard.parsing.errors import ParsingError
from arena_leaderboard.services import pipeline, report

_log = logging.getLogger("arena_leaderboard")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Lichess arena tournament leaderboard")
    p.add_argument("--config", type=str, help="JSON file overriding roster, filters and tables")
    p.add_argument("--cache-dir", type=str, default=None, help="Cache root directory")
    p.add_argument(
        "--token",
        type=str,
        default=None,
        help=f"Lichess API token (defaults to ${settings.TOKEN_ENV_VAR})",
    )
    p.add_argument("--output", type=str, help="Write the report to this file instead of stdout")
    p.add_argument("--json", action="store_true", help="Output JSON summary")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p.parse_args(argv)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )
    # httpx logs every request at INFO; the pipeline already logs each fetch.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)
    token = args.token or settings.api_token()
    if not token:
        _log.warning("No API token given; requests are sent unauthenticated")

    def _print_tournaments(text: str) -> None:
        if not args.json and text:
            print(text, flush=True)

    try:
        config = load_config(args.config)
        result = asyncio.run(
            pipeline.run_with_token(
                config,
                cache_dir=args.cache_dir,
                token=token,
                on_tournaments=_print_tournaments,
            )
        )
    except (ConfigError, AsyncHttpError, CacheWriteError, ParsingError) as e:
        _log.error("%s", e)
        return 1

    if args.json:
        output = json.dumps(report.to_summary(result.leaderboard), indent=2, ensure_ascii=False) + "\n"
    else:
        output = report.render_report(result.leaderboard)
    if args.output:
        filesystem.write_text(args.output, output)
    else:
        sys.stdout.write(output)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
