from datetime import datetime, timezone

import pytest

from arena_leaderboard.parsing import game_export_parser, link_extractor, tournament_parser
from arena_leaderboard.parsing.errors import TournamentMetadataError

PGN = """[Event "Rated Blitz game"]
[Site "https://lichess.org/g1"]
[Date "2021.03.20"]
[White "A"]

1. e4 e5 1-0

[Event "Club Arena"]
[Site "https://lichess.org/g2"]
[Date "2021.03.20"]
[White "A"]

1. d4 d5 0-1

[Event "Club Arena"]
[Site "https://lichess.org/g3"]
[Date "2021.03.27"]

1. c4 1/2-1/2
"""


def test_game_export_records():
    records = game_export_parser.parse_game_export(PGN)
    assert [(r.date, r.game_id) for r in records] == [
        ("2021.03.20", "g1"),
        ("2021.03.20", "g2"),
        ("2021.03.27", "g3"),
    ]


def test_last_game_per_date_wins():
    assert game_export_parser.extract_game_ids(PGN) == ["g2", "g3"]


def test_empty_export_yields_no_games():
    assert game_export_parser.extract_game_ids("") == []
    assert game_export_parser.extract_game_ids("\n\n") == []


def test_lines_before_first_event_ignored():
    text = '[Site "https://lichess.org/zzz"]\n[Event "x"]\n[Date "2020.01.01"]\n[Site "https://lichess.org/abc"]\n'
    assert game_export_parser.extract_game_ids(text) == ["abc"]


def test_crlf_export():
    text = PGN.replace("\n", "\r\n")
    assert game_export_parser.extract_game_ids(text) == ["g2", "g3"]


def test_tournament_link_extraction():
    html = (
        '<html><a href="/@/someone">p</a>'
        '<a href="/tournament/T1">Arena</a><a href="/tournament/T2">Other</a></html>'
    )
    assert link_extractor.extract_tournament_id(html) == "T1"


def test_tournament_link_absolute_url():
    html = '<a href="https://lichess.org/tournament/Abc12345">Arena</a>'
    assert link_extractor.extract_tournament_id(html) == "Abc12345"


def test_no_tournament_link():
    html = '<html><a href="/swiss/S1">Swiss</a><a href="/tournament">List</a></html>'
    assert link_extractor.extract_tournament_id(html) is None


def test_tournament_metadata():
    meta = tournament_parser.parse_tournament(
        '{"id": "T1", "fullName": "Club Arena", "createdBy": "Jfilho_AS",'
        ' "startsAt": "2021-03-20T21:00:00Z", "nbPlayers": 12}'
    )
    assert meta.id == "T1"
    assert meta.full_name == "Club Arena"
    assert meta.created_by == "Jfilho_AS"
    assert meta.starts_at == datetime(2021, 3, 20, 21, 0, tzinfo=timezone.utc)


def test_starts_at_epoch_millis():
    assert tournament_parser.parse_starts_at(1616274000000) == datetime(
        2021, 3, 20, 21, 0, tzinfo=timezone.utc
    )


@pytest.mark.parametrize(
    "payload",
    [
        "not json",
        "[1, 2]",
        '{"id": "T1", "fullName": "x", "createdBy": "y"}',
        '{"id": "T1", "fullName": "x", "createdBy": "y", "startsAt": "yesterday"}',
    ],
)
def test_bad_metadata_raises(payload):
    with pytest.raises(TournamentMetadataError):
        tournament_parser.parse_tournament(payload)
