from datetime import datetime, timedelta, timezone

import pytest

from arena_app.constants.quiz_constants import TOURNAMENT_ENDED_TEXT
from arena_app.core.errors import ConfigurationError
from arena_app.core.models import TournamentStatus
from arena_app.core.tournament_status import (
    can_edit_tournament,
    can_start_quiz,
    format_time_remaining,
    parse_timestamp,
    resolve_status,
    status_label,
)

START = datetime(2026, 5, 1, 9, 0, tzinfo=timezone.utc)
END = datetime(2026, 5, 1, 17, 0, tzinfo=timezone.utc)

_ORDER = [TournamentStatus.UPCOMING, TournamentStatus.ONGOING, TournamentStatus.COMPLETED]


def test_status_before_during_and_after_window():
    assert resolve_status(START - timedelta(seconds=1), START, END) is TournamentStatus.UPCOMING
    assert resolve_status(START + timedelta(hours=3), START, END) is TournamentStatus.ONGOING
    assert resolve_status(END + timedelta(hours=3), START, END) is TournamentStatus.COMPLETED


def test_window_boundaries_are_inclusive():
    assert resolve_status(START, START, END) is TournamentStatus.ONGOING
    assert resolve_status(END, START, END) is TournamentStatus.ONGOING
    assert resolve_status(END + timedelta(milliseconds=1), START, END) is TournamentStatus.COMPLETED


def test_status_never_moves_backwards_or_skips():
    now = START - timedelta(minutes=30)
    seen = []
    while now <= END + timedelta(minutes=30):
        status = resolve_status(now, START, END)
        if not seen or seen[-1] is not status:
            seen.append(status)
        now += timedelta(minutes=1)
    assert seen == _ORDER


def test_zero_length_window_is_ongoing_only_at_its_instant():
    assert resolve_status(START, START, START) is TournamentStatus.ONGOING
    assert resolve_status(START + timedelta(microseconds=1), START, START) is TournamentStatus.COMPLETED


def test_gates_follow_status():
    assert can_start_quiz(TournamentStatus.ONGOING)
    assert not can_start_quiz(TournamentStatus.UPCOMING)
    assert not can_start_quiz(TournamentStatus.COMPLETED)
    assert can_edit_tournament(TournamentStatus.UPCOMING)
    assert can_edit_tournament(TournamentStatus.ONGOING)
    assert not can_edit_tournament(TournamentStatus.COMPLETED)
    assert status_label(TournamentStatus.ONGOING) == "Ongoing"


def test_parse_timestamp_accepts_zulu_offsets_and_naive_values():
    assert parse_timestamp("2026-05-01T09:00:00Z") == START
    assert parse_timestamp("2026-05-01T11:00:00+02:00") == START
    naive = parse_timestamp("2026-05-01T09:00:00")
    assert naive == START
    assert naive.tzinfo is timezone.utc


def test_parse_timestamp_rejects_garbage():
    with pytest.raises(ConfigurationError):
        parse_timestamp("next tuesday")


@pytest.mark.parametrize(
    "remaining, expected",
    [
        (timedelta(days=2, hours=3, minutes=4), "2d 3h 4m"),
        (timedelta(hours=1, minutes=2, seconds=3), "1h 2m 3s"),
        (timedelta(minutes=5, seconds=9), "5m 9s"),
        (timedelta(0), TOURNAMENT_ENDED_TEXT),
        (timedelta(seconds=-10), TOURNAMENT_ENDED_TEXT),
    ],
)
def test_format_time_remaining(remaining, expected):
    assert format_time_remaining(START, START + remaining) == expected
