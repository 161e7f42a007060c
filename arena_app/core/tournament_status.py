"""Tournament lifecycle status derived from the wall clock."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from arena_app.constants.quiz_constants import TOURNAMENT_ENDED_TEXT
from arena_app.core.errors import ConfigurationError
from arena_app.core.models import Tournament, TournamentStatus

_STATUS_LABELS = {
    TournamentStatus.UPCOMING: "Upcoming",
    TournamentStatus.ONGOING: "Ongoing",
    TournamentStatus.COMPLETED: "Completed",
}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: str | datetime) -> datetime:
    """Parse an ISO 8601 timestamp into an aware UTC datetime.

    Naive values are interpreted as UTC. Raises ``ConfigurationError`` for
    anything that cannot be parsed.
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip() if value is not None else ""
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as exc:
            raise ConfigurationError(f"Unparsable timestamp: {value!r}") from exc
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def resolve_status(now: datetime, start_date: datetime, end_date: datetime) -> TournamentStatus:
    """Map the current time onto the tournament window.

    Both boundaries belong to the ongoing window.
    """
    if now < start_date:
        return TournamentStatus.UPCOMING
    if now > end_date:
        return TournamentStatus.COMPLETED
    return TournamentStatus.ONGOING


def tournament_status(tournament: Tournament, now: datetime | None = None) -> TournamentStatus:
    return resolve_status(now or utc_now(), tournament.start_date, tournament.end_date)


def can_start_quiz(status: TournamentStatus) -> bool:
    return status is TournamentStatus.ONGOING


def can_edit_tournament(status: TournamentStatus) -> bool:
    return status is not TournamentStatus.COMPLETED


def status_label(status: TournamentStatus) -> str:
    return _STATUS_LABELS[status]


def format_time_remaining(now: datetime, end_date: datetime) -> str:
    """Human readable countdown to ``end_date``, at most three units."""
    remaining = end_date - now
    if remaining <= timedelta(0):
        return TOURNAMENT_ENDED_TEXT

    total_seconds = int(remaining.total_seconds())
    days, rest = divmod(total_seconds, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)

    if days > 0:
        return f"{days}d {hours}h {minutes}m"
    if hours > 0:
        return f"{hours}h {minutes}m {seconds}s"
    return f"{minutes}m {seconds}s"
