"""Validation of the administrator's create/edit tournament form."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
import re

from arena_app.constants.quiz_constants import (
    DEFAULT_PASSING_PERCENTAGE,
    MIN_TOURNAMENT_DURATION_MINUTES,
    START_DATE_GRACE_MINUTES,
    TOURNAMENT_NAME_MAX_LENGTH,
    TOURNAMENT_NAME_MIN_LENGTH,
)
from arena_app.core.models import Difficulty, Tournament

_HTML_TAG = re.compile(r"<[^>]*>")


@dataclass(slots=True)
class TournamentForm:
    """Editable tournament fields as entered by an administrator."""

    name: str = ""
    category: str = ""
    difficulty: Difficulty = Difficulty.MEDIUM
    start_date: datetime | None = None
    end_date: datetime | None = None
    minimum_passing_score: int | str | None = DEFAULT_PASSING_PERCENTAGE

    @classmethod
    def from_tournament(cls, tournament: Tournament) -> TournamentForm:
        return cls(
            name=tournament.name,
            category=tournament.category,
            difficulty=tournament.difficulty,
            start_date=tournament.start_date,
            end_date=tournament.end_date,
            minimum_passing_score=tournament.minimum_passing_score,
        )

    def passing_score_value(self) -> int | None:
        try:
            return int(str(self.minimum_passing_score).strip())
        except (TypeError, ValueError):
            return None

    def to_payload(self, creating: bool = True) -> dict[str, object]:
        """Wire payload; edits only carry the fields an edit may change."""
        payload: dict[str, object] = {
            "name": self.name.strip(),
            "startDate": self.start_date.isoformat() if self.start_date else None,
            "endDate": self.end_date.isoformat() if self.end_date else None,
        }
        if creating:
            payload["category"] = self.category
            payload["difficulty"] = self.difficulty.value
            payload["minimumPassingScore"] = self.passing_score_value()
        return payload


def is_valid_tournament_name(name: str | None) -> bool:
    if not name:
        return False
    stripped = name.strip()
    return (
        TOURNAMENT_NAME_MIN_LENGTH <= len(stripped) <= TOURNAMENT_NAME_MAX_LENGTH
        and not _HTML_TAG.search(stripped)
    )


def validate_tournament_form(form: TournamentForm, now: datetime, creating: bool = True) -> list[str]:
    """Return a list of human readable problems; empty when the form is valid."""
    errors: list[str] = []

    if not form.name.strip():
        errors.append("Tournament name is required")
    elif not is_valid_tournament_name(form.name):
        errors.append(
            f"Tournament name must be {TOURNAMENT_NAME_MIN_LENGTH}-{TOURNAMENT_NAME_MAX_LENGTH} "
            "characters and must not contain HTML"
        )
    if creating and not form.category:
        errors.append("Category is required")
    if form.start_date is None:
        errors.append("Start date is required")
    if form.end_date is None:
        errors.append("End date is required")

    if form.start_date is not None and form.end_date is not None:
        if creating and form.start_date < now - timedelta(minutes=START_DATE_GRACE_MINUTES):
            errors.append(f"Start date cannot be more than {START_DATE_GRACE_MINUTES} minutes in the past")
        if form.end_date <= form.start_date:
            errors.append("End date must be after start date")
        elif creating and form.end_date - form.start_date < timedelta(minutes=MIN_TOURNAMENT_DURATION_MINUTES):
            errors.append(f"Tournament must be at least {MIN_TOURNAMENT_DURATION_MINUTES} minutes long")

    if creating:
        score = form.passing_score_value()
        if score is None or not 0 <= score <= 100:
            errors.append("Minimum passing score must be between 0 and 100")

    return errors
