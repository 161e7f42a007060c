"""Pass/fail evaluation of a tournament score.

The remote API scores attempts; this module mirrors the verdict client-side so
the result screen can show the requirement and the percentage consistently.
Callers apply the default passing percentage (see
``resolve_passing_percentage``); ``evaluate`` itself never defaults.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import math

from arena_app.constants.quiz_constants import (
    DEFAULT_PASSING_PERCENTAGE,
    EXCELLENT_PERCENTAGE,
    GOOD_PERCENTAGE,
)
from arena_app.core.errors import ConfigurationError
from arena_app.core.models import Tournament


class ScoreGrade(Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    PASSED = "passed"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class Evaluation:
    """Verdict and display values for one score."""

    passed: bool
    percentage: float
    required_score: int
    raw_score: int
    total_questions: int
    passing_percentage: float

    @property
    def score_text(self) -> str:
        return f"{self.raw_score}/{self.total_questions}"

    @property
    def percentage_text(self) -> str:
        return f"{self.percentage:.1f}%"

    @property
    def requirement_text(self) -> str:
        return f"{self.required_score}/{self.total_questions} ({self.passing_percentage:g}%)"

    @property
    def status_text(self) -> str:
        return "PASSED" if self.passed else "FAILED"

    @property
    def grade(self) -> ScoreGrade:
        if not self.passed:
            return ScoreGrade.FAILED
        if self.percentage >= EXCELLENT_PERCENTAGE:
            return ScoreGrade.EXCELLENT
        if self.percentage >= GOOD_PERCENTAGE:
            return ScoreGrade.GOOD
        return ScoreGrade.PASSED

    @property
    def summary_text(self) -> str:
        return f"{self.score_text} ({self.percentage_text}) - {self.status_text}"


def _one_decimal(value: float) -> float:
    # Halves round up.
    return math.floor(value * 10 + 0.5) / 10


def _check_percentage(passing_percentage: float) -> None:
    if not 0 <= passing_percentage <= 100:
        raise ConfigurationError(
            f"Passing percentage must be between 0 and 100, got {passing_percentage}."
        )


def required_score(total_questions: int, passing_percentage: float) -> int:
    if total_questions <= 0:
        raise ConfigurationError("A tournament must have at least one question.")
    _check_percentage(passing_percentage)
    return math.ceil(passing_percentage * total_questions / 100)


def evaluate(raw_score: int, total_questions: int, passing_percentage: float) -> Evaluation:
    """Turn a raw score into a pass/fail verdict.

    Raises:
        ConfigurationError: ``total_questions`` is not positive or
            ``passing_percentage`` lies outside [0, 100].
    """
    required = required_score(total_questions, passing_percentage)
    return Evaluation(
        passed=raw_score >= required,
        percentage=_one_decimal(raw_score / total_questions * 100),
        required_score=required,
        raw_score=raw_score,
        total_questions=total_questions,
        passing_percentage=passing_percentage,
    )


def resolve_passing_percentage(
    tournament: Tournament,
    default: int = DEFAULT_PASSING_PERCENTAGE,
) -> int:
    """Return the tournament's passing percentage, or ``default`` when unset."""
    value = tournament.minimum_passing_score
    if value is None:
        return default
    _check_percentage(value)
    return value


def validate_tournament_scoring(
    tournament: Tournament,
    question_count: int,
    default: int = DEFAULT_PASSING_PERCENTAGE,
) -> int:
    """Check that a tournament can be scored; returns the passing percentage in effect."""
    if question_count <= 0:
        raise ConfigurationError(f"Tournament {tournament.name!r} has no questions.")
    return resolve_passing_percentage(tournament, default=default)
