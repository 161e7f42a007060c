"""Domain models for the tournament client."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class TournamentStatus(str, Enum):
    """Temporal status of a tournament relative to the wall clock."""

    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    COMPLETED = "completed"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class UserRole(str, Enum):
    PLAYER = "player"
    ADMIN = "admin"


@dataclass(slots=True)
class UserAccount:
    """Signed-in user as returned by the sign-in endpoint."""

    id: str
    username: str
    role: UserRole
    email: str | None = None


@dataclass(slots=True)
class Attempt:
    """One player's completed submission for a tournament."""

    tournament_id: str
    user_id: str | None
    username: str | None
    answers: list[str] = field(default_factory=list)
    score: int = 0
    completed_at: datetime | None = None


@dataclass(slots=True)
class Tournament:
    """Time-boxed quiz competition with a fixed question set."""

    id: str
    name: str
    category: str
    difficulty: Difficulty
    start_date: datetime
    end_date: datetime
    minimum_passing_score: int | None = None
    attempts: list[Attempt] = field(default_factory=list)
    like_count: int = 0
    created_by: str | None = None

    def attempt_for(self, user_id: str) -> Attempt | None:
        return next((a for a in self.attempts if a.user_id == user_id), None)


@dataclass(slots=True)
class Question:
    """Multiple-choice question. ``correct_answer`` is only filled in server-side."""

    id: str
    question_text: str
    options: list[str]
    correct_answer: str | None = None


@dataclass(slots=True)
class AttemptResult:
    """Outcome returned by the remote API after an attempt is submitted."""

    score: int
    total_questions: int
    passed: bool
    message: str | None = None


@dataclass(slots=True)
class ScoreRow:
    """A single entry of a tournament's score listing."""

    username: str
    score: int
    total_questions: int | None = None
    completed_at: datetime | None = None
