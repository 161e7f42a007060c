"""Pydantic schemas for the tournament REST API payloads (camelCase on the wire)."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from arena_app.core.models import (
    Attempt,
    AttemptResult,
    Difficulty,
    Question,
    ScoreRow,
    Tournament,
    UserAccount,
    UserRole,
)
from arena_app.core.tournament_status import parse_timestamp

Identifier = Annotated[str, BeforeValidator(lambda value: str(value))]


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class UserRefSchema(WireModel):
    id: Optional[Identifier] = None
    username: Optional[str] = None


class AttemptSchema(WireModel):
    tournament_id: Optional[Identifier] = None
    user: Optional[UserRefSchema] = None
    answers: list[str] = Field(default_factory=list)
    score: int = 0
    completed_at: Optional[datetime] = None

    def to_domain(self, tournament_id: str) -> Attempt:
        return Attempt(
            tournament_id=self.tournament_id or tournament_id,
            user_id=self.user.id if self.user else None,
            username=self.user.username if self.user else None,
            answers=list(self.answers),
            score=self.score,
            completed_at=parse_timestamp(self.completed_at) if self.completed_at else None,
        )


class TournamentSchema(WireModel):
    id: Identifier
    name: str
    category: str = ""
    difficulty: Difficulty = Difficulty.MEDIUM
    start_date: datetime
    end_date: datetime
    minimum_passing_score: Optional[int] = None
    attempts: list[AttemptSchema] = Field(default_factory=list)
    like_count: int = 0
    created_by: Optional[str] = None

    @field_validator("difficulty", mode="before")
    @classmethod
    def _normalize_difficulty(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    def to_domain(self) -> Tournament:
        return Tournament(
            id=self.id,
            name=self.name,
            category=self.category,
            difficulty=self.difficulty,
            start_date=parse_timestamp(self.start_date),
            end_date=parse_timestamp(self.end_date),
            minimum_passing_score=self.minimum_passing_score,
            attempts=[attempt.to_domain(self.id) for attempt in self.attempts],
            like_count=self.like_count,
            created_by=self.created_by,
        )


class QuestionSchema(WireModel):
    id: Identifier
    question: str
    options: list[str] = Field(default_factory=list)
    correct_answer: Optional[str] = None

    def to_domain(self) -> Question:
        return Question(
            id=self.id,
            question_text=self.question,
            options=list(self.options),
            correct_answer=self.correct_answer,
        )


class SignInPayload(WireModel):
    username_or_email: str
    password: str


class SignInResponse(WireModel):
    access_token: str
    id: Identifier
    username: str
    email: Optional[str] = None
    role: UserRole

    @field_validator("role", mode="before")
    @classmethod
    def _normalize_role(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower().removeprefix("role_")
        return value

    def to_domain(self) -> UserAccount:
        return UserAccount(id=self.id, username=self.username, email=self.email, role=self.role)


class RegisterPayload(WireModel):
    username: str
    email: str
    password: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class ParticipatePayload(WireModel):
    answers: list[str]


class ParticipateResponse(WireModel):
    score: int
    total_questions: int
    passed: bool
    message: Optional[str] = None

    def to_domain(self) -> AttemptResult:
        return AttemptResult(
            score=self.score,
            total_questions=self.total_questions,
            passed=self.passed,
            message=self.message,
        )


class ScoreSchema(WireModel):
    username: Optional[str] = None
    user: Optional[UserRefSchema] = None
    score: int
    total_questions: Optional[int] = None
    completed_at: Optional[datetime] = None

    def to_domain(self) -> ScoreRow:
        username = self.username or (self.user.username if self.user else None) or "unknown"
        return ScoreRow(
            username=username,
            score=self.score,
            total_questions=self.total_questions,
            completed_at=parse_timestamp(self.completed_at) if self.completed_at else None,
        )


class LikeCountResponse(WireModel):
    count: int = 0
