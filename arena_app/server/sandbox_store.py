"""In-memory state behind the sandbox tournament API."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
import secrets
from threading import Lock
from uuid import uuid4

from arena_app.constants.quiz_constants import DEFAULT_PASSING_PERCENTAGE
from arena_app.core.models import (
    Attempt,
    AttemptResult,
    Difficulty,
    Question,
    ScoreRow,
    Tournament,
    TournamentStatus,
    UserAccount,
    UserRole,
)
from arena_app.core.scoring import evaluate
from arena_app.core.tournament_status import resolve_status, utc_now
from arena_app.server.sandbox_seed import QUESTION_BANK, SAMPLE_TOURNAMENTS, SAMPLE_USERS


@dataclass(slots=True)
class StoredUser:
    account: UserAccount
    password: str


@dataclass(slots=True)
class TournamentRecord:
    tournament: Tournament
    questions: list[Question]
    likes: set[str] = field(default_factory=set)


class SandboxStore:
    """Thread-safe store for users, tokens and tournaments."""

    def __init__(self, seed: bool = True, clock=utc_now) -> None:
        self._lock = Lock()
        self._clock = clock
        self._users: dict[str, StoredUser] = {}
        self._tokens: dict[str, str] = {}
        self._tournaments: dict[str, TournamentRecord] = {}
        self._tournament_counter: int = 0
        if seed:
            self._seed()

    # --- Users ---

    def register(self, username: str, email: str, password: str, role: UserRole) -> UserAccount:
        with self._lock:
            if any(u.account.username == username or u.account.email == email for u in self._users.values()):
                raise ValueError("Username or email is already taken.")
            account = UserAccount(id=uuid4().hex[:12], username=username, email=email, role=role)
            self._users[account.id] = StoredUser(account=account, password=password)
            return account

    def authenticate(self, username_or_email: str, password: str) -> tuple[str, UserAccount] | None:
        with self._lock:
            for stored in self._users.values():
                account = stored.account
                if username_or_email not in (account.username, account.email):
                    continue
                if not secrets.compare_digest(stored.password, password):
                    return None
                token = secrets.token_urlsafe(24)
                self._tokens[token] = account.id
                return token, account
            return None

    def user_for_token(self, token: str) -> UserAccount | None:
        with self._lock:
            user_id = self._tokens.get(token)
            if user_id is None:
                return None
            return self._users[user_id].account

    # --- Tournaments ---

    def list_tournaments(self) -> list[Tournament]:
        with self._lock:
            return [record.tournament for record in self._tournaments.values()]

    def get_tournament(self, tournament_id: str) -> Tournament:
        with self._lock:
            return self._record(tournament_id).tournament

    def get_questions(self, tournament_id: str) -> list[Question]:
        with self._lock:
            return list(self._record(tournament_id).questions)

    def categories(self) -> list[str]:
        return list(QUESTION_BANK)

    def create_tournament(
        self,
        name: str,
        category: str,
        difficulty: Difficulty,
        start_date: datetime,
        end_date: datetime,
        minimum_passing_score: int | None,
        created_by: str | None = None,
    ) -> Tournament:
        if end_date <= start_date:
            raise ValueError("End date must be after start date.")
        if minimum_passing_score is not None and not 0 <= minimum_passing_score <= 100:
            raise ValueError("Minimum passing score must be between 0 and 100.")
        with self._lock:
            self._tournament_counter += 1
            tournament = Tournament(
                id=str(self._tournament_counter),
                name=name,
                category=category,
                difficulty=difficulty,
                start_date=start_date,
                end_date=end_date,
                minimum_passing_score=minimum_passing_score,
                created_by=created_by,
            )
            self._tournaments[tournament.id] = TournamentRecord(
                tournament=tournament,
                questions=self._questions_for(category, tournament.id),
            )
            return tournament

    def update_tournament(
        self,
        tournament_id: str,
        name: str,
        start_date: datetime,
        end_date: datetime,
    ) -> Tournament:
        if end_date <= start_date:
            raise ValueError("End date must be after start date.")
        with self._lock:
            tournament = self._record(tournament_id).tournament
            if self._status(tournament) is TournamentStatus.COMPLETED:
                raise RuntimeError("Completed tournaments cannot be edited.")
            tournament.name = name
            tournament.start_date = start_date
            tournament.end_date = end_date
            return tournament

    def delete_tournament(self, tournament_id: str) -> None:
        with self._lock:
            self._record(tournament_id)
            del self._tournaments[tournament_id]

    def set_questions(self, tournament_id: str, questions: list[Question]) -> None:
        with self._lock:
            self._record(tournament_id).questions = list(questions)

    # --- Attempts ---

    def participate(self, tournament_id: str, user: UserAccount, answers: list[str]) -> AttemptResult:
        with self._lock:
            record = self._record(tournament_id)
            tournament = record.tournament
            if self._status(tournament) is not TournamentStatus.ONGOING:
                raise RuntimeError("Tournament is not open for participation.")
            if tournament.attempt_for(user.id) is not None:
                raise RuntimeError("You have already participated in this tournament.")
            if len(answers) != len(record.questions):
                raise ValueError(
                    f"Expected {len(record.questions)} answers, got {len(answers)}."
                )

            score = sum(
                1
                for question, answer in zip(record.questions, answers)
                if answer and question.correct_answer
                and answer.strip().lower() == question.correct_answer.strip().lower()
            )
            passing = tournament.minimum_passing_score
            if passing is None:
                passing = DEFAULT_PASSING_PERCENTAGE
            evaluation = evaluate(score, len(record.questions), passing)
            tournament.attempts.append(
                Attempt(
                    tournament_id=tournament.id,
                    user_id=user.id,
                    username=user.username,
                    answers=list(answers),
                    score=score,
                    completed_at=self._clock(),
                )
            )
            message = (
                f"Congratulations! You passed with {evaluation.percentage_text}."
                if evaluation.passed
                else f"You scored {evaluation.percentage_text}; {evaluation.requirement_text} was needed."
            )
            return AttemptResult(
                score=score,
                total_questions=len(record.questions),
                passed=evaluation.passed,
                message=message,
            )

    def scores(self, tournament_id: str) -> list[ScoreRow]:
        with self._lock:
            record = self._record(tournament_id)
            return [
                ScoreRow(
                    username=attempt.username or "unknown",
                    score=attempt.score,
                    total_questions=len(record.questions),
                    completed_at=attempt.completed_at,
                )
                for attempt in record.tournament.attempts
            ]

    def participated(self, user: UserAccount) -> list[Tournament]:
        with self._lock:
            return [
                record.tournament
                for record in self._tournaments.values()
                if record.tournament.attempt_for(user.id) is not None
            ]

    # --- Likes ---

    def like(self, tournament_id: str, user: UserAccount) -> int:
        with self._lock:
            record = self._record(tournament_id)
            record.likes.add(user.id)
            record.tournament.like_count = len(record.likes)
            return record.tournament.like_count

    def unlike(self, tournament_id: str, user: UserAccount) -> int:
        with self._lock:
            record = self._record(tournament_id)
            record.likes.discard(user.id)
            record.tournament.like_count = len(record.likes)
            return record.tournament.like_count

    def like_count(self, tournament_id: str) -> int:
        with self._lock:
            return len(self._record(tournament_id).likes)

    # --- Internals ---

    def _record(self, tournament_id: str) -> TournamentRecord:
        record = self._tournaments.get(tournament_id)
        if record is None:
            raise LookupError(f"Tournament {tournament_id} not found.")
        return record

    def _status(self, tournament: Tournament) -> TournamentStatus:
        return resolve_status(self._clock(), tournament.start_date, tournament.end_date)

    @staticmethod
    def _questions_for(category: str, tournament_id: str) -> list[Question]:
        bank = QUESTION_BANK.get(category) or QUESTION_BANK["General Knowledge"]
        return [
            Question(
                id=f"{tournament_id}-{index + 1}",
                question_text=text,
                options=list(options),
                correct_answer=correct,
            )
            for index, (text, options, correct) in enumerate(bank)
        ]

    def _seed(self) -> None:
        for username, email, password, role in SAMPLE_USERS:
            self.register(username, email, password, UserRole(role))
        now = self._clock()
        for name, category, difficulty, start_hours, end_hours, passing in SAMPLE_TOURNAMENTS:
            self.create_tournament(
                name=name,
                category=category,
                difficulty=Difficulty(difficulty),
                start_date=now + timedelta(hours=start_hours),
                end_date=now + timedelta(hours=end_hours),
                minimum_passing_score=passing,
                created_by="admin",
            )
