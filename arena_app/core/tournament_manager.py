"""Business logic shared between the Qt views and the remote API."""

from __future__ import annotations

from datetime import datetime
import logging
from typing import Callable

from arena_app.client.api_client import TournamentApiClient
from arena_app.constants.quiz_constants import DEFAULT_PASSING_PERCENTAGE
from arena_app.core.errors import ConfigurationError, InvalidState, ValidationError
from arena_app.core.models import (
    AttemptResult,
    Question,
    Tournament,
    TournamentStatus,
    UserAccount,
    UserRole,
)
from arena_app.core.scoring import (
    Evaluation,
    evaluate,
    resolve_passing_percentage,
    validate_tournament_scoring,
)
from arena_app.core.services.auth_session import AuthSession
from arena_app.core.services.countdown import QuizCountdown, attempt_deadline
from arena_app.core.services.leaderboard import Leaderboard
from arena_app.core.services.quiz_attempt import QuizAttemptController, QuizSessionSnapshot
from arena_app.core.tournament_status import (
    can_edit_tournament,
    can_start_quiz,
    resolve_status,
    utc_now,
)
from arena_app.core.tournament_validation import TournamentForm, validate_tournament_form

logger = logging.getLogger(__name__)


class TournamentManager:
    """Facade for the API client, auth session, status gates and quiz attempts."""

    def __init__(
        self,
        api: TournamentApiClient,
        session: AuthSession,
        clock: Callable[[], datetime] = utc_now,
        default_passing_percentage: int = DEFAULT_PASSING_PERCENTAGE,
        attempt_time_limit_seconds: int | None = None,
    ) -> None:
        self._api = api
        self._session = session
        self._clock = clock
        self._default_passing_percentage = default_passing_percentage
        self._attempt_time_limit_seconds = attempt_time_limit_seconds
        # Configuration problems found at load time, per tournament id.
        self._configuration_errors: dict[str, ConfigurationError] = {}

    @property
    def session(self) -> AuthSession:
        return self._session

    def now(self) -> datetime:
        return self._clock()

    # --- Auth ---

    def login(self, username_or_email: str, password: str) -> UserAccount:
        token, user = self._api.sign_in(username_or_email, password)
        self._session.sign_in(token, user)
        return user

    def logout(self) -> None:
        self._session.sign_out()
        self._configuration_errors.clear()

    def register(self, username: str, email: str, password: str, role: UserRole = UserRole.PLAYER) -> None:
        self._api.register(username, email, password, role=role)

    def forgot_password(self, email: str) -> None:
        self._api.forgot_password(email)

    def reset_password(self, token: str, new_password: str) -> None:
        self._api.reset_password(token, new_password)

    # --- Status gates ---

    def status_of(self, tournament: Tournament) -> TournamentStatus:
        return resolve_status(self._clock(), tournament.start_date, tournament.end_date)

    def can_start(self, tournament: Tournament) -> bool:
        return can_start_quiz(self.status_of(tournament))

    def can_edit(self, tournament: Tournament) -> bool:
        return can_edit_tournament(self.status_of(tournament))

    def has_participated(self, tournament: Tournament) -> bool:
        user = self._session.user
        return user is not None and tournament.attempt_for(user.id) is not None

    # --- Browsing ---

    def list_tournaments(self, status: TournamentStatus | None = None) -> list[Tournament]:
        tournaments = self._api.list_tournaments()
        if status is None:
            return tournaments
        return [t for t in tournaments if self.status_of(t) is status]

    def tournaments_by_status(self) -> dict[TournamentStatus, list[Tournament]]:
        grouped: dict[TournamentStatus, list[Tournament]] = {status: [] for status in TournamentStatus}
        for tournament in self._api.list_tournaments():
            grouped[self.status_of(tournament)].append(tournament)
        return grouped

    def player_history(self) -> list[Tournament]:
        return self._api.list_participated()

    def load_tournament(self, tournament_id: str) -> Tournament:
        return self._api.load_tournament(tournament_id)

    def list_categories(self) -> list[str]:
        return self._api.list_categories()

    # --- Playing ---

    def prepare_quiz(
        self,
        tournament_id: str,
        on_session_change: Callable[[QuizSessionSnapshot], None] | None = None,
    ) -> QuizAttemptController:
        """Load a tournament with its questions and wire up a fresh attempt.

        Raises:
            ConfigurationError: the tournament cannot be played (cached per id).
            NetworkFailure: loading failed; calling again retries the load.
        """
        cached = self._configuration_errors.get(tournament_id)
        if cached is not None:
            raise cached

        tournament = self._api.load_tournament(tournament_id)
        questions = self._api.load_questions(tournament_id)
        self._check_playable(tournament, questions)

        def submit_answers(answers: list[str]) -> AttemptResult:
            return self._api.submit_attempt(tournament.id, answers)

        return QuizAttemptController(
            tournament,
            questions,
            submit_answers,
            clock=self._clock,
            on_session_change=on_session_change,
        )

    def create_countdown(self, controller: QuizAttemptController) -> QuizCountdown:
        deadline = attempt_deadline(
            controller.tournament.end_date,
            self._clock(),
            self._attempt_time_limit_seconds,
        )
        return QuizCountdown(controller, deadline, clock=self._clock)

    def passing_percentage(self, tournament: Tournament) -> int:
        return resolve_passing_percentage(tournament, default=self._default_passing_percentage)

    def evaluate_result(self, tournament: Tournament, result: AttemptResult) -> Evaluation:
        evaluation = evaluate(result.score, result.total_questions, self.passing_percentage(tournament))
        if evaluation.passed != result.passed:
            logger.warning(
                "Local verdict for tournament %s (%s) differs from the server's (%s)",
                tournament.id,
                evaluation.status_text,
                "PASSED" if result.passed else "FAILED",
            )
        return evaluation

    # --- Administration ---

    def create_tournament(self, form: TournamentForm) -> Tournament:
        self._require_admin("create tournaments")
        errors = validate_tournament_form(form, self._clock(), creating=True)
        if errors:
            raise ValidationError(errors)
        tournament = self._api.create_tournament(form.to_payload(creating=True))
        logger.info("Created tournament %s (%s)", tournament.id, tournament.name)
        return tournament

    def update_tournament(self, tournament: Tournament, form: TournamentForm) -> Tournament:
        self._require_admin("edit tournaments")
        if not self.can_edit(tournament):
            raise InvalidState(
                "This tournament has been completed and cannot be edited.",
                operation="update_tournament",
                state=TournamentStatus.COMPLETED.value,
            )
        errors = validate_tournament_form(form, self._clock(), creating=False)
        if errors:
            raise ValidationError(errors)
        updated = self._api.update_tournament(tournament.id, form.to_payload(creating=False))
        self._configuration_errors.pop(tournament.id, None)
        return updated

    def delete_tournament(self, tournament_id: str) -> None:
        self._require_admin("delete tournaments")
        self._api.delete_tournament(tournament_id)
        self._configuration_errors.pop(tournament_id, None)
        logger.info("Deleted tournament %s", tournament_id)

    # --- Likes & results ---

    def like(self, tournament_id: str) -> int:
        self._api.like_tournament(tournament_id)
        return self._api.get_like_count(tournament_id)

    def unlike(self, tournament_id: str) -> int:
        self._api.unlike_tournament(tournament_id)
        return self._api.get_like_count(tournament_id)

    def like_count(self, tournament_id: str) -> int:
        return self._api.get_like_count(tournament_id)

    def leaderboard(self, tournament_id: str) -> Leaderboard:
        return Leaderboard(self._api.get_scores(tournament_id))

    # --- Internals ---

    def _check_playable(self, tournament: Tournament, questions: list[Question]) -> None:
        try:
            validate_tournament_scoring(tournament, len(questions), default=self._default_passing_percentage)
        except ConfigurationError as exc:
            logger.error("Tournament %s cannot be played: %s", tournament.id, exc)
            self._configuration_errors[tournament.id] = exc
            raise

    def _require_admin(self, action: str) -> None:
        if not self._session.is_admin:
            raise InvalidState(f"Only administrators can {action}.", operation=action)
