"""Controller walking a player through one tournament attempt."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
import logging
from typing import Callable

from arena_app.core.errors import (
    AlreadySubmitted,
    ArenaError,
    ConfigurationError,
    InvalidState,
    NetworkFailure,
)
from arena_app.core.models import AttemptResult, Question, Tournament
from arena_app.core.tournament_status import can_start_quiz, tournament_status, utc_now

logger = logging.getLogger(__name__)

SubmitAnswers = Callable[[list[str]], AttemptResult]


class AttemptState(Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    SUBMITTING = "submitting"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class QuizSessionSnapshot:
    """Read-only view of the session handed to the presentation layer."""

    state: AttemptState
    current_index: int
    total_questions: int
    current_question: Question | None
    pending_selection: str
    answers: dict[int, str] = field(default_factory=dict)
    result: AttemptResult | None = None
    error: ArenaError | None = None

    @property
    def answered_count(self) -> int:
        answered = set(self.answers)
        if self.state is AttemptState.IN_PROGRESS:
            if self.pending_selection:
                answered.add(self.current_index)
            else:
                answered.discard(self.current_index)
        return len(answered)

    @property
    def progress_percent(self) -> float:
        return (self.current_index + 1) / self.total_questions * 100

    @property
    def is_last_question(self) -> bool:
        return self.current_index == self.total_questions - 1


@dataclass(frozen=True, slots=True)
class ActionResult:
    """Outcome of a controller operation.

    ``error`` holds the rejection, if any. A duplicate submission carries an
    ``AlreadySubmitted`` error but still counts as ``ok``: it is a no-op that
    returns the result already on record.
    """

    state: AttemptState
    error: ArenaError | None = None
    result: AttemptResult | None = None

    @property
    def ok(self) -> bool:
        return self.error is None or isinstance(self.error, AlreadySubmitted)

    @property
    def is_duplicate(self) -> bool:
        return isinstance(self.error, AlreadySubmitted)


class QuizAttemptController:
    """State machine over a fixed question sequence.

    NOT_STARTED -> IN_PROGRESS -> SUBMITTING -> COMPLETED | FAILED

    Answers are buffered locally; the selection for the current question is
    only committed when the player moves to another question or submits.
    """

    def __init__(
        self,
        tournament: Tournament,
        questions: list[Question],
        submit_answers: SubmitAnswers,
        clock: Callable[[], datetime] = utc_now,
        on_session_change: Callable[[QuizSessionSnapshot], None] | None = None,
    ) -> None:
        if not questions:
            raise ConfigurationError(f"Tournament {tournament.name!r} has no questions.")
        self._tournament = tournament
        self._questions: list[Question] = list(questions)
        self._submit_answers = submit_answers
        self._clock = clock
        self._on_session_change = on_session_change

        self._state = AttemptState.NOT_STARTED
        self._current_index: int = 0
        self._answers: dict[int, str] = {}
        self._pending: str = ""
        self._submitted_answers: list[str] | None = None
        self._result: AttemptResult | None = None
        self._error: ArenaError | None = None

    # --- Queries ---

    @property
    def state(self) -> AttemptState:
        return self._state

    @property
    def tournament(self) -> Tournament:
        return self._tournament

    @property
    def question_count(self) -> int:
        return len(self._questions)

    @property
    def submitted_answers(self) -> list[str] | None:
        if self._submitted_answers is None:
            return None
        return list(self._submitted_answers)

    @property
    def result(self) -> AttemptResult | None:
        return self._result

    def snapshot(self) -> QuizSessionSnapshot:
        in_session = self._state is not AttemptState.NOT_STARTED
        return QuizSessionSnapshot(
            state=self._state,
            current_index=self._current_index,
            total_questions=len(self._questions),
            current_question=self._questions[self._current_index] if in_session else None,
            pending_selection=self._pending,
            answers=dict(self._answers),
            result=self._result,
            error=self._error,
        )

    def set_session_listener(self, listener: Callable[[QuizSessionSnapshot], None] | None) -> None:
        self._on_session_change = listener

    # --- Operations ---

    def start(self) -> ActionResult:
        if self._state is not AttemptState.NOT_STARTED:
            return self._reject("start", "The quiz has already been started.")
        status = tournament_status(self._tournament, self._clock())
        if not can_start_quiz(status):
            return self._reject("start", f"Tournament is {status.value}; only ongoing tournaments can be played.")

        self._state = AttemptState.IN_PROGRESS
        self._current_index = 0
        self._answers = {}
        self._pending = ""
        logger.info("Started attempt for tournament %s (%d questions)", self._tournament.id, len(self._questions))
        return self._changed()

    def select_answer(self, option_text: str) -> ActionResult:
        if self._state is not AttemptState.IN_PROGRESS:
            return self._reject("select_answer", "No question is active.")
        self._pending = option_text or ""
        return self._changed()

    def next(self) -> ActionResult:
        """Commit the selection and advance, submitting after the last question.

        A question answered earlier may be left by clearing its selection;
        the cleared state is committed like ``previous`` and ``jump_to`` do.
        """
        if self._state is not AttemptState.IN_PROGRESS:
            return self._reject("next", "No question is active.")
        if not self._pending and self._current_index not in self._answers:
            return self._reject("next", "Select an answer before moving on.")

        self._commit_pending()
        if self._current_index + 1 < len(self._questions):
            self._move_to(self._current_index + 1)
            return self._changed()
        return self.submit()

    def previous(self) -> ActionResult:
        if self._state is not AttemptState.IN_PROGRESS:
            return self._reject("previous", "No question is active.")
        if self._current_index == 0:
            return self._reject("previous", "Already at the first question.")
        self._commit_pending()
        self._move_to(self._current_index - 1)
        return self._changed()

    def jump_to(self, index: int) -> ActionResult:
        if self._state is not AttemptState.IN_PROGRESS:
            return self._reject("jump_to", "No question is active.")
        if not 0 <= index < len(self._questions):
            return self._reject("jump_to", f"Question index {index} out of range.")
        self._commit_pending()
        self._move_to(index)
        return self._changed()

    def submit(self) -> ActionResult:
        """Submit the buffered answers, at most once.

        From FAILED the frozen answers are sent again without touching the
        session. From SUBMITTING or COMPLETED nothing is sent.
        """
        if self._state in (AttemptState.SUBMITTING, AttemptState.COMPLETED):
            logger.info("Ignoring duplicate submission for tournament %s", self._tournament.id)
            return ActionResult(
                state=self._state,
                error=AlreadySubmitted("This attempt has already been submitted."),
                result=self._result,
            )
        if self._state is AttemptState.NOT_STARTED:
            return self._reject("submit", "The quiz has not been started.")

        if self._state is AttemptState.IN_PROGRESS:
            self._commit_pending()
            self._submitted_answers = [self._answers.get(i, "") for i in range(len(self._questions))]

        self._state = AttemptState.SUBMITTING
        self._error = None
        self._notify()

        try:
            result = self._submit_answers(list(self._submitted_answers))
        except ArenaError as exc:
            logger.error("Submitting attempt for tournament %s failed: %s", self._tournament.id, exc)
            return self._fail(exc)
        except Exception as exc:
            logger.exception("Unexpected error submitting attempt for tournament %s", self._tournament.id)
            failure = NetworkFailure("Submission failed unexpectedly. Try again.")
            failure.__cause__ = exc
            return self._fail(failure)

        self._state = AttemptState.COMPLETED
        self._result = result
        logger.info(
            "Attempt for tournament %s completed: %d/%d",
            self._tournament.id,
            result.score,
            result.total_questions,
        )
        return self._changed()

    def discard(self) -> ActionResult:
        """Drop the session when the player navigates away."""
        if self._state is AttemptState.SUBMITTING:
            return self._reject("discard", "Submission is in flight and cannot be cancelled.")
        if self._state in (AttemptState.NOT_STARTED, AttemptState.IN_PROGRESS):
            self._state = AttemptState.NOT_STARTED
            self._current_index = 0
            self._answers = {}
            self._pending = ""
            return self._changed()
        return ActionResult(state=self._state, result=self._result)

    # --- Internals ---

    def _fail(self, error: ArenaError) -> ActionResult:
        # Frozen answers stay in place for the retry.
        self._state = AttemptState.FAILED
        self._error = error
        self._notify()
        return ActionResult(state=self._state, error=error)

    def _commit_pending(self) -> None:
        if self._pending:
            self._answers[self._current_index] = self._pending
        else:
            self._answers.pop(self._current_index, None)

    def _move_to(self, index: int) -> None:
        self._current_index = index
        self._pending = self._answers.get(index, "")

    def _changed(self) -> ActionResult:
        self._notify()
        return ActionResult(state=self._state, result=self._result)

    def _notify(self) -> None:
        if self._on_session_change is not None:
            self._on_session_change(self.snapshot())

    def _reject(self, operation: str, message: str) -> ActionResult:
        logger.warning("Rejected %s in state %s: %s", operation, self._state.value, message)
        return ActionResult(
            state=self._state,
            error=InvalidState(message, operation=operation, state=self._state.value),
            result=self._result,
        )
