"""Deadline tracking that auto-submits an attempt when time runs out."""

from __future__ import annotations

from datetime import datetime, timedelta
import logging
from typing import Callable

from arena_app.core.services.quiz_attempt import ActionResult, AttemptState, QuizAttemptController
from arena_app.core.tournament_status import format_time_remaining, utc_now

logger = logging.getLogger(__name__)


def attempt_deadline(
    end_date: datetime,
    started_at: datetime,
    time_limit_seconds: int | None = None,
) -> datetime:
    """Tournament end, capped by the per-attempt time limit when one is set."""
    if time_limit_seconds is None or time_limit_seconds <= 0:
        return end_date
    return min(end_date, started_at + timedelta(seconds=time_limit_seconds))


class QuizCountdown:
    """Counts down to a deadline and submits through the controller's guarded path."""

    def __init__(
        self,
        controller: QuizAttemptController,
        deadline: datetime,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._controller = controller
        self._deadline = deadline
        self._clock = clock
        self._fired: bool = False

    @property
    def deadline(self) -> datetime:
        return self._deadline

    def remaining(self) -> timedelta:
        return max(self._deadline - self._clock(), timedelta(0))

    def is_expired(self) -> bool:
        return self._clock() >= self._deadline

    def label(self) -> str:
        return format_time_remaining(self._clock(), self._deadline)

    def tick(self) -> ActionResult | None:
        """Submit once the deadline has passed; returns the submit outcome when it fires."""
        if self._fired or not self.is_expired():
            return None
        if self._controller.state is not AttemptState.IN_PROGRESS:
            return None
        self._fired = True
        logger.info("Time is up for tournament %s, submitting", self._controller.tournament.id)
        return self._controller.submit()
