from datetime import timedelta

import pytest

from arena_app.core.errors import (
    AlreadySubmitted,
    ConfigurationError,
    InvalidState,
    NetworkFailure,
)
from arena_app.core.models import AttemptResult
from arena_app.core.scoring import evaluate
from arena_app.core.services.quiz_attempt import AttemptState, QuizAttemptController


class RecordingSubmitter:
    """Stand-in for the remote submit call that remembers every payload."""

    def __init__(self, score: int = 0, failures: int = 0) -> None:
        self.calls: list[list[str]] = []
        self.score = score
        self.failures = failures

    def __call__(self, answers: list[str]) -> AttemptResult:
        self.calls.append(list(answers))
        if self.failures:
            self.failures -= 1
            raise NetworkFailure("Unable to connect to the tournament server.")
        return AttemptResult(score=self.score, total_questions=len(answers), passed=True)


@pytest.fixture
def submitter():
    return RecordingSubmitter(score=2)


@pytest.fixture
def controller(make_tournament, make_questions, submitter, clock):
    return QuizAttemptController(make_tournament(), make_questions(3), submitter, clock=clock)


def test_requires_questions(make_tournament, submitter):
    with pytest.raises(ConfigurationError):
        QuizAttemptController(make_tournament(), [], submitter)


def test_start_moves_to_first_question(controller):
    outcome = controller.start()
    assert outcome.ok
    snapshot = controller.snapshot()
    assert snapshot.state is AttemptState.IN_PROGRESS
    assert snapshot.current_index == 0
    assert snapshot.current_question.id == "q-1"
    assert snapshot.answers == {}


@pytest.mark.parametrize(
    "start_offset, end_offset",
    [
        (timedelta(hours=1), timedelta(hours=2)),
        (timedelta(hours=-2), timedelta(hours=-1)),
    ],
)
def test_start_is_refused_outside_the_window(make_tournament, make_questions, submitter, clock, start_offset, end_offset):
    tournament = make_tournament(start_offset=start_offset, end_offset=end_offset)
    controller = QuizAttemptController(tournament, make_questions(2), submitter, clock=clock)
    outcome = controller.start()
    assert not outcome.ok
    assert isinstance(outcome.error, InvalidState)
    assert controller.state is AttemptState.NOT_STARTED


def test_start_twice_is_rejected(controller):
    controller.start()
    outcome = controller.start()
    assert isinstance(outcome.error, InvalidState)
    assert controller.state is AttemptState.IN_PROGRESS


def test_operations_before_start_are_rejected(controller, submitter):
    for outcome in (controller.select_answer("x"), controller.next(), controller.jump_to(1), controller.submit()):
        assert isinstance(outcome.error, InvalidState)
    assert submitter.calls == []


def test_next_requires_a_selection(controller):
    controller.start()
    outcome = controller.next()
    assert isinstance(outcome.error, InvalidState)
    assert controller.snapshot().current_index == 0


def test_selection_is_committed_on_navigation(controller):
    controller.start()
    controller.select_answer("opt1-B")
    assert controller.snapshot().answers == {}
    controller.next()
    snapshot = controller.snapshot()
    assert snapshot.answers == {0: "opt1-B"}
    assert snapshot.current_index == 1
    assert snapshot.pending_selection == ""

    controller.previous()
    assert controller.snapshot().pending_selection == "opt1-B"


def test_clearing_selection_and_going_back_unanswers(controller):
    controller.start()
    controller.select_answer("opt1-A")
    controller.next()
    controller.previous()
    controller.select_answer("")
    controller.jump_to(2)
    assert controller.snapshot().answers == {}


def test_next_commits_a_cleared_selection_on_a_revisited_question(controller):
    controller.start()
    controller.select_answer("opt1-A")
    controller.next()
    controller.previous()
    controller.select_answer("")
    outcome = controller.next()
    assert outcome.ok
    assert controller.snapshot().current_index == 1
    assert controller.snapshot().answers == {}


def test_next_keeps_a_revisited_answer_left_untouched(controller):
    controller.start()
    controller.select_answer("opt1-A")
    controller.next()
    controller.previous()
    controller.next()
    assert controller.snapshot().answers == {0: "opt1-A"}


def test_previous_on_first_question_is_rejected(controller):
    controller.start()
    assert isinstance(controller.previous().error, InvalidState)


def test_jump_to_out_of_range_is_rejected(controller):
    controller.start()
    assert isinstance(controller.jump_to(3).error, InvalidState)
    assert isinstance(controller.jump_to(-1).error, InvalidState)
    assert controller.snapshot().current_index == 0


def test_jump_to_twice_is_idempotent(controller):
    controller.start()
    controller.select_answer("opt1-C")
    controller.next()
    controller.select_answer("opt2-D")
    controller.jump_to(2)
    before = controller.snapshot().answers
    controller.jump_to(0)
    controller.jump_to(0)
    snapshot = controller.snapshot()
    assert snapshot.current_index == 0
    assert snapshot.answers == before == {0: "opt1-C", 1: "opt2-D"}


def test_answered_count_includes_pending_selection(controller):
    controller.start()
    controller.select_answer("opt1-A")
    assert controller.snapshot().answered_count == 1
    assert controller.snapshot().progress_percent == pytest.approx(100 / 3)


def test_submitted_answers_cover_every_question(make_tournament, make_questions, clock):
    submitter = RecordingSubmitter()
    controller = QuizAttemptController(make_tournament(), make_questions(5), submitter, clock=clock)
    controller.start()
    controller.jump_to(3)
    controller.select_answer("opt4-B")
    controller.submit()
    assert submitter.calls == [["", "", "", "opt4-B", ""]]
    assert controller.submitted_answers == ["", "", "", "opt4-B", ""]


def test_next_on_last_question_submits(controller, submitter):
    controller.start()
    for answer in ("opt1-A", "opt2-A", "opt3-A"):
        controller.select_answer(answer)
        outcome = controller.next()
    assert outcome.state is AttemptState.COMPLETED
    assert submitter.calls == [["opt1-A", "opt2-A", "opt3-A"]]


def test_second_submit_returns_original_result_without_calling_again(controller, submitter):
    controller.start()
    first = controller.submit()
    second = controller.submit()
    assert first.state is AttemptState.COMPLETED
    assert second.ok
    assert second.is_duplicate
    assert isinstance(second.error, AlreadySubmitted)
    assert second.result is first.result
    assert len(submitter.calls) == 1


def test_submit_while_submitting_is_a_no_op(make_tournament, make_questions, clock):
    nested = []

    def reentrant_submit(answers):
        nested.append(controller.submit())
        nested.append(controller.discard())
        return AttemptResult(score=1, total_questions=len(answers), passed=False)

    controller = QuizAttemptController(make_tournament(), make_questions(2), reentrant_submit, clock=clock)
    controller.start()
    outcome = controller.submit()

    assert outcome.state is AttemptState.COMPLETED
    assert nested[0].is_duplicate
    assert nested[0].state is AttemptState.SUBMITTING
    assert isinstance(nested[1].error, InvalidState)


def test_listener_sees_submitting_state(make_tournament, make_questions, clock):
    states = []
    controller = QuizAttemptController(
        make_tournament(),
        make_questions(1),
        RecordingSubmitter(),
        clock=clock,
        on_session_change=lambda snapshot: states.append(snapshot.state),
    )
    controller.start()
    controller.submit()
    assert states == [AttemptState.IN_PROGRESS, AttemptState.SUBMITTING, AttemptState.COMPLETED]


def test_failed_submit_can_be_retried_with_the_same_answers(make_tournament, make_questions, clock):
    submitter = RecordingSubmitter(score=1, failures=1)
    controller = QuizAttemptController(make_tournament(), make_questions(2), submitter, clock=clock)
    controller.start()
    controller.select_answer("opt1-B")
    failed = controller.submit()

    assert failed.state is AttemptState.FAILED
    assert isinstance(failed.error, NetworkFailure)
    assert isinstance(controller.snapshot().error, NetworkFailure)
    assert isinstance(controller.select_answer("opt1-C").error, InvalidState)

    retried = controller.submit()
    assert retried.state is AttemptState.COMPLETED
    assert submitter.calls == [["opt1-B", ""], ["opt1-B", ""]]
    assert controller.snapshot().error is None


def test_discard_resets_an_attempt_in_progress(controller):
    controller.start()
    controller.select_answer("opt1-A")
    controller.next()
    outcome = controller.discard()
    assert outcome.state is AttemptState.NOT_STARTED
    snapshot = controller.snapshot()
    assert snapshot.answers == {}
    assert snapshot.current_question is None


def test_three_question_scenario(make_tournament, make_questions, clock):
    submitter = RecordingSubmitter(score=2)
    tournament = make_tournament(minimum_passing_score=60)
    controller = QuizAttemptController(tournament, make_questions(3), submitter, clock=clock)

    controller.start()
    controller.select_answer("opt1-A")
    controller.next()
    controller.select_answer("opt2-B")
    controller.next()
    assert controller.snapshot().pending_selection == ""
    outcome = controller.submit()

    assert submitter.calls == [["opt1-A", "opt2-B", ""]]
    verdict = evaluate(outcome.result.score, 3, tournament.minimum_passing_score)
    assert verdict.required_score == 2
    assert verdict.passed


def test_unexpected_submit_error_still_fails_the_attempt(make_tournament, make_questions, clock):
    calls = []

    def flaky(answers):
        calls.append(list(answers))
        if len(calls) == 1:
            raise RuntimeError("socket closed mid-response")
        return AttemptResult(score=1, total_questions=len(answers), passed=False)

    controller = QuizAttemptController(make_tournament(), make_questions(2), flaky, clock=clock)
    controller.start()
    controller.select_answer("opt1-A")

    failed = controller.submit()
    assert failed.state is AttemptState.FAILED
    assert isinstance(failed.error, NetworkFailure)
    assert isinstance(failed.error.__cause__, RuntimeError)
    assert controller.discard().error is None

    retried = controller.submit()
    assert retried.state is AttemptState.COMPLETED
    assert calls == [["opt1-A", ""], ["opt1-A", ""]]
