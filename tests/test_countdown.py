from datetime import timedelta

from arena_app.core.models import AttemptResult
from arena_app.core.services.countdown import QuizCountdown, attempt_deadline
from arena_app.core.services.quiz_attempt import AttemptState, QuizAttemptController


def _controller(make_tournament, make_questions, clock, calls):
    def submit(answers):
        calls.append(list(answers))
        return AttemptResult(score=0, total_questions=len(answers), passed=False)

    return QuizAttemptController(
        make_tournament(end_offset=timedelta(minutes=5)),
        make_questions(3),
        submit,
        clock=clock,
    )


def test_deadline_is_capped_by_time_limit(clock):
    end = clock.now + timedelta(hours=1)
    assert attempt_deadline(end, clock.now) == end
    assert attempt_deadline(end, clock.now, 0) == end
    assert attempt_deadline(end, clock.now, 600) == clock.now + timedelta(minutes=10)
    assert attempt_deadline(end, clock.now, 7200) == end


def test_countdown_submits_once_when_time_runs_out(make_tournament, make_questions, clock):
    calls = []
    controller = _controller(make_tournament, make_questions, clock, calls)
    controller.start()
    controller.select_answer("opt1-A")
    countdown = QuizCountdown(controller, controller.tournament.end_date, clock=clock)

    assert countdown.tick() is None
    assert countdown.label() == "5m 0s"
    assert countdown.remaining() == timedelta(minutes=5)

    clock.advance(minutes=5)
    outcome = countdown.tick()
    assert outcome is not None
    assert outcome.state is AttemptState.COMPLETED
    assert calls == [["opt1-A", "", ""]]

    clock.advance(minutes=1)
    assert countdown.tick() is None
    assert countdown.remaining() == timedelta(0)
    assert len(calls) == 1


def test_countdown_does_nothing_after_manual_submit(make_tournament, make_questions, clock):
    calls = []
    controller = _controller(make_tournament, make_questions, clock, calls)
    controller.start()
    countdown = QuizCountdown(controller, controller.tournament.end_date, clock=clock)
    controller.submit()

    clock.advance(minutes=10)
    assert countdown.is_expired()
    assert countdown.tick() is None
    assert len(calls) == 1
