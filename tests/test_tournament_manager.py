from datetime import timedelta

import pytest

from arena_app.core.errors import (
    AuthenticationError,
    ConfigurationError,
    InvalidState,
    NetworkFailure,
    ValidationError,
)
from arena_app.core.models import Difficulty, TournamentStatus
from arena_app.core.services.quiz_attempt import AttemptState
from arena_app.core.tournament_manager import TournamentManager
from arena_app.core.tournament_validation import TournamentForm

# Seeded sandbox tournaments, by id.
MORNING = "1"  # ongoing, 70 %
SCIENCE = "2"  # ongoing, 60 %
HISTORY = "3"  # upcoming
WORLD = "4"  # completed, no passing score


def test_login_and_logout(manager):
    user = manager.login("player", "Player123")
    assert user.username == "player"
    assert manager.session.is_authenticated
    manager.logout()
    assert not manager.session.is_authenticated


def test_bad_credentials(manager):
    with pytest.raises(AuthenticationError):
        manager.login("player", "wrong")
    assert not manager.session.is_authenticated


def test_tournaments_are_grouped_by_status(manager):
    manager.login("player", "Player123")
    grouped = manager.tournaments_by_status()
    assert {t.id for t in grouped[TournamentStatus.ONGOING]} == {MORNING, SCIENCE}
    assert [t.id for t in grouped[TournamentStatus.UPCOMING]] == [HISTORY]
    assert [t.id for t in manager.list_tournaments(TournamentStatus.COMPLETED)] == [WORLD]


def test_play_a_tournament_end_to_end(manager, sandbox_store):
    manager.login("player", "Player123")
    questions = sandbox_store.get_questions(MORNING)
    controller = manager.prepare_quiz(MORNING)
    controller.start()
    # Four right, one left blank.
    for question in questions[:-1]:
        controller.select_answer(question.correct_answer)
        controller.next()
    outcome = controller.submit()

    assert outcome.state is AttemptState.COMPLETED
    assert outcome.result.score == 4
    assert outcome.result.total_questions == 5
    assert controller.submitted_answers[-1] == ""

    tournament = manager.load_tournament(MORNING)
    evaluation = manager.evaluate_result(tournament, outcome.result)
    assert evaluation.passed == outcome.result.passed is True
    assert evaluation.percentage == 80.0
    assert manager.has_participated(tournament)
    assert [t.id for t in manager.player_history()] == [MORNING]

    board = manager.leaderboard(MORNING)
    assert board.find("player").score == 4


def test_second_attempt_is_rejected_by_the_server(manager):
    manager.login("player", "Player123")
    first = manager.prepare_quiz(SCIENCE)
    first.start()
    first.submit()

    second = manager.prepare_quiz(SCIENCE)
    second.start()
    outcome = second.submit()
    assert outcome.state is AttemptState.FAILED
    assert outcome.error.status_code == 409


def test_attempt_survives_a_network_outage(manager, api_client):
    manager.login("player", "Player123")
    controller = manager.prepare_quiz(MORNING)
    controller.start()
    controller.select_answer("7")

    def offline(tournament_id, answers):
        raise NetworkFailure("Unable to connect to the tournament server.")

    real_submit = api_client.submit_attempt
    api_client.submit_attempt = offline
    assert controller.submit().state is AttemptState.FAILED

    api_client.submit_attempt = real_submit
    outcome = controller.submit()
    assert outcome.state is AttemptState.COMPLETED
    assert outcome.result.score == 1


def test_upcoming_tournament_cannot_be_started(manager):
    manager.login("player", "Player123")
    controller = manager.prepare_quiz(HISTORY)
    assert not manager.can_start(controller.tournament)
    outcome = controller.start()
    assert isinstance(outcome.error, InvalidState)


def test_unplayable_tournament_is_cached(manager, sandbox_store, api_client):
    manager.login("player", "Player123")
    sandbox_store.set_questions(SCIENCE, [])
    with pytest.raises(ConfigurationError):
        manager.prepare_quiz(SCIENCE)

    def fail_if_called(tournament_id):
        raise AssertionError("tournament should not be reloaded")

    api_client.load_tournament = fail_if_called
    with pytest.raises(ConfigurationError):
        manager.prepare_quiz(SCIENCE)


def test_tournament_becomes_playable_as_time_passes(manager, clock):
    manager.login("player", "Player123")
    controller = manager.prepare_quiz(HISTORY)
    clock.advance(hours=25)
    assert controller.start().ok


def test_countdown_respects_attempt_time_limit(api_client, auth_session, clock):
    manager = TournamentManager(api_client, auth_session, clock=clock, attempt_time_limit_seconds=300)
    manager.login("player", "Player123")
    controller = manager.prepare_quiz(MORNING)
    controller.start()
    countdown = manager.create_countdown(controller)
    assert countdown.deadline == clock.now + timedelta(minutes=5)

    clock.advance(minutes=5)
    outcome = countdown.tick()
    assert outcome.state is AttemptState.COMPLETED
    assert outcome.result.score == 0


def _new_form(clock, **overrides):
    values = dict(
        name="Pop Culture Night",
        category="Geography",
        difficulty=Difficulty.EASY,
        start_date=clock.now + timedelta(hours=2),
        end_date=clock.now + timedelta(hours=6),
        minimum_passing_score=50,
    )
    values.update(overrides)
    return TournamentForm(**values)


def test_players_cannot_administer(manager, clock):
    manager.login("player", "Player123")
    with pytest.raises(InvalidState):
        manager.create_tournament(_new_form(clock))
    with pytest.raises(InvalidState):
        manager.delete_tournament(MORNING)


def test_admin_creates_edits_and_deletes(manager, clock):
    manager.login("admin", "Admin123")
    created = manager.create_tournament(_new_form(clock))
    assert created.minimum_passing_score == 50
    assert manager.status_of(created) is TournamentStatus.UPCOMING

    form = TournamentForm.from_tournament(created)
    form.name = "Pop Culture Finals"
    updated = manager.update_tournament(created, form)
    assert updated.name == "Pop Culture Finals"

    manager.delete_tournament(created.id)
    assert created.id not in {t.id for t in manager.list_tournaments()}


def test_invalid_form_is_not_sent(manager, clock):
    manager.login("admin", "Admin123")
    with pytest.raises(ValidationError) as info:
        manager.create_tournament(_new_form(clock, name="x", minimum_passing_score=140))
    assert len(info.value.messages) == 2


def test_completed_tournament_cannot_be_edited(manager):
    manager.login("admin", "Admin123")
    completed = manager.load_tournament(WORLD)
    assert not manager.can_edit(completed)
    with pytest.raises(InvalidState):
        manager.update_tournament(completed, TournamentForm.from_tournament(completed))


def test_likes(manager):
    manager.login("player", "Player123")
    assert manager.like(MORNING) == 1
    assert manager.like(MORNING) == 1
    assert manager.unlike(MORNING) == 0
    assert manager.like_count(MORNING) == 0


def test_passing_percentage_default_applies_to_unset_tournaments(manager):
    manager.login("player", "Player123")
    assert manager.passing_percentage(manager.load_tournament(WORLD)) == 70
    assert manager.passing_percentage(manager.load_tournament(SCIENCE)) == 60
