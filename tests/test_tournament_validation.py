from datetime import timedelta

from arena_app.core.account_validation import registration_errors
from arena_app.core.models import Difficulty
from arena_app.core.tournament_validation import (
    TournamentForm,
    is_valid_tournament_name,
    validate_tournament_form,
)


def _form(clock, **overrides):
    values = dict(
        name="Spring Cup",
        category="History",
        difficulty=Difficulty.HARD,
        start_date=clock.now + timedelta(hours=1),
        end_date=clock.now + timedelta(hours=3),
        minimum_passing_score=75,
    )
    values.update(overrides)
    return TournamentForm(**values)


def test_valid_form_has_no_errors(clock):
    assert validate_tournament_form(_form(clock), clock.now) == []


def test_name_rules():
    assert is_valid_tournament_name("Cup")
    assert not is_valid_tournament_name("Cu")
    assert not is_valid_tournament_name("x" * 101)
    assert not is_valid_tournament_name("<b>Cup</b>")
    assert not is_valid_tournament_name(None)


def test_missing_fields_are_reported(clock):
    form = TournamentForm(name="  ", category="", start_date=None, end_date=None)
    errors = validate_tournament_form(form, clock.now)
    assert "Tournament name is required" in errors
    assert "Category is required" in errors
    assert "Start date is required" in errors
    assert "End date is required" in errors


def test_date_rules_on_creation(clock):
    past = _form(clock, start_date=clock.now - timedelta(minutes=10))
    assert any("in the past" in e for e in validate_tournament_form(past, clock.now))

    within_grace = _form(clock, start_date=clock.now - timedelta(minutes=4))
    assert validate_tournament_form(within_grace, clock.now) == []

    inverted = _form(clock, end_date=clock.now)
    assert "End date must be after start date" in validate_tournament_form(inverted, clock.now)

    short = _form(clock, end_date=clock.now + timedelta(hours=1, minutes=20))
    assert any("at least 30 minutes" in e for e in validate_tournament_form(short, clock.now))


def test_editing_allows_past_start_and_short_window(clock):
    form = _form(
        clock,
        start_date=clock.now - timedelta(days=1),
        end_date=clock.now - timedelta(days=1) + timedelta(minutes=10),
        category="",
        minimum_passing_score="abc",
    )
    assert validate_tournament_form(form, clock.now, creating=False) == []


def test_passing_score_bounds(clock):
    for bad in (-5, 101, "", "seventy"):
        errors = validate_tournament_form(_form(clock, minimum_passing_score=bad), clock.now)
        assert "Minimum passing score must be between 0 and 100" in errors
    assert validate_tournament_form(_form(clock, minimum_passing_score="0"), clock.now) == []


def test_payload_shape(clock):
    form = _form(clock, name="  Spring Cup  ")
    created = form.to_payload(creating=True)
    assert created["name"] == "Spring Cup"
    assert created["category"] == "History"
    assert created["difficulty"] == "hard"
    assert created["minimumPassingScore"] == 75
    assert created["startDate"] == form.start_date.isoformat()

    edited = form.to_payload(creating=False)
    assert set(edited) == {"name", "startDate", "endDate"}


def test_registration_rules():
    assert registration_errors("player_1", "p@example.com", "Secret123") == []
    errors = registration_errors("pl", "not-an-email", "short")
    assert len(errors) == 3
    assert registration_errors("player", "p@example.com", "alllowercase1") != []
