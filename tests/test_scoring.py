import pytest

from arena_app.core.errors import ConfigurationError
from arena_app.core.scoring import (
    ScoreGrade,
    evaluate,
    required_score,
    resolve_passing_percentage,
    validate_tournament_scoring,
)


def test_exactly_at_threshold_passes():
    result = evaluate(7, 10, 70)
    assert result.passed
    assert result.percentage == 70.0
    assert result.required_score == 7


def test_one_below_threshold_fails():
    result = evaluate(6, 10, 70)
    assert not result.passed
    assert result.percentage == 60.0
    assert result.required_score == 7


def test_required_score_rounds_up():
    result = evaluate(5, 7, 70)
    assert result.passed
    assert result.percentage == 71.4
    assert result.required_score == 5


def test_zero_questions_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        evaluate(0, 0, 70)


@pytest.mark.parametrize("percentage", [-1, 101])
def test_out_of_range_percentage_is_rejected(percentage):
    with pytest.raises(ConfigurationError):
        required_score(10, percentage)


def test_zero_percent_always_passes():
    assert evaluate(0, 5, 0).passed


def test_display_texts():
    result = evaluate(9, 10, 70)
    assert result.score_text == "9/10"
    assert result.percentage_text == "90.0%"
    assert result.requirement_text == "7/10 (70%)"
    assert result.status_text == "PASSED"
    assert result.summary_text == "9/10 (90.0%) - PASSED"


@pytest.mark.parametrize(
    "raw, expected",
    [(10, ScoreGrade.EXCELLENT), (8, ScoreGrade.GOOD), (7, ScoreGrade.PASSED), (3, ScoreGrade.FAILED)],
)
def test_grades(raw, expected):
    assert evaluate(raw, 10, 70).grade is expected


def test_missing_passing_score_falls_back_to_default(make_tournament):
    assert resolve_passing_percentage(make_tournament(minimum_passing_score=None)) == 70
    assert resolve_passing_percentage(make_tournament(minimum_passing_score=None), default=50) == 50
    assert resolve_passing_percentage(make_tournament(minimum_passing_score=85)) == 85


def test_invalid_stored_passing_score_is_a_configuration_error(make_tournament):
    with pytest.raises(ConfigurationError):
        resolve_passing_percentage(make_tournament(minimum_passing_score=150))


def test_validate_tournament_scoring(make_tournament):
    assert validate_tournament_scoring(make_tournament(minimum_passing_score=60), 3) == 60
    with pytest.raises(ConfigurationError):
        validate_tournament_scoring(make_tournament(), 0)


@pytest.mark.parametrize("raw, total, expected", [(1, 16, 6.3), (3, 16, 18.8), (1, 8, 12.5), (2, 3, 66.7)])
def test_percentage_rounds_halves_up(raw, total, expected):
    result = evaluate(raw, total, 50)
    assert result.percentage == expected
    assert result.percentage_text == f"{expected:.1f}%"
