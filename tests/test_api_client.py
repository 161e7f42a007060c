import httpx
import pytest

from arena_app.client.api_client import TournamentApiClient
from arena_app.core.errors import (
    ApiRequestError,
    AuthenticationError,
    NetworkFailure,
    NotFound,
    PermissionDenied,
)
from arena_app.core.models import Difficulty, UserAccount, UserRole
from arena_app.core.services.auth_session import AuthSession
from arena_app.core.services.quiz_attempt import AttemptState, QuizAttemptController

TOURNAMENT_JSON = {
    "id": 7,
    "name": "Night Quiz",
    "category": "Sports",
    "difficulty": "HARD",
    "startDate": "2026-03-01T10:00:00Z",
    "endDate": "2026-03-01T14:00:00",
    "minimumPassingScore": 60,
    "attempts": [{"user": {"id": 3, "username": "kim"}, "score": 4, "answers": ["a"]}],
    "likeCount": 2,
}


def _client(handler, session=None):
    session = session or AuthSession()
    http = httpx.Client(base_url="https://api.test/api", transport=httpx.MockTransport(handler))
    return TournamentApiClient(session, http_client=http), session


def _signed_in_session():
    session = AuthSession()
    session.sign_in("tok", UserAccount(id="3", username="kim", role=UserRole.PLAYER))
    return session


def test_tournament_payload_is_mapped_to_domain():
    seen = {}

    def handler(request):
        seen["auth"] = request.headers.get("Authorization")
        seen["path"] = request.url.path
        return httpx.Response(200, json=TOURNAMENT_JSON)

    client, _ = _client(handler, _signed_in_session())
    tournament = client.load_tournament("7")

    assert seen == {"auth": "Bearer tok", "path": "/api/tournaments/7"}
    assert tournament.id == "7"
    assert tournament.difficulty is Difficulty.HARD
    assert tournament.end_date.tzinfo is not None
    assert tournament.attempt_for("3").score == 4
    assert tournament.like_count == 2


def test_list_envelopes_are_unwrapped():
    def handler(request):
        return httpx.Response(200, json={"content": [TOURNAMENT_JSON], "totalPages": 1})

    client, _ = _client(handler)
    assert [t.name for t in client.list_tournaments()] == ["Night Quiz"]


def test_sign_in_normalizes_role():
    def handler(request):
        assert request.headers.get("Authorization") is None
        return httpx.Response(
            200,
            json={"accessToken": "abc", "id": 1, "username": "root", "email": "r@x.io", "role": "ROLE_ADMIN"},
        )

    client, _ = _client(handler)
    token, user = client.sign_in("root", "pw")
    assert token == "abc"
    assert user.role is UserRole.ADMIN
    assert user.id == "1"


def test_like_count_accepts_bare_integer():
    client, _ = _client(lambda request: httpx.Response(200, json=5))
    assert client.get_like_count("7") == 5


@pytest.mark.parametrize(
    "status, error",
    [
        (403, PermissionDenied),
        (404, NotFound),
        (409, ApiRequestError),
        (500, NetworkFailure),
        (503, NetworkFailure),
    ],
)
def test_http_errors_are_mapped(status, error):
    client, _ = _client(lambda request: httpx.Response(status, json={"message": "nope"}))
    with pytest.raises(error) as info:
        client.load_tournament("7")
    assert info.value.status_code == status
    assert str(info.value) == "nope"


def test_unauthorized_signs_the_session_out():
    session = _signed_in_session()
    client, _ = _client(lambda request: httpx.Response(401, json={"detail": "expired"}), session)
    with pytest.raises(AuthenticationError):
        client.list_tournaments()
    assert not session.is_authenticated


def test_transport_errors_become_network_failures():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    def slow(request):
        raise httpx.ReadTimeout("timed out", request=request)

    for handler in (refuse, slow):
        client, _ = _client(handler)
        with pytest.raises(NetworkFailure):
            client.load_questions("7")


def test_malformed_payload_is_an_api_error():
    client, _ = _client(lambda request: httpx.Response(200, json={"unexpected": True}))
    with pytest.raises(ApiRequestError):
        client.load_tournament("7")


def test_submit_sends_fixed_length_answers():
    seen = {}

    def handler(request):
        seen["body"] = request.read()
        return httpx.Response(200, json={"score": 1, "totalQuestions": 3, "passed": False, "message": "ok"})

    client, _ = _client(handler, _signed_in_session())
    result = client.submit_attempt("7", ["a", "", "c"])
    assert b'"answers":["a","","c"]' in seen["body"].replace(b" ", b"")
    assert result.total_questions == 3
    assert not result.passed


def test_against_sandbox(api_client, auth_session):
    token, user = api_client.sign_in("player", "Player123")
    auth_session.sign_in(token, user)
    tournaments = api_client.list_tournaments()
    assert len(tournaments) == 4
    questions = api_client.load_questions(tournaments[0].id)
    assert questions
    assert all(q.correct_answer is None for q in questions)
    assert "History" in api_client.list_categories()


def test_undecodable_response_fails_the_attempt_instead_of_hanging(make_tournament, make_questions, clock):
    def corrupt(request):
        return httpx.Response(200, headers={"Content-Encoding": "gzip"}, content=b"not gzip at all")

    client, _ = _client(corrupt, _signed_in_session())
    with pytest.raises(NetworkFailure):
        client.submit_attempt("7", ["a"])

    tournament = make_tournament()
    controller = QuizAttemptController(
        tournament,
        make_questions(1),
        lambda answers: client.submit_attempt(tournament.id, answers),
        clock=clock,
    )
    controller.start()
    controller.select_answer("opt1-A")
    outcome = controller.submit()
    assert outcome.state is AttemptState.FAILED
    assert isinstance(outcome.error, NetworkFailure)
    assert not controller.submit().is_duplicate
