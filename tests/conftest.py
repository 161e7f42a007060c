from __future__ import annotations

from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient
import pytest

from arena_app.client.api_client import TournamentApiClient
from arena_app.core.models import Difficulty, Question, Tournament
from arena_app.core.services.auth_session import AuthSession
from arena_app.core.tournament_manager import TournamentManager
from arena_app.server.sandbox_server import create_sandbox_app
from arena_app.server.sandbox_store import SandboxStore

FIXED_NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime = FIXED_NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_tournament(clock):
    def factory(
        start_offset: timedelta = timedelta(hours=-1),
        end_offset: timedelta = timedelta(hours=1),
        minimum_passing_score: int | None = 70,
        tournament_id: str = "t-1",
    ) -> Tournament:
        return Tournament(
            id=tournament_id,
            name="Friday Trivia",
            category="General Knowledge",
            difficulty=Difficulty.EASY,
            start_date=clock.now + start_offset,
            end_date=clock.now + end_offset,
            minimum_passing_score=minimum_passing_score,
        )

    return factory


@pytest.fixture
def make_questions():
    def factory(count: int = 3) -> list[Question]:
        return [
            Question(
                id=f"q-{index + 1}",
                question_text=f"Question number {index + 1}?",
                options=[f"opt{index + 1}-{letter}" for letter in "ABCD"],
            )
            for index in range(count)
        ]

    return factory


@pytest.fixture
def sandbox_store(clock) -> SandboxStore:
    return SandboxStore(clock=clock)


@pytest.fixture
def sandbox_http(sandbox_store):
    with TestClient(create_sandbox_app(sandbox_store), base_url="http://testserver/api") as client:
        yield client


@pytest.fixture
def auth_session() -> AuthSession:
    return AuthSession()


@pytest.fixture
def api_client(auth_session, sandbox_http) -> TournamentApiClient:
    return TournamentApiClient(auth_session, http_client=sandbox_http)


@pytest.fixture
def manager(api_client, auth_session, clock) -> TournamentManager:
    return TournamentManager(api_client, auth_session, clock=clock)
