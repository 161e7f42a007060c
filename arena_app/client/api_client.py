"""HTTP client for the remote tournament API."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError as PydanticValidationError

from arena_app.client.schemas import (
    LikeCountResponse,
    ParticipatePayload,
    ParticipateResponse,
    QuestionSchema,
    RegisterPayload,
    ScoreSchema,
    SignInPayload,
    SignInResponse,
    TournamentSchema,
)
from arena_app.constants.network_constants import (
    DEFAULT_API_BASE_URL,
    REQUEST_RETRIES,
    REQUEST_TIMEOUT_SECONDS,
)
from arena_app.core.errors import (
    ApiRequestError,
    AuthenticationError,
    NetworkFailure,
    NotFound,
    PermissionDenied,
)
from arena_app.core.models import (
    AttemptResult,
    Question,
    ScoreRow,
    Tournament,
    UserAccount,
    UserRole,
)
from arena_app.core.services.auth_session import AuthSession

logger = logging.getLogger(__name__)

_LIST_ENVELOPE_KEYS = ("content", "tournaments")


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        return str(body.get("message") or body.get("detail") or response.reason_phrase)
    return response.reason_phrase


def _unwrap_list(body: Any) -> list[Any]:
    if isinstance(body, list):
        return body
    if isinstance(body, dict):
        for key in _LIST_ENVELOPE_KEYS:
            if isinstance(body.get(key), list):
                return body[key]
    raise ApiRequestError("Expected a list in the API response.", details=body)


class TournamentApiClient:
    """Typed wrapper around the tournament REST endpoints.

    Connection failures are retried by the transport; everything else is
    mapped onto the ``ArenaError`` hierarchy.
    """

    def __init__(
        self,
        auth_session: AuthSession,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        retries: int = REQUEST_RETRIES,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._session = auth_session
        if http_client is None:
            http_client = httpx.Client(
                base_url=base_url.rstrip("/"),
                timeout=timeout,
                transport=httpx.HTTPTransport(retries=retries),
                headers={"Accept": "application/json"},
            )
        self._http = http_client

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> TournamentApiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # --- Auth ---

    def sign_in(self, username_or_email: str, password: str) -> tuple[str, UserAccount]:
        payload = SignInPayload(username_or_email=username_or_email, password=password)
        body = self._request("POST", "/auth/signin", json=self._dump(payload), authenticated=False)
        response = self._parse(SignInResponse, body)
        return response.access_token, response.to_domain()

    def register(
        self,
        username: str,
        email: str,
        password: str,
        role: UserRole = UserRole.PLAYER,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> None:
        payload = RegisterPayload(
            username=username,
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name,
        )
        self._request("POST", f"/auth/signup/{role.value}", json=self._dump(payload), authenticated=False)

    def forgot_password(self, email: str) -> None:
        self._request("POST", "/auth/forgot-password", json={"email": email}, authenticated=False)

    def reset_password(self, token: str, new_password: str) -> None:
        self._request(
            "POST",
            "/auth/reset-password",
            json={"token": token, "newPassword": new_password},
            authenticated=False,
        )

    # --- Tournaments ---

    def list_tournaments(self) -> list[Tournament]:
        body = self._request("GET", "/tournaments")
        return [self._parse(TournamentSchema, item).to_domain() for item in _unwrap_list(body)]

    def list_participated(self) -> list[Tournament]:
        body = self._request("GET", "/tournaments/participated")
        return [self._parse(TournamentSchema, item).to_domain() for item in _unwrap_list(body)]

    def list_categories(self) -> list[str]:
        body = self._request("GET", "/tournaments/categories")
        return [str(item) for item in _unwrap_list(body)]

    def load_tournament(self, tournament_id: str) -> Tournament:
        body = self._request("GET", f"/tournaments/{tournament_id}")
        return self._parse(TournamentSchema, body).to_domain()

    def load_questions(self, tournament_id: str) -> list[Question]:
        body = self._request("GET", f"/tournaments/{tournament_id}/questions")
        return [self._parse(QuestionSchema, item).to_domain() for item in _unwrap_list(body)]

    def create_tournament(self, payload: dict[str, object]) -> Tournament:
        body = self._request("POST", "/tournaments", json=payload)
        return self._parse(TournamentSchema, body).to_domain()

    def update_tournament(self, tournament_id: str, payload: dict[str, object]) -> Tournament:
        body = self._request("PUT", f"/tournaments/{tournament_id}", json=payload)
        return self._parse(TournamentSchema, body).to_domain()

    def delete_tournament(self, tournament_id: str) -> None:
        self._request("DELETE", f"/tournaments/{tournament_id}")

    def submit_attempt(self, tournament_id: str, answers: list[str]) -> AttemptResult:
        payload = ParticipatePayload(answers=answers)
        body = self._request("POST", f"/tournaments/{tournament_id}/participate", json=self._dump(payload))
        return self._parse(ParticipateResponse, body).to_domain()

    def get_scores(self, tournament_id: str) -> list[ScoreRow]:
        body = self._request("GET", f"/tournaments/{tournament_id}/scores")
        return [self._parse(ScoreSchema, item).to_domain() for item in _unwrap_list(body)]

    # --- Likes ---

    def like_tournament(self, tournament_id: str) -> None:
        self._request("POST", f"/tournaments/{tournament_id}/like")

    def unlike_tournament(self, tournament_id: str) -> None:
        self._request("DELETE", f"/tournaments/{tournament_id}/like")

    def get_like_count(self, tournament_id: str) -> int:
        body = self._request("GET", f"/tournaments/{tournament_id}/likes", authenticated=False)
        if isinstance(body, int):
            return body
        return self._parse(LikeCountResponse, body).count

    # --- Internals ---

    @staticmethod
    def _dump(payload: BaseModel) -> dict[str, Any]:
        return payload.model_dump(by_alias=True, exclude_none=True)

    @staticmethod
    def _parse(schema: type[BaseModel], body: Any) -> Any:
        try:
            return schema.model_validate(body)
        except PydanticValidationError as exc:
            raise ApiRequestError(f"Unexpected {schema.__name__} payload from the API.", details=str(exc)) from exc

    def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        authenticated: bool = True,
    ) -> Any:
        headers = self._session.authorization_header() if authenticated else {}
        logger.debug("%s %s", method, path)
        try:
            response = self._http.request(method, path, json=json, headers=headers)
        except httpx.TimeoutException as exc:
            logger.error("%s %s timed out", method, path)
            raise NetworkFailure("Request timed out. The server might be busy or unavailable.") from exc
        except httpx.TransportError as exc:
            logger.error("%s %s failed: %s", method, path, exc)
            raise NetworkFailure("Unable to connect to the tournament server.") from exc
        except httpx.RequestError as exc:
            logger.error("%s %s failed: %s", method, path, exc)
            raise NetworkFailure("The tournament server sent an unreadable response.") from exc

        if response.is_success:
            if not response.content:
                return None
            try:
                return response.json()
            except ValueError as exc:
                raise ApiRequestError("The API returned malformed JSON.", status_code=response.status_code) from exc

        message = _error_message(response)
        status = response.status_code
        logger.error("%s %s -> %d: %s", method, path, status, message)
        if status == 401:
            if authenticated:
                self._session.sign_out()
            raise AuthenticationError(message, status_code=status)
        if status == 403:
            raise PermissionDenied(message, status_code=status)
        if status == 404:
            raise NotFound(message, status_code=status)
        if status >= 500:
            raise NetworkFailure(message, status_code=status)
        raise ApiRequestError(message, status_code=status)
