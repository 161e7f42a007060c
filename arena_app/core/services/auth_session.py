"""Signed-in user and bearer token, shared by reference with the API client."""

from __future__ import annotations

import logging
from typing import Callable

from arena_app.core.models import UserAccount, UserRole

logger = logging.getLogger(__name__)


class AuthSession:
    """Holds the credentials of the current user.

    Lifecycle follows sign-in and sign-out; nothing is persisted.
    """

    def __init__(self) -> None:
        self._token: str | None = None
        self._user: UserAccount | None = None
        self._listeners: list[Callable[[AuthSession], None]] = []

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def user(self) -> UserAccount | None:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._token is not None and self._user is not None

    @property
    def is_admin(self) -> bool:
        return self._user is not None and self._user.role is UserRole.ADMIN

    def sign_in(self, token: str, user: UserAccount) -> None:
        if not token:
            raise ValueError("Access token must not be empty.")
        self._token = token
        self._user = user
        logger.info("Signed in as %s (%s)", user.username, user.role.value)
        self._notify()

    def sign_out(self) -> None:
        if self._token is None and self._user is None:
            return
        if self._user is not None:
            logger.info("Signed out %s", self._user.username)
        self._token = None
        self._user = None
        self._notify()

    def authorization_header(self) -> dict[str, str]:
        if self._token is None:
            return {}
        return {"Authorization": f"Bearer {self._token}"}

    def add_listener(self, listener: Callable[[AuthSession], None]) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Callable[[AuthSession], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
