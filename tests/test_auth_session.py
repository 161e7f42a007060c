import pytest

from arena_app.core.models import UserAccount, UserRole
from arena_app.core.services.auth_session import AuthSession


def test_sign_in_and_out_notify_listeners():
    session = AuthSession()
    seen = []
    session.add_listener(lambda s: seen.append(s.is_authenticated))

    session.sign_in("token-123", UserAccount(id="1", username="ada", role=UserRole.ADMIN))
    assert session.is_authenticated
    assert session.is_admin
    assert session.authorization_header() == {"Authorization": "Bearer token-123"}

    session.sign_out()
    session.sign_out()
    assert not session.is_authenticated
    assert session.authorization_header() == {}
    assert seen == [True, False]


def test_empty_token_is_refused():
    with pytest.raises(ValueError):
        AuthSession().sign_in("", UserAccount(id="1", username="ada", role=UserRole.PLAYER))


def test_removed_listener_is_not_called():
    session = AuthSession()
    seen = []

    def listener(s):
        seen.append(s)

    session.add_listener(listener)
    session.remove_listener(listener)
    session.remove_listener(listener)
    session.sign_in("t", UserAccount(id="1", username="bob", role=UserRole.PLAYER))
    assert seen == []
    assert not session.is_admin
