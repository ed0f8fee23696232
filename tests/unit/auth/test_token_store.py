"""
Tests unitaires TokenStore

Vérifie:
- Écriture last-write-wins
- Notification des observateurs à chaque set / clear
- clear() idempotent
- Relecture de la persistance au démarrage
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

import pytest

from panel_client.auth import (
    Credential,
    ITokenPersistence,
    ITokenStore,
    TokenPersistenceError,
    TokenStore,
    UserInfo,
)


# ══════════════════════════════════════════════════════════════════════════════
# FIXTURES
# ══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def other_credential() -> Credential:
    return Credential.from_expires_in("access-2", "refresh-2", 7200)


# ══════════════════════════════════════════════════════════════════════════════
# TESTS
# ══════════════════════════════════════════════════════════════════════════════


class TestTokenStoreBasics:
    """get / set / clear."""

    def test_implements_interface(self, store):
        assert isinstance(store, ITokenStore)

    def test_empty_at_start(self, store):
        assert store.get() is None
        assert store.user is None
        assert store.is_authenticated is False

    def test_set_then_get(self, store, credential, user):
        store.set(credential, user)

        assert store.get() == credential
        assert store.user == user
        assert store.is_authenticated is True

    def test_last_write_wins(self, store, credential, other_credential):
        store.set(credential)
        store.set(other_credential)

        assert store.get().access_token == "access-2"

    def test_set_without_user_keeps_current_user(self, store, credential, other_credential, user):
        store.set(credential, user)
        store.set(other_credential)

        assert store.user == user

    def test_clear(self, authenticated_store):
        authenticated_store.clear()

        assert authenticated_store.get() is None
        assert authenticated_store.user is None

    def test_clear_is_idempotent(self, store):
        store.clear()
        store.clear()
        assert store.get() is None


class TestTokenStoreObservers:
    """subscribe / notification."""

    def test_observer_notified_on_set_and_clear(self, store, credential):
        observer = Mock()
        store.subscribe(observer)

        store.set(credential)
        store.clear()

        assert [c.args[0] for c in observer.call_args_list] == [credential, None]

    def test_unsubscribe_stops_notifications(self, store, credential):
        observer = Mock()
        unsubscribe = store.subscribe(observer)

        unsubscribe()
        unsubscribe()
        store.set(credential)

        observer.assert_not_called()

    def test_observer_may_unsubscribe_during_notification(self, store, credential):
        calls = []

        def once(cred):
            calls.append(cred)
            unsubscribe()

        unsubscribe = store.subscribe(once)
        second = Mock()
        store.subscribe(second)

        store.set(credential)
        store.clear()

        assert calls == [credential]
        assert second.call_count == 2


class TestTokenStorePersistence:
    """Backend durable."""

    def test_snapshot_loaded_at_start(self, credential, user):
        persistence = Mock(spec=ITokenPersistence)
        persistence.load.return_value = (credential, user)

        store = TokenStore(persistence)

        assert store.get() == credential
        assert store.user == user

    def test_set_saves_and_clear_clears(self, credential, user):
        persistence = Mock(spec=ITokenPersistence)
        persistence.load.return_value = None
        store = TokenStore(persistence)

        store.set(credential, user)
        store.clear()

        persistence.save.assert_called_once_with(credential, user)
        persistence.clear.assert_called_once()


class TestCredential:
    """Credential."""

    def test_from_expires_in(self):
        now = datetime(2026, 1, 1, tzinfo=timezone.utc)

        credential = Credential.from_expires_in("a", "r", 3600, now=now)

        assert credential.expires_at == now + timedelta(hours=1)

    def test_is_expired(self):
        now = datetime(2026, 1, 1, tzinfo=timezone.utc)
        credential = Credential.from_expires_in("a", "r", 60, now=now)

        assert credential.is_expired(now) is False
        assert credential.is_expired(now + timedelta(seconds=60)) is True


class TestUserInfo:
    """UserInfo."""

    def test_from_dict_api_format(self):
        user = UserInfo.from_dict(
            {"userId": 7, "username": "alice", "roles": ["admin", "editor"], "avatar": "/a.png"}
        )

        assert user.user_id == "7"
        assert user.roles == ("admin", "editor")
        assert user.is_admin is True

    def test_to_dict_round_trip_fields(self):
        user = UserInfo(user_id="1", username="bob", roles=("viewer",))

        data = user.to_dict()

        assert data == {"userId": "1", "username": "bob", "roles": ["viewer"]}
        assert UserInfo.from_dict(data) == user


class TestTokenStorePersistenceFailure:
    """Échec du backend durable: l'état mémoire et les observateurs restent cohérents."""

    def test_clear_notifies_even_when_persistence_fails(self, credential):
        persistence = Mock(spec=ITokenPersistence)
        persistence.load.return_value = (credential, None)
        persistence.clear.side_effect = TokenPersistenceError("corrupt")
        store = TokenStore(persistence)
        observer = Mock()
        store.subscribe(observer)

        with pytest.raises(TokenPersistenceError):
            store.clear()

        assert store.get() is None
        observer.assert_called_once_with(None)

    def test_set_notifies_even_when_persistence_fails(self, credential):
        persistence = Mock(spec=ITokenPersistence)
        persistence.load.return_value = None
        persistence.save.side_effect = TokenPersistenceError("disk full")
        store = TokenStore(persistence)
        observer = Mock()
        store.subscribe(observer)

        with pytest.raises(TokenPersistenceError):
            store.set(credential)

        assert store.get() == credential
        observer.assert_called_once_with(credential)
