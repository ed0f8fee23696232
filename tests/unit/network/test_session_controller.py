"""
Tests unitaires SessionController

Vérifie:
- AUTHENTICATED → UNAUTHENTICATED sur toute Outcome UNAUTHORIZED
- Redirection /login?redirect=<chemin courant encodé>
- Une seule redirection pour plusieurs 401 concurrents
- Échec de persistance loggé, la session se termine quand même
- UNAUTHENTICATED → AUTHENTICATED uniquement par TokenStore.set
"""

from unittest.mock import Mock

import pytest

from panel_client.auth import Credential, ITokenPersistence, TokenPersistenceError, TokenStore
from panel_client.logging import LogLevel
from panel_client.network import (
    ErrorKind,
    InMemoryNavigator,
    Outcome,
    OutcomeKind,
    SessionController,
    SessionState,
    UnauthorizedError,
)


# ══════════════════════════════════════════════════════════════════════════════
# FIXTURES
# ══════════════════════════════════════════════════════════════════════════════


@pytest.fixture
def controller(authenticated_store, navigator, logger) -> SessionController:
    return SessionController(authenticated_store, navigator, logger=logger)


@pytest.fixture
def unauthorized() -> Outcome:
    return Outcome(OutcomeKind.UNAUTHORIZED, status=401)


# ══════════════════════════════════════════════════════════════════════════════
# TESTS
# ══════════════════════════════════════════════════════════════════════════════


class TestSessionState:
    """État initial et suivi du TokenStore."""

    def test_initial_state_authenticated(self, controller):
        assert controller.state == SessionState.AUTHENTICATED
        assert controller.is_authenticated is True

    def test_initial_state_unauthenticated(self, store, navigator):
        assert SessionController(store, navigator).state == SessionState.UNAUTHENTICATED

    def test_set_authenticates(self, store, navigator, credential):
        controller = SessionController(store, navigator)

        store.set(credential)

        assert controller.state == SessionState.AUTHENTICATED

    def test_close_unsubscribes(self, store, navigator, credential):
        controller = SessionController(store, navigator)
        controller.close()

        store.set(credential)

        assert controller.state == SessionState.UNAUTHENTICATED


class TestHandleUnauthorized:
    """Fin de session."""

    def test_clears_store_and_redirects(self, controller, authenticated_store, navigator, unauthorized):
        error = controller.handle_unauthorized(unauthorized)

        assert authenticated_store.get() is None
        assert authenticated_store.user is None
        assert controller.state == SessionState.UNAUTHENTICATED
        assert navigator.current_path() == "/login?redirect=/users%3Fpage%3D2"
        assert isinstance(error, UnauthorizedError)
        assert error.kind == ErrorKind.UNAUTHORIZED
        assert error.status == 401

    def test_business_unauthorized_keeps_message(self, controller):
        outcome = Outcome(OutcomeKind.UNAUTHORIZED, code=401, message="Token expired", status=200)

        error = controller.handle_unauthorized(outcome)

        assert error.message == "Token expired"
        assert error.code == 401

    def test_single_redirect_for_concurrent_401(self, controller, navigator, unauthorized):
        controller.handle_unauthorized(unauthorized)
        controller.handle_unauthorized(unauthorized)
        controller.handle_unauthorized(unauthorized)

        login_entries = [p for p in navigator.history if p.startswith("/login")]
        assert len(login_entries) == 1

    def test_no_redirect_when_already_on_login(self, authenticated_store, unauthorized):
        navigator = InMemoryNavigator("/login?redirect=/dashboard")
        controller = SessionController(authenticated_store, navigator)

        controller.handle_unauthorized(unauthorized)

        assert navigator.history == ["/login?redirect=/dashboard"]
        assert authenticated_store.get() is None

    def test_custom_login_path(self, authenticated_store, unauthorized):
        navigator = InMemoryNavigator("/dashboard")
        controller = SessionController(authenticated_store, navigator, login_path="/signin")

        controller.handle_unauthorized(unauthorized)

        assert navigator.current_path() == "/signin?redirect=/dashboard"

    def test_logs_warning_with_correlation(self, controller, logger, unauthorized):
        controller.handle_unauthorized(unauthorized, correlation_id="req-9")

        entries = logger.get_entries_by_correlation("req-9")
        assert len(entries) == 1
        assert entries[0].level == LogLevel.WARN
        assert entries[0].extra["redirect"] == "/login?redirect=/users%3Fpage%3D2"

    def test_rejects_other_outcomes(self, controller):
        with pytest.raises(ValueError):
            controller.handle_unauthorized(Outcome(OutcomeKind.FORBIDDEN, status=403))

    def test_login_again_after_invalidation(self, controller, authenticated_store, unauthorized):
        controller.handle_unauthorized(unauthorized)

        authenticated_store.set(Credential.from_expires_in("access-2", "refresh-2", 3600))

        assert controller.state == SessionState.AUTHENTICATED

    def test_persistence_failure_does_not_abort(self, credential, navigator, logger, unauthorized):
        persistence = Mock(spec=ITokenPersistence)
        persistence.load.return_value = (credential, None)
        persistence.clear.side_effect = TokenPersistenceError("Fichier de persistance corrompu")
        store = TokenStore(persistence)
        controller = SessionController(store, navigator, logger=logger)

        error = controller.handle_unauthorized(unauthorized, correlation_id="req-3")

        assert isinstance(error, UnauthorizedError)
        assert store.get() is None
        assert controller.state == SessionState.UNAUTHENTICATED
        assert navigator.current_path() == "/login?redirect=/users%3Fpage%3D2"
        levels = [e.level for e in logger.get_entries_by_correlation("req-3")]
        assert levels == [LogLevel.ERROR, LogLevel.WARN]
