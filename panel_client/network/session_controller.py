"""
Network - Session Controller

Machine à deux états de la session client.

Transitions:
    AUTHENTICATED → UNAUTHENTICATED: toute Outcome UNAUTHORIZED
        (store vidé, redirection /login?redirect=<chemin courant>, appel en échec)
    UNAUTHENTICATED → AUTHENTICATED: uniquement TokenStore.set (login / refresh)

Politique d'échec unique: pas de refresh silencieux ni de rejeu, les autres
requêtes en vol ne sont ni annulées ni rejouées.
"""

from enum import Enum
from typing import Optional
from urllib.parse import quote

from ..auth.interfaces import Credential, ITokenStore
from ..auth.persistence import TokenPersistenceError
from ..logging import LogLevel, StructuredLogger
from .errors import UnauthorizedError, error_from_outcome
from .interfaces import INavigator, Outcome, OutcomeKind


class SessionState(Enum):
    """États de la session."""

    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"


class SessionController:
    """
    Réagit aux Outcome UNAUTHORIZED.

    L'état initial dépend de la présence d'un Credential au démarrage; il suit
    ensuite le TokenStore par abonnement.

    Example:
        controller = SessionController(store, navigator)
        error = controller.handle_unauthorized(outcome)
        controller.state  # SessionState.UNAUTHENTICATED
    """

    def __init__(
        self,
        token_store: ITokenStore,
        navigator: INavigator,
        login_path: str = "/login",
        logger: Optional[StructuredLogger] = None,
    ) -> None:
        self._store = token_store
        self._navigator = navigator
        self._login_path = login_path
        self._logger = logger or StructuredLogger("panel_client.session")
        self._state = self._state_for(token_store.get())
        self._unsubscribe = token_store.subscribe(self._on_credential_change)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_authenticated(self) -> bool:
        return self._state == SessionState.AUTHENTICATED

    def login_redirect_target(self) -> str:
        """/login?redirect=<chemin courant encodé>."""
        current = self._navigator.current_path()
        return f"{self._login_path}?redirect={quote(current, safe='/')}"

    def handle_unauthorized(
        self, outcome: Outcome, correlation_id: Optional[str] = None
    ) -> UnauthorizedError:
        """
        Termine la session.

        Étapes:
            1. Calcule la cible de retour (avant toute navigation)
            2. Vide le TokenStore (idempotent, échec de persistance loggé)
            3. Redirige vers la page de login, sauf si elle est déjà affichée
            4. Retourne l'erreur à propager à l'appelant

        Raises:
            ValueError: Si outcome n'est pas UNAUTHORIZED
        """
        if outcome.kind != OutcomeKind.UNAUTHORIZED:
            raise ValueError(f"Expected UNAUTHORIZED outcome, got {outcome.kind.value}")

        already_on_login = self._is_login_path(self._navigator.current_path())
        target = self.login_redirect_target()

        try:
            self._store.clear()
        except TokenPersistenceError as e:
            # Store mémoire déjà vidé: la session se termine quand même
            self._logger.log(
                LogLevel.ERROR,
                "Session persistence clear failed",
                correlation_id=correlation_id,
                reason=str(e),
            )

        # Plusieurs 401 concurrents: une seule redirection
        if not already_on_login:
            self._navigator.navigate(target)

        self._logger.log(
            LogLevel.WARN,
            "Session invalidated",
            correlation_id=correlation_id,
            status=outcome.status,
            code=outcome.code,
            redirect=None if already_on_login else target,
        )
        return error_from_outcome(outcome)

    def close(self) -> None:
        """Se désabonne du TokenStore."""
        self._unsubscribe()

    def _on_credential_change(self, credential: Optional[Credential]) -> None:
        self._state = self._state_for(credential)

    def _is_login_path(self, path: str) -> bool:
        return path.split("?", 1)[0] == self._login_path

    @staticmethod
    def _state_for(credential: Optional[Credential]) -> SessionState:
        if credential is None:
            return SessionState.UNAUTHENTICATED
        return SessionState.AUTHENTICATED
