"""
Token Store Implementation

Détient le Credential courant et l'utilisateur authentifié, et notifie
les observateurs à chaque changement.

Invariants:
    - Seul état mutable partagé entre requêtes
    - Mutation uniquement par set() / clear(), affectation atomique
    - clear() répété laisse le store vide sans erreur
"""

from typing import Callable, List, Optional

from .interfaces import Credential, CredentialObserver, ITokenPersistence, ITokenStore, UserInfo


class TokenStore(ITokenStore):
    """
    Store en mémoire des jetons, avec persistance optionnelle.

    Un seul writer attendu (session d'un onglet / processus): pas de verrou,
    la dernière écriture gagne.

    Example:
        store = TokenStore()
        unsubscribe = store.subscribe(lambda cred: print(cred))
        store.set(Credential.from_expires_in("abc", "r-1", 3600))
        store.clear()
    """

    def __init__(self, persistence: Optional[ITokenPersistence] = None) -> None:
        """
        Args:
            persistence: Backend durable, relu à la construction
        """
        self._persistence = persistence
        self._credential: Optional[Credential] = None
        self._user: Optional[UserInfo] = None
        self._observers: List[CredentialObserver] = []

        if persistence is not None:
            snapshot = persistence.load()
            if snapshot is not None:
                self._credential, self._user = snapshot

    def get(self) -> Optional[Credential]:
        return self._credential

    @property
    def user(self) -> Optional[UserInfo]:
        """Utilisateur authentifié (None si déconnecté)."""
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._credential is not None

    def set(self, credential: Credential, user: Optional[UserInfo] = None) -> None:
        """
        Remplace le Credential.

        Un refresh ne fournit pas d'utilisateur: l'utilisateur courant est conservé.
        """
        if user is not None:
            self._user = user
        self._credential = credential

        # Observateurs notifiés même si la persistance échoue
        try:
            if self._persistence is not None:
                self._persistence.save(credential, self._user)
        finally:
            self._notify()

    def clear(self) -> None:
        """
        Efface Credential et utilisateur.

        Raises:
            TokenPersistenceError: Échec de la persistance (le store est vidé quand même)
        """
        self._credential = None
        self._user = None

        try:
            if self._persistence is not None:
                self._persistence.clear()
        finally:
            self._notify()

    def subscribe(self, observer: CredentialObserver) -> Callable[[], None]:
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _notify(self) -> None:
        # Copie: un observateur peut se désinscrire pendant la notification
        for observer in list(self._observers):
            observer(self._credential)
