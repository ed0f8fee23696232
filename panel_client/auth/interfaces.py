"""
Auth Interfaces

Contrats pour l'état d'authentification côté client: jeton courant,
utilisateur authentifié, persistance et endpoints publics.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional, Tuple


@dataclass(frozen=True)
class Credential:
    """
    Jetons d'accès obtenus au login ou au refresh.

    Attributes:
        access_token: Jeton envoyé en Authorization: Bearer
        refresh_token: Jeton de renouvellement
        expires_at: Expiration annoncée par le serveur

    Note:
        Le store ne vérifie jamais l'expiration: c'est le serveur qui juge.
    """

    access_token: str
    refresh_token: str
    expires_at: datetime

    @classmethod
    def from_expires_in(
        cls,
        access_token: str,
        refresh_token: str,
        expires_in: float,
        now: Optional[datetime] = None,
    ) -> "Credential":
        """Construit un Credential depuis une durée de validité en secondes."""
        issued = now or datetime.now(timezone.utc)
        return cls(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_at=issued + timedelta(seconds=expires_in),
        )

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Indicatif uniquement (affichage), jamais utilisé pour filtrer les requêtes."""
        return (now or datetime.now(timezone.utc)) >= self.expires_at


@dataclass(frozen=True)
class UserInfo:
    """
    Utilisateur authentifié.

    Attributes:
        user_id: Identifiant utilisateur
        username: Nom de connexion
        roles: Rôles attribués
        avatar: URL avatar
    """

    user_id: str
    username: str
    roles: Tuple[str, ...] = field(default_factory=tuple)
    avatar: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return "admin" in self.roles

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserInfo":
        """Construit depuis le format API (userId, username, avatar, roles)."""
        return cls(
            user_id=str(data.get("userId") or data.get("id") or ""),
            username=data.get("username", ""),
            roles=tuple(data.get("roles") or ()),
            avatar=data.get("avatar"),
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "userId": self.user_id,
            "username": self.username,
            "roles": list(self.roles),
        }
        if self.avatar:
            result["avatar"] = self.avatar
        return result


CredentialObserver = Callable[[Optional[Credential]], None]


class ITokenStore(ABC):
    """
    Interface du store de jetons.

    Invariants:
        - Écriture last-write-wins, sans fusion
        - Chaque set/clear notifie tous les observateurs
        - clear() est idempotent
    """

    @abstractmethod
    def get(self) -> Optional[Credential]:
        """Retourne le Credential courant ou None."""
        pass

    @abstractmethod
    def set(self, credential: Credential, user: Optional[UserInfo] = None) -> None:
        """Remplace le Credential (et l'utilisateur si fourni)."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Efface Credential et utilisateur."""
        pass

    @abstractmethod
    def subscribe(self, observer: CredentialObserver) -> Callable[[], None]:
        """
        Enregistre un observateur appelé après chaque set/clear.

        Returns:
            Fonction de désinscription
        """
        pass


class ITokenPersistence(ABC):
    """Stockage durable du jeton et de l'utilisateur (équivalent localStorage)."""

    @abstractmethod
    def load(self) -> Optional[Tuple[Credential, Optional[UserInfo]]]:
        """Retourne l'état sauvegardé ou None."""
        pass

    @abstractmethod
    def save(self, credential: Credential, user: Optional[UserInfo]) -> None:
        pass

    @abstractmethod
    def clear(self) -> None:
        pass


class IEndpointClassifier(ABC):
    """Décide si une URL est exemptée d'en-tête Authorization."""

    @abstractmethod
    def is_exempt(self, url: str) -> bool:
        """
        Args:
            url: URL relative ou absolue de la requête

        Returns:
            True si la requête ne doit jamais porter de jeton
        """
        pass
