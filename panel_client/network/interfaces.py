"""
Network - Interfaces

Types échangés dans la chaîne d'intercepteurs et contrats des collaborateurs
(transport HTTP, navigation).

Invariants:
    - Un RequestDescriptor est immuable: la décoration produit un nouveau descripteur
    - Envelope.code == 200 ⇔ succès métier, même si le statut HTTP est 2xx
    - Chaque échange produit exactement une Outcome
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Generic, Mapping, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, StrictInt, field_validator

T = TypeVar("T")


# ══════════════════════════════════════════════════════════════════════════════
# REQUÊTE
# ══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class RequestOptions:
    """
    Options par requête.

    Attributes:
        show_loading: Compte la requête dans l'indicateur de chargement
        show_error: Transmet les erreurs métier/réseau au reporter d'erreurs
        skip_interceptors: Contourne décoration et classification (résultat brut)
        timeout: Timeout spécifique en secondes (défaut: celui du client)
    """

    show_loading: bool = True
    show_error: bool = True
    skip_interceptors: bool = False
    timeout: Optional[float] = None


@dataclass(frozen=True)
class RequestDescriptor:
    """
    Description d'une requête sortante.

    Les noms d'en-têtes sont comparés sans tenir compte de la casse.
    """

    url: str
    method: str = "GET"
    headers: Mapping[str, str] = field(default_factory=dict)
    body: Any = None
    query: Optional[Mapping[str, Any]] = None
    files: Optional[Mapping[str, Any]] = None  # multipart/form-data
    options: RequestOptions = field(default_factory=RequestOptions)

    def __post_init__(self) -> None:
        if not self.url:
            raise ValueError("url cannot be empty")
        object.__setattr__(self, "method", self.method.upper())
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    def get_header(self, name: str) -> Optional[str]:
        """Valeur de l'en-tête (insensible à la casse) ou None."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None

    def header_count(self, name: str) -> int:
        wanted = name.lower()
        return sum(1 for key in self.headers if key.lower() == wanted)

    def with_header(self, name: str, value: str) -> "RequestDescriptor":
        """Nouveau descripteur où l'en-tête remplace toute variante de casse."""
        headers = {k: v for k, v in self.headers.items() if k.lower() != name.lower()}
        headers[name] = value
        return replace(self, headers=headers)

    def without_header(self, name: str) -> "RequestDescriptor":
        headers = {k: v for k, v in self.headers.items() if k.lower() != name.lower()}
        return replace(self, headers=headers)


# ══════════════════════════════════════════════════════════════════════════════
# RÉPONSE
# ══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class TransportResponse:
    """Réponse HTTP brute reçue du transport."""

    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    content: bytes = b""

    @property
    def is_success(self) -> bool:
        return 200 <= self.status < 300

    def json(self) -> Any:
        """
        Décode le corps JSON.

        Raises:
            ValueError: Corps vide ou JSON invalide
        """
        return json.loads(self.content)


@dataclass(frozen=True)
class Exchange:
    """Échange complet: requête envoyée et réponse, ou échec transport."""

    descriptor: RequestDescriptor
    response: Optional[TransportResponse] = None
    error: Optional[Exception] = None


class Envelope(BaseModel):
    """Réponse métier {code, data, message}."""

    model_config = ConfigDict(extra="allow")

    code: StrictInt  # "200" n'est pas un succès
    data: Any = None
    message: Optional[str] = ""

    @field_validator("message", mode="before")
    @classmethod
    def _message_as_text(cls, value: Any) -> Optional[str]:
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @property
    def is_success(self) -> bool:
        return self.code == 200


# ══════════════════════════════════════════════════════════════════════════════
# OUTCOME / ERREURS
# ══════════════════════════════════════════════════════════════════════════════


class OutcomeKind(Enum):
    """Variantes d'Outcome produites par la classification."""

    SUCCESS = "success"
    BUSINESS_ERROR = "business_error"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"
    NETWORK_ERROR = "network_error"
    UNKNOWN = "unknown"


class ErrorKind(Enum):
    """Taxonomie des échecs remontés à l'appelant."""

    NETWORK_ERROR = "network_error"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"
    BUSINESS_ERROR = "business_error"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Outcome:
    """
    Résultat classifié d'un échange.

    Attributes:
        kind: Variante
        data: Données déballées (SUCCESS)
        code: Code métier (BUSINESS_ERROR, UNAUTHORIZED métier)
        message: Message serveur ou raison de l'échec
        raw: Corps brut (UNKNOWN)
        status: Statut HTTP, None si aucune réponse
    """

    kind: OutcomeKind
    data: Any = None
    code: Optional[int] = None
    message: Optional[str] = None
    raw: Any = None
    status: Optional[int] = None

    @property
    def is_success(self) -> bool:
        return self.kind == OutcomeKind.SUCCESS

    @classmethod
    def success(cls, data: Any, status: Optional[int] = None) -> "Outcome":
        return cls(OutcomeKind.SUCCESS, data=data, status=status)

    @classmethod
    def business_error(cls, code: int, message: Optional[str], status: Optional[int] = None) -> "Outcome":
        return cls(OutcomeKind.BUSINESS_ERROR, code=code, message=message, status=status)

    @classmethod
    def unknown(cls, raw: Any, status: Optional[int] = None) -> "Outcome":
        return cls(OutcomeKind.UNKNOWN, raw=raw, status=status)


@dataclass
class RequestResult(Generic[T]):
    """
    Résultat d'un appel HttpClient.request.

    Exactement un de data (success=True) ou error (success=False) est significatif.
    """

    success: bool
    data: Optional[T] = None
    error: Optional[Exception] = None

    @classmethod
    def ok(cls, data: T) -> "RequestResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: Exception) -> "RequestResult[T]":
        return cls(success=False, error=error)

    @property
    def error_kind(self) -> Optional[ErrorKind]:
        return getattr(self.error, "kind", None)

    def unwrap(self) -> T:
        """
        Retourne data ou lève l'erreur.

        Raises:
            ApiError: L'erreur portée par le résultat
        """
        if not self.success:
            raise self.error
        return self.data


# ══════════════════════════════════════════════════════════════════════════════
# INTERFACES
# ══════════════════════════════════════════════════════════════════════════════


class ITransport(ABC):
    """Primitive d'envoi HTTP."""

    @abstractmethod
    async def send(self, descriptor: RequestDescriptor) -> TransportResponse:
        """
        Envoie la requête.

        Returns:
            TransportResponse pour tout statut HTTP reçu (y compris 4xx/5xx)

        Raises:
            TransportError: Aucune réponse (DNS, connexion, timeout)
        """
        pass

    async def aclose(self) -> None:
        """Libère les connexions."""
        return None


class INavigator(ABC):
    """Capacité de navigation consommée depuis le routeur."""

    @abstractmethod
    def navigate(self, path: str) -> None:
        """Change de route."""
        pass

    @abstractmethod
    def current_path(self) -> str:
        """Chemin complet courant (cible de retour après login)."""
        pass


class IResponseClassifier(ABC):
    """Classification d'un échange en Outcome."""

    @abstractmethod
    def classify(self, exchange: Exchange) -> Outcome:
        pass
