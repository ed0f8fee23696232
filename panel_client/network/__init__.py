"""
Network

Chaîne d'intercepteurs du client API:
- Décoration des requêtes (Authorization: Bearer)
- Classification des réponses en Outcome
- Fin de session sur 401 (HTTP ou métier)
- Redirection vers /403, /404, /500
- Transport httpx
"""

from .interfaces import (
    # Enums
    OutcomeKind,
    ErrorKind,
    # Data classes
    RequestOptions,
    RequestDescriptor,
    TransportResponse,
    Exchange,
    Envelope,
    Outcome,
    RequestResult,
    # Interfaces
    ITransport,
    INavigator,
    IResponseClassifier,
)
from .errors import (
    TransportError,
    ApiError,
    NetworkError,
    UnauthorizedError,
    ForbiddenError,
    NotFoundError,
    ServerError,
    BusinessError,
    UnknownResponseError,
    error_from_outcome,
)
from .request_decorator import AUTHORIZATION_HEADER, RequestDecorator
from .response_classifier import ResponseClassifier
from .session_controller import SessionController, SessionState
from .navigation import DEFAULT_ERROR_PAGES, InMemoryNavigator, NavigationSideEffects
from .feedback import LoadingTracker
from .transport import HttpxTransport
from .http_client import ErrorReporter, HttpClient

__all__ = [
    # Enums
    "OutcomeKind",
    "ErrorKind",
    "SessionState",
    # Data classes
    "RequestOptions",
    "RequestDescriptor",
    "TransportResponse",
    "Exchange",
    "Envelope",
    "Outcome",
    "RequestResult",
    # Interfaces
    "ITransport",
    "INavigator",
    "IResponseClassifier",
    # Implementations
    "RequestDecorator",
    "ResponseClassifier",
    "SessionController",
    "NavigationSideEffects",
    "InMemoryNavigator",
    "LoadingTracker",
    "HttpxTransport",
    "HttpClient",
    "ErrorReporter",
    # Constants
    "AUTHORIZATION_HEADER",
    "DEFAULT_ERROR_PAGES",
    # Exceptions
    "TransportError",
    "ApiError",
    "NetworkError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "ServerError",
    "BusinessError",
    "UnknownResponseError",
    "error_from_outcome",
]
