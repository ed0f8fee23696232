"""
Network - Errors

Erreurs remontées aux appelants de HttpClient, une classe par ErrorKind.
"""

from typing import Any, Dict, Optional, Type

from .interfaces import ErrorKind, Outcome, OutcomeKind


class TransportError(Exception):
    """Aucune réponse reçue (DNS, connexion refusée, timeout)."""

    def __init__(self, reason: str, timed_out: bool = False) -> None:
        self.reason = reason
        self.timed_out = timed_out
        super().__init__(reason)


class ApiError(Exception):
    """Erreur de base de la couche API."""

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        status: Optional[int] = None,
        raw: Any = None,
    ) -> None:
        self.message = message
        self.code = code
        self.status = status
        self.raw = raw
        super().__init__(message)


class NetworkError(ApiError):
    """Le transport n'a jamais abouti."""

    kind = ErrorKind.NETWORK_ERROR


class UnauthorizedError(ApiError):
    """Session invalide (401 HTTP ou code métier 401)."""

    kind = ErrorKind.UNAUTHORIZED


class ForbiddenError(ApiError):
    kind = ErrorKind.FORBIDDEN


class NotFoundError(ApiError):
    kind = ErrorKind.NOT_FOUND


class ServerError(ApiError):
    kind = ErrorKind.SERVER_ERROR


class BusinessError(ApiError):
    """Code métier != 200."""

    kind = ErrorKind.BUSINESS_ERROR


class UnknownResponseError(ApiError):
    """Corps de réponse au format non reconnu."""

    kind = ErrorKind.UNKNOWN


ERROR_CLASSES: Dict[OutcomeKind, Type[ApiError]] = {
    OutcomeKind.NETWORK_ERROR: NetworkError,
    OutcomeKind.UNAUTHORIZED: UnauthorizedError,
    OutcomeKind.FORBIDDEN: ForbiddenError,
    OutcomeKind.NOT_FOUND: NotFoundError,
    OutcomeKind.SERVER_ERROR: ServerError,
    OutcomeKind.BUSINESS_ERROR: BusinessError,
    OutcomeKind.UNKNOWN: UnknownResponseError,
}

DEFAULT_MESSAGES: Dict[OutcomeKind, str] = {
    OutcomeKind.NETWORK_ERROR: "Network error",
    OutcomeKind.UNAUTHORIZED: "Session expired, please log in again",
    OutcomeKind.FORBIDDEN: "Access forbidden",
    OutcomeKind.NOT_FOUND: "Resource not found",
    OutcomeKind.SERVER_ERROR: "Server error",
    OutcomeKind.BUSINESS_ERROR: "Business error",
    OutcomeKind.UNKNOWN: "Unrecognized response",
}


def error_from_outcome(outcome: Outcome) -> ApiError:
    """
    Construit l'erreur correspondant à une Outcome d'échec.

    Raises:
        ValueError: Si outcome est un succès
    """
    if outcome.is_success:
        raise ValueError("Cannot build an error from a successful outcome")

    error_class = ERROR_CLASSES[outcome.kind]
    return error_class(
        outcome.message or DEFAULT_MESSAGES[outcome.kind],
        code=outcome.code,
        status=outcome.status,
        raw=outcome.raw,
    )
