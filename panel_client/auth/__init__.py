"""
Auth

État d'authentification côté client:
- TokenStore observable (jeton + utilisateur)
- Persistance JSON optionnelle
- Endpoints publics exemptés de jeton
- Lecture non vérifiée des claims JWT
"""

from .interfaces import (
    Credential,
    UserInfo,
    CredentialObserver,
    ITokenStore,
    ITokenPersistence,
    IEndpointClassifier,
)
from .token_store import TokenStore
from .persistence import DEFAULT_STORAGE_KEY, JsonFileTokenPersistence, TokenPersistenceError
from .endpoint_classifier import DEFAULT_EXEMPT_ENDPOINTS, EndpointClassifier
from .claims import ClaimsDecoder, ClaimsDecodeError

__all__ = [
    # Data classes
    "Credential",
    "UserInfo",
    "CredentialObserver",
    # Interfaces
    "ITokenStore",
    "ITokenPersistence",
    "IEndpointClassifier",
    # Implementations
    "TokenStore",
    "JsonFileTokenPersistence",
    "EndpointClassifier",
    "ClaimsDecoder",
    # Constants
    "DEFAULT_STORAGE_KEY",
    "DEFAULT_EXEMPT_ENDPOINTS",
    # Exceptions
    "TokenPersistenceError",
    "ClaimsDecodeError",
]
