"""
Panel Client

Couche d'accès API d'un panneau d'administration:
- Jeton Bearer attaché automatiquement (sauf login / refresh-token)
- Réponses classées (succès, 401, 403, 404, 500, erreur métier, réseau)
- Fin de session et redirection vers /login sur 401
- Services typés auth et utilisateurs
"""

from .bootstrap import build_client, create_client
from .core import ClientConfig, ConfigIntegrityError, ConfigLoader
from .network import HttpClient, RequestOptions, RequestResult
from .services import AuthApi, UserService

__version__ = "1.0.0"

__all__ = [
    "build_client",
    "create_client",
    "ClientConfig",
    "ConfigLoader",
    "ConfigIntegrityError",
    "HttpClient",
    "RequestOptions",
    "RequestResult",
    "AuthApi",
    "UserService",
]
