"""
Services

Wrappers typés des modules fonctionnels (auth, utilisateurs) au-dessus du
HttpClient.
"""

from .interfaces import (
    ApiModel,
    LoginResponse,
    RefreshTokenResponse,
    PageQuery,
    PageResult,
    UserRecord,
    UserQuery,
    UserForm,
    parse_model,
)
from .auth_api import AuthApi
from .user_service import UserService

__all__ = [
    # Models
    "ApiModel",
    "LoginResponse",
    "RefreshTokenResponse",
    "PageQuery",
    "PageResult",
    "UserRecord",
    "UserQuery",
    "UserForm",
    # Implementations
    "AuthApi",
    "UserService",
    # Helpers
    "parse_model",
]
