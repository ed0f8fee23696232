"""
Services - Auth API

Login, refresh, logout et permissions au-dessus du HttpClient.

Seuls login() et refresh_token() écrivent dans le TokenStore (passage à
AUTHENTICATED); logout() le vide toujours, même si l'appel serveur échoue.
"""

from datetime import datetime
from typing import List, Optional

from ..auth.claims import ClaimsDecoder
from ..auth.interfaces import Credential, UserInfo
from ..network.errors import UnauthorizedError, UnknownResponseError
from ..network.http_client import HttpClient
from ..network.interfaces import RequestOptions
from .interfaces import LoginResponse, RefreshTokenResponse, parse_model


LOGIN_URL = "/auth/login"
REFRESH_TOKEN_URL = "/auth/refresh-token"
LOGOUT_URL = "/auth/logout"
PERMISSIONS_URL = "/auth/permissions"
CAPTCHA_URL = "/auth/captcha"


class AuthApi:
    """
    Service d'authentification.

    Example:
        auth = AuthApi(client)
        user = await auth.login("admin", "secret")
        permissions = await auth.get_permissions()
    """

    DEFAULT_TOKEN_LIFETIME: float = 3600.0  # Si ni expiresIn ni exp JWT

    def __init__(
        self,
        client: HttpClient,
        claims_decoder: Optional[ClaimsDecoder] = None,
        default_token_lifetime: float = DEFAULT_TOKEN_LIFETIME,
    ) -> None:
        self._client = client
        self._store = client.token_store
        self._claims = claims_decoder or ClaimsDecoder()
        self._default_lifetime = default_token_lifetime

    async def login(
        self,
        username: str,
        password: str,
        captcha: Optional[str] = None,
        options: Optional[RequestOptions] = None,
    ) -> Optional[UserInfo]:
        """
        Authentifie l'utilisateur et enregistre son Credential.

        Returns:
            Utilisateur authentifié (réponse userInfo, sinon claims du jeton)

        Raises:
            ApiError: Échec de l'appel (identifiants refusés, réseau, ...)
        """
        if not username or not password:
            raise ValueError("username and password are required")

        body = {"username": username, "password": password}
        if captcha:
            body["captcha"] = captcha

        result = await self._client.post(
            LOGIN_URL,
            body,
            options=options or RequestOptions(show_loading=True, show_error=True),
        )
        response = parse_model(LoginResponse, result.unwrap())

        credential = Credential(
            access_token=response.token,
            refresh_token=response.refresh_token,
            expires_at=self._expires_at(response.token, response.expires_in),
        )
        if response.user_info:
            user = UserInfo.from_dict(response.user_info)
        else:
            user = self._claims.user_info(response.token)

        self._store.set(credential, user)
        return user

    async def refresh_token(self) -> Credential:
        """
        Renouvelle le jeton d'accès avec le refresh token courant.

        Les erreurs du refresh ne sont jamais transmises au reporter d'erreurs.

        Raises:
            UnauthorizedError: Aucune session à renouveler
            ApiError: Échec de l'appel
        """
        current = self._store.get()
        if current is None or not current.refresh_token:
            raise UnauthorizedError("No active session to refresh")

        result = await self._client.post(
            REFRESH_TOKEN_URL,
            {"refreshToken": current.refresh_token},
            options=RequestOptions(show_error=False),
        )
        response = parse_model(RefreshTokenResponse, result.unwrap())

        credential = Credential(
            access_token=response.token,
            refresh_token=response.refresh_token or current.refresh_token,
            expires_at=self._expires_at(response.token, response.expires_in),
        )
        self._store.set(credential)
        return credential

    async def logout(self) -> None:
        """
        Termine la session côté serveur puis vide le TokenStore.

        Raises:
            ApiError: Échec de l'appel serveur (le store est vidé quand même)
        """
        try:
            result = await self._client.post(LOGOUT_URL)
            result.unwrap()
        finally:
            self._store.clear()

    async def get_permissions(self) -> List[str]:
        result = await self._client.get(PERMISSIONS_URL)
        permissions = result.unwrap()
        if not isinstance(permissions, list):
            raise UnknownResponseError("Unexpected permissions payload", raw=permissions)
        return [str(p) for p in permissions]

    async def get_captcha(self) -> bytes:
        """
        Image captcha brute (hors enveloppe, intercepteurs contournés).

        Raises:
            NetworkError: Aucune réponse
            UnknownResponseError: Statut HTTP non 2xx
        """
        result = await self._client.get(
            CAPTCHA_URL,
            options=RequestOptions(skip_interceptors=True, show_loading=False),
        )
        response = result.unwrap()
        if not response.is_success:
            raise UnknownResponseError(
                f"Captcha request failed with status {response.status}",
                status=response.status,
            )
        return response.content

    def _expires_at(self, token: str, expires_in: Optional[float]) -> datetime:
        if expires_in is not None:
            return Credential.from_expires_in(token, "", expires_in).expires_at

        # Jeton JWT: exp du payload (non vérifié)
        from_claims = self._claims.expires_at(token)
        if from_claims is not None:
            return from_claims

        return Credential.from_expires_in(token, "", self._default_lifetime).expires_at
