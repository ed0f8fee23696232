"""
Access Token Claims

Lecture du payload JWT du jeton d'accès, SANS vérification de signature.
Sert uniquement à compléter l'état client (expiration, utilisateur) quand la
réponse de login ne les fournit pas. L'autorisation reste jugée par le serveur.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import jwt

from .interfaces import UserInfo


class ClaimsDecodeError(Exception):
    """Jeton non décodable comme JWT."""

    pass


class ClaimsDecoder:
    """
    Décodeur de claims JWT non vérifié.

    ⚠️ NE JAMAIS utiliser pour une décision d'autorisation.

    Example:
        decoder = ClaimsDecoder()
        expires_at = decoder.expires_at(token)
    """

    def decode_without_validation(self, token: str) -> Dict[str, Any]:
        """
        Décode le payload sans valider la signature.

        Raises:
            ClaimsDecodeError: Si le jeton n'est pas un JWT
        """
        try:
            return jwt.decode(token, options={"verify_signature": False})
        except jwt.InvalidTokenError as e:
            raise ClaimsDecodeError(f"Invalid token: {e}")

    def expires_at(self, token: str) -> Optional[datetime]:
        """Retourne le claim exp, ou None si absent / jeton opaque."""
        try:
            payload = self.decode_without_validation(token)
        except ClaimsDecodeError:
            return None

        exp_timestamp = payload.get("exp")
        if isinstance(exp_timestamp, bool) or not isinstance(exp_timestamp, (int, float)):
            return None
        try:
            return datetime.fromtimestamp(exp_timestamp, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    def user_info(self, token: str) -> Optional[UserInfo]:
        """Construit un UserInfo depuis sub / username / roles, si présents."""
        try:
            payload = self.decode_without_validation(token)
        except ClaimsDecodeError:
            return None

        user_id = payload.get("sub") or payload.get("userId")
        if not user_id:
            return None

        return UserInfo(
            user_id=str(user_id),
            username=str(payload.get("username") or payload.get("preferred_username") or ""),
            roles=tuple(self._extract_roles(payload)),
            avatar=payload.get("avatar"),
        )

    def _extract_roles(self, payload: Dict[str, Any]) -> List[str]:
        """Rôles à plat (roles) ou au format Keycloak (realm_access.roles)."""
        roles = self._role_list(payload.get("roles"))
        realm_access = payload.get("realm_access")
        if isinstance(realm_access, dict):
            roles.extend(self._role_list(realm_access.get("roles")))

        # Dédupliquer en gardant l'ordre
        return list(dict.fromkeys(roles))

    @staticmethod
    def _role_list(value: Any) -> List[str]:
        # Claim mal formé ignoré
        if not isinstance(value, list):
            return []
        return [str(role) for role in value]
