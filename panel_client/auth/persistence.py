"""
Token Persistence

Persistance JSON du jeton et de l'utilisateur, sous une clé unique dans un
fichier partagé (seuls token et userInfo sont sauvegardés).
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from .interfaces import Credential, ITokenPersistence, UserInfo


DEFAULT_STORAGE_KEY = "vue3-admin-user"


class TokenPersistenceError(Exception):
    """Fichier de persistance illisible ou corrompu."""

    pass


class JsonFileTokenPersistence(ITokenPersistence):
    """
    Persistance dans un fichier JSON.

    Format:
        {"vue3-admin-user": {"token": {...}, "userInfo": {...}}}

    Les autres clés du fichier sont préservées.
    """

    def __init__(self, path: str, key: str = DEFAULT_STORAGE_KEY) -> None:
        if not key:
            raise ValueError("key cannot be empty")
        self.path = Path(path)
        self.key = key

    def load(self) -> Optional[Tuple[Credential, Optional[UserInfo]]]:
        """
        Relit l'état sauvegardé.

        Returns:
            (Credential, UserInfo | None) ou None si rien n'est sauvegardé

        Raises:
            TokenPersistenceError: Si le contenu est corrompu
        """
        entry = self._read_all().get(self.key)
        if not entry:
            return None

        try:
            token = entry["token"]
            credential = Credential(
                access_token=token["accessToken"],
                refresh_token=token.get("refreshToken", ""),
                expires_at=datetime.fromisoformat(token["expiresAt"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise TokenPersistenceError(f"Entrée '{self.key}' invalide: {e}")

        user_data = entry.get("userInfo")
        user = UserInfo.from_dict(user_data) if isinstance(user_data, dict) else None
        return credential, user

    def save(self, credential: Credential, user: Optional[UserInfo]) -> None:
        content = self._read_all()
        content[self.key] = {
            "token": {
                "accessToken": credential.access_token,
                "refreshToken": credential.refresh_token,
                "expiresAt": credential.expires_at.isoformat(),
            },
            "userInfo": user.to_dict() if user else None,
        }
        self._write_all(content)

    def clear(self) -> None:
        content = self._read_all()
        if self.key in content:
            del content[self.key]
            self._write_all(content)

    def _read_all(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                content = json.load(f)
        except json.JSONDecodeError as e:
            raise TokenPersistenceError(f"Fichier de persistance corrompu: {e}")
        except OSError as e:
            raise TokenPersistenceError(f"Erreur de lecture fichier: {e}")

        if not isinstance(content, dict):
            raise TokenPersistenceError("Le fichier de persistance doit contenir un objet JSON")
        return content

    def _write_all(self, content: Dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(content, f, ensure_ascii=False)
        except OSError as e:
            raise TokenPersistenceError(f"Erreur d'écriture fichier: {e}")
