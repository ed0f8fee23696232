"""
Panel Client - Pytest Configuration
Fixtures partagées pour tous les tests.
"""

import json
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, List

import httpx
import pytest
from pathlib import Path

from panel_client.auth import Credential, TokenStore, UserInfo
from panel_client.logging import StructuredLogger, LogConfig, LogLevel
from panel_client.network import InMemoryNavigator


@pytest.fixture
def fixtures_path() -> Path:
    """Chemin vers le dossier fixtures."""
    return Path(__file__).parent.parent / "fixtures"


@pytest.fixture
def credential() -> Credential:
    """Credential valide une heure."""
    return Credential(
        access_token="access-1",
        refresh_token="refresh-1",
        expires_at=datetime.now(timezone.utc) + timedelta(hours=1),
    )


@pytest.fixture
def user() -> UserInfo:
    return UserInfo(user_id="1", username="admin", roles=("admin",))


@pytest.fixture
def store() -> TokenStore:
    """TokenStore vide, sans persistance."""
    return TokenStore()


@pytest.fixture
def authenticated_store(credential: Credential, user: UserInfo) -> TokenStore:
    store = TokenStore()
    store.set(credential, user)
    return store


@pytest.fixture
def navigator() -> InMemoryNavigator:
    """Navigateur positionné sur une page protégée."""
    return InMemoryNavigator("/users?page=2")


@pytest.fixture
def logger() -> StructuredLogger:
    """Logger capturant toutes les entrées (DEBUG inclus), sans sortie."""
    return StructuredLogger("test", config=LogConfig(min_level=LogLevel.DEBUG))


def envelope(code: int = 200, data: Any = None, message: str = "ok") -> bytes:
    """Corps JSON {code, data, message}."""
    return json.dumps({"code": code, "data": data, "message": message}).encode("utf-8")


class RecordingHandler:
    """
    Handler httpx.MockTransport: réponses programmées et requêtes reçues.

    Example:
        handler = RecordingHandler(lambda request: httpx.Response(200, json={...}))
        transport = httpx.MockTransport(handler)
    """

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]) -> None:
        self._respond = respond
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def make_envelope() -> Callable[..., bytes]:
    """Fabrique de corps {code, data, message}."""
    return envelope


@pytest.fixture
def make_handler() -> Callable[..., RecordingHandler]:
    """Fabrique de handlers httpx.MockTransport."""
    return RecordingHandler
