"""
Endpoint Classifier

Liste fixe des endpoints publics qui ne reçoivent jamais de jeton.
L'endpoint de refresh ne doit jamais recevoir un jeton peut-être expiré,
sinon un 401 sur le refresh déclencherait un nouveau refresh.
"""

from typing import Iterable, Optional, Tuple
from urllib.parse import unquote, urlsplit

from .interfaces import IEndpointClassifier


DEFAULT_EXEMPT_ENDPOINTS: Tuple[str, ...] = ("/auth/login", "/auth/refresh-token")


class EndpointClassifier(IEndpointClassifier):
    """
    Correspondance par sous-chaîne, sensible à la casse, sur le chemin décodé
    (la query string est ignorée).

    Example:
        classifier = EndpointClassifier()
        classifier.is_exempt("/api/auth/login")  # True
        classifier.is_exempt("/users/1")  # False
    """

    def __init__(self, exempt_endpoints: Optional[Iterable[str]] = None) -> None:
        """
        Args:
            exempt_endpoints: Liste d'endpoints (défaut: login et refresh-token)

        Raises:
            ValueError: Si un endpoint est vide
        """
        endpoints = (
            DEFAULT_EXEMPT_ENDPOINTS if exempt_endpoints is None else tuple(exempt_endpoints)
        )
        for endpoint in endpoints:
            if not endpoint or not endpoint.strip():
                raise ValueError("Exempt endpoint cannot be empty")
        self._exempt: Tuple[str, ...] = endpoints

    @property
    def exempt_endpoints(self) -> Tuple[str, ...]:
        return self._exempt

    def is_exempt(self, url: str) -> bool:
        path = unquote(urlsplit(url or "").path)
        return any(endpoint in path for endpoint in self._exempt)
