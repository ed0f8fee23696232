"""
Network - HTTPX Transport

Adaptateur ITransport sur httpx.AsyncClient.

Tout statut HTTP reçu devient une TransportResponse; seule l'absence de
réponse (DNS, connexion, timeout) lève TransportError.
"""

from typing import Any, Dict, Mapping, Optional

import httpx

from .errors import TransportError
from .interfaces import ITransport, RequestDescriptor, TransportResponse


class HttpxTransport(ITransport):
    """
    Transport HTTP asynchrone.

    Le client httpx vit aussi longtemps que le HttpClient qui l'utilise
    (créé au démarrage, fermé par aclose()).

    Example:
        transport = HttpxTransport("https://api.example.com", timeout=10.0)
        response = await transport.send(RequestDescriptor(url="/users/1"))
    """

    DEFAULT_TIMEOUT: float = 10.0

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        default_headers: Optional[Mapping[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Args:
            base_url: URL de base de l'API
            timeout: Timeout par défaut en secondes
            default_headers: En-têtes ajoutés à chaque requête
            transport: Transport httpx sous-jacent (httpx.MockTransport en test)
        """
        if timeout <= 0:
            raise ValueError("timeout must be positive")

        self._timeout = timeout
        self._default_headers: Dict[str, str] = dict(default_headers or {})
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
        )

    @property
    def timeout(self) -> float:
        return self._timeout

    async def send(self, descriptor: RequestDescriptor) -> TransportResponse:
        """
        Raises:
            TransportError: Aucune réponse reçue (URL invalide comprise)
        """
        try:
            response = await self._client.request(
                descriptor.method,
                descriptor.url,
                **self._request_kwargs(descriptor),
            )
        except httpx.TimeoutException as e:
            raise TransportError(f"Request timeout: {e}", timed_out=True)
        except httpx.RequestError as e:
            raise TransportError(f"Request failed: {e}")
        except httpx.InvalidURL as e:
            raise TransportError(f"Invalid URL: {e}")

        return TransportResponse(
            status=response.status_code,
            headers=dict(response.headers),
            content=response.content,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    def _request_kwargs(self, descriptor: RequestDescriptor) -> Dict[str, Any]:
        headers = self._merge_headers(descriptor)
        kwargs: Dict[str, Any] = {"headers": headers}

        if descriptor.query:
            kwargs["params"] = dict(descriptor.query)

        if descriptor.options.timeout is not None:
            kwargs["timeout"] = descriptor.options.timeout

        if descriptor.files:
            # httpx pose le Content-Type multipart avec sa boundary
            for name in [k for k in headers if k.lower() == "content-type"]:
                del headers[name]
            kwargs["files"] = dict(descriptor.files)
            if descriptor.body is not None:
                kwargs["data"] = descriptor.body
        elif isinstance(descriptor.body, (bytes, str)):
            kwargs["content"] = descriptor.body
        elif descriptor.body is not None:
            kwargs["json"] = descriptor.body

        return kwargs

    def _merge_headers(self, descriptor: RequestDescriptor) -> Dict[str, str]:
        """En-têtes par défaut, remplacés par ceux du descripteur (sans tenir compte de la casse)."""
        overridden = {name.lower() for name in descriptor.headers}
        headers = {
            name: value
            for name, value in self._default_headers.items()
            if name.lower() not in overridden
        }
        headers.update(descriptor.headers)
        return headers
