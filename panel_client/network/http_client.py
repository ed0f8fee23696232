"""
Network - HTTP Client

Point d'entrée unique des modules fonctionnels (auth, utilisateurs, ...).

Chaîne:
    décoration (jeton) → transport → classification →
        SUCCESS: data déballée
        échec: effet de bord (session / navigation) puis erreur propagée

Aucune erreur n'est absorbée: tout échec revient dans un RequestResult en échec.
"""

from typing import Any, Callable, Mapping, Optional

from ..auth.endpoint_classifier import EndpointClassifier
from ..auth.interfaces import IEndpointClassifier, ITokenStore
from ..logging import ContextualLogger, StructuredLogger
from .errors import ApiError, NetworkError, TransportError, error_from_outcome
from .feedback import LoadingTracker
from .interfaces import (
    ErrorKind,
    Exchange,
    INavigator,
    IResponseClassifier,
    ITransport,
    Outcome,
    OutcomeKind,
    RequestDescriptor,
    RequestOptions,
    RequestResult,
)
from .navigation import NavigationSideEffects
from .request_decorator import RequestDecorator
from .response_classifier import ResponseClassifier
from .session_controller import SessionController


ErrorReporter = Callable[[ApiError], None]

# Erreurs laissées à l'affichage de l'appelant (toast)
REPORTABLE_ERRORS = frozenset(
    {ErrorKind.BUSINESS_ERROR, ErrorKind.NETWORK_ERROR, ErrorKind.UNKNOWN}
)


class HttpClient:
    """
    Client HTTP avec intercepteurs d'authentification et de classification.

    Instance unique construite au démarrage et injectée dans les services;
    vit pendant toute la durée du processus, fermée par aclose().

    Example:
        client = HttpClient(HttpxTransport(base_url), TokenStore(), navigator)
        result = await client.get("/users/1")
        if result.success:
            user = result.data
    """

    CORRELATION_HEADER = "X-Correlation-ID"

    def __init__(
        self,
        transport: ITransport,
        token_store: ITokenStore,
        navigator: INavigator,
        *,
        endpoint_classifier: Optional[IEndpointClassifier] = None,
        response_classifier: Optional[IResponseClassifier] = None,
        login_path: str = "/login",
        error_pages: Optional[Mapping[int, str]] = None,
        logger: Optional[StructuredLogger] = None,
        loading_tracker: Optional[LoadingTracker] = None,
        error_reporter: Optional[ErrorReporter] = None,
    ) -> None:
        """
        Args:
            transport: Primitive d'envoi HTTP
            token_store: Store des jetons (seul état partagé entre requêtes)
            navigator: Capacité de navigation du routeur
            endpoint_classifier: Endpoints exemptés de jeton (défaut: login, refresh-token)
            response_classifier: Classification des échanges
            login_path: Page de login pour la redirection sur 401
            error_pages: Pages d'erreur par statut (403, 404, 500)
            logger: Logger structuré
            loading_tracker: Indicateur de chargement global
            error_reporter: Callback d'affichage des erreurs (requêtes show_error)
        """
        self._transport = transport
        self._store = token_store
        self._logger = logger or StructuredLogger("panel_client.http")
        self._decorator = RequestDecorator(
            token_store, endpoint_classifier or EndpointClassifier()
        )
        self._classifier = response_classifier or ResponseClassifier()
        self._session = SessionController(
            token_store, navigator, login_path=login_path, logger=self._logger
        )
        self._navigation = NavigationSideEffects(navigator, error_pages)
        self._loading = loading_tracker or LoadingTracker()
        self._error_reporter = error_reporter

    @property
    def token_store(self) -> ITokenStore:
        return self._store

    @property
    def session(self) -> SessionController:
        return self._session

    @property
    def loading(self) -> LoadingTracker:
        return self._loading

    @property
    def logger(self) -> StructuredLogger:
        return self._logger

    async def request(self, descriptor: RequestDescriptor) -> RequestResult[Any]:
        """
        Exécute une requête à travers la chaîne d'intercepteurs.

        Args:
            descriptor: Requête (jamais modifiée)

        Returns:
            RequestResult.ok(data) sur SUCCESS, RequestResult.fail(ApiError) sinon.
            Avec skip_interceptors: la TransportResponse brute, sans décoration
            ni effet de bord.
        """
        log = self._logger.with_context()
        outgoing = descriptor.with_header(self.CORRELATION_HEADER, log.correlation_id)
        show_loading = descriptor.options.show_loading

        if show_loading:
            self._loading.start()
        try:
            if descriptor.options.skip_interceptors:
                return await self._send_raw(outgoing, log)
            return await self._send_intercepted(outgoing, log)
        finally:
            if show_loading:
                self._loading.stop()

    async def get(
        self,
        url: str,
        query: Optional[Mapping[str, Any]] = None,
        options: Optional[RequestOptions] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> RequestResult[Any]:
        return await self.request(self._descriptor("GET", url, None, query, options, headers))

    async def post(
        self,
        url: str,
        body: Any = None,
        options: Optional[RequestOptions] = None,
        headers: Optional[Mapping[str, str]] = None,
        files: Optional[Mapping[str, Any]] = None,
    ) -> RequestResult[Any]:
        return await self.request(
            self._descriptor("POST", url, body, None, options, headers, files)
        )

    async def put(
        self,
        url: str,
        body: Any = None,
        options: Optional[RequestOptions] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> RequestResult[Any]:
        return await self.request(self._descriptor("PUT", url, body, None, options, headers))

    async def delete(
        self,
        url: str,
        body: Any = None,
        options: Optional[RequestOptions] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> RequestResult[Any]:
        return await self.request(self._descriptor("DELETE", url, body, None, options, headers))

    async def aclose(self) -> None:
        """Ferme le transport et se désabonne du TokenStore."""
        self._session.close()
        await self._transport.aclose()

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def _send_raw(self, descriptor: RequestDescriptor, log: ContextualLogger) -> RequestResult[Any]:
        log.debug("Raw request sent", method=descriptor.method, url=descriptor.url)
        try:
            response = await self._transport.send(descriptor)
        except TransportError as e:
            log.warn("Raw request failed", url=descriptor.url, reason=e.reason)
            return RequestResult.fail(NetworkError(e.reason))
        return RequestResult.ok(response)

    async def _send_intercepted(
        self, descriptor: RequestDescriptor, log: ContextualLogger
    ) -> RequestResult[Any]:
        decorated = self._decorator.decorate(descriptor)
        log.debug(
            "Request sent",
            method=decorated.method,
            url=decorated.url,
            headers=dict(decorated.headers),
        )

        try:
            response = await self._transport.send(decorated)
            exchange = Exchange(decorated, response=response)
        except TransportError as e:
            exchange = Exchange(decorated, error=e)

        outcome = self._classifier.classify(exchange)

        if outcome.is_success:
            log.info("Request succeeded", method=decorated.method, url=decorated.url, status=outcome.status)
            return RequestResult.ok(outcome.data)

        error = self._apply_side_effects(outcome, decorated, log)
        if descriptor.options.show_error and self._error_reporter and error.kind in REPORTABLE_ERRORS:
            self._error_reporter(error)
        return RequestResult.fail(error)

    def _apply_side_effects(
        self, outcome: Outcome, descriptor: RequestDescriptor, log: ContextualLogger
    ) -> ApiError:
        """Effet de bord de l'Outcome d'échec, puis erreur à propager."""
        if outcome.kind == OutcomeKind.UNAUTHORIZED:
            return self._session.handle_unauthorized(outcome, correlation_id=log.correlation_id)

        target = self._navigation.on_outcome(outcome)
        log.warn(
            "Request failed",
            method=descriptor.method,
            url=descriptor.url,
            outcome=outcome.kind.value,
            status=outcome.status,
            code=outcome.code,
            navigated_to=target,
        )
        return error_from_outcome(outcome)

    @staticmethod
    def _descriptor(
        method: str,
        url: str,
        body: Any,
        query: Optional[Mapping[str, Any]],
        options: Optional[RequestOptions],
        headers: Optional[Mapping[str, str]],
        files: Optional[Mapping[str, Any]] = None,
    ) -> RequestDescriptor:
        return RequestDescriptor(
            url=url,
            method=method,
            headers=dict(headers or {}),
            body=body,
            query=query,
            files=files,
            options=options or RequestOptions(),
        )
