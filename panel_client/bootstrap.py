"""
Bootstrap

Assemble le HttpClient depuis une ClientConfig: transport httpx, TokenStore
(persisté si persistence_path), logger structuré et endpoints exemptés.
"""

from typing import Optional

import httpx

from .auth.endpoint_classifier import EndpointClassifier
from .auth.interfaces import ITokenPersistence
from .auth.persistence import JsonFileTokenPersistence
from .auth.token_store import TokenStore
from .core.config_loader import ConfigLoader
from .core.interfaces import ClientConfig
from .logging import LogConfig, StructuredLogger, parse_log_level, stderr_output
from .network.http_client import ErrorReporter, HttpClient
from .network.interfaces import INavigator
from .network.transport import HttpxTransport


def build_logger(config: ClientConfig) -> StructuredLogger:
    return StructuredLogger(
        "panel_client",
        config=LogConfig(min_level=parse_log_level(config.log_level)),
        output_handler=stderr_output,
    )


def build_client(
    config: ClientConfig,
    navigator: INavigator,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    logger: Optional[StructuredLogger] = None,
    persistence: Optional[ITokenPersistence] = None,
    error_reporter: Optional[ErrorReporter] = None,
) -> HttpClient:
    """
    Construit le client unique de l'application.

    Args:
        config: Configuration validée
        navigator: Routeur de l'application
        transport: Transport httpx sous-jacent (httpx.MockTransport en test)
        logger: Logger structuré (défaut: JSON sur stderr au niveau config.log_level)
        persistence: Persistance du jeton (défaut: fichier config.persistence_path)
        error_reporter: Callback d'affichage des erreurs

    Returns:
        HttpClient prêt à l'emploi
    """
    if persistence is None and config.persistence_path:
        persistence = JsonFileTokenPersistence(config.persistence_path)

    return HttpClient(
        HttpxTransport(
            config.base_url,
            timeout=config.timeout,
            default_headers=config.default_headers,
            transport=transport,
        ),
        TokenStore(persistence),
        navigator,
        endpoint_classifier=EndpointClassifier(config.exempt_endpoints),
        login_path=config.login_path,
        error_pages=config.error_pages,
        logger=logger or build_logger(config),
        error_reporter=error_reporter,
    )


async def create_client(
    profile: str,
    navigator: INavigator,
    configs_path: str = "fixtures/configs",
    **kwargs,
) -> HttpClient:
    """
    Charge le profil puis construit le client.

    Raises:
        ConfigIntegrityError: Configuration absente ou invalide
    """
    config = await ConfigLoader(configs_path).load(profile)
    return build_client(config, navigator, **kwargs)
