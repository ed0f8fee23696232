"""
Core

Configuration du client API (profils YAML, surcharge par variable d'environnement).
"""

from .interfaces import ClientConfig, IConfigLoader
from .config_loader import BASE_URL_ENV_VAR, ConfigIntegrityError, ConfigLoader

__all__ = [
    # Types
    "ClientConfig",
    # Interfaces
    "IConfigLoader",
    # Implementations
    "ConfigLoader",
    "BASE_URL_ENV_VAR",
    # Exceptions
    "ConfigIntegrityError",
]
