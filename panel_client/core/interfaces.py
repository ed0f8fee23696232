"""
Core Interfaces

Configuration du client API et contrat de chargement.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════════
# TYPES
# ══════════════════════════════════════════════════════════════════════════════


class ClientConfig(BaseModel):
    """
    Configuration complète du client API.

    Attributes:
        base_url: URL de base de l'API (surchargée par PANEL_API_BASE_URL)
        timeout: Timeout transport en secondes (échéance = NetworkError)
        default_headers: En-têtes ajoutés à chaque requête
        exempt_endpoints: Endpoints qui ne reçoivent jamais de jeton
        login_path: Page de connexion (cible de redirection sur 401)
        error_pages: Page d'erreur par statut HTTP (403, 404, 500)
        log_level: Niveau minimum de log
        persistence_path: Fichier JSON de persistance du jeton (optionnel)
    """

    base_url: str
    timeout: float = 10.0
    default_headers: Dict[str, str] = Field(
        default_factory=lambda: {"Content-Type": "application/json"}
    )
    exempt_endpoints: List[str] = Field(
        default_factory=lambda: ["/auth/login", "/auth/refresh-token"]
    )
    login_path: str = "/login"
    error_pages: Dict[int, str] = Field(
        default_factory=lambda: {403: "/403", 404: "/404", 500: "/500"}
    )
    log_level: str = "INFO"
    persistence_path: Optional[str] = None

    @field_validator("base_url")
    @classmethod
    def _base_url_not_empty(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("base_url cannot be empty")
        return value.strip().rstrip("/")

    @field_validator("timeout")
    @classmethod
    def _timeout_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("timeout must be positive")
        return value

    @field_validator("login_path")
    @classmethod
    def _login_path_absolute(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("login_path must start with '/'")
        return value


# ══════════════════════════════════════════════════════════════════════════════
# INTERFACES
# ══════════════════════════════════════════════════════════════════════════════


class IConfigLoader(ABC):
    """Charge la configuration d'un profil (default, staging, ...)."""

    @abstractmethod
    async def load(self, profile: str) -> ClientConfig:
        """
        Charge et valide la configuration d'un profil.

        Raises:
            ConfigIntegrityError: Fichier absent, YAML invalide ou structure invalide
        """
        pass
