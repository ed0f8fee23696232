"""
Config Loader Implementation
Charge la configuration du client depuis des fichiers YAML par profil.
"""

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import ValidationError

from .interfaces import ClientConfig, IConfigLoader


BASE_URL_ENV_VAR = "PANEL_API_BASE_URL"


class ConfigIntegrityError(Exception):
    """Erreur d'intégrité de configuration."""

    pass


class ConfigLoader(IConfigLoader):
    """Chargement des configurations depuis fichiers YAML."""

    def __init__(
        self,
        configs_path: str = "fixtures/configs",
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.configs_path = Path(configs_path)
        self._environ = os.environ if environ is None else environ

    async def load(self, profile: str) -> ClientConfig:
        """
        Charge la config d'un profil.

        Args:
            profile: Nom du profil (fichier <profile>.yaml)

        Returns:
            ClientConfig validée

        Raises:
            ConfigIntegrityError: Si fichier inexistant ou structure invalide
        """
        config_file = self.configs_path / f"{profile}.yaml"

        if not config_file.exists():
            raise ConfigIntegrityError(f"Configuration non trouvée pour le profil: {profile}")

        try:
            with open(config_file, "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigIntegrityError(f"Erreur de parsing YAML: {e}")
        except OSError as e:
            raise ConfigIntegrityError(f"Erreur de lecture fichier: {e}")

        if not isinstance(raw, dict):
            raise ConfigIntegrityError("Configuration doit être un objet YAML")

        return self.from_dict(raw)

    def from_dict(self, raw: Dict[str, Any]) -> ClientConfig:
        """
        Construit une ClientConfig depuis un dictionnaire.

        La variable d'environnement PANEL_API_BASE_URL remplace base_url.

        Raises:
            ConfigIntegrityError: Si la structure est invalide
        """
        # La section api peut être imbriquée ou à plat
        section = raw.get("api", raw)
        if not isinstance(section, dict):
            raise ConfigIntegrityError("api doit être un objet")
        data = dict(section)

        env_base_url = self._environ.get(BASE_URL_ENV_VAR)
        if env_base_url:
            data["base_url"] = env_base_url

        if "base_url" not in data:
            raise ConfigIntegrityError("Champ obligatoire manquant: base_url")

        try:
            return ClientConfig(**data)
        except ValidationError as e:
            raise ConfigIntegrityError(f"Configuration invalide: {e}")
