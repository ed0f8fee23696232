"""
Logging - Structured Logger

Logger JSON structuré utilisé par toute la couche d'accès API.

Invariants:
    - Format JSON structuré obligatoire
    - Champs obligatoires: timestamp, level, correlation_id, message
    - Timestamp ISO 8601 UTC avec millisecondes
    - Jetons jamais en clair (masqués avant stockage et sortie)
"""

import sys
import uuid
from collections import deque
from datetime import datetime, timezone
from typing import Any, Callable, Deque, Dict, List, Optional

from .interfaces import (
    IStructuredLogger,
    ISensitiveMasker,
    LogConfig,
    LogEntry,
    LogLevel,
)
from .sensitive_masker import SensitiveMasker


class MissingRequiredFieldError(Exception):
    """Champ obligatoire manquant."""

    def __init__(self, field_name: str) -> None:
        self.field_name = field_name
        super().__init__(f"Required field missing: {field_name}")


class InvalidLogLevelError(Exception):
    """Niveau de log invalide."""

    def __init__(self, level: str) -> None:
        self.level = level
        super().__init__(f"Invalid log level: {level}")


def parse_log_level(name: str) -> LogLevel:
    """
    Convertit un nom de niveau ("info", "WARNING"...) en LogLevel.

    Raises:
        InvalidLogLevelError: Si le nom ne correspond à aucun niveau
    """
    normalized = (name or "").strip().upper()
    if normalized == "WARNING":
        normalized = "WARN"
    try:
        return LogLevel(normalized)
    except ValueError:
        raise InvalidLogLevelError(name)


def stderr_output(line: str) -> None:
    """Handler de sortie par défaut: une ligne JSON sur stderr."""
    sys.stderr.write(line + "\n")


class StructuredLogger(IStructuredLogger):
    """
    Logger JSON structuré avec champs obligatoires.

    Chaque entrée est masquée (SensitiveMasker) puis gardée en mémoire
    (bornée par LogConfig.max_entries) et envoyée à l'output_handler.

    Example:
        logger = StructuredLogger("panel_client.http", output_handler=stderr_output)
        logger.info("Request sent", method="GET", url="/users/1")
    """

    def __init__(
        self,
        name: str,
        config: Optional[LogConfig] = None,
        masker: Optional[ISensitiveMasker] = None,
        output_handler: Optional[Callable[[str], None]] = None,
    ) -> None:
        """
        Initialise le logger structuré.

        Args:
            name: Nom du logger (identifiant du composant)
            config: Configuration optionnelle
            masker: Masker pour données sensibles
            output_handler: Handler de sortie (None = capture mémoire seule)

        Raises:
            ValueError: Si name vide
        """
        if not name or not name.strip():
            raise ValueError("Logger name cannot be empty")

        self._name = name.strip()
        self._config = config or LogConfig()
        self._masker = masker or SensitiveMasker()
        self._output_handler = output_handler
        self._entries: Deque[LogEntry] = deque(maxlen=self._config.max_entries)
        self._default_correlation_id: Optional[str] = self._config.default_correlation_id

    @property
    def name(self) -> str:
        """Retourne le nom du logger."""
        return self._name

    @property
    def config(self) -> LogConfig:
        """Retourne la configuration."""
        return self._config

    def set_default_correlation(self, correlation_id: str) -> None:
        """Définit correlation_id par défaut."""
        self._default_correlation_id = correlation_id

    def log(
        self,
        level: LogLevel,
        message: str,
        correlation_id: Optional[str] = None,
        **extra: Any,
    ) -> Optional[LogEntry]:
        """
        Crée une entrée de log structurée.

        Processus:
            1. Vérifie niveau >= min_level
            2. Résout correlation_id (explicite, défaut, ou UUID généré)
            3. Masque données sensibles dans extra
            4. Stocke l'entrée et l'écrit en JSON

        Returns:
            LogEntry créé ou None si filtré

        Raises:
            MissingRequiredFieldError: Si message vide
        """
        if not self._should_log(level):
            return None

        if not message:
            raise MissingRequiredFieldError("message")

        resolved_correlation = (
            correlation_id or self._default_correlation_id or self._generate_correlation_id()
        )

        masked_extra: Dict[str, Any] = {}
        if extra and self._config.include_extra:
            if self._config.mask_sensitive:
                masked_extra = self._masker.mask(dict(extra))
            else:
                masked_extra = dict(extra)

        entry = LogEntry(
            timestamp=self._generate_timestamp(),
            level=level,
            correlation_id=resolved_correlation,
            message=message,
            extra=masked_extra,
            logger_name=self._name,
        )

        self._entries.append(entry)

        if self._output_handler:
            self._output_handler(entry.to_json())

        return entry

    def _generate_timestamp(self) -> str:
        """
        Génère timestamp ISO 8601 UTC avec millisecondes.

        Format: 2024-12-04T14:30:00.123Z
        """
        now = datetime.now(timezone.utc)
        return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"

    def _generate_correlation_id(self) -> str:
        return str(uuid.uuid4())

    def _should_log(self, level: LogLevel) -> bool:
        return LogLevel.get_priority(level) >= LogLevel.get_priority(
            self._config.min_level
        )

    def debug(self, message: str, **extra: Any) -> Optional[LogEntry]:
        """Log niveau DEBUG."""
        return self.log(LogLevel.DEBUG, message, **extra)

    def info(self, message: str, **extra: Any) -> Optional[LogEntry]:
        """Log niveau INFO."""
        return self.log(LogLevel.INFO, message, **extra)

    def warn(self, message: str, **extra: Any) -> Optional[LogEntry]:
        """Log niveau WARN."""
        return self.log(LogLevel.WARN, message, **extra)

    def error(self, message: str, **extra: Any) -> Optional[LogEntry]:
        """Log niveau ERROR."""
        return self.log(LogLevel.ERROR, message, **extra)

    def critical(self, message: str, **extra: Any) -> Optional[LogEntry]:
        """Log niveau CRITICAL."""
        return self.log(LogLevel.CRITICAL, message, **extra)

    def get_entries(self) -> List[LogEntry]:
        """Retourne les entrées de log capturées."""
        return list(self._entries)

    def clear_entries(self) -> None:
        """Efface les entrées capturées."""
        self._entries.clear()

    def get_entries_by_level(self, level: LogLevel) -> List[LogEntry]:
        """Filtre les entrées par niveau."""
        return [e for e in self._entries if e.level == level]

    def get_entries_by_correlation(self, correlation_id: str) -> List[LogEntry]:
        """Filtre les entrées par correlation_id."""
        return [e for e in self._entries if e.correlation_id == correlation_id]

    def with_context(self, correlation_id: Optional[str] = None) -> "ContextualLogger":
        """
        Crée un logger avec correlation_id fixé (une requête HTTP).

        Args:
            correlation_id: ID corrélation pour ce contexte (généré si absent)

        Returns:
            ContextualLogger avec contexte fixé
        """
        return ContextualLogger(
            self,
            correlation_id=correlation_id or self._generate_correlation_id(),
        )


class ContextualLogger:
    """
    Logger avec correlation_id pré-défini.

    Wrapper qui évite de répéter le correlation_id à chaque appel
    pendant le traitement d'une requête.
    """

    def __init__(self, logger: StructuredLogger, correlation_id: str) -> None:
        self._logger = logger
        self._correlation_id = correlation_id

    @property
    def correlation_id(self) -> str:
        return self._correlation_id

    def log(self, level: LogLevel, message: str, **extra: Any) -> Optional[LogEntry]:
        """Log avec contexte."""
        return self._logger.log(
            level,
            message,
            correlation_id=self._correlation_id,
            **extra,
        )

    def debug(self, message: str, **extra: Any) -> Optional[LogEntry]:
        return self.log(LogLevel.DEBUG, message, **extra)

    def info(self, message: str, **extra: Any) -> Optional[LogEntry]:
        return self.log(LogLevel.INFO, message, **extra)

    def warn(self, message: str, **extra: Any) -> Optional[LogEntry]:
        return self.log(LogLevel.WARN, message, **extra)

    def error(self, message: str, **extra: Any) -> Optional[LogEntry]:
        return self.log(LogLevel.ERROR, message, **extra)
