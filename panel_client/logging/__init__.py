"""
Logging

Logging structuré JSON de la couche d'accès API:
- Champs obligatoires (timestamp, level, correlation_id, message)
- Timestamp ISO 8601 UTC
- Masquage des jetons, mots de passe et en-têtes Authorization
"""

from .interfaces import (
    # Enums
    LogLevel,
    # Dataclasses
    LogEntry,
    LogConfig,
    # Interfaces
    IStructuredLogger,
    ISensitiveMasker,
)
from .sensitive_masker import SensitiveMasker
from .structured_logger import (
    StructuredLogger,
    ContextualLogger,
    parse_log_level,
    stderr_output,
    # Exceptions
    MissingRequiredFieldError,
    InvalidLogLevelError,
)

__all__ = [
    # Enums
    "LogLevel",
    # Dataclasses
    "LogEntry",
    "LogConfig",
    # Interfaces
    "IStructuredLogger",
    "ISensitiveMasker",
    # Implementations
    "SensitiveMasker",
    "StructuredLogger",
    "ContextualLogger",
    # Helpers
    "parse_log_level",
    "stderr_output",
    # Exceptions
    "MissingRequiredFieldError",
    "InvalidLogLevelError",
]
