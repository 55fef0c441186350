"""
SESSIONGUARD - Logging

Logging structuré des événements de session:
- Format JSON avec champs obligatoires et état de session
- Timestamp ISO 8601 UTC
- Corrélation via le contexte de la requête
- Masquage des identifiants sensibles
- Tampon borné des dernières entrées
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
    # Context
    correlation_id_var,
    # Exceptions
    InvalidLogLevelError,
)
from .sensitive_masker import SensitiveMasker
from .structured_logger import StructuredLogger, MissingRequiredFieldError

__all__ = [
    # Enums
    "LogLevel",
    # Dataclasses
    "LogEntry",
    "LogConfig",
    # Interfaces
    "IStructuredLogger",
    "ISensitiveMasker",
    "correlation_id_var",
    # Implementations
    "SensitiveMasker",
    "StructuredLogger",
    # Exceptions
    "MissingRequiredFieldError",
    "InvalidLogLevelError",
]
