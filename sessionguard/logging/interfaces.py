"""
SESSIONGUARD - Logging Interfaces

Entrée de log d'un événement de session et contrats du logger / masker.

Champs obligatoires d'une entrée:
    timestamp, level, correlation_id, session_type, message
Champ optionnel:
    state (état de la session au moment de l'événement)
"""

import json
from abc import ABC, abstractmethod
from contextvars import ContextVar
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


# Correlation de la requête courante, lue par le logger si aucun ID n'est fourni
correlation_id_var: ContextVar[Optional[str]] = ContextVar(
    "correlation_id", default=None
)


class InvalidLogLevelError(Exception):
    """Niveau de log invalide."""

    def __init__(self, level: str) -> None:
        self.level = level
        super().__init__(f"Invalid log level: {level}")


class LogLevel(Enum):
    """Niveaux, déclarés du moins au plus sévère."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"

    @property
    def priority(self) -> int:
        return list(LogLevel).index(self)

    @classmethod
    def parse(cls, name: str) -> "LogLevel":
        """
        Convertit un nom de niveau issu de la configuration.

        Insensible à la casse, "WARNING" accepté comme alias de WARN.

        Raises:
            InvalidLogLevelError: Si nom inconnu
        """
        normalized = (name or "").strip().upper()
        if normalized == "WARNING":
            normalized = "WARN"

        try:
            return cls(normalized)
        except ValueError:
            raise InvalidLogLevelError(name)


@dataclass
class LogEntry:
    """Événement de cycle de vie d'une session."""

    timestamp: str  # ISO 8601 UTC
    level: LogLevel
    correlation_id: str
    session_type: str
    message: str
    state: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "timestamp": self.timestamp,
            "level": self.level.value,
            "correlation_id": self.correlation_id,
            "session_type": self.session_type,
            "message": self.message,
        }
        if self.state:
            result["state"] = self.state
        if self.extra:
            result["extra"] = self.extra
        return result

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)


@dataclass
class LogConfig:
    """
    Configuration du logger de session.

    Attributes:
        min_level: Niveau minimum émis
        mask_sensitive: Masquage des identifiants dans extra
        session_type: Type de session porté par chaque entrée
        max_entries: Taille du tampon des dernières entrées (0 = aucune capture)
    """

    min_level: LogLevel = LogLevel.INFO
    mask_sensitive: bool = True
    session_type: Optional[str] = None
    max_entries: int = 100


class IStructuredLogger(ABC):
    """Interface logger des événements de session."""

    @abstractmethod
    def log(
        self,
        level: LogLevel,
        message: str,
        state: Optional[str] = None,
        **extra: Any,
    ) -> Optional[LogEntry]:
        """
        Émet un événement.

        Returns:
            LogEntry créé ou None si filtré par niveau
        """
        pass

    def debug(self, message: str, **extra: Any) -> Optional[LogEntry]:
        return self.log(LogLevel.DEBUG, message, **extra)

    def info(self, message: str, **extra: Any) -> Optional[LogEntry]:
        return self.log(LogLevel.INFO, message, **extra)

    def warn(self, message: str, **extra: Any) -> Optional[LogEntry]:
        return self.log(LogLevel.WARN, message, **extra)

    def error(self, message: str, **extra: Any) -> Optional[LogEntry]:
        return self.log(LogLevel.ERROR, message, **extra)


class ISensitiveMasker(ABC):
    """Interface masquage des identifiants de session."""

    SENSITIVE_PATTERNS: List[str] = [
        "password",
        "passwd",
        "pwd",
        "token",
        "secret",
        "api_key",
        "apikey",
        "private_key",
        "credential",
        "authorization",
        "bearer",
        "session_id",
        "cookie",
        "pin",
    ]

    MASK_VALUE: str = "***MASKED***"

    @abstractmethod
    def mask(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Retourne une copie avec les valeurs sensibles masquées."""
        pass

    @abstractmethod
    def is_sensitive_key(self, key: str) -> bool:
        pass
