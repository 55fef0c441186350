"""
SESSIONGUARD - Logging - Structured Logger

Logger JSON des événements du cycle de vie d'un type de session.
"""

import uuid
from collections import deque
from datetime import datetime, timezone
from typing import Any, Callable, Deque, List, Optional

from .interfaces import (
    IStructuredLogger,
    ISensitiveMasker,
    LogConfig,
    LogEntry,
    LogLevel,
    correlation_id_var,
)
from .sensitive_masker import SensitiveMasker


class MissingRequiredFieldError(Exception):
    """Champ obligatoire manquant dans une entrée de log."""

    def __init__(self, field_name: str) -> None:
        self.field_name = field_name
        super().__init__(f"Required field missing: {field_name}")


class StructuredLogger(IStructuredLogger):
    """
    Logger JSON d'un type de session.

    Chaque entrée porte timestamp ISO 8601 UTC, niveau, correlation_id de
    la requête courante (correlation_id_var, sinon UUID4), type de session,
    état de la session et message. Les données extra passent par le masker.

    Seules les `max_entries` dernières entrées restent en mémoire; la
    sortie réelle passe par `output_handler`.

    Example:
        logger = StructuredLogger(LogConfig(session_type="UserSession"), output_handler=print)
        logger.info("Session sauvegardée", state="active", branch="create")
    """

    def __init__(
        self,
        config: LogConfig,
        masker: Optional[ISensitiveMasker] = None,
        output_handler: Optional[Callable[[str], None]] = None,
    ) -> None:
        """
        Args:
            config: Configuration (session_type obligatoire)
            masker: Masker pour données sensibles
            output_handler: Reçoit chaque entrée sérialisée en JSON

        Raises:
            MissingRequiredFieldError: Si config.session_type vide
        """
        if not config.session_type or not config.session_type.strip():
            raise MissingRequiredFieldError("session_type")

        self._config = config
        self._masker = masker or SensitiveMasker()
        self._output_handler = output_handler
        self._entries: Deque[LogEntry] = deque(maxlen=max(config.max_entries, 0))

    @property
    def config(self) -> LogConfig:
        return self._config

    def log(
        self,
        level: LogLevel,
        message: str,
        state: Optional[str] = None,
        **extra: Any,
    ) -> Optional[LogEntry]:
        """
        Crée et émet une entrée.

        Args:
            level: Niveau de log
            message: Message à logger
            state: État de la session (SessionState.value)
            **extra: Données supplémentaires, masquées si configuré

        Returns:
            LogEntry créé ou None si filtré

        Raises:
            MissingRequiredFieldError: Si message vide
        """
        if level.priority < self._config.min_level.priority:
            return None

        if not message:
            raise MissingRequiredFieldError("message")

        entry = LogEntry(
            timestamp=self._generate_timestamp(),
            level=level,
            correlation_id=correlation_id_var.get() or str(uuid.uuid4()),
            session_type=self._config.session_type,
            message=message,
            state=state,
            extra=self._masker.mask(extra) if self._config.mask_sensitive else dict(extra),
        )

        self._entries.append(entry)
        if self._output_handler:
            self._output_handler(entry.to_json())

        return entry

    def _generate_timestamp(self) -> str:
        """Format: 2024-12-04T14:30:00.123Z"""
        now = datetime.now(timezone.utc)
        return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"

    def get_entries(self, level: Optional[LogLevel] = None) -> List[LogEntry]:
        """
        Dernières entrées capturées, éventuellement filtrées par niveau.

        Utile pour tests et débogage.
        """
        return [e for e in self._entries if level is None or e.level == level]

    def clear_entries(self) -> None:
        self._entries.clear()
