"""
SESSIONGUARD - Core Interfaces
Contrats et modèles partagés par le cycle de vie des sessions.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════════
# TYPES
# ══════════════════════════════════════════════════════════════════════════════


class ValidationError(BaseModel):
    """Erreur de validation d'un champ de session."""

    rule_id: str
    message: str
    location: Optional[str] = None


class ValidationResult(BaseModel):
    """Résultat de validation d'une session."""

    valid: bool
    errors: List[ValidationError] = []
    checked_at: datetime

    @property
    def messages(self) -> List[str]:
        """Messages d'erreur dans l'ordre des règles."""
        return [error.message for error in self.errors]


class SessionSettings(BaseModel):
    """
    Configuration d'un type de session.

    Attributes:
        session_invalid_message: Phrase préfixe de SessionInvalidError
        record_not_found_message: Erreur ajoutée si le record est introuvable
        words_connector: Séparateur entre éléments (3+)
        two_words_connector: Séparateur pour exactement 2 éléments
        last_word_connector: Séparateur avant le dernier élément (3+)
        log_level: Niveau minimum du logger structuré
        mask_sensitive: Masquage des données sensibles dans les logs
        sensitive_patterns: Patterns sensibles supplémentaires
        freeze_callbacks: Gèle le registre de callbacks à la construction de la factory
    """

    session_invalid_message: str = "Your session is invalid and has the following errors:"
    record_not_found_message: str = "Record could not be found for the provided credentials"
    words_connector: str = ", "
    two_words_connector: str = " and "
    last_word_connector: str = ", and "
    log_level: str = "INFO"
    mask_sensitive: bool = True
    sensitive_patterns: List[str] = Field(default_factory=list)
    freeze_callbacks: bool = True


# ══════════════════════════════════════════════════════════════════════════════
# INTERFACES
# ══════════════════════════════════════════════════════════════════════════════


class ISettingsLoader(ABC):
    """Charge la configuration d'un type de session."""

    @abstractmethod
    def load(self, name: str) -> SessionSettings:
        """
        Charge la configuration nommée.

        Raises:
            ConfigIntegrityError: Si fichier absent ou contenu invalide
        """
        pass
