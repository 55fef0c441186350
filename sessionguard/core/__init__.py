"""
SESSIONGUARD - Core

Configuration et utilitaires partagés:
- Modèles de validation (pydantic)
- Réglages de session chargés depuis YAML
- Formatage de phrases pour les messages d'erreur
"""

from .interfaces import (
    ISettingsLoader,
    SessionSettings,
    ValidationError,
    ValidationResult,
)
from .config_loader import ConfigIntegrityError, SettingsLoader
from .sentence import to_sentence

__all__ = [
    # Interfaces
    "ISettingsLoader",
    # Models
    "SessionSettings",
    "ValidationError",
    "ValidationResult",
    # Implementations
    "SettingsLoader",
    "to_sentence",
    # Exceptions
    "ConfigIntegrityError",
]
