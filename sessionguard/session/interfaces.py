"""
SESSIONGUARD - Session Interfaces

Définit les contrats du cycle de vie des sessions d'authentification.
Les collaborateurs externes (résolution du record, persistance) DOIVENT
respecter ces interfaces.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Optional, Tuple, Union

from ..core.interfaces import ValidationResult

if TYPE_CHECKING:
    from .lifecycle import Session


class Phase(Enum):
    """
    Phases nommées du cycle de vie.

    Ordre d'un save:
        before_save → before_create|before_update → after_create|after_update → after_save
    Ordre d'un destroy:
        before_destroy → (commit + nettoyage) → after_destroy
    """

    BEFORE_SAVE = "before_save"
    BEFORE_CREATE = "before_create"
    BEFORE_UPDATE = "before_update"
    AFTER_CREATE = "after_create"
    AFTER_UPDATE = "after_update"
    AFTER_SAVE = "after_save"
    BEFORE_DESTROY = "before_destroy"
    AFTER_DESTROY = "after_destroy"

    @classmethod
    def coerce(cls, phase: Union["Phase", str]) -> "Phase":
        """
        Accepte un membre ou un nom de phase.

        Raises:
            ValueError: Si phase inconnue
        """
        if isinstance(phase, cls):
            return phase
        try:
            return cls(str(phase).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown callback phase: {phase}")


class SessionState(Enum):
    """États de la machine à états d'une session."""

    NEW = "new"
    ACTIVE = "active"
    DESTROYED = "destroyed"


Hook = Callable[["Session"], Any]


class IValidationGate(ABC):
    """
    Interface validation de l'état d'une session.

    Contrat:
        - Vide puis remplit session.errors
        - Aucun autre effet de bord
        - Ré-entrant: même entrée → même résultat
    """

    @abstractmethod
    def validate(self, session: "Session") -> ValidationResult:
        """
        Valide les champs de la session.

        Returns:
            ValidationResult (valid=False si au moins une erreur)
        """
        pass


class IRecordResolver(ABC):
    """Interface résolution du sujet authentifié (record)."""

    @abstractmethod
    def resolve(self, session: "Session") -> Optional[Any]:
        """
        Retrouve le record correspondant aux champs validés.

        Returns:
            Record, ou None si introuvable

        Raises:
            RecordNotFoundError: Record introuvable (équivalent à None)
        """
        pass


class IPersistenceAdapter(ABC):
    """Interface persistance de la référence au record."""

    @abstractmethod
    def commit(self, record: Optional[Any]) -> None:
        """
        Enregistre le record courant, ou son absence (None).

        Les erreurs d'I/O remontent sans être interceptées.
        """
        pass


class ICallbackPipeline(ABC):
    """
    Interface registre de hooks par phase.

    Garanties:
        - Hooks d'une phase exécutés dans l'ordre d'enregistrement
        - Registre partagé entre instances, immuable après configuration
    """

    @abstractmethod
    def register(self, phase: Union[Phase, str], hook: Hook) -> Hook:
        """Enregistre un hook pour une phase."""
        pass

    @abstractmethod
    def run(self, phase: Union[Phase, str], session: "Session") -> int:
        """
        Exécute les hooks d'une phase.

        Returns:
            Nombre de hooks exécutés
        """
        pass

    @abstractmethod
    def hooks(self, phase: Union[Phase, str]) -> Tuple[Hook, ...]:
        """Retourne un instantané des hooks d'une phase."""
        pass
