"""
SESSIONGUARD - Session Lifecycle

Cycle de vie des sessions d'authentification:
- Validation des champs (ValidationGate)
- Résolution du sujet authentifié (RecordResolver)
- Hooks ordonnés par phase (CallbackPipeline)
- Persistance de la référence au record (PersistenceAdapter)
"""

from .interfaces import (
    Hook,
    ICallbackPipeline,
    IPersistenceAdapter,
    IRecordResolver,
    IValidationGate,
    Phase,
    SessionState,
)
from .errors import (
    CallbackRegistryFrozenError,
    ErrorSet,
    RecordNotFoundError,
    SessionInvalidError,
    SessionLifecycleError,
)
from .callbacks import CallbackPipeline
from .validation import ValidationGate, presence
from .resolver import CallableRecordResolver
from .persistence import SessionStoreAdapter
from .lifecycle import Session, SessionDefinition
from .factory import SessionFactory

__all__ = [
    # Interfaces
    "ICallbackPipeline",
    "IPersistenceAdapter",
    "IRecordResolver",
    "IValidationGate",
    "Hook",
    # Enums
    "Phase",
    "SessionState",
    # Implementations
    "CallbackPipeline",
    "ValidationGate",
    "presence",
    "CallableRecordResolver",
    "SessionStoreAdapter",
    "Session",
    "SessionDefinition",
    "SessionFactory",
    "ErrorSet",
    # Exceptions
    "SessionLifecycleError",
    "SessionInvalidError",
    "RecordNotFoundError",
    "CallbackRegistryFrozenError",
]
