"""
SESSIONGUARD - Session Lifecycle

Machine à états d'une session d'authentification:

    NEW --save ok--> ACTIVE --save ok--> ACTIVE
    NEW --save ko--> NEW    (erreurs seulement)
    *   --destroy--> DESTROYED

Ordre d'un save réussi:
    validation → résolution du record → before_save →
    before_create|before_update → after_create|after_update →
    after_save → commit → new_session = False

Ordre d'un destroy:
    before_destroy → commit(None) → errors vidées → record effacé → after_destroy
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from ..core.interfaces import SessionSettings
from ..logging.interfaces import IStructuredLogger
from .errors import ErrorSet, RecordNotFoundError, SessionInvalidError
from .interfaces import (
    ICallbackPipeline,
    IPersistenceAdapter,
    IRecordResolver,
    IValidationGate,
    Phase,
    SessionState,
)


@dataclass(frozen=True)
class SessionDefinition:
    """
    Configuration partagée par toutes les sessions d'un même type.

    Attributes:
        name: Type de session (ex: "UserSession")
        validation_gate: Validation des champs
        record_resolver: Résolution du sujet authentifié
        persistence_factory: Construit la persistance propre à chaque session
        callbacks: Registre de hooks partagé
        settings: Réglages (messages, connecteurs, logs)
        logger: Logger structuré du type de session
    """

    name: str
    validation_gate: IValidationGate
    record_resolver: IRecordResolver
    persistence_factory: Callable[[], IPersistenceAdapter]
    callbacks: ICallbackPipeline
    settings: SessionSettings
    logger: IStructuredLogger


class Session:
    """
    Session d'authentification et son cycle de vie.

    Les attributs (champs d'identification) sont fournis à la construction
    et lus par la validation et la résolution du record.

    Example:
        session = Session(definition, login="bob", password="secret")
        if session.save():
            session.record  # sujet authentifié
        else:
            session.errors.full_messages
    """

    def __init__(
        self,
        definition: SessionDefinition,
        persistence: Optional[IPersistenceAdapter] = None,
        **attributes: Any,
    ):
        """
        Args:
            definition: Configuration du type de session
            persistence: Persistance de cette session (défaut: definition.persistence_factory())
            **attributes: Champs de la session
        """
        self._definition = definition
        self._persistence = (
            persistence if persistence is not None else definition.persistence_factory()
        )
        self.attributes: Dict[str, Any] = dict(attributes)
        self.errors = ErrorSet()
        self._record: Optional[Any] = None
        self._new_session = True
        self._destroyed = False

    @property
    def definition(self) -> SessionDefinition:
        return self._definition

    @property
    def settings(self) -> SessionSettings:
        return self._definition.settings

    @property
    def persistence(self) -> IPersistenceAdapter:
        return self._persistence

    @property
    def record(self) -> Optional[Any]:
        """Sujet authentifié, présent après un save réussi et avant destroy."""
        return self._record

    @property
    def new_session(self) -> bool:
        return self._new_session

    @property
    def state(self) -> SessionState:
        if self._record is not None:
            return SessionState.ACTIVE
        if self._destroyed:
            return SessionState.DESTROYED
        return SessionState.NEW

    def is_new(self) -> bool:
        """True tant qu'aucun save n'a réussi."""
        return self._new_session is not False

    def save(self, on_result: Optional[Callable[[bool], Any]] = None) -> bool:
        """
        Valide la session, résout le record et le persiste.

        Un échec de validation (ou un record introuvable) remplit errors et
        retourne False sans callback ni commit. Les exceptions des hooks,
        du resolver ou de la persistance remontent telles quelles; le record
        précédent est alors restauré et new_session reste inchangé.

        Args:
            on_result: Appelé avec le résultat une fois le save terminé

        Returns:
            True si la session est sauvegardée
        """
        result = self._attempt_save()
        if on_result is not None:
            on_result(result)
        return result

    def save_or_raise(self) -> bool:
        """
        Comme save, mais lève une exception si la session est invalide.

        Raises:
            SessionInvalidError: Validation échouée
        """
        result = self.save()
        if not result:
            self._definition.logger.error(
                "Session invalide (appel strict)",
                state=self.state.value,
                errors=self.errors.full_messages,
            )
            raise SessionInvalidError(self)
        return result

    def destroy(self) -> bool:
        """
        Termine la session: le record est effacé et son absence persistée.

        Aucune validation. Retourne toujours True (les erreurs de
        persistance remontent).
        """
        callbacks = self._definition.callbacks

        callbacks.run(Phase.BEFORE_DESTROY, self)
        self._persistence.commit(None)
        self.errors.clear()
        self._record = None
        self._destroyed = True
        callbacks.run(Phase.AFTER_DESTROY, self)

        self._definition.logger.info("Session détruite", state=self.state.value)
        return True

    def _attempt_save(self) -> bool:
        definition = self._definition
        logger = definition.logger

        validation = definition.validation_gate.validate(self)
        if not validation.valid:
            logger.warn(
                "Validation de session échouée",
                state=self.state.value,
                errors=validation.messages,
                attributes=self.attributes,
            )
            return False

        record = self._resolve_record()
        if record is None:
            self.errors.add(self.settings.record_not_found_message, field="record")
            logger.warn(
                "Record introuvable",
                state=self.state.value,
                attributes=self.attributes,
            )
            return False

        # Branche figée au début du save
        creating = self.is_new()
        previous_record = self._record
        self._record = record

        callbacks = definition.callbacks
        try:
            callbacks.run(Phase.BEFORE_SAVE, self)
            callbacks.run(Phase.BEFORE_CREATE if creating else Phase.BEFORE_UPDATE, self)
            callbacks.run(Phase.AFTER_CREATE if creating else Phase.AFTER_UPDATE, self)
            callbacks.run(Phase.AFTER_SAVE, self)
            self._persistence.commit(record)
        except Exception:
            # Save interrompu: record et new_session inchangés
            self._record = previous_record
            raise

        self._new_session = False
        self._destroyed = False

        logger.info(
            "Session sauvegardée",
            state=self.state.value,
            branch="create" if creating else "update",
        )
        return True

    def _resolve_record(self) -> Optional[Any]:
        try:
            return self._definition.record_resolver.resolve(self)
        except RecordNotFoundError:
            return None

    def __repr__(self) -> str:
        return f"<{self._definition.name} state={self.state.value} errors={len(self.errors)}>"
