"""
SESSIONGUARD - Session Factory

Surface de configuration d'un type de session: registre de callbacks,
réglages, logger, et constructeurs create / create_or_raise.
"""

import logging
from typing import Any, Callable, Optional, Type, Union

from ..core.config_loader import SettingsLoader
from ..core.interfaces import SessionSettings
from ..logging import LogConfig, LogLevel, SensitiveMasker, StructuredLogger
from .callbacks import CallbackPipeline
from .interfaces import (
    Hook,
    ICallbackPipeline,
    IPersistenceAdapter,
    IRecordResolver,
    IValidationGate,
    Phase,
)
from .lifecycle import Session, SessionDefinition
from .persistence import SessionStoreAdapter

LOGGER_NAME = "sessionguard.session"


class SessionFactory:
    """
    Fabrique de sessions d'un type donné.

    La configuration des hooks se fait avant la première session construite;
    si settings.freeze_callbacks est vrai, le registre est alors gelé.

    Chaque session reçoit sa propre persistance via `persistence_factory`,
    sauf si `persistence` est passé à build / create.

    Les entrées JSON du logger sont émises sur le logger `sessionguard.session`
    du module logging, sauf si `output_handler` est fourni.

    Example:
        factory = SessionFactory("UserSession", gate, resolver)

        @factory.on("after_create")
        def remember_login(session):
            ...

        session = factory.create(login="bob", password="secret")
        session = factory.create_or_raise(login="bob", password="secret")
    """

    def __init__(
        self,
        name: str,
        validation_gate: IValidationGate,
        record_resolver: IRecordResolver,
        persistence_factory: Callable[[], IPersistenceAdapter] = SessionStoreAdapter,
        callbacks: Optional[ICallbackPipeline] = None,
        settings: Optional[SessionSettings] = None,
        session_class: Type[Session] = Session,
        output_handler: Optional[Callable[[str], None]] = None,
    ):
        """
        Args:
            name: Type de session (apparaît dans les logs)
            validation_gate: Validation des champs
            record_resolver: Résolution du record
            persistence_factory: Persistance d'une session (défaut: SessionStoreAdapter en mémoire)
            callbacks: Registre partagé (défaut: nouveau CallbackPipeline)
            settings: Réglages (défaut: SessionSettings())
            session_class: Constructeur des sessions
            output_handler: Sortie JSON des logs (défaut: logging.getLogger(LOGGER_NAME))

        Raises:
            ValueError: Si name vide
            InvalidLogLevelError: Si settings.log_level inconnu
        """
        if not name or not name.strip():
            raise ValueError("Session type name cannot be empty")
        if not callable(persistence_factory):
            raise TypeError("persistence_factory must be callable")

        settings = settings or SessionSettings()
        logger = StructuredLogger(
            config=LogConfig(
                min_level=LogLevel.parse(settings.log_level),
                mask_sensitive=settings.mask_sensitive,
                session_type=name.strip(),
            ),
            masker=SensitiveMasker(settings.sensitive_patterns),
            output_handler=output_handler or logging.getLogger(LOGGER_NAME).info,
        )

        self.definition = SessionDefinition(
            name=name.strip(),
            validation_gate=validation_gate,
            record_resolver=record_resolver,
            persistence_factory=persistence_factory,
            callbacks=callbacks if callbacks is not None else CallbackPipeline(logger=logger),
            settings=settings,
            logger=logger,
        )
        self._session_class = session_class

    @classmethod
    def from_config(
        cls,
        name: str,
        validation_gate: IValidationGate,
        record_resolver: IRecordResolver,
        configs_path: str = "config",
        **kwargs: Any,
    ) -> "SessionFactory":
        """
        Construit une fabrique à partir de <configs_path>/<name>.yaml.

        Raises:
            ConfigIntegrityError: Configuration absente ou invalide
        """
        settings = SettingsLoader(configs_path).load(name)
        return cls(name, validation_gate, record_resolver, settings=settings, **kwargs)

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def callbacks(self) -> ICallbackPipeline:
        return self.definition.callbacks

    @property
    def logger(self) -> StructuredLogger:
        return self.definition.logger

    def on(self, phase: Union[Phase, str]) -> Callable[[Hook], Hook]:
        """Décorateur d'enregistrement d'un hook."""

        def decorator(hook: Hook) -> Hook:
            return self.callbacks.register(phase, hook)

        return decorator

    def build(self, persistence: Optional[IPersistenceAdapter] = None, **attributes: Any) -> Session:
        """Construit une session sans la sauvegarder."""
        if self.definition.settings.freeze_callbacks:
            freeze = getattr(self.callbacks, "freeze", None)
            if freeze is not None:
                freeze()
        return self._session_class(self.definition, persistence=persistence, **attributes)

    def create(
        self,
        on_result: Optional[Callable[[bool], Any]] = None,
        persistence: Optional[IPersistenceAdapter] = None,
        **attributes: Any,
    ) -> Session:
        """
        Construit puis sauvegarde une session.

        Returns:
            La session, que le save ait réussi ou non (voir errors)
        """
        session = self.build(persistence=persistence, **attributes)
        session.save(on_result)
        return session

    def create_or_raise(
        self,
        persistence: Optional[IPersistenceAdapter] = None,
        **attributes: Any,
    ) -> Session:
        """
        Construit puis sauvegarde une session en mode strict.

        Raises:
            SessionInvalidError: Validation échouée
        """
        session = self.build(persistence=persistence, **attributes)
        session.save_or_raise()
        return session
