"""
SESSIONGUARD - Callback Pipeline

Registre ordonné de hooks par phase, partagé entre les sessions d'un même type.

Lecture sans verrou: chaque phase pointe vers un tuple remplacé à chaque
enregistrement (copy-on-write), l'écriture est exclusive.
"""

import threading
from typing import Callable, Dict, Optional, Tuple, Union

from ..logging.interfaces import IStructuredLogger
from .errors import CallbackRegistryFrozenError
from .interfaces import Hook, ICallbackPipeline, Phase


class CallbackPipeline(ICallbackPipeline):
    """
    Registre et exécuteur de hooks de cycle de vie.

    Les hooks reçoivent la session. Une exception levée par un hook n'est
    pas interceptée: elle interrompt l'opération en cours et remonte.

    Example:
        callbacks = CallbackPipeline()
        callbacks.register("before_save", audit_login)

        @callbacks.on(Phase.AFTER_DESTROY)
        def forget_user(session):
            ...
    """

    def __init__(self, logger: Optional[IStructuredLogger] = None) -> None:
        """
        Args:
            logger: Logger structuré (enregistrement et gel en DEBUG)
        """
        self._logger = logger
        self._lock = threading.Lock()
        self._hooks: Dict[Phase, Tuple[Hook, ...]] = {phase: () for phase in Phase}
        self._frozen = False

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def register(self, phase: Union[Phase, str], hook: Hook) -> Hook:
        """
        Enregistre un hook en fin de phase.

        Args:
            phase: Phase (membre ou nom, ex: "before_save")
            hook: Callable recevant la session

        Returns:
            Le hook, pour usage en décorateur

        Raises:
            ValueError: Phase inconnue
            TypeError: Hook non callable
            CallbackRegistryFrozenError: Registre gelé
        """
        resolved = Phase.coerce(phase)
        if not callable(hook):
            raise TypeError(f"Hook for {resolved.value} must be callable")

        with self._lock:
            if self._frozen:
                raise CallbackRegistryFrozenError(resolved.value)
            self._hooks[resolved] = self._hooks[resolved] + (hook,)
            count = len(self._hooks[resolved])

        if self._logger:
            self._logger.debug(
                "Hook enregistré",
                phase=resolved.value,
                hook=getattr(hook, "__name__", repr(hook)),
                position=count,
            )
        return hook

    def on(self, phase: Union[Phase, str]) -> Callable[[Hook], Hook]:
        """Décorateur équivalent à register(phase, hook)."""

        def decorator(hook: Hook) -> Hook:
            return self.register(phase, hook)

        return decorator

    def freeze(self) -> None:
        """Termine la configuration: tout enregistrement ultérieur échoue."""
        with self._lock:
            if self._frozen:
                return
            self._frozen = True

        if self._logger:
            self._logger.debug(
                "Registre de callbacks gelé",
                hooks={phase.value: len(hooks) for phase, hooks in self._hooks.items()},
            )

    def hooks(self, phase: Union[Phase, str]) -> Tuple[Hook, ...]:
        return self._hooks[Phase.coerce(phase)]

    def run(self, phase: Union[Phase, str], session) -> int:
        """
        Exécute les hooks d'une phase dans l'ordre d'enregistrement.

        L'instantané est pris avant exécution: un enregistrement concurrent
        n'affecte pas l'exécution en cours.

        Returns:
            Nombre de hooks exécutés
        """
        snapshot = self._hooks[Phase.coerce(phase)]
        for hook in snapshot:
            hook(session)
        return len(snapshot)

    def __len__(self) -> int:
        return sum(len(hooks) for hooks in self._hooks.values())
