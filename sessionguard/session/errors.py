"""
SESSIONGUARD - Session Errors

Ensemble d'erreurs de validation et exceptions du cycle de vie.
"""

from typing import TYPE_CHECKING, Iterator, List, Optional, Tuple

from ..core.sentence import to_sentence

if TYPE_CHECKING:
    from .lifecycle import Session


class ErrorSet:
    """
    Collection ordonnée de messages d'erreur de validation.

    Example:
        errors = ErrorSet()
        errors.add("Login cannot be blank", field="login")
        errors.full_messages  # ["Login cannot be blank"]
    """

    def __init__(self) -> None:
        self._errors: List[Tuple[Optional[str], str]] = []

    def add(self, message: str, field: Optional[str] = None) -> None:
        """
        Ajoute un message.

        Raises:
            ValueError: Si message vide
        """
        if not message:
            raise ValueError("Error message cannot be empty")
        self._errors.append((field, message))

    def clear(self) -> None:
        self._errors.clear()

    def on(self, field: str) -> List[str]:
        """Messages rattachés à un champ."""
        return [message for error_field, message in self._errors if error_field == field]

    @property
    def full_messages(self) -> List[str]:
        """Tous les messages dans l'ordre d'ajout."""
        return [message for _, message in self._errors]

    def is_empty(self) -> bool:
        return not self._errors

    def to_sentence(self, **connectors: str) -> str:
        """Messages joints en phrase ("a, b, and c")."""
        return to_sentence(self.full_messages, **connectors)

    def __len__(self) -> int:
        return len(self._errors)

    def __iter__(self) -> Iterator[str]:
        return iter(self.full_messages)

    def __contains__(self, message: object) -> bool:
        return message in self.full_messages

    def __repr__(self) -> str:
        return f"ErrorSet({self.full_messages!r})"


class SessionLifecycleError(Exception):
    """Erreur de base du cycle de vie des sessions."""

    pass


class SessionInvalidError(SessionLifecycleError):
    """
    Session invalide lors d'un appel strict (save_or_raise, create_or_raise).

    Le message est la phrase préfixe configurée suivie de toutes les
    erreurs de la session jointes en phrase.
    """

    def __init__(self, session: "Session") -> None:
        self.session = session
        self.messages = list(session.errors.full_messages)

        settings = session.settings
        sentence = to_sentence(
            self.messages,
            words_connector=settings.words_connector,
            two_words_connector=settings.two_words_connector,
            last_word_connector=settings.last_word_connector,
        )
        super().__init__(f"{settings.session_invalid_message} {sentence}".rstrip())


class RecordNotFoundError(SessionLifecycleError):
    """Aucun record ne correspond aux champs validés."""

    pass


class CallbackRegistryFrozenError(SessionLifecycleError):
    """Enregistrement de hook après la fin de la configuration."""

    def __init__(self, phase: str) -> None:
        self.phase = phase
        super().__init__(f"Callback registry is frozen, cannot register hook for {phase}")
