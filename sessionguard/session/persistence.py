"""
SESSIONGUARD - Persistence Adapter

Enregistre la référence au record dans un stockage de session.
"""

from typing import Any, Callable, MutableMapping, Optional

from .interfaces import IPersistenceAdapter


def record_identifier(record: Any) -> Any:
    """Attribut `id` du record, sinon le record lui-même (ex: login en str)."""
    return getattr(record, "id", record)


class SessionStoreAdapter(IPersistenceAdapter):
    """
    Persistance dans un mapping mutable (ex: dict de session web).

    commit(record) écrit l'identifiant du record sous `key`,
    commit(None) retire la clé.

    Note:
        Stockage en mémoire par défaut. Passer le store de la requête
        courante pour une persistance réelle.

    Example:
        adapter = SessionStoreAdapter(request.session, key="user_credentials_id")
    """

    DEFAULT_KEY: str = "record_id"

    def __init__(
        self,
        store: Optional[MutableMapping[str, Any]] = None,
        key: str = DEFAULT_KEY,
        identifier: Callable[[Any], Any] = record_identifier,
    ):
        """
        Args:
            store: Mapping cible (défaut: dict en mémoire)
            key: Clé sous laquelle stocker l'identifiant
            identifier: Extraction de l'identifiant du record

        Raises:
            ValueError: Si key vide
        """
        if not key:
            raise ValueError("key cannot be empty")

        self.store: MutableMapping[str, Any] = store if store is not None else {}
        self.key = key
        self._identifier = identifier

    def commit(self, record: Optional[Any]) -> None:
        if record is None:
            self.store.pop(self.key, None)
            return

        self.store[self.key] = self._identifier(record)

    def current(self) -> Optional[Any]:
        """Identifiant actuellement enregistré, ou None."""
        return self.store.get(self.key)
