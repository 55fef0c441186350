"""
SESSIONGUARD - Record Resolver

Adaptateur vers la recherche du sujet authentifié.
"""

from typing import Any, Callable, Optional

from .interfaces import IRecordResolver


class CallableRecordResolver(IRecordResolver):
    """
    Résolution déléguée à une fonction de recherche.

    La fonction reçoit la session et retourne le record, ou None si
    introuvable. Elle peut aussi lever RecordNotFoundError.

    Example:
        resolver = CallableRecordResolver(
            lambda session: users.get(session.attributes["login"])
        )
    """

    def __init__(self, lookup: Callable[[Any], Optional[Any]]):
        if not callable(lookup):
            raise TypeError("lookup must be callable")
        self._lookup = lookup

    def resolve(self, session) -> Optional[Any]:
        return self._lookup(session)
