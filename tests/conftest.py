"""
SESSIONGUARD - Pytest Configuration
Fixtures partagées pour tous les tests.
"""

from dataclasses import dataclass
from typing import Dict, List

import pytest

from sessionguard.session import (
    CallableRecordResolver,
    Phase,
    SessionFactory,
    SessionStoreAdapter,
    ValidationGate,
    presence,
)


@dataclass
class User:
    """Sujet authentifié minimal pour les tests."""

    id: int
    login: str
    password: str


class PhaseRecorder:
    """Enregistre chaque hook exécuté, dans l'ordre."""

    def __init__(self) -> None:
        self.calls: List[str] = []

    def attach(self, callbacks) -> None:
        for phase in Phase:
            callbacks.register(phase, self._hook(phase.value))

    def _hook(self, name: str):
        def hook(session) -> None:
            self.calls.append(name)

        hook.__name__ = f"record_{name}"
        return hook

    def clear(self) -> None:
        self.calls.clear()


@pytest.fixture
def users() -> Dict[str, User]:
    """Annuaire d'utilisateurs indexé par login."""
    return {
        "bob": User(id=1, login="bob", password="s3cret"),
        "alice": User(id=2, login="alice", password="w0nderland"),
    }


@pytest.fixture
def validation_gate() -> ValidationGate:
    """Gate exigeant login et password."""
    gate = ValidationGate()
    gate.add_rule("login", presence("login"))
    gate.add_rule("password", presence("password"))
    return gate


@pytest.fixture
def record_resolver(users) -> CallableRecordResolver:
    """Resolver par login."""
    return CallableRecordResolver(lambda session: users.get(session.attributes.get("login")))


@pytest.fixture
def store() -> dict:
    """Stockage de session (équivalent dict de requête web)."""
    return {}


@pytest.fixture
def persistence(store) -> SessionStoreAdapter:
    return SessionStoreAdapter(store, key="user_credentials_id")


@pytest.fixture
def recorder() -> PhaseRecorder:
    return PhaseRecorder()


@pytest.fixture
def factory(validation_gate, record_resolver, persistence, recorder) -> SessionFactory:
    """Factory UserSession avec enregistrement de toutes les phases."""
    session_factory = SessionFactory(
        "UserSession",
        validation_gate,
        record_resolver,
        persistence_factory=lambda: persistence,
    )
    recorder.attach(session_factory.callbacks)
    return session_factory
