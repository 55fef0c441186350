"""
Tests unitaires SessionFactory (create / create_or_raise)
"""

import json
import logging

import pytest

from sessionguard.core import SessionSettings
from sessionguard.logging import InvalidLogLevelError, LogLevel
from sessionguard.session import (
    CallbackPipeline,
    CallableRecordResolver,
    CallbackRegistryFrozenError,
    Session,
    SessionFactory,
    SessionInvalidError,
    SessionStoreAdapter,
)


class TestConstruction:
    """Construction de la factory."""

    def test_empty_name_raises(self, validation_gate, record_resolver):
        with pytest.raises(ValueError):
            SessionFactory("  ", validation_gate, record_resolver)

    def test_defaults(self, validation_gate, record_resolver):
        factory = SessionFactory("UserSession", validation_gate, record_resolver)

        assert factory.name == "UserSession"
        assert isinstance(factory.callbacks, CallbackPipeline)
        assert isinstance(factory.build().persistence, SessionStoreAdapter)
        assert factory.definition.settings == SessionSettings()

    def test_invalid_log_level_raises(self, validation_gate, record_resolver):
        with pytest.raises(InvalidLogLevelError):
            SessionFactory(
                "UserSession",
                validation_gate,
                record_resolver,
                settings=SessionSettings(log_level="LOUD"),
            )

    def test_non_callable_persistence_factory_raises(self, validation_gate, record_resolver):
        with pytest.raises(TypeError):
            SessionFactory("UserSession", validation_gate, record_resolver, persistence_factory=SessionStoreAdapter())

    def test_shared_pipeline(self, validation_gate, record_resolver):
        pipeline = CallbackPipeline()
        factory = SessionFactory("UserSession", validation_gate, record_resolver, callbacks=pipeline)
        assert factory.callbacks is pipeline


class TestCreate:
    """create construit puis sauvegarde."""

    def test_create_valid(self, factory, recorder):
        session = factory.create(login="bob", password="s3cret")

        assert isinstance(session, Session)
        assert session.is_new() is False
        assert session.record.login == "bob"
        assert recorder.calls == ["before_save", "before_create", "after_create", "after_save"]

    def test_create_invalid_returns_session(self, factory):
        session = factory.create(login="bob")

        assert session.is_new() is True
        assert session.errors.full_messages == ["Password cannot be blank"]

    def test_create_forwards_on_result(self, factory):
        results = []
        factory.create(on_result=results.append, login="bob", password="s3cret")
        factory.create(on_result=results.append, login="bob")
        assert results == [True, False]

    def test_create_with_own_persistence(self, factory, store):
        request_store = {}
        factory.create(
            persistence=SessionStoreAdapter(request_store),
            login="alice",
            password="w0nderland",
        )

        assert request_store == {"record_id": 2}
        assert store == {}

    def test_custom_session_class(self, validation_gate, record_resolver):
        class UserSession(Session):
            pass

        factory = SessionFactory("UserSession", validation_gate, record_resolver, session_class=UserSession)
        assert isinstance(factory.create(login="bob", password="s3cret"), UserSession)


class TestCreateOrRaise:
    """create_or_raise lève si invalide."""

    def test_valid(self, factory):
        session = factory.create_or_raise(login="bob", password="s3cret")
        assert session.record is not None

    def test_invalid_raises(self, factory):
        with pytest.raises(SessionInvalidError, match="Login cannot be blank and Password cannot be blank"):
            factory.create_or_raise()


class TestHookConfiguration:
    """Enregistrement des hooks via la factory."""

    def test_on_decorator(self, factory):
        seen = []

        @factory.on("after_create")
        def remember(session):
            seen.append(session.attributes["login"])

        factory.create(login="alice", password="w0nderland")
        assert seen == ["alice"]

    def test_first_build_freezes_callbacks(self, factory):
        factory.build()

        with pytest.raises(CallbackRegistryFrozenError):
            factory.on("before_save")(lambda s: None)

    def test_freeze_can_be_disabled(self, validation_gate, record_resolver):
        factory = SessionFactory(
            "UserSession",
            validation_gate,
            record_resolver,
            settings=SessionSettings(freeze_callbacks=False),
        )
        factory.build()

        factory.callbacks.register("before_save", lambda s: None)
        assert factory.callbacks.is_frozen is False


class TestLogging:
    """Événements de cycle de vie dans le logger structuré."""

    def test_save_and_destroy_are_logged(self, factory):
        session = factory.create(login="bob", password="s3cret")
        session.destroy()

        messages = [entry.message for entry in factory.logger.get_entries(LogLevel.INFO)]
        assert messages == ["Session sauvegardée", "Session détruite"]
        assert factory.logger.get_entries()[0].session_type == "UserSession"

    def test_failed_save_masks_password(self, validation_gate, record_resolver):
        output = []
        factory = SessionFactory("UserSession", validation_gate, record_resolver, output_handler=output.append)

        factory.create(login="", password="hunter2")

        payload = json.loads(output[-1])
        assert payload["level"] == "WARN"
        assert payload["extra"]["attributes"] == {"login": "", "password": "***MASKED***"}
        assert "hunter2" not in output[-1]

    def test_sensitive_patterns_from_settings(self, validation_gate, record_resolver):
        factory = SessionFactory(
            "UserSession",
            validation_gate,
            record_resolver,
            settings=SessionSettings(sensitive_patterns=["login"]),
        )

        factory.create(login="bob", password="")

        entry = factory.logger.get_entries(LogLevel.WARN)[0]
        assert entry.extra["attributes"] == {"login": "***MASKED***", "password": "***MASKED***"}

    def test_strict_failure_logged_as_error(self, factory):
        with pytest.raises(SessionInvalidError):
            factory.create_or_raise(login="bob")

        errors = factory.logger.get_entries(LogLevel.ERROR)
        assert errors[0].extra["errors"] == ["Password cannot be blank"]

    def test_entries_carry_session_state(self, factory):
        session = factory.create(login="bob")
        session.attributes["password"] = "s3cret"
        session.save()
        session.destroy()

        states = [(entry.message, entry.state) for entry in factory.logger.get_entries()]
        assert states == [
            ("Validation de session échouée", "new"),
            ("Session sauvegardée", "active"),
            ("Session détruite", "destroyed"),
        ]

    def test_default_output_goes_to_logging_module(self, validation_gate, record_resolver, caplog):
        factory = SessionFactory("UserSession", validation_gate, record_resolver)

        with caplog.at_level(logging.INFO, logger="sessionguard.session"):
            factory.create(login="bob", password="s3cret")

        payloads = [json.loads(record.getMessage()) for record in caplog.records]
        assert [p["message"] for p in payloads] == ["Session sauvegardée"]
        assert payloads[0]["session_type"] == "UserSession"
        assert payloads[0]["state"] == "active"


# ══════════════════════════════════════════════════════════════════════════════
# PERSISTANCE PAR SESSION
# ══════════════════════════════════════════════════════════════════════════════


class TestPersistencePerSession:
    """Chaque session construite reçoit sa propre persistance."""

    def test_destroy_does_not_clear_other_sessions(self, validation_gate, record_resolver):
        factory = SessionFactory("UserSession", validation_gate, record_resolver)

        bob = factory.create(login="bob", password="s3cret")
        alice = factory.create(login="alice", password="w0nderland")
        alice.destroy()

        assert bob.persistence is not alice.persistence
        assert bob.persistence.current() == 1
        assert alice.persistence.current() is None

    def test_persistence_factory_called_per_session(self, validation_gate, record_resolver):
        stores = []

        def per_request():
            stores.append({})
            return SessionStoreAdapter(stores[-1], key="user_credentials_id")

        factory = SessionFactory("UserSession", validation_gate, record_resolver, persistence_factory=per_request)
        factory.create(login="bob", password="s3cret")
        factory.create(login="alice", password="w0nderland")

        assert stores == [{"user_credentials_id": 1}, {"user_credentials_id": 2}]

    def test_record_without_id_attribute(self, validation_gate, users):
        logins = CallableRecordResolver(lambda s: s.attributes["login"] if s.attributes["login"] in users else None)
        factory = SessionFactory("UserSession", validation_gate, logins)

        session = factory.create(login="alice", password="w0nderland")

        assert session.record == "alice"
        assert session.is_new() is False
        assert session.persistence.current() == "alice"
