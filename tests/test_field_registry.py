"""Tests for field registration, mutation and change notification."""

import pytest

from formcore.errors import UnknownFieldError
from formcore.form.events import EventChannel, FormEvent, FormEventType
from formcore.form.registry import FieldRegistry
from formcore.form.state import FormState
from formcore.validation.types import FieldRules


@pytest.fixture
def state():
    return FormState(id="signup")


@pytest.fixture
def registry(state):
    return FieldRegistry(state)


@pytest.fixture
def events(state):
    received: list[FormEvent] = []
    state.events.subscribe(received.append)
    return received


# =============================================================================
# Registration
# =============================================================================


class TestRegister:
    def test_register_creates_field(self, registry, state):
        rules = FieldRules(required=True, schema={"gt": 3})
        assert registry.register("username", "bob", rules) is True

        field = state.fields["username"]
        assert field.value == "bob"
        assert field.required is True
        assert field.schema_rules == {"gt": 3}
        assert field.error is None

    def test_register_is_idempotent(self, registry, state):
        registry.register("username", "first", FieldRules(required=True))
        assert registry.register("username", "second", FieldRules(schema={"gt": 1})) is False

        field = state.fields["username"]
        assert field.value == "first"
        assert field.required is True
        assert field.schema_rules == {}

    def test_register_with_initial_error(self, registry, state):
        registry.register("email", "", error="Already in use")
        assert state.fields["email"].error == "Already in use"

    def test_registration_order_is_kept(self, registry):
        for field_id in ("c", "a", "b"):
            registry.register(field_id)
        assert [f.id for f in registry] == ["c", "a", "b"]

    def test_unregister(self, registry):
        registry.register("username")
        assert registry.unregister("username") is True
        assert "username" not in registry
        assert registry.unregister("username") is False

    def test_reregister_after_unregister_takes_new_value(self, registry, state):
        registry.register("username", "first")
        registry.unregister("username")
        registry.register("username", "second")
        assert state.fields["username"].value == "second"

    def test_len_and_contains(self, registry):
        registry.register("a")
        registry.register("b")
        assert len(registry) == 2
        assert "a" in registry
        assert "z" not in registry


# =============================================================================
# Mutation
# =============================================================================


class TestMutation:
    def test_set_value(self, registry):
        registry.register("username")
        registry.set_value("username", "alice")
        assert registry.get("username").value == "alice"

    def test_set_value_does_not_validate(self, registry):
        registry.register("username", rules=FieldRules(required=True))
        registry.set_value("username", "")
        assert registry.get("username").error is None

    def test_set_error_and_clear(self, registry):
        registry.register("username")
        registry.set_error("username", "Taken")
        assert registry.get("username").error == "Taken"
        registry.set_error("username", None)
        assert registry.get("username").error is None

    def test_unknown_field_raises(self, registry):
        with pytest.raises(UnknownFieldError, match="'ghost' is not registered"):
            registry.set_value("ghost", "x")
        with pytest.raises(KeyError):
            registry.set_error("ghost", "x")

    def test_values_snapshot_copies_lists(self, registry):
        registry.register("tags", ["a"])
        snapshot = registry.values()
        snapshot["tags"].append("b")
        assert registry.get("tags").value == ["a"]


# =============================================================================
# Stale results
# =============================================================================


class TestTokens:
    def test_apply_error_for_live_field(self, registry):
        registry.register("username")
        token = registry.token("username")
        assert registry.apply_error(token, "Bad") is True
        assert registry.get("username").error == "Bad"

    def test_apply_error_after_unregister_is_discarded(self, registry):
        registry.register("username")
        token = registry.token("username")
        registry.unregister("username")
        assert registry.apply_error(token, "Bad") is False
        assert "username" not in registry

    def test_apply_error_after_reregister_is_discarded(self, registry):
        registry.register("username")
        token = registry.token("username")
        registry.unregister("username")
        registry.register("username")
        assert registry.apply_error(token, "Bad") is False
        assert registry.get("username").error is None


# =============================================================================
# Notifications
# =============================================================================


class TestNotifications:
    def test_every_mutation_emits(self, registry, events):
        registry.register("username")
        registry.set_value("username", "alice")
        registry.set_error("username", "Taken")
        registry.unregister("username")

        assert [e.type for e in events] == [
            FormEventType.FIELD_REGISTERED,
            FormEventType.VALUE_CHANGED,
            FormEventType.ERROR_CHANGED,
            FormEventType.FIELD_UNREGISTERED,
        ]
        assert all(e.form_id == "signup" and e.field_id == "username" for e in events)

    def test_noop_register_emits_nothing(self, registry, events):
        registry.register("username")
        registry.register("username")
        assert len(events) == 1

    def test_state_setters_emit(self, state, events):
        state.set_global_error("boom")
        state.set_submitting(True)
        assert [e.type for e in events] == [
            FormEventType.GLOBAL_ERROR_CHANGED,
            FormEventType.SUBMITTING_CHANGED,
        ]
        assert events[0].field_id is None


class TestEventChannel:
    def test_unsubscribe(self):
        channel = EventChannel()
        received = []
        unsubscribe = channel.subscribe(received.append)
        channel.emit(FormEvent(FormEventType.VALUE_CHANGED, "f", "a"))
        unsubscribe()
        channel.emit(FormEvent(FormEventType.VALUE_CHANGED, "f", "a"))
        assert len(received) == 1
        assert len(channel) == 0

    def test_unsubscribe_twice_is_harmless(self):
        channel = EventChannel()
        unsubscribe = channel.subscribe(lambda e: None)
        unsubscribe()
        unsubscribe()
        assert len(channel) == 0

    def test_failing_listener_does_not_stop_others(self, caplog):
        channel = EventChannel()
        received = []

        def broken(event):
            raise RuntimeError("render failed")

        channel.subscribe(broken)
        channel.subscribe(received.append)
        channel.emit(FormEvent(FormEventType.VALUE_CHANGED, "f", "a"))

        assert len(received) == 1
        assert "render failed" in caplog.text
