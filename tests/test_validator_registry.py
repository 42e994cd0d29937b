"""Tests for the validator registry and the built-in schema validators."""

import logging

import pytest

from formcore.validation.registry import ValidatorRegistry, schema_validator
from formcore.validation.types import MessageContext, SchemaValidator
from formcore.validation.validators import EMAIL_PATTERN, NUMERIC_PATTERN


@pytest.fixture(autouse=True)
def reset_registry():
    ValidatorRegistry.reset()
    yield
    ValidatorRegistry.reset()


def make_validator(name: str = "startsWith") -> SchemaValidator:
    return SchemaValidator(
        name=name,
        predicate=lambda value, prefix: value.startswith(prefix),
        message=lambda ctx: f"Must start with {ctx.expected}",
    )


# =============================================================================
# ValidatorRegistry tests
# =============================================================================


class TestValidatorRegistry:
    def test_builtins_registered(self):
        for name in ("lt", "gt", "lte", "gte", "len", "email", "numeric"):
            assert ValidatorRegistry.is_registered(name)
            assert ValidatorRegistry.is_builtin(name)

    def test_resolve_unknown_returns_none(self):
        assert ValidatorRegistry.resolve("foo") is None

    def test_resolve_is_exact_match(self):
        assert ValidatorRegistry.resolve("GT") is None
        assert ValidatorRegistry.resolve("gt ") is None

    def test_get_unknown_raises(self):
        with pytest.raises(ValueError, match="not registered"):
            ValidatorRegistry.get("foo")

    def test_register_and_resolve(self):
        validator = make_validator()
        assert ValidatorRegistry.register(validator) is True
        assert ValidatorRegistry.resolve("startsWith") is validator
        assert not ValidatorRegistry.is_builtin("startsWith")

    def test_register_does_not_override(self, caplog):
        first = make_validator()
        second = make_validator()

        ValidatorRegistry.register(first)
        with caplog.at_level(logging.WARNING, logger="formcore"):
            assert ValidatorRegistry.register(second) is False

        assert ValidatorRegistry.resolve("startsWith") is first
        assert "already registered" in caplog.text

    def test_register_same_entry_twice_is_quiet(self, caplog):
        validator = make_validator()
        ValidatorRegistry.register(validator)
        with caplog.at_level(logging.WARNING, logger="formcore"):
            assert ValidatorRegistry.register(validator) is False
        assert "already registered" not in caplog.text

    def test_builtin_cannot_be_replaced(self):
        original = ValidatorRegistry.resolve("gt")
        ValidatorRegistry.register(
            SchemaValidator(name="gt", predicate=lambda v, p: True, message=lambda c: "")
        )
        assert ValidatorRegistry.resolve("gt") is original

    def test_reset_keeps_builtins(self):
        ValidatorRegistry.register(make_validator())
        ValidatorRegistry.reset()
        assert not ValidatorRegistry.is_registered("startsWith")
        assert ValidatorRegistry.is_registered("email")

    def test_list_registered_sorted(self):
        ValidatorRegistry.register(make_validator("zzz"))
        ValidatorRegistry.register(make_validator("aaa"))
        names = ValidatorRegistry.list_registered()
        assert names == sorted(names)
        assert "aaa" in names and "zzz" in names


class TestSchemaValidatorDecorator:
    def test_decorator_registers(self):
        @schema_validator("even", message="Must have an even length")
        def even(value, enabled):
            return len(value) % 2 == 0

        validator = ValidatorRegistry.get("even")
        assert validator.check("ab", True)
        assert not validator.check("abc", True)
        assert validator.format_message(True, "abc") == "Must have an even length"

    def test_decorator_preserves_function(self):
        @schema_validator("noop")
        def original_fn(value, param):
            return True

        assert original_fn.__name__ == "original_fn"
        assert ValidatorRegistry.get("noop").format_message(1, "x") == "Invalid value"

    def test_decorator_callable_message(self):
        @schema_validator("prefix", message=lambda ctx: f"Expected {ctx.expected}, got {ctx.value}")
        def prefix(value, p):
            return value.startswith(p)

        assert ValidatorRegistry.get("prefix").format_message("ab", "xy") == "Expected ab, got xy"


# =============================================================================
# Built-in validator tests
# =============================================================================


class TestLengthValidators:
    @pytest.mark.parametrize(
        "name,value,bound,expected",
        [
            ("lt", "ab", 3, True),
            ("lt", "abc", 3, False),
            ("gt", "abcd", 3, True),
            ("gt", "ab", 3, False),
            ("lte", "abc", 3, True),
            ("lte", "abcd", 3, False),
            ("gte", "abc", 3, True),
            ("gte", "ab", 3, False),
            ("len", "abc", 3, True),
            ("len", "abcd", 3, False),
        ],
    )
    def test_string_lengths(self, name, value, bound, expected):
        assert ValidatorRegistry.get(name).check(value, bound) is expected

    def test_list_length_counts_items(self):
        gte = ValidatorRegistry.get("gte")
        assert gte.check(["a", "b"], 2)
        assert not gte.check(["a"], 2)

    def test_string_bound_is_coerced(self):
        assert ValidatorRegistry.get("gt").check("abcd", "3")

    def test_non_integer_bound_raises(self):
        with pytest.raises(ValueError):
            ValidatorRegistry.get("gt").check("abcd", "three")

    def test_default_message(self):
        gt = ValidatorRegistry.get("gt")
        assert gt.format_message(3, "ab") == "Must be more than 3 characters"

    def test_message_for_list_uses_items(self):
        gte = ValidatorRegistry.get("gte")
        assert gte.format_message(2, ["a"]) == "Must be at least 2 items"

    def test_message_context_expected_is_string(self):
        seen = []
        ValidatorRegistry.register(
            SchemaValidator(
                name="capture",
                predicate=lambda v, p: False,
                message=lambda ctx: seen.append(ctx) or "bad",
            )
        )
        ValidatorRegistry.get("capture").format_message(5, "abc")
        assert seen == [MessageContext(expected="5", value="abc")]


class TestFormatValidators:
    def test_email_requires_at_sign(self):
        email = ValidatorRegistry.get("email")
        assert email.check("me@example.com", True)
        assert email.check("a@b", True)
        assert not email.check("example.com", True)

    def test_email_disabled_with_false(self):
        assert ValidatorRegistry.get("email").check("example.com", False)

    def test_numeric(self):
        numeric = ValidatorRegistry.get("numeric")
        assert numeric.check("12345", True)
        assert not numeric.check("12a45", True)
        assert not numeric.check("-1", True)
        assert not numeric.check("", True)

    def test_numeric_rejects_non_ascii_digits(self):
        assert NUMERIC_PATTERN.fullmatch("١٢٣") is None

    def test_list_values_check_every_item(self):
        email = ValidatorRegistry.get("email")
        assert email.check(["a@b", "c@d"], True)
        assert not email.check(["a@b", "cd"], True)

    def test_messages(self):
        assert ValidatorRegistry.get("email").format_message(True, "x") == "Invalid email address"
        assert ValidatorRegistry.get("numeric").format_message(True, "x") == "Must be a numeric value"

    def test_email_pattern_spans_lines(self):
        assert EMAIL_PATTERN.fullmatch("a\n@b") is not None
