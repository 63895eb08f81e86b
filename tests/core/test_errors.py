"""Tests for overridefromenv.errors module."""

import pytest

from overridefromenv.errors import (
    ConversionError,
    ErrorCategory,
    FlagError,
    FlagExistsError,
    FlagParseError,
    OverrideFromEnvError,
    UnknownFlagError,
)


class TestOverrideFromEnvError:
    def test_defaults(self):
        err = OverrideFromEnvError("boom")
        assert err.message == "boom"
        assert err.category == ErrorCategory.INTERNAL
        assert err.context == {}
        assert err.cause is None

    def test_cause_is_chained(self):
        cause = ValueError("bad")
        err = OverrideFromEnvError("wrapped", cause=cause)
        assert err.__cause__ is cause

    def test_with_context_is_fluent(self):
        err = OverrideFromEnvError("boom").with_context(flag="port")
        assert err.context == {"flag": "port"}

    def test_to_dict(self):
        err = OverrideFromEnvError("boom", context={"a": 1}, cause=RuntimeError("x"))
        assert err.to_dict() == {
            "error_type": "OverrideFromEnvError",
            "message": "boom",
            "category": "INTERNAL",
            "context": {"a": 1},
            "cause": "x",
        }

    def test_repr(self):
        assert repr(FlagError("oops")) == "FlagError('oops', category=FLAG)"


class TestConversionError:
    def test_fields_and_message(self):
        err = ConversionError("port", "APP_PORT", "abc", cause=ValueError("invalid integer 'abc'"))

        assert err.flag_name == "port"
        assert err.env_key == "APP_PORT"
        assert err.value == "abc"
        assert err.category == ErrorCategory.CONVERSION
        assert str(err) == (
            'unable to set flag port from environment variable APP_PORT, '
            'which has a value of "abc": invalid integer \'abc\''
        )

    def test_context(self):
        err = ConversionError("port", "APP_PORT", "abc")
        assert err.to_dict()["context"] == {"flag": "port", "env_key": "APP_PORT", "value": "abc"}

    def test_is_base_error(self):
        assert isinstance(ConversionError("a", "B", "c"), OverrideFromEnvError)


class TestFlagErrors:
    def test_exists_is_value_error(self):
        err = FlagExistsError("port")
        assert isinstance(err, ValueError)
        assert isinstance(err, FlagError)
        assert str(err) == "flag redefined: port"

    def test_unknown_is_key_error(self):
        with pytest.raises(KeyError):
            raise UnknownFlagError("port")

    def test_parse_error_category(self):
        assert FlagParseError("bad").category == ErrorCategory.FLAG
