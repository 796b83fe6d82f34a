"""Tests for the DocForge exception hierarchy."""

from __future__ import annotations

import pytest

from docforge.core.exceptions import (
    ConfigurationError,
    ConfigValidationError,
    DocForgeError,
    DocletValidationError,
    InputError,
    RegistryError,
    get_root_cause,
)


class TestHierarchy:
    """Every error is catchable as DocForgeError."""

    @pytest.mark.parametrize(
        "exc_type",
        [ConfigurationError, ConfigValidationError, InputError, DocletValidationError, RegistryError],
    )
    def test_subclasses_docforge_error(self, exc_type) -> None:
        assert issubclass(exc_type, DocForgeError)

    def test_validation_errors_nest_under_their_category(self) -> None:
        assert issubclass(ConfigValidationError, ConfigurationError)
        assert issubclass(DocletValidationError, InputError)


class TestErrorInfo:
    """Tests for error codes and fix hints."""

    def test_class_defaults(self) -> None:
        err = InputError("missing doclets")

        assert err.error_code == "DF-IN-000"
        assert err.how_to_fix
        assert err.user_message == "missing doclets"

    def test_overrides(self) -> None:
        err = DocForgeError(
            "boom",
            error_code="DF-X-001",
            why_it_happened="because",
            how_to_fix=["do this"],
        )

        assert err.error_code == "DF-X-001"
        assert err.why_it_happened == "because"
        assert err.how_to_fix == ["do this"]

    def test_config_validation_error_keeps_field_and_value(self) -> None:
        err = ConfigValidationError("bad", field="nav.use_longname_in_nav", value="yes")

        assert err.field == "nav.use_longname_in_nav"
        assert err.value == "yes"
        assert err.error_code == "DF-CFG-001"

    def test_doclet_validation_error_keeps_index(self) -> None:
        assert DocletValidationError("bad record", index=4).index == 4


class TestRootCause:
    """Tests for get_root_cause."""

    def test_follows_cause_chain(self) -> None:
        original = ValueError("original")
        try:
            try:
                raise original
            except ValueError as e:
                raise InputError("wrapped") from e
        except InputError as err:
            assert get_root_cause(err) is original
            assert err.get_root_cause() is original

    def test_returns_self_without_chain(self) -> None:
        err = RegistryError("alone")

        assert get_root_cause(err) is err
