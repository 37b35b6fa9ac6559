"""Tests for the unified exception taxonomy.

Validates:
- GeoqError hierarchy and structured attributes
- Category classification (conversion, configuration, command)
- ``to_error_dict()`` produces stable payload keys
- Recoverability follows the category
"""

from __future__ import annotations

from typing import ClassVar

import pytest

from geoq.core.config import ConfigValidationError
from geoq.core.exceptions import (
    CommandError,
    ConfigurationError,
    ConversionError,
    EntityParseError,
    GeoqError,
    InvalidCoordinateError,
    MissingGeometryError,
    MungeError,
    QueryError,
    UnknownCommandError,
    UnsupportedGeometryError,
    UnsupportedPredicateGeometryError,
    WhereamiError,
)


class TestGeoqErrorBase:
    """GeoqError base class behavior."""

    def test_default_attributes(self) -> None:
        err = GeoqError("boom")
        assert err.message == "boom"
        assert err.stage == ""
        assert err.code == ""
        assert err.recoverable is False

    def test_custom_attributes(self) -> None:
        err = GeoqError("fail", stage="convert", code="X", recoverable=True)
        assert err.stage == "convert"
        assert err.code == "X"
        assert err.recoverable is True
        assert err.category == "conversion"

    def test_str_is_message(self) -> None:
        assert str(GeoqError("boom")) == "boom"

    def test_repr(self) -> None:
        err = EntityParseError("bad line", text="x")
        assert repr(err) == "EntityParseError(code='ENTITY_PARSE_FAILED', message='bad line')"


class TestCategories:
    """Concrete classes map onto the three categories."""

    CONVERSION: ClassVar[list[type[GeoqError]]] = [
        ConversionError,
        InvalidCoordinateError,
        EntityParseError,
        MissingGeometryError,
        UnsupportedGeometryError,
        UnsupportedPredicateGeometryError,
        MungeError,
    ]
    CONFIGURATION: ClassVar[list[type[GeoqError]]] = [ConfigurationError, QueryError]
    COMMAND: ClassVar[list[type[GeoqError]]] = [CommandError, UnknownCommandError, WhereamiError]

    @pytest.mark.parametrize("cls", CONVERSION)
    def test_conversion_recoverable(self, cls: type[GeoqError]) -> None:
        err = cls("x")
        assert err.category == "conversion"
        assert err.recoverable is True
        assert err.code

    @pytest.mark.parametrize("cls", CONFIGURATION)
    def test_configuration_fatal(self, cls: type[GeoqError]) -> None:
        err = cls("x")
        assert err.category == "configuration"
        assert err.recoverable is False

    @pytest.mark.parametrize("cls", COMMAND)
    def test_command_fatal(self, cls: type[GeoqError]) -> None:
        err = cls("x")
        assert err.category == "command"
        assert err.recoverable is False

    def test_config_validation_error_is_configuration(self) -> None:
        err = ConfigValidationError("GEOQ_STRICT", "maybe", "must be a boolean")
        assert isinstance(err, ConfigurationError)
        assert err.key == "GEOQ_STRICT"
        assert err.value == "maybe"
        assert err.code == "CONFIG_VALIDATION_FAILED"

    def test_code_override(self) -> None:
        err = EntityParseError("x", code="ENTITY_UNRECOGNIZED")
        assert err.code == "ENTITY_UNRECOGNIZED"


class TestErrorDict:
    """Structured payload keys are stable."""

    def test_keys(self) -> None:
        payload = QueryError("bad query").to_error_dict()
        assert payload == {
            "category": "configuration",
            "code": "QUERY_INVALID",
            "stage": "query",
            "message": "bad query",
            "recoverable": False,
        }

    def test_munge_stage(self) -> None:
        assert MungeError("x").to_error_dict()["stage"] == "json_munge"
