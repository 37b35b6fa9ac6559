"""Unified geoq exception taxonomy.

Every domain exception inherits from ``GeoqError`` and carries
structured context fields so the CLI can decide whether a failure is
local to one input line or fatal to the whole run.

Taxonomy categories
-------------------
- ``ConversionError``     : one entity could not be converted; recoverable
  per stream item (the item is skipped and reported).
- ``ConfigurationError``  : invalid user input detected at startup (bad
  query, empty query set, bad level); terminates the run.
- ``CommandError``        : command dispatch or outer-surface failure;
  terminates the run.

Every exception exposes ``to_error_dict()`` for a stable structured
payload suitable for logging.
"""

from __future__ import annotations


class GeoqError(Exception):
    """Base exception for all geoq errors.

    Attributes:
        message: Human-readable error description.
        stage: Component where the error occurred
            (e.g. ``"convert"``, ``"query"``, ``"config"``).
        code: Machine-readable error code (e.g. ``"ENTITY_PARSE_FAILED"``).
        recoverable: Whether a streaming consumer may skip the offending
            item and continue.
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        recoverable: bool = False,
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.recoverable = recoverable
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ConversionError):
            return "conversion"
        if isinstance(self, ConfigurationError):
            return "configuration"
        if isinstance(self, CommandError):
            return "command"
        return "conversion" if self.recoverable else "command"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "recoverable": self.recoverable,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ConversionError(GeoqError):
    """An entity could not be turned into a geometry. Recoverable per item."""

    default_stage = "convert"
    default_code = "CONVERSION_FAILED"

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("recoverable", True)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class ConfigurationError(GeoqError):
    """Invalid combination of user-supplied settings. Never recoverable."""

    default_stage = "config"
    default_code = "CONFIGURATION_INVALID"

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("recoverable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class CommandError(GeoqError):
    """Command dispatch or outer-surface failure. Never recoverable."""

    default_stage = "command"
    default_code = "COMMAND_FAILED"

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("recoverable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Conversion errors
# ---------------------------------------------------------------------------


class InvalidCoordinateError(ConversionError):
    """Raised when a latitude or longitude is outside WGS 84 bounds."""

    default_code = "COORDINATE_OUT_OF_RANGE"


class EntityParseError(ConversionError):
    """Raised when the text of an entity cannot be parsed.

    Attributes:
        text: The offending input text.
    """

    default_code = "ENTITY_PARSE_FAILED"

    def __init__(self, message: str = "", *, text: str = "", **kwargs: object) -> None:
        self.text = text
        super().__init__(message, **kwargs)


class MissingGeometryError(ConversionError):
    """Raised when a GeoJSON Feature has an absent or null geometry."""

    default_code = "FEATURE_GEOMETRY_MISSING"


class UnsupportedGeometryError(ConversionError):
    """Raised when an operation is not defined for a geometry type."""

    default_code = "GEOMETRY_TYPE_UNSUPPORTED"


class UnsupportedPredicateGeometryError(UnsupportedGeometryError):
    """Raised when ``contains`` is asked of a non-polygonal container."""

    default_code = "PREDICATE_GEOMETRY_UNSUPPORTED"


class MungeError(ConversionError):
    """Raised when arbitrary JSON holds nothing recognisable as a geometry."""

    default_stage = "json_munge"
    default_code = "JSON_MUNGE_FAILED"


# ---------------------------------------------------------------------------
# Configuration / command errors
# ---------------------------------------------------------------------------


class QueryError(ConfigurationError):
    """Raised when a user-supplied query entity cannot be used."""

    default_stage = "query"
    default_code = "QUERY_INVALID"


class UnknownCommandError(CommandError):
    """Raised when dispatch finds no matching subcommand handler."""

    default_code = "UNKNOWN_COMMAND"


class WhereamiError(CommandError):
    """Raised when the IP geolocation lookup fails."""

    default_stage = "whereami"
    default_code = "WHEREAMI_FAILED"
