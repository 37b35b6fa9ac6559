"""geoq configuration loaded from environment variables.

All configuration values have sensible defaults, so ``geoq`` runs
without any environment set.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any value is out of
    its valid range.  Bad configuration is reported before the first
    input line is read.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from geoq.core.constants import (
    DEFAULT_HTTP_TIMEOUT_S,
    DEFAULT_MAP_URL,
    DEFAULT_MAX_SIMPLIFY_ITERATIONS,
    DEFAULT_WHEREAMI_URL,
)
from geoq.core.exceptions import ConfigurationError

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"", "0", "false", "no", "off"})


class ConfigValidationError(ConfigurationError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
    """

    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class GeoqConfig:
    """Immutable geoq configuration.

    Loaded once when the CLI starts and threaded through the commands.

    Attributes:
        log_level: Name of the stdlib logging level for diagnostics on stderr.
        strict: Treat the first per-item conversion failure as fatal
            instead of skipping the item.
        map_url: Base URL of the mapping website used by ``geoq map``.
        whereami_url: IP geolocation endpoint used by ``geoq whereami``.
        http_timeout_s: Timeout for the ``whereami`` request, in seconds.
        max_simplify_iterations: Upper bound on epsilon doublings for
            ``simplify --to-coord-count``.
    """

    log_level: str = "WARNING"
    strict: bool = False
    map_url: str = DEFAULT_MAP_URL
    whereami_url: str = DEFAULT_WHEREAMI_URL
    http_timeout_s: float = DEFAULT_HTTP_TIMEOUT_S
    max_simplify_iterations: int = DEFAULT_MAX_SIMPLIFY_ITERATIONS

    @classmethod
    def from_env(cls) -> GeoqConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is out of range or cannot
                be parsed.
        """
        config = cls(
            log_level=os.getenv("GEOQ_LOG_LEVEL", "WARNING").strip().upper(),
            strict=_parse_bool("GEOQ_STRICT", os.getenv("GEOQ_STRICT", "")),
            map_url=os.getenv("GEOQ_MAP_URL", DEFAULT_MAP_URL),
            whereami_url=os.getenv("GEOQ_WHEREAMI_URL", DEFAULT_WHEREAMI_URL),
            http_timeout_s=_parse_number(
                "GEOQ_HTTP_TIMEOUT_S",
                os.getenv("GEOQ_HTTP_TIMEOUT_S", str(DEFAULT_HTTP_TIMEOUT_S)),
                float,
            ),
            max_simplify_iterations=_parse_number(
                "GEOQ_MAX_SIMPLIFY_ITERATIONS",
                os.getenv("GEOQ_MAX_SIMPLIFY_ITERATIONS", str(DEFAULT_MAX_SIMPLIFY_ITERATIONS)),
                int,
            ),
        )
        _validate(config)
        return config


def _parse_bool(key: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ConfigValidationError(key, raw, "must be a boolean (1/0, true/false, yes/no)")


def _parse_number(key: str, raw: str, kind: type) -> float | int:
    try:
        return kind(raw)
    except ValueError as exc:
        raise ConfigValidationError(key, raw, f"must be a {kind.__name__}") from exc


def _validate(config: GeoqConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if not isinstance(logging.getLevelName(config.log_level), int):
        raise ConfigValidationError(
            "GEOQ_LOG_LEVEL",
            config.log_level,
            "must be a logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        )

    if config.http_timeout_s <= 0:
        raise ConfigValidationError(
            "GEOQ_HTTP_TIMEOUT_S",
            config.http_timeout_s,
            "must be > 0 (seconds)",
        )

    if config.max_simplify_iterations < 1:
        raise ConfigValidationError(
            "GEOQ_MAX_SIMPLIFY_ITERATIONS",
            config.max_simplify_iterations,
            "must be >= 1",
        )

    if not config.map_url:
        raise ConfigValidationError("GEOQ_MAP_URL", config.map_url, "must not be empty")

    if not config.whereami_url:
        raise ConfigValidationError("GEOQ_WHEREAMI_URL", config.whereami_url, "must not be empty")
