"""``whereami``: approximate current location from IP geolocation."""

from __future__ import annotations

import logging

import httpx

from geoq.core.exceptions import ConversionError, WhereamiError
from geoq.formats import FormatTag, to_format
from geoq.models.entity import Entity

logger = logging.getLogger("geoq.commands.whereami")


def locate(url: str, *, timeout_s: float) -> str:
    """Current location as ``lat,lon``.

    The service must answer with a JSON object whose ``loc`` member is a
    ``"lat,lon"`` string.

    Raises:
        WhereamiError: On any HTTP failure or an unusable response.
    """
    try:
        with httpx.Client(timeout=timeout_s, follow_redirects=True) as client:
            response = client.get(url)
            response.raise_for_status()
            payload = response.json()
    except httpx.HTTPError as exc:
        msg = f"Location lookup at {url} failed: {exc}"
        raise WhereamiError(msg) from exc
    except ValueError as exc:
        msg = f"Location lookup at {url} returned invalid JSON: {exc}"
        raise WhereamiError(msg) from exc

    loc = payload.get("loc") if isinstance(payload, dict) else None
    if not isinstance(loc, str):
        msg = f"Location lookup at {url} returned no 'loc' member"
        raise WhereamiError(msg)

    entity = Entity.classify(loc)
    if entity.kind is not FormatTag.LATLON:
        msg = f"Location lookup at {url} returned unreadable loc {loc!r}"
        raise WhereamiError(msg)
    try:
        point = entity.to_geometry()
    except ConversionError as exc:
        msg = f"Location lookup at {url} returned invalid loc {loc!r}: {exc.message}"
        raise WhereamiError(msg) from exc

    logger.debug("Resolved location %s via %s", loc, url)
    return to_format(point, FormatTag.LATLON)
