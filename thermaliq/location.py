"""Static location lookups keyed by ZIP code prefix."""
import logging

from .constants import ALTITUDE_BY_ZIP_PREFIX, DEFAULT_ALTITUDE_FT, ZIP_PREFIX_STATES

_LOGGER = logging.getLogger(__name__)


def altitude_from_zip(zip_code):
    """Altitude (ft) from the two-digit ZIP prefix, 500 ft when unmatched."""
    prefix = str(zip_code or '').strip()[:2]
    altitude = ALTITUDE_BY_ZIP_PREFIX.get(prefix)
    if altitude is None:
        _LOGGER.debug("No altitude entry for ZIP prefix %r, using %s ft", prefix, DEFAULT_ALTITUDE_FT)
        return DEFAULT_ALTITUDE_FT
    return float(altitude)


def state_from_zip(zip_code):
    """Two-letter state for a ZIP code, or None when the prefix is not mapped."""
    try:
        prefix = int(str(zip_code).strip()[:2])
    except (TypeError, ValueError):
        return None

    for (first, last), state in ZIP_PREFIX_STATES:
        if first <= prefix <= last:
            return state
    return None
