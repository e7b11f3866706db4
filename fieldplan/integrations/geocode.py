"""City coordinate lookup for map placement.

The service area is a fixed set of East Texas towns. Geocoding is a
table lookup, not a network call: a city name resolves to a known
coordinate, and unknown cities fall back to Tyler. A small random
jitter is added on import so markers for the same town do not stack.

Usage:
    from fieldplan.integrations.geocode import infer_city, jittered_coordinates

    city = infer_city("500 Spur 63, Longview, TX")
    coords = jittered_coordinates(city, rng)
"""

import math
import random
import re
from typing import Optional

from fieldplan.data.models import Coordinates

DEFAULT_CITY = "Tyler"
DEFAULT_JITTER = 0.025
EARTH_RADIUS_KM = 6371.0

CITY_COORDINATES: dict[str, Coordinates] = {
    "Tyler": Coordinates(32.3513, -95.3011),
    "Longview": Coordinates(32.5007, -94.7405),
    "Whitehouse": Coordinates(32.2224, -95.2222),
    "Lindale": Coordinates(32.5132, -95.4074),
    "Kilgore": Coordinates(32.3854, -94.8752),
    "Chandler": Coordinates(32.3057, -95.4783),
    "Athens": Coordinates(32.2057, -95.8552),
    "Jacksonville": Coordinates(31.9652, -95.2677),
    "Bullard": Coordinates(32.1463, -95.3230),
    "Mineola": Coordinates(32.6635, -95.4852),
    "Henderson": Coordinates(32.1532, -94.7994),
}

# Substring inference checks the default city last so a street named
# "Tyler St" in another town does not win.
_INFERENCE_ORDER = [c for c in CITY_COORDINATES if c != DEFAULT_CITY] + [DEFAULT_CITY]

_NON_LETTERS = re.compile(r"[^a-zA-Z]")


def _city_key(name: str) -> str:
    return _NON_LETTERS.sub("", name).lower()


_BY_KEY = {_city_key(name): name for name in CITY_COORDINATES}


def canonical_city(name: Optional[str]) -> Optional[str]:
    """Return the table spelling of a city, or None if unknown.

    Matching ignores case and any non-letter characters.

    Examples:
        >>> canonical_city("LONGVIEW,")
        'Longview'
        >>> canonical_city("Dallas") is None
        True
    """
    if not name:
        return None
    return _BY_KEY.get(_city_key(name))


def lookup_city(name: Optional[str], default: str = DEFAULT_CITY) -> Coordinates:
    """Return the base coordinate for a city.

    Args:
        name: City name (any case/punctuation)
        default: City to fall back to when name is unknown

    Returns:
        Coordinates from the table, without jitter
    """
    city = canonical_city(name) or canonical_city(default) or DEFAULT_CITY
    return CITY_COORDINATES[city]


def jittered_coordinates(
    city: Optional[str],
    rng: Optional[random.Random] = None,
    jitter: float = DEFAULT_JITTER,
    default: str = DEFAULT_CITY,
) -> Coordinates:
    """Return a city coordinate with uniform jitter on both axes.

    Args:
        city: City name
        rng: Random source (module-level random if None)
        jitter: Maximum offset in degrees on each axis
        default: City to use when city is unknown

    Returns:
        Coordinates within +/- jitter of the city's table entry
    """
    source = rng or random
    base = lookup_city(city, default)
    return Coordinates(
        lat=base.lat + (source.random() - 0.5) * 2 * jitter,
        lng=base.lng + (source.random() - 0.5) * 2 * jitter,
    )


def infer_city(text: Optional[str], default: Optional[str] = DEFAULT_CITY) -> Optional[str]:
    """Infer a known city by substring match against free text.

    First match in table order wins, with the default city checked last.

    Args:
        text: Address or other free text
        default: Returned when nothing matches

    Returns:
        Matched city name, or default
    """
    if text:
        for city in _INFERENCE_ORDER:
            if city in text:
                return city
    return default


def distance_km(a: Optional[Coordinates], b: Optional[Coordinates]) -> Optional[float]:
    """Great-circle distance between two points in kilometres.

    Informational only; planning does not use distances.

    Returns:
        Distance in km, or None if either point is missing
    """
    if a is None or b is None:
        return None
    lat1, lat2 = math.radians(a.lat), math.radians(b.lat)
    dlat = lat2 - lat1
    dlng = math.radians(b.lng - a.lng)
    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(h))
