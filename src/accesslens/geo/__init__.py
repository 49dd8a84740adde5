"""Geolocation lookup for remote addresses.

Public API:
    GeoLocator: the lookup protocol the classifier consumes
    NullGeoLocator: always-unknown locator (no database)
    NetworkTableGeoLocator: CIDR tables loaded from CSV
"""

from accesslens.geo.locator import (
    GeoDatabaseError,
    GeoLocator,
    NetworkTableGeoLocator,
    NullGeoLocator,
    UNKNOWN_COUNTRY,
)

__all__ = [
    "GeoDatabaseError",
    "GeoLocator",
    "NetworkTableGeoLocator",
    "NullGeoLocator",
    "UNKNOWN_COUNTRY",
]
