"""Coarse coastal-zone classification by bounding boxes."""

from dataclasses import dataclass
from typing import Sequence, Tuple


@dataclass(frozen=True)
class CoastalZone:
    """A named latitude/longitude bounding box around a stretch of coast."""
    name: str
    lat_min: float
    lat_max: float
    lon_min: float
    lon_max: float

    def contains(self, latitude: float, longitude: float) -> bool:
        """Check whether a point lies in the box, bounds included."""
        return (
            self.lat_min <= latitude <= self.lat_max
            and self.lon_min <= longitude <= self.lon_max
        )


COASTAL_ZONES: Tuple[CoastalZone, ...] = (
    CoastalZone("US West Coast", 32, 49, -125, -117),
    CoastalZone("US East Coast", 25, 45, -81, -66),
    CoastalZone("Hawaii", 18, 23, -161, -154),
    CoastalZone("Australia East", -39, -10, 141, 154),
    CoastalZone("Europe Atlantic", 36, 60, -10, 0),
    CoastalZone("Mediterranean", 30, 45, -6, 36),
    CoastalZone("Gulf of Mexico", 18, 30.5, -98, -81),
    CoastalZone("Caribbean", 10, 24, -85, -59),
    CoastalZone("Mexico Pacific", 15, 32, -118, -94),
    CoastalZone("Central America Pacific", 7, 15, -92, -77),
    CoastalZone("Brazil Atlantic", -34, -3, -52, -34),
    CoastalZone("Peru and Chile", -45, -3, -82, -70),
    CoastalZone("South Africa", -35, -28, 16, 33),
    CoastalZone("Morocco and Canaries", 27, 36, -18, -6),
    CoastalZone("Java and Bali", -11, -5, 105, 120),
    CoastalZone("Japan Pacific", 30, 42, 129, 146),
    CoastalZone("Australia West", -35, -20, 112, 118),
    CoastalZone("Australia South", -39, -31, 115, 141),
    CoastalZone("New Zealand", -47, -34, 166, 179),
    CoastalZone("Sri Lanka", 5.5, 10, 79, 82),
    CoastalZone("Philippines", 5, 19, 117, 127),
)


def is_coastal(
    latitude: float,
    longitude: float,
    zones: Sequence[CoastalZone] = COASTAL_ZONES
) -> bool:
    """Check whether a location is near a surfable coast.

    Args:
        latitude: Latitude in decimal degrees
        longitude: Longitude in decimal degrees
        zones: Zones to test against; defaults to the built-in table

    Returns:
        True if the point falls inside any zone
    """
    return any(zone.contains(latitude, longitude) for zone in zones)
