"""Geographic value type plus distance and travel-speed helpers."""

import math
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

EARTH_RADIUS_KM = 6371.0


class GeoPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    country: str | None = None


def haversine(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate distance in km between two lat/lon points."""
    lat1_r, lon1_r = math.radians(lat1), math.radians(lon1)
    lat2_r, lon2_r = math.radians(lat2), math.radians(lon2)
    dlat = lat2_r - lat1_r
    dlon = lon2_r - lon1_r
    a = math.sin(dlat / 2) ** 2 + math.cos(lat1_r) * math.cos(lat2_r) * math.sin(dlon / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(a))


def distance_km(a: GeoPoint, b: GeoPoint) -> float:
    return haversine(a.latitude, a.longitude, b.latitude, b.longitude)


def is_location_similar(
    a: GeoPoint | None,
    b: GeoPoint | None,
    tolerance_degrees: float = 0.1,
) -> bool:
    """Coarse bounding-box match, roughly 10km at the default tolerance."""
    if a is None or b is None:
        return False
    return (
        abs(a.latitude - b.latitude) < tolerance_degrees
        and abs(a.longitude - b.longitude) < tolerance_degrees
    )


def is_impossible_travel(
    origin: GeoPoint | None,
    destination: GeoPoint | None,
    departed_at: datetime,
    arrived_at: datetime,
    max_speed_kmh: float = 1000.0,
) -> bool:
    """True when covering the distance in the elapsed time needs more than max_speed_kmh."""
    if origin is None or destination is None:
        return False
    distance = distance_km(origin, destination)
    # Staying put is never impossible, even when clocks disagree
    if distance == 0:
        return False
    hours = (arrived_at - departed_at).total_seconds() / 3600
    return distance > hours * max_speed_kmh
