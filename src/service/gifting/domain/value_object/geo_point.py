import math

import attrs


EARTH_RADIUS_KM = 6371.0


def _validate_latitude(instance: 'GeoPoint', attribute: attrs.Attribute, value: float) -> None:
    if not -90.0 <= value <= 90.0:
        raise ValueError(f'latitude out of range: {value}')


def _validate_longitude(instance: 'GeoPoint', attribute: attrs.Attribute, value: float) -> None:
    if not -180.0 <= value <= 180.0:
        raise ValueError(f'longitude out of range: {value}')


@attrs.frozen
class GeoPoint:
    latitude: float = attrs.field(converter=float, validator=_validate_latitude)
    longitude: float = attrs.field(converter=float, validator=_validate_longitude)

    def distance_km_to(self, other: 'GeoPoint') -> float:
        """Great-circle (haversine) distance in kilometres."""
        lat1, lat2 = math.radians(self.latitude), math.radians(other.latitude)
        d_lat = lat2 - lat1
        d_lon = math.radians(other.longitude - self.longitude)

        a = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
        return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(a))


def format_distance(distance_km: float) -> str:
    """Human readable distance: metres below 1 km, one decimal below 10 km."""
    if distance_km < 1:
        return f'{int(distance_km * 1000)}m'
    if distance_km < 10:
        return f'{distance_km:.1f}km'
    return f'{distance_km:.0f}km'
