"""Provinces, their major cities, and reference coordinates for city-level matching."""

from src.service.gifting.domain.value_object.geo_point import GeoPoint


PROVINCE_CITIES: dict[str, tuple[str, ...]] = {
    'Punjab': (
        'Lahore', 'Faisalabad', 'Rawalpindi', 'Multan', 'Gujranwala', 'Sialkot', 'Bahawalpur',
        'Sargodha', 'Jhang', 'Sheikhupura', 'Rahim Yar Khan', 'Gujrat', 'Kasur', 'Okara',
        'Sahiwal', 'Wah Cantonment', 'Mianwali', 'Chiniot', 'Kamoke', 'Hafizabad',
        'Dera Ghazi Khan',
    ),
    'Sindh': (
        'Karachi', 'Hyderabad', 'Sukkur', 'Larkana', 'Nawabshah', 'Mirpur Khas', 'Jacobabad',
        'Shikarpur', 'Khairpur', 'Dadu', 'Tando Allahyar', 'Tando Adam', 'Badin', 'Thatta',
        'Umerkot',
    ),
    'Khyber Pakhtunkhwa': (
        'Peshawar', 'Mardan', 'Mingora', 'Kohat', 'Abbottabad', 'Dera Ismail Khan', 'Mansehra',
        'Swabi', 'Nowshera', 'Charsadda', 'Bannu', 'Haripur', 'Chitral', 'Batkhela', 'Timergara',
    ),
    'Balochistan': (
        'Quetta', 'Turbat', 'Khuzdar', 'Chaman', 'Hub', 'Sibi', 'Loralai', 'Dera Murad Jamali',
        'Gwadar', 'Dera Allah Yar', 'Usta Muhammad', 'Sui', 'Saranan', 'Kalat', 'Mastung',
    ),
    'Islamabad Capital Territory': ('Islamabad',),
    'Gilgit-Baltistan': (
        'Gilgit', 'Skardu', 'Chilas', 'Astore', 'Ghanche', 'Diamer', 'Hunza', 'Nagar', 'Shigar',
        'Kharmang',
    ),
    'Azad Jammu & Kashmir': (
        'Muzaffarabad', 'Mirpur', 'Rawalakot', 'Kotli', 'Bhimber', 'Bagh', 'Hattian Bala',
        'Neelum', 'Haveli', 'Sudhnuti',
    ),
}

REMOTE_PROVINCES = frozenset({'Gilgit-Baltistan', 'Azad Jammu & Kashmir'})

CITY_COORDINATES: dict[str, GeoPoint] = {
    'Lahore': GeoPoint(31.5204, 74.3587),
    'Karachi': GeoPoint(24.8607, 67.0011),
    'Islamabad': GeoPoint(33.6844, 73.0479),
    'Rawalpindi': GeoPoint(33.5651, 73.0169),
    'Faisalabad': GeoPoint(31.4167, 73.0833),
    'Multan': GeoPoint(30.1575, 71.5249),
    'Peshawar': GeoPoint(34.0150, 71.5805),
    'Quetta': GeoPoint(30.1798, 66.9750),
    'Sialkot': GeoPoint(32.4927, 74.5313),
    'Gujranwala': GeoPoint(32.1617, 74.1883),
    'Sargodha': GeoPoint(32.0836, 72.6711),
    'Bahawalpur': GeoPoint(29.3956, 71.6722),
    'Sukkur': GeoPoint(27.7032, 68.8589),
    'Jhang': GeoPoint(31.2682, 72.3181),
    'Sheikhupura': GeoPoint(31.7131, 73.9783),
    'Mardan': GeoPoint(34.1983, 72.0458),
    'Gujrat': GeoPoint(32.5742, 74.0754),
    'Kasur': GeoPoint(31.1156, 74.4467),
    'Dera Ghazi Khan': GeoPoint(30.0561, 70.6344),
    'Sahiwal': GeoPoint(30.6641, 73.1016),
}

_CITY_TO_PROVINCE = {
    city.casefold(): province for province, cities in PROVINCE_CITIES.items() for city in cities
}
_COORDINATES_BY_KEY = {city.casefold(): point for city, point in CITY_COORDINATES.items()}


def get_province(city: str | None) -> str | None:
    if not city:
        return None
    return _CITY_TO_PROVINCE.get(city.strip().casefold())


def get_city_coordinates(city: str | None) -> GeoPoint | None:
    if not city:
        return None
    return _COORDINATES_BY_KEY.get(city.strip().casefold())


def all_cities() -> list[str]:
    return sorted(city for cities in PROVINCE_CITIES.values() for city in cities)
