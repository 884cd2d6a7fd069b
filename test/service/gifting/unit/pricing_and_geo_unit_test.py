"""
Unit tests for delivery pricing and distance

Test Focus:
1. Fee tier by how the two cities relate, scaled for the largest destinations
2. Haversine distance and its display format
3. Province lookup is case-insensitive
"""

from decimal import Decimal

import pytest

from src.platform.exception.exceptions import ValidationFailedError
from src.service.gifting.app.query.quote_delivery_fee_use_case import QuoteDeliveryFeeUseCase
from src.service.gifting.domain.value_object.geo_point import GeoPoint, format_distance
from src.service.gifting.domain.value_object.pakistan_region import (
    all_cities,
    get_city_coordinates,
    get_province,
)
from src.service.gifting.driven_adapter.pricing.province_delivery_fee_calculator_impl import (
    ProvinceDeliveryFeeCalculatorImpl,
)


@pytest.mark.unit
class TestProvinceDeliveryFeeCalculator:
    @pytest.mark.parametrize(
        'origin,destination,fee',
        [
            ('Multan', 'Multan', Decimal('200.00')),
            ('Lahore', 'Lahore', Decimal('240.00')),
            ('Multan', 'Faisalabad', Decimal('550.00')),
            ('Multan', 'Lahore', Decimal('660.00')),
            ('Karachi', 'Peshawar', Decimal('1400.00')),
            ('Lahore', 'Karachi', Decimal('1680.00')),
            ('Karachi', 'Islamabad', Decimal('1540.00')),
            ('Lahore', 'Skardu', Decimal('2500.00')),
            (None, 'Quetta', Decimal('1400.00')),
            ('Atlantis', 'Hunza', Decimal('2500.00')),
        ],
    )
    def test_fee_tiers(self, origin: str | None, destination: str, fee: Decimal) -> None:
        calculator = ProvinceDeliveryFeeCalculatorImpl()

        assert calculator.compute_delivery_fee(origin_city=origin, destination_city=destination) == fee

    def test_quote_requires_destination(self) -> None:
        use_case = QuoteDeliveryFeeUseCase(delivery_fee_calculator=ProvinceDeliveryFeeCalculatorImpl())

        assert use_case.execute(origin_city='lahore', destination_city=' LAHORE ') == Decimal('240.00')
        with pytest.raises(ValidationFailedError):
            use_case.execute(origin_city='Lahore', destination_city='  ')


@pytest.mark.unit
class TestGeo:
    def test_distance_lahore_to_islamabad(self) -> None:
        lahore = get_city_coordinates('Lahore')
        islamabad = get_city_coordinates('islamabad')
        assert lahore is not None and islamabad is not None

        assert lahore.distance_km_to(islamabad) == pytest.approx(270, abs=15)
        assert lahore.distance_km_to(lahore) == 0

    @pytest.mark.parametrize(
        'km,text', [(0.5, '500m'), (2.345, '2.3km'), (12.6, '13km')]
    )
    def test_format_distance(self, km: float, text: str) -> None:
        assert format_distance(km) == text

    def test_rejects_out_of_range_coordinates(self) -> None:
        with pytest.raises(ValueError):
            GeoPoint(91, 0)
        with pytest.raises(ValueError):
            GeoPoint(0, -181)

    def test_province_lookup(self) -> None:
        assert get_province(' karachi ') == 'Sindh'
        assert get_province('Islamabad') == 'Islamabad Capital Territory'
        assert get_province('Atlantis') is None
        assert 'Gilgit' in all_cities()
