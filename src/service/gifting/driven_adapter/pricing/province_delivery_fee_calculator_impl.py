from decimal import Decimal

from src.service.gifting.app.interface.i_delivery_fee_calculator import IDeliveryFeeCalculator
from src.service.gifting.domain.value_object.pakistan_region import REMOTE_PROVINCES, get_province


# Midpoints of the published PKR fee bands
SAME_CITY_FEE = Decimal('200')
SAME_PROVINCE_FEE = Decimal('550')
DIFFERENT_PROVINCE_FEE = Decimal('1400')
REMOTE_AREA_FEE = Decimal('2500')

CITY_ADJUSTMENTS: dict[str, Decimal] = {
    'lahore': Decimal('1.2'),
    'karachi': Decimal('1.2'),
    'islamabad': Decimal('1.1'),
    'rawalpindi': Decimal('1.1'),
}


class ProvinceDeliveryFeeCalculatorImpl(IDeliveryFeeCalculator):
    """
    Tiered flat fee by how far apart the two cities are administratively.

    same city < same province < different province < remote area, then scaled
    up for the largest destination cities. An unknown origin is priced as a
    different-province delivery.
    """

    def compute_delivery_fee(self, *, origin_city: str | None, destination_city: str) -> Decimal:
        origin_key = (origin_city or '').strip().casefold()
        destination_key = destination_city.strip().casefold()
        origin_province = get_province(origin_city)
        destination_province = get_province(destination_city)

        if origin_key and origin_key == destination_key:
            base = SAME_CITY_FEE
        elif origin_province and origin_province == destination_province:
            base = SAME_PROVINCE_FEE
        elif destination_province in REMOTE_PROVINCES:
            base = REMOTE_AREA_FEE
        else:
            base = DIFFERENT_PROVINCE_FEE

        adjustment = CITY_ADJUSTMENTS.get(destination_key, Decimal('1'))
        return (base * adjustment).quantize(Decimal('0.01'))
