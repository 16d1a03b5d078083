# stars/services/pricing.py
#
# Single source of the trip price. Used by the booking REST path and by the
# advisor's createBooking tool.

from typing import Union

from stars.models.booking_models import DestinationCode, TravelClass


DESTINATION_BASE_PRICES = {
    "mercury": 200000,
    "venus": 250000,
    "earth": 100000,
    "mars": 300000,
    "saturn": 600000,
}
DEFAULT_BASE_PRICE = 200000

CLASS_PRICE_MULTIPLIERS = {
    "economy": 1.0,
    "luxury": 1.5,
    "vip": 2.5,
}
DEFAULT_CLASS_MULTIPLIER = 1.0


def _key(value: Union[str, DestinationCode, TravelClass]) -> str:
    if hasattr(value, "value"):
        value = value.value
    return str(value).strip().lower()


def destination_base_price(destination: Union[str, DestinationCode]) -> int:
    return DESTINATION_BASE_PRICES.get(_key(destination), DEFAULT_BASE_PRICE)


def class_price_multiplier(travel_class: Union[str, TravelClass]) -> float:
    return CLASS_PRICE_MULTIPLIERS.get(_key(travel_class), DEFAULT_CLASS_MULTIPLIER)


def calculate_price(
    destination: Union[str, DestinationCode],
    travel_class: Union[str, TravelClass],
    number_of_travelers: int,
) -> float:
    """
    price = base price of destination * class multiplier * travelers

    >>> calculate_price("mars", "vip", 1)
    750000.0
    """
    if number_of_travelers < 1:
        raise ValueError("number_of_travelers must be at least 1")
    return float(destination_base_price(destination) * class_price_multiplier(travel_class) * number_of_travelers)
