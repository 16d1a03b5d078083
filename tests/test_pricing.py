"""
Tests for the trip price calculator.
"""

import pytest

from stars.models.booking_models import DestinationCode, TravelClass
from stars.services.pricing import (
    DEFAULT_BASE_PRICE,
    calculate_price,
    class_price_multiplier,
    destination_base_price,
)


class TestCalculatePrice:

    def test_mars_vip_single_traveler(self):
        assert calculate_price("mars", "vip", 1) == 750000

    @pytest.mark.parametrize("destination, travel_class, travelers, expected", [
        ("earth", "economy", 1, 100000),
        ("venus", "luxury", 2, 750000),
        ("saturn", "luxury", 2, 1800000),
        ("mercury", "vip", 10, 5000000),
    ])
    def test_table(self, destination, travel_class, travelers, expected):
        assert calculate_price(destination, travel_class, travelers) == expected

    def test_accepts_enums_and_mixed_case(self):
        assert calculate_price(DestinationCode.MARS, TravelClass.VIP, 1) == 750000
        assert calculate_price(" Mars ", "VIP", 1) == 750000

    def test_unknown_destination_uses_default_base_price(self):
        assert destination_base_price("pluto") == DEFAULT_BASE_PRICE
        assert calculate_price("pluto", "economy", 1) == 200000

    def test_unknown_class_uses_multiplier_of_one(self):
        assert class_price_multiplier("first") == 1
        assert calculate_price("mars", "first", 2) == 600000

    def test_rejects_zero_travelers(self):
        with pytest.raises(ValueError):
            calculate_price("mars", "vip", 0)
