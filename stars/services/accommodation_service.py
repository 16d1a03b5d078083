# stars/services/accommodation_service.py

from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from stars.models.accommodation_models import PriceRange


# bucket -> predicate on price per night
PRICE_RANGES: Dict[PriceRange, Callable[[float], bool]] = {
    PriceRange.BUDGET: lambda p: p < 10000,
    PriceRange.STANDARD: lambda p: 10000 <= p <= 25000,
    PriceRange.LUXURY: lambda p: 25000 < p <= 50000,
    PriceRange.ULTRA: lambda p: p > 50000,
}


def _active(value: Optional[str]) -> bool:
    return bool(value) and value.lower() != "all"


def filter_accommodations(
    rows: Iterable[Dict[str, Any]],
    location: Optional[str] = None,
    amenity: Optional[str] = None,
    price_range: Optional[Union[str, PriceRange]] = None,
) -> List[Dict[str, Any]]:
    """
    Intersection of the three optional filters over catalog rows.

    Args:
        location: case-insensitive substring of the location
        amenity: case-insensitive substring of any amenity
        price_range: one of budget / standard / luxury / ultra ("all" = no filter)

    Raises:
        ValueError: unknown price range
    """
    result = list(rows)

    if _active(location):
        needle = location.lower()
        result = [r for r in result if needle in r["location"].lower()]

    if _active(amenity):
        needle = amenity.lower()
        result = [r for r in result if any(needle in a.lower() for a in r["amenities"])]

    if price_range is not None:
        bucket = PriceRange(price_range)
        if bucket is not PriceRange.ALL:
            in_bucket = PRICE_RANGES[bucket]
            result = [r for r in result if in_bucket(r["price_per_night"])]

    return result
