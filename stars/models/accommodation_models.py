# stars/models/accommodation_models.py

from enum import Enum
from typing import List

from stars.models.base import CamelModel


class PriceRange(str, Enum):
    ALL = "all"
    BUDGET = "budget"        # < 10 000
    STANDARD = "standard"    # 10 000 – 25 000
    LUXURY = "luxury"        # 25 000 – 50 000
    ULTRA = "ultra"          # > 50 000


class AccommodationOut(CamelModel):
    id: int
    name: str
    location: str
    description: str
    price_per_night: float
    image: str
    tier: str
    amenities: List[str]
