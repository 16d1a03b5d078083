# stars/models/booking_models.py

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator, model_validator

from stars.models.base import CamelModel
from stars.utils.time_utils import ensure_utc


class DestinationCode(str, Enum):
    MERCURY = "mercury"
    VENUS = "venus"
    EARTH = "earth"
    MARS = "mars"
    SATURN = "saturn"


class TravelClass(str, Enum):
    ECONOMY = "economy"
    LUXURY = "luxury"
    VIP = "vip"


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


MAX_TRAVELERS = 10


# ----------------------------------------------------------
# INPUT
# ----------------------------------------------------------
class BookingCreate(CamelModel):
    """
    Body of POST /api/bookings. Price and owner are not part of the input:
    the price is computed server side and the owner is the session user.
    """
    destination: str = Field(min_length=1)
    departure_date: datetime
    return_date: Optional[datetime] = None
    travel_class: TravelClass
    number_of_travelers: int = Field(default=1, ge=1, le=MAX_TRAVELERS)
    status: BookingStatus = BookingStatus.CONFIRMED

    # before-mode so min_length sees the stripped value
    @field_validator("destination", mode="before")
    @classmethod
    def _normalize_destination(cls, value):
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("departure_date", "return_date")
    @classmethod
    def _as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value) if value is not None else None

    @model_validator(mode="after")
    def _check_dates(self):
        if self.return_date and self.return_date < self.departure_date:
            raise ValueError("returnDate must not be before departureDate")
        return self


class BookingUpdate(CamelModel):
    destination: Optional[str] = Field(default=None, min_length=1)
    departure_date: Optional[datetime] = None
    return_date: Optional[datetime] = None
    travel_class: Optional[TravelClass] = None
    number_of_travelers: Optional[int] = Field(default=None, ge=1, le=MAX_TRAVELERS)
    status: Optional[BookingStatus] = None

    @field_validator("destination", mode="before")
    @classmethod
    def _normalize_destination(cls, value):
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("departure_date", "return_date")
    @classmethod
    def _as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value) if value is not None else None


# ----------------------------------------------------------
# OUTPUT
# ----------------------------------------------------------
class BookingOut(CamelModel):
    id: int
    destination: str
    departure_date: datetime
    return_date: Optional[datetime] = None
    travel_class: str
    number_of_travelers: int
    status: str
    price: float
    user_id: str
    created_at: datetime
    updated_at: Optional[datetime] = None
