# stars/services/booking_service.py

from datetime import date, datetime
from typing import List, Optional, Union

from stars.core.logger import logger
from stars.db.storage import Record, Storage
from stars.models.booking_models import BookingCreate, BookingStatus, BookingUpdate, TravelClass
from stars.models.user_models import SessionContext
from stars.services.pricing import calculate_price
from stars.utils.time_utils import to_datetime


class BookingNotFound(Exception):
    pass


class BookingAccessDenied(Exception):
    pass


class InvalidBooking(ValueError):
    pass


PRICING_FIELDS = ("destination", "travel_class", "number_of_travelers")
REQUIRED_FIELDS = ("destination", "departure_date", "travel_class", "number_of_travelers", "status")


def _value(v):
    return v.value if hasattr(v, "value") else v


# --------------------------------------------------------
# READ
# --------------------------------------------------------
def list_bookings(storage: Storage, ctx: SessionContext) -> List[Record]:
    return storage.get_bookings(ctx.username)


def get_owned_booking(storage: Storage, ctx: SessionContext, booking_id: int) -> Record:
    """
    Raises BookingNotFound when the id is unknown and BookingAccessDenied
    when the booking belongs to another user (checked in that order).
    """
    booking = storage.get_booking(booking_id)
    if not booking:
        raise BookingNotFound(booking_id)
    if booking["user_id"] != ctx.username:
        logger.warning(f"User {ctx.username} denied access to booking {booking_id}")
        raise BookingAccessDenied(booking_id)
    return booking


# --------------------------------------------------------
# CREATE
# --------------------------------------------------------
def create_booking(
    storage: Storage,
    ctx: SessionContext,
    destination: str,
    departure_date: Union[date, datetime],
    travel_class: Union[str, TravelClass],
    number_of_travelers: int = 1,
    return_date: Optional[Union[date, datetime]] = None,
    status: Union[str, BookingStatus] = BookingStatus.CONFIRMED,
) -> Record:
    """
    Creates a booking owned by the session user. The price is always
    computed here; callers cannot supply one.
    """
    departure = to_datetime(departure_date)
    returning = to_datetime(return_date) if return_date else None
    if returning and returning < departure:
        raise InvalidBooking("returnDate must not be before departureDate")

    destination = _value(destination).strip().lower()
    price = calculate_price(destination, travel_class, number_of_travelers)

    booking = storage.create_booking({
        "destination": destination,
        "departure_date": departure,
        "return_date": returning,
        "travel_class": _value(travel_class),
        "number_of_travelers": number_of_travelers,
        "status": _value(status),
        "price": price,
        "user_id": ctx.username,
    })
    logger.info(
        f"Booking {booking['id']} created for {ctx.username}: "
        f"{destination}/{booking['travel_class']} x{number_of_travelers} = {price}"
    )
    return booking


def create_booking_from_form(storage: Storage, ctx: SessionContext, data: BookingCreate) -> Record:
    return create_booking(
        storage, ctx,
        destination=data.destination,
        departure_date=data.departure_date,
        return_date=data.return_date,
        travel_class=data.travel_class,
        number_of_travelers=data.number_of_travelers,
        status=data.status,
    )


# --------------------------------------------------------
# UPDATE
# --------------------------------------------------------
def update_booking(storage: Storage, ctx: SessionContext, booking_id: int, data: BookingUpdate) -> Record:
    """
    Partial update. Only fields present in the request are written;
    price is recomputed when destination, class or travelers change.
    Status accepts any of the three values, no transition rules apply.
    """
    existing = get_owned_booking(storage, ctx, booking_id)

    changes = data.model_dump(exclude_unset=True)
    for field in REQUIRED_FIELDS:
        if field in changes and changes[field] is None:
            raise InvalidBooking(f"{field} cannot be null")

    departure = changes.get("departure_date", existing["departure_date"])
    returning = changes.get("return_date", existing["return_date"])
    if returning and returning < departure:
        raise InvalidBooking("returnDate must not be before departureDate")

    if any(field in changes for field in PRICING_FIELDS):
        merged = {field: changes.get(field, existing[field]) for field in PRICING_FIELDS}
        changes["price"] = calculate_price(
            merged["destination"], merged["travel_class"], merged["number_of_travelers"]
        )

    changes = {key: _value(value) for key, value in changes.items()}
    updated = storage.update_booking(booking_id, changes)
    if not updated:
        raise BookingNotFound(booking_id)

    logger.info(f"Booking {booking_id} updated by {ctx.username}: {sorted(changes)}")
    return updated


# --------------------------------------------------------
# DELETE
# --------------------------------------------------------
def delete_booking(storage: Storage, ctx: SessionContext, booking_id: int) -> None:
    get_owned_booking(storage, ctx, booking_id)
    if not storage.delete_booking(booking_id):
        raise BookingNotFound(booking_id)
    logger.info(f"Booking {booking_id} deleted by {ctx.username}")
