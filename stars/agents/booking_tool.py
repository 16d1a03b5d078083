# stars/agents/booking_tool.py
#
# The single tool the advisor model may call. The JSON schema below is the
# only accepted contract: enum destinations and classes, ISO dates.

import json
from datetime import date
from typing import Any, Dict, Optional

from pydantic import Field, ValidationError, field_validator

from stars.core.logger import logger
from stars.db.storage import Storage
from stars.models.base import CamelModel
from stars.models.booking_models import MAX_TRAVELERS, DestinationCode, TravelClass
from stars.models.catalog import DESTINATIONS
from stars.models.user_models import SessionContext
from stars.services import booking_service


TOOL_NAME = "createBooking"

CREATE_BOOKING_TOOL: Dict[str, Any] = {
    "type": "function",
    "function": {
        "name": TOOL_NAME,
        "description": "Create a space trip booking for the current user.",
        "parameters": {
            "type": "object",
            "properties": {
                "destination": {
                    "type": "string",
                    "enum": [d.value for d in DestinationCode],
                    "description": "Destination code",
                },
                "departureDate": {
                    "type": "string",
                    "format": "date",
                    "description": "Departure date, YYYY-MM-DD",
                },
                "returnDate": {
                    "type": "string",
                    "format": "date",
                    "description": "Optional return date, YYYY-MM-DD",
                },
                "travelClass": {
                    "type": "string",
                    "enum": [c.value for c in TravelClass],
                },
                "numberOfTravelers": {
                    "type": "integer",
                    "minimum": 1,
                    "maximum": MAX_TRAVELERS,
                },
                "price": {
                    "type": "number",
                    "description": "Your estimate of the total price; the booking system recalculates it",
                },
                "userId": {
                    "type": "string",
                    "description": "ID of the current user",
                },
            },
            "required": [
                "destination", "departureDate", "travelClass",
                "numberOfTravelers", "price", "userId",
            ],
        },
    },
}


class CreateBookingArgs(CamelModel):
    destination: DestinationCode
    departure_date: date
    return_date: Optional[date] = None
    travel_class: TravelClass
    number_of_travelers: int = Field(ge=1, le=MAX_TRAVELERS)
    price: Optional[float] = None
    user_id: Optional[str] = None

    @field_validator("destination", "travel_class", mode="before")
    @classmethod
    def _lower(cls, value):
        return value.strip().lower() if isinstance(value, str) else value


def _destination_name(code: str) -> str:
    for destination in DESTINATIONS:
        if destination.id == code:
            return destination.name
    return code.title()


def _format_errors(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or 'arguments'}: {err['msg']}"
        for err in exc.errors()
    )


def execute_create_booking(storage: Storage, ctx: Optional[SessionContext], raw_arguments: str) -> str:
    """
    Runs a createBooking request from the model and returns the text handed
    back to it as the tool result. Invalid arguments come back as an error
    string so the model can correct itself or explain the problem.
    """
    if ctx is None:
        return "Booking not created: the user is not logged in. Ask them to log in to book a trip."

    try:
        payload = json.loads(raw_arguments or "{}")
        args = CreateBookingArgs.model_validate(payload)
    except json.JSONDecodeError:
        logger.warning(f"createBooking called with non-JSON arguments: {raw_arguments[:200]!r}")
        return "Booking not created: arguments were not valid JSON."
    except ValidationError as e:
        logger.warning(f"createBooking rejected for {ctx.username}: {_format_errors(e)}")
        return f"Booking not created: {_format_errors(e)}"

    if args.user_id and args.user_id != ctx.username:
        logger.warning(f"createBooking userId {args.user_id!r} ignored, booking for {ctx.username}")

    try:
        booking = booking_service.create_booking(
            storage, ctx,
            destination=args.destination.value,
            departure_date=args.departure_date,
            return_date=args.return_date,
            travel_class=args.travel_class,
            number_of_travelers=args.number_of_travelers,
        )
    except booking_service.InvalidBooking as e:
        return f"Booking not created: {e}"

    travelers = booking["number_of_travelers"]
    return (
        f"Booking confirmed! Booking #{booking['id']}: {_destination_name(booking['destination'])} trip "
        f"departing {args.departure_date.isoformat()}, {booking['travel_class']} class for "
        f"{travelers} traveler{'s' if travelers != 1 else ''}. "
        f"Total price: ${booking['price']:,.0f}."
    )
