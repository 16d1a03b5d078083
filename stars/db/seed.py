# stars/db/seed.py

from datetime import datetime
from typing import Any, Dict

from stars.core.logger import logger
from stars.core.security import get_password_hash
from stars.db.storage import Storage
from stars.models.user_models import SessionContext
from stars.services import booking_service
from stars.utils.time_utils import UTC


DEMO_USER = {
    "username": "john-doe",
    "password": "password123",
    "email": "john.doe@example.com",
    "first_name": "John",
    "last_name": "Doe",
    "phone_number": "+971 50 123 4567",
    "profile_picture": "https://randomuser.me/api/portraits/men/42.jpg",
}

DEMO_BOOKINGS = [
    {
        "destination": "mars",
        "departure_date": datetime(2025, 6, 15, 23, 30, tzinfo=UTC),
        "return_date": datetime(2025, 12, 20, 10, 15, tzinfo=UTC),
        "travel_class": "vip",
        "number_of_travelers": 1,
        "status": "confirmed",
    },
    {
        "destination": "saturn",
        "departure_date": datetime(2025, 12, 10, 8, 15, tzinfo=UTC),
        "return_date": None,
        "travel_class": "luxury",
        "number_of_travelers": 2,
        "status": "pending",
    },
]


def seed_demo_data(storage: Storage) -> Dict[str, Any]:
    """
    Idempotent: the demo user and its bookings are only created when the
    user is missing; the accommodation catalog only when it is empty.
    """
    summary = {"user_created": False, "bookings_created": 0, "accommodations_created": 0}

    user = storage.get_user_by_username(DEMO_USER["username"])
    if user is None:
        fields = {k: v for k, v in DEMO_USER.items() if k != "password"}
        user = storage.create_user(
            hashed_password=get_password_hash(DEMO_USER["password"]),
            role="user",
            is_verified=True,
            **fields,
        )
        summary["user_created"] = True

        ctx = SessionContext(session_id="seed", user_id=user["id"], username=user["username"])
        for booking in DEMO_BOOKINGS:
            booking_service.create_booking(storage, ctx, **booking)
            summary["bookings_created"] += 1

    summary["accommodations_created"] = storage.seed_accommodations()
    logger.info(f"Demo data: {summary}")
    return summary
