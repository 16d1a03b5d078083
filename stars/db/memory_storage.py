# stars/db/memory_storage.py

from datetime import datetime
from itertools import count
from typing import Dict, List, Optional

from stars.db.storage import Record, Storage
from stars.utils.time_utils import ensure_utc, utc_now


def _plain(value):
    return value.value if hasattr(value, "value") else value


class MemoryStorage(Storage):
    """
    Dict-backed store with the same behaviour as SQLiteStorage.

    Test-only: nothing guards the maps against concurrent writers.
    Records are copied on the way in and out so callers cannot mutate
    stored state by accident.
    """

    def __init__(self):
        self.users: Dict[int, Record] = {}
        self.sessions: Dict[str, Record] = {}
        self.bookings: Dict[int, Record] = {}
        self.accommodations: Dict[int, Record] = {}
        self.chat_messages: Dict[int, Record] = {}
        self._ids = {
            "user": count(1),
            "booking": count(1),
            "accommodation": count(1),
            "chat_message": count(1),
        }

    # ----------------------------------------------------------------------
    # USERS
    # ----------------------------------------------------------------------
    def get_user(self, user_id: int) -> Optional[Record]:
        user = self.users.get(user_id)
        return dict(user) if user else None

    def get_user_by_username(self, username: str) -> Optional[Record]:
        for user in self.users.values():
            if user["username"] == username:
                return dict(user)
        return None

    def get_user_by_email(self, email: str) -> Optional[Record]:
        for user in self.users.values():
            if email and user["email"] == email:
                return dict(user)
        return None

    def create_user(
        self, username: str, hashed_password: str,
        email: Optional[str] = None, first_name: Optional[str] = None,
        last_name: Optional[str] = None, phone_number: Optional[str] = None,
        profile_picture: Optional[str] = None,
        role: str = "user", is_verified: bool = False,
    ) -> Record:
        if self.get_user_by_username(username):
            raise ValueError(f"username {username!r} already exists")

        now = utc_now()
        user_id = next(self._ids["user"])
        self.users[user_id] = {
            "id": user_id,
            "username": username,
            "hashed_password": hashed_password,
            "email": email,
            "first_name": first_name,
            "last_name": last_name,
            "phone_number": phone_number,
            "profile_picture": profile_picture,
            "role": role or "user",
            "is_verified": bool(is_verified),
            "created_at": now,
            "last_login": now,
        }
        return dict(self.users[user_id])

    def update_user_last_login(self, user_id: int) -> Optional[Record]:
        user = self.users.get(user_id)
        if not user:
            return None
        user["last_login"] = utc_now()
        return dict(user)

    # ----------------------------------------------------------------------
    # SESSIONS
    # ----------------------------------------------------------------------
    def create_session(self, session_id: str, user_id: int, username: str, expires_at: datetime) -> Record:
        self.sessions[session_id] = {
            "id": session_id,
            "user_id": user_id,
            "username": username,
            "created_at": utc_now(),
            "expires_at": ensure_utc(expires_at),
        }
        return dict(self.sessions[session_id])

    def get_session(self, session_id: str) -> Optional[Record]:
        session = self.sessions.get(session_id)
        return dict(session) if session else None

    def delete_session(self, session_id: str) -> bool:
        return self.sessions.pop(session_id, None) is not None

    # ----------------------------------------------------------------------
    # BOOKINGS
    # ----------------------------------------------------------------------
    def get_bookings(self, user_id: str) -> List[Record]:
        owned = [dict(b) for b in self.bookings.values() if b["user_id"] == user_id]
        return sorted(owned, key=lambda b: (b["created_at"], b["id"]), reverse=True)

    def get_booking(self, booking_id: int) -> Optional[Record]:
        booking = self.bookings.get(booking_id)
        return dict(booking) if booking else None

    def create_booking(self, data: Record) -> Record:
        now = utc_now()
        booking_id = next(self._ids["booking"])
        self.bookings[booking_id] = {
            "id": booking_id,
            "destination": data["destination"],
            "departure_date": data["departure_date"],
            "return_date": data.get("return_date"),
            "travel_class": _plain(data["travel_class"]),
            "number_of_travelers": data.get("number_of_travelers") or 1,
            "status": _plain(data.get("status") or "confirmed"),
            "price": float(data["price"]),
            "user_id": data["user_id"],
            "created_at": now,
            "updated_at": now,
        }
        return dict(self.bookings[booking_id])

    def update_booking(self, booking_id: int, changes: Record) -> Optional[Record]:
        booking = self.bookings.get(booking_id)
        if not booking:
            return None
        for key, value in changes.items():
            if key in booking and key not in ("id", "created_at"):
                booking[key] = _plain(value)
        booking["updated_at"] = utc_now()
        return dict(booking)

    def delete_booking(self, booking_id: int) -> bool:
        return self.bookings.pop(booking_id, None) is not None

    # ----------------------------------------------------------------------
    # ACCOMMODATIONS
    # ----------------------------------------------------------------------
    def get_accommodations(self) -> List[Record]:
        return [dict(a, amenities=list(a["amenities"])) for a in self.accommodations.values()]

    def create_accommodation(self, data: Record) -> Record:
        accommodation_id = next(self._ids["accommodation"])
        self.accommodations[accommodation_id] = {
            "id": accommodation_id,
            "name": data["name"],
            "location": data["location"],
            "description": data["description"],
            "price_per_night": data["price_per_night"],
            "image": data["image"],
            "tier": data["tier"],
            "amenities": list(data.get("amenities") or []),
        }
        return dict(self.accommodations[accommodation_id])

    # ----------------------------------------------------------------------
    # CHAT MESSAGES
    # ----------------------------------------------------------------------
    def get_chat_messages(self, user_id: str) -> List[Record]:
        mine = [dict(m) for m in self.chat_messages.values() if m["user_id"] == user_id]
        return sorted(mine, key=lambda m: (m["timestamp"], m["id"]))

    def create_chat_message(
        self, user_id: str, content: str, role: str, timestamp: Optional[datetime] = None
    ) -> Record:
        message_id = next(self._ids["chat_message"])
        self.chat_messages[message_id] = {
            "id": message_id,
            "user_id": user_id,
            "content": content,
            "role": _plain(role),
            "timestamp": ensure_utc(timestamp) if timestamp else utc_now(),
        }
        return dict(self.chat_messages[message_id])

    def delete_chat_messages(self, user_id: str) -> int:
        doomed = [mid for mid, m in self.chat_messages.items() if m["user_id"] == user_id]
        for mid in doomed:
            del self.chat_messages[mid]
        return len(doomed)
