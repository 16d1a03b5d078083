# stars/db/storage.py

from abc import ABC, abstractmethod
from datetime import datetime
from functools import lru_cache
from typing import Any, Dict, List, Optional

from stars.core.config_loader import settings
from stars.core.logger import logger
from stars.models.catalog import ACCOMMODATION_SEED, WELCOME_MESSAGE
from stars.services.accommodation_service import filter_accommodations


Record = Dict[str, Any]


class Storage(ABC):
    """
    Persistence contract shared by the SQLite store and the in-memory store.

    Records are plain dicts with snake_case keys and timezone-aware
    datetimes. Bookings and chat messages reference their owner by
    username (``user_id`` column), not by the numeric user id.
    """

    # ----------------------------------------------------------------------
    # USERS
    # ----------------------------------------------------------------------
    @abstractmethod
    def get_user(self, user_id: int) -> Optional[Record]: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[Record]: ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[Record]: ...

    @abstractmethod
    def create_user(
        self, username: str, hashed_password: str,
        email: Optional[str] = None, first_name: Optional[str] = None,
        last_name: Optional[str] = None, phone_number: Optional[str] = None,
        profile_picture: Optional[str] = None,
        role: str = "user", is_verified: bool = False,
    ) -> Record: ...

    @abstractmethod
    def update_user_last_login(self, user_id: int) -> Optional[Record]: ...

    # ----------------------------------------------------------------------
    # SESSIONS
    # ----------------------------------------------------------------------
    @abstractmethod
    def create_session(self, session_id: str, user_id: int, username: str, expires_at: datetime) -> Record: ...

    @abstractmethod
    def get_session(self, session_id: str) -> Optional[Record]: ...

    @abstractmethod
    def delete_session(self, session_id: str) -> bool: ...

    # ----------------------------------------------------------------------
    # BOOKINGS
    # ----------------------------------------------------------------------
    @abstractmethod
    def get_bookings(self, user_id: str) -> List[Record]:
        """Bookings owned by ``user_id`` (a username), newest first."""

    @abstractmethod
    def get_booking(self, booking_id: int) -> Optional[Record]: ...

    @abstractmethod
    def create_booking(self, data: Record) -> Record: ...

    @abstractmethod
    def update_booking(self, booking_id: int, changes: Record) -> Optional[Record]: ...

    @abstractmethod
    def delete_booking(self, booking_id: int) -> bool: ...

    # ----------------------------------------------------------------------
    # ACCOMMODATIONS
    # ----------------------------------------------------------------------
    @abstractmethod
    def get_accommodations(self) -> List[Record]: ...

    @abstractmethod
    def create_accommodation(self, data: Record) -> Record: ...

    def get_filtered_accommodations(
        self,
        location: Optional[str] = None,
        amenity: Optional[str] = None,
        price_range: Optional[str] = None,
    ) -> List[Record]:
        return filter_accommodations(self.get_accommodations(), location, amenity, price_range)

    def seed_accommodations(self) -> int:
        """Loads the catalog once; returns how many rows were inserted."""
        if self.get_accommodations():
            return 0
        for row in ACCOMMODATION_SEED:
            self.create_accommodation(dict(row))
        logger.info(f"Seeded {len(ACCOMMODATION_SEED)} accommodations")
        return len(ACCOMMODATION_SEED)

    # ----------------------------------------------------------------------
    # CHAT MESSAGES
    # ----------------------------------------------------------------------
    @abstractmethod
    def get_chat_messages(self, user_id: str) -> List[Record]:
        """Messages of ``user_id``, oldest first."""

    @abstractmethod
    def create_chat_message(
        self, user_id: str, content: str, role: str, timestamp: Optional[datetime] = None
    ) -> Record: ...

    @abstractmethod
    def delete_chat_messages(self, user_id: str) -> int: ...

    def clear_chat_messages(self, user_id: str) -> bool:
        removed = self.delete_chat_messages(user_id)
        self.create_chat_message(user_id, WELCOME_MESSAGE, "assistant")
        logger.info(f"Cleared {removed} chat messages for {user_id}")
        return True


@lru_cache(maxsize=1)
def get_storage() -> Storage:
    """Process-wide store selected by ``settings.storage_backend``."""
    if settings.storage_backend == "memory":
        from stars.db.memory_storage import MemoryStorage
        store: Storage = MemoryStorage()
    elif settings.storage_backend == "sqlite":
        from stars.db.sqlite_storage import SQLiteStorage
        store = SQLiteStorage(settings.db_path)
    else:
        raise ValueError(f"Unknown storage backend: {settings.storage_backend}")

    store.seed_accommodations()
    return store
