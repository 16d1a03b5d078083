# stars/db/sqlite_storage.py

import json
import sqlite3
import time
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from stars.core.logger import logger
from stars.db.storage import Record, Storage
from stars.utils.time_utils import from_iso, to_iso, utc_now


# Retry configuration
MAX_RETRIES = 5
RETRY_DELAY = 0.1  # 100ms

BOOKING_COLUMNS = (
    "destination", "departure_date", "return_date", "travel_class",
    "number_of_travelers", "status", "price", "user_id",
)
DATETIME_COLUMNS = {
    "departure_date", "return_date", "created_at", "updated_at",
    "last_login", "expires_at", "timestamp",
}


def _row_to_record(row: Optional[sqlite3.Row]) -> Optional[Record]:
    if row is None:
        return None
    item = dict(row)
    for key in DATETIME_COLUMNS & item.keys():
        item[key] = from_iso(item[key])
    if "amenities_json" in item:
        item["amenities"] = json.loads(item.pop("amenities_json") or "[]")
    if "is_verified" in item:
        item["is_verified"] = bool(item["is_verified"])
    return item


def _to_db(key: str, value: Any) -> Any:
    if key in DATETIME_COLUMNS and isinstance(value, datetime):
        return to_iso(value)
    if hasattr(value, "value"):   # enums
        return value.value
    return value


class SQLiteStorage(Storage):
    def __init__(self, db_path: str = "data.sqlite3"):
        if db_path != ":memory:":
            Path(db_path).resolve().parent.mkdir(parents=True, exist_ok=True)

        self.conn = sqlite3.connect(
            db_path,
            check_same_thread=False,
            timeout=30.0
        )
        self.conn.row_factory = sqlite3.Row
        # WAL lets readers run while a request writes
        self.conn.execute("PRAGMA journal_mode=WAL")
        self.conn.execute("PRAGMA synchronous=NORMAL")
        self.conn.execute("PRAGMA busy_timeout=30000")
        self._init_tables()

    def _execute_with_retry(self, operation, *args, **kwargs):
        """Execute database operation with retry logic for handling locked database"""
        for attempt in range(MAX_RETRIES):
            try:
                return operation(*args, **kwargs)
            except sqlite3.OperationalError as e:
                if "locked" in str(e).lower() and attempt < MAX_RETRIES - 1:
                    logger.warning(f"Database locked, retry {attempt + 1}/{MAX_RETRIES}")
                    time.sleep(RETRY_DELAY * (attempt + 1))
                    continue
                raise

    def close(self):
        self.conn.close()

    # ----------------------------------------------------------------------
    # CREATE TABLES
    # ----------------------------------------------------------------------
    def _init_tables(self):
        cur = self.conn.cursor()

        # USERS
        cur.execute("""
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            username TEXT NOT NULL UNIQUE,
            hashed_password TEXT NOT NULL,
            email TEXT UNIQUE,
            first_name TEXT,
            last_name TEXT,
            phone_number TEXT,
            profile_picture TEXT,
            role TEXT NOT NULL DEFAULT 'user',
            is_verified INTEGER NOT NULL DEFAULT 0,
            created_at TEXT NOT NULL,
            last_login TEXT
        );
        """)

        # SESSIONS
        cur.execute("""
        CREATE TABLE IF NOT EXISTS sessions (
            id TEXT PRIMARY KEY,
            user_id INTEGER NOT NULL,
            username TEXT NOT NULL,
            created_at TEXT NOT NULL,
            expires_at TEXT NOT NULL
        );
        """)

        # BOOKINGS (user_id holds the username)
        cur.execute("""
        CREATE TABLE IF NOT EXISTS bookings (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            destination TEXT NOT NULL,
            departure_date TEXT NOT NULL,
            return_date TEXT,
            travel_class TEXT NOT NULL,
            number_of_travelers INTEGER NOT NULL DEFAULT 1,
            status TEXT NOT NULL DEFAULT 'confirmed',
            price REAL NOT NULL,
            user_id TEXT NOT NULL,
            created_at TEXT NOT NULL,
            updated_at TEXT
        );
        """)

        # ACCOMMODATIONS
        cur.execute("""
        CREATE TABLE IF NOT EXISTS accommodations (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            location TEXT NOT NULL,
            description TEXT NOT NULL,
            price_per_night REAL NOT NULL,
            image TEXT NOT NULL,
            tier TEXT NOT NULL,
            amenities_json TEXT NOT NULL
        );
        """)

        # CHAT MESSAGES
        cur.execute("""
        CREATE TABLE IF NOT EXISTS chat_messages (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id TEXT NOT NULL,
            content TEXT NOT NULL,
            role TEXT NOT NULL,
            timestamp TEXT NOT NULL
        );
        """)

        # INDEXES
        cur.execute("CREATE INDEX IF NOT EXISTS idx_booking_user ON bookings(user_id);")
        cur.execute("CREATE INDEX IF NOT EXISTS idx_chat_user ON chat_messages(user_id);")

        self.conn.commit()

    # ----------------------------------------------------------------------
    # USERS
    # ----------------------------------------------------------------------
    def get_user(self, user_id: int) -> Optional[Record]:
        cur = self.conn.cursor()
        cur.execute("SELECT * FROM users WHERE id = ?", (user_id,))
        return _row_to_record(cur.fetchone())

    def get_user_by_username(self, username: str) -> Optional[Record]:
        cur = self.conn.cursor()
        cur.execute("SELECT * FROM users WHERE username = ?", (username,))
        return _row_to_record(cur.fetchone())

    def get_user_by_email(self, email: str) -> Optional[Record]:
        cur = self.conn.cursor()
        cur.execute("SELECT * FROM users WHERE email = ?", (email,))
        return _row_to_record(cur.fetchone())

    def create_user(
        self, username: str, hashed_password: str,
        email: Optional[str] = None, first_name: Optional[str] = None,
        last_name: Optional[str] = None, phone_number: Optional[str] = None,
        profile_picture: Optional[str] = None,
        role: str = "user", is_verified: bool = False,
    ) -> Record:
        now = utc_now()

        def _create_user():
            cur = self.conn.cursor()
            cur.execute("""
            INSERT INTO users (username, hashed_password, email, first_name, last_name,
                               phone_number, profile_picture, role, is_verified,
                               created_at, last_login)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """, (
                username, hashed_password, email, first_name, last_name,
                phone_number, profile_picture, role, int(is_verified),
                to_iso(now), to_iso(now),
            ))
            self.conn.commit()
            return cur.lastrowid

        return self.get_user(self._execute_with_retry(_create_user))

    def update_user_last_login(self, user_id: int) -> Optional[Record]:
        def _touch():
            cur = self.conn.cursor()
            cur.execute("UPDATE users SET last_login = ? WHERE id = ?", (to_iso(utc_now()), user_id))
            self.conn.commit()
            return cur.rowcount

        if not self._execute_with_retry(_touch):
            return None
        return self.get_user(user_id)

    # ----------------------------------------------------------------------
    # SESSIONS
    # ----------------------------------------------------------------------
    def create_session(self, session_id: str, user_id: int, username: str, expires_at: datetime) -> Record:
        def _create_session():
            cur = self.conn.cursor()
            cur.execute("""
            INSERT INTO sessions (id, user_id, username, created_at, expires_at)
            VALUES (?, ?, ?, ?, ?)
            """, (session_id, user_id, username, to_iso(utc_now()), to_iso(expires_at)))
            self.conn.commit()

        self._execute_with_retry(_create_session)
        return self.get_session(session_id)

    def get_session(self, session_id: str) -> Optional[Record]:
        cur = self.conn.cursor()
        cur.execute("SELECT * FROM sessions WHERE id = ?", (session_id,))
        return _row_to_record(cur.fetchone())

    def delete_session(self, session_id: str) -> bool:
        def _delete_session():
            cur = self.conn.cursor()
            cur.execute("DELETE FROM sessions WHERE id = ?", (session_id,))
            self.conn.commit()
            return cur.rowcount > 0

        return self._execute_with_retry(_delete_session)

    # ----------------------------------------------------------------------
    # BOOKINGS
    # ----------------------------------------------------------------------
    def get_bookings(self, user_id: str) -> List[Record]:
        cur = self.conn.cursor()
        cur.execute("""
        SELECT * FROM bookings
        WHERE user_id = ?
        ORDER BY created_at DESC, id DESC
        """, (user_id,))
        return [_row_to_record(r) for r in cur.fetchall()]

    def get_booking(self, booking_id: int) -> Optional[Record]:
        cur = self.conn.cursor()
        cur.execute("SELECT * FROM bookings WHERE id = ?", (booking_id,))
        return _row_to_record(cur.fetchone())

    def create_booking(self, data: Record) -> Record:
        now = utc_now()
        values = [_to_db(col, data.get(col)) for col in BOOKING_COLUMNS]

        def _create_booking():
            cur = self.conn.cursor()
            cur.execute(f"""
            INSERT INTO bookings ({", ".join(BOOKING_COLUMNS)}, created_at, updated_at)
            VALUES ({", ".join("?" for _ in BOOKING_COLUMNS)}, ?, ?)
            """, (*values, to_iso(now), to_iso(now)))
            self.conn.commit()
            return cur.lastrowid

        return self.get_booking(self._execute_with_retry(_create_booking))

    def update_booking(self, booking_id: int, changes: Record) -> Optional[Record]:
        fields: Dict[str, Any] = {
            col: _to_db(col, value) for col, value in changes.items() if col in BOOKING_COLUMNS
        }
        fields["updated_at"] = to_iso(utc_now())
        assignments = ", ".join(f"{col} = ?" for col in fields)

        def _update_booking():
            cur = self.conn.cursor()
            cur.execute(
                f"UPDATE bookings SET {assignments} WHERE id = ?",
                (*fields.values(), booking_id),
            )
            self.conn.commit()
            return cur.rowcount

        if not self._execute_with_retry(_update_booking):
            return None
        return self.get_booking(booking_id)

    def delete_booking(self, booking_id: int) -> bool:
        def _delete_booking():
            cur = self.conn.cursor()
            cur.execute("DELETE FROM bookings WHERE id = ?", (booking_id,))
            self.conn.commit()
            return cur.rowcount > 0

        return self._execute_with_retry(_delete_booking)

    # ----------------------------------------------------------------------
    # ACCOMMODATIONS
    # ----------------------------------------------------------------------
    def get_accommodations(self) -> List[Record]:
        cur = self.conn.cursor()
        cur.execute("SELECT * FROM accommodations ORDER BY id ASC")
        return [_row_to_record(r) for r in cur.fetchall()]

    def create_accommodation(self, data: Record) -> Record:
        def _create_accommodation():
            cur = self.conn.cursor()
            cur.execute("""
            INSERT INTO accommodations (name, location, description, price_per_night,
                                        image, tier, amenities_json)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """, (
                data["name"], data["location"], data["description"],
                data["price_per_night"], data["image"], data["tier"],
                json.dumps(data.get("amenities") or []),
            ))
            self.conn.commit()
            return cur.lastrowid

        new_id = self._execute_with_retry(_create_accommodation)
        cur = self.conn.cursor()
        cur.execute("SELECT * FROM accommodations WHERE id = ?", (new_id,))
        return _row_to_record(cur.fetchone())

    # ----------------------------------------------------------------------
    # CHAT MESSAGES
    # ----------------------------------------------------------------------
    def get_chat_messages(self, user_id: str) -> List[Record]:
        cur = self.conn.cursor()
        cur.execute("""
        SELECT * FROM chat_messages
        WHERE user_id = ?
        ORDER BY timestamp ASC, id ASC
        """, (user_id,))
        return [_row_to_record(r) for r in cur.fetchall()]

    def create_chat_message(
        self, user_id: str, content: str, role: str, timestamp: Optional[datetime] = None
    ) -> Record:
        def _add_message():
            cur = self.conn.cursor()
            cur.execute("""
            INSERT INTO chat_messages (user_id, content, role, timestamp)
            VALUES (?, ?, ?, ?)
            """, (user_id, content, _to_db("role", role), to_iso(timestamp or utc_now())))
            self.conn.commit()
            return cur.lastrowid

        new_id = self._execute_with_retry(_add_message)
        cur = self.conn.cursor()
        cur.execute("SELECT * FROM chat_messages WHERE id = ?", (new_id,))
        return _row_to_record(cur.fetchone())

    def delete_chat_messages(self, user_id: str) -> int:
        def _delete_messages():
            cur = self.conn.cursor()
            cur.execute("DELETE FROM chat_messages WHERE user_id = ?", (user_id,))
            self.conn.commit()
            return cur.rowcount

        return self._execute_with_retry(_delete_messages)
