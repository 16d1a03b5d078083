# stars/services/session_service.py

from datetime import timedelta
from typing import Optional, Tuple

from stars.core.config_loader import settings
from stars.core.security import create_session_token, decode_session_token, new_session_id
from stars.db.storage import Record, Storage
from stars.models.user_models import SessionContext
from stars.utils.time_utils import utc_now


def open_session(storage: Storage, user: Record) -> Tuple[str, SessionContext]:
    """Creates the server-side session row and returns (cookie token, context)."""
    session_id = new_session_id()
    expires_at = utc_now() + timedelta(minutes=settings.session_max_age_minutes)
    storage.create_session(session_id, user["id"], user["username"], expires_at)

    token = create_session_token(session_id)
    return token, SessionContext(session_id=session_id, user_id=user["id"], username=user["username"])


def resolve_session(storage: Storage, token: Optional[str]) -> Optional[SessionContext]:
    if not token:
        return None

    session_id = decode_session_token(token)
    if not session_id:
        return None

    session = storage.get_session(session_id)
    if not session:
        return None

    if session["expires_at"] <= utc_now():
        storage.delete_session(session_id)
        return None

    return SessionContext(
        session_id=session["id"],
        user_id=session["user_id"],
        username=session["username"],
    )


def close_session(storage: Storage, token: Optional[str]) -> bool:
    session_id = decode_session_token(token) if token else None
    if not session_id:
        return False
    return storage.delete_session(session_id)
