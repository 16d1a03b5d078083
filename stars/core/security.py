# stars/core/security.py

import secrets
from datetime import timedelta
from typing import Optional

import bcrypt
import jwt

from stars.core.config_loader import settings
from stars.utils.time_utils import utc_now


ALGORITHM = "HS256"


# ---------------------------------------------------------------------------
# PASSWORD HASHING
# ---------------------------------------------------------------------------
def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # stored value is not a bcrypt hash
        return False


# ---------------------------------------------------------------------------
# SESSION IDS + SIGNED COOKIE
# ---------------------------------------------------------------------------
def new_session_id() -> str:
    return secrets.token_urlsafe(32)


def create_session_token(session_id: str, expires_minutes: Optional[int] = None) -> str:
    """
    Signs the opaque session id for the cookie.
    Default expiration = settings.session_max_age_minutes
    """
    minutes = expires_minutes or settings.session_max_age_minutes
    now = utc_now()

    payload = {
        "sid": session_id,
        "exp": now + timedelta(minutes=minutes),
        "iat": now,
    }

    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=ALGORITHM)


def decode_session_token(token: str) -> Optional[str]:
    try:
        decoded = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[ALGORITHM])
    except jwt.PyJWTError:
        return None
    return decoded.get("sid")
