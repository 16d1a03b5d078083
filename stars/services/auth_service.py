# stars/services/auth_service.py

from typing import Any, Dict

from stars.core.logger import logger
from stars.core.security import get_password_hash, verify_password
from stars.db.storage import Record, Storage
from stars.models.user_models import RegisterIn


class UsernameTaken(Exception):
    pass


class EmailTaken(Exception):
    pass


class InvalidCredentials(Exception):
    pass


def public_user(user: Record) -> Dict[str, Any]:
    """User record without the password hash."""
    return {k: v for k, v in user.items() if k != "hashed_password"}


def register_user(storage: Storage, data: RegisterIn) -> Record:
    if storage.get_user_by_username(data.username):
        raise UsernameTaken(data.username)
    if data.email and storage.get_user_by_email(data.email):
        raise EmailTaken(data.email)

    user = storage.create_user(
        username=data.username,
        hashed_password=get_password_hash(data.password),
        email=data.email,
        first_name=data.first_name,
        last_name=data.last_name,
        role="user",
        is_verified=True,   # auto-verified
    )
    logger.info(f"Registered user {user['username']} (id={user['id']})")
    return user


def authenticate(storage: Storage, username: str, password: str) -> Record:
    """
    Checks the password and stamps last_login.
    Unknown user and wrong password raise the same error.
    """
    user = storage.get_user_by_username(username)
    if not user or not verify_password(password, user["hashed_password"]):
        logger.info(f"Failed login for {username!r}")
        raise InvalidCredentials(username)

    return storage.update_user_last_login(user["id"]) or user
