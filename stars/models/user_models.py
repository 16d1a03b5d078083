# stars/models/user_models.py

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from stars.models.base import CamelModel

MAX_PASSWORD_BYTES = 72


# -------------------------
# Registration model
# -------------------------
class RegisterIn(CamelModel):
    username: str = Field(min_length=3, max_length=50)
    password: str = Field(min_length=6)
    email: Optional[EmailStr] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @field_validator("password")
    @classmethod
    def _fits_bcrypt(cls, value: str) -> str:
        # bcrypt only accepts 72 bytes, not characters
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


# -------------------------
# Login model
# -------------------------
class LoginIn(BaseModel):
    username: str
    password: str


# -------------------------
# Public user info (never carries the hash)
# -------------------------
class UserOut(CamelModel):
    id: int
    username: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone_number: Optional[str] = None
    profile_picture: Optional[str] = None
    role: str = "user"
    is_verified: bool = False
    created_at: datetime
    last_login: Optional[datetime] = None


class AuthOut(CamelModel):
    user: UserOut
    is_authenticated: bool = True


class MeOut(CamelModel):
    is_authenticated: bool = True
    user_id: int
    username: str


class LogoutOut(CamelModel):
    message: str
    is_authenticated: bool = False


# -------------------------
# Identity of the caller, handed explicitly to services
# -------------------------
class SessionContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    session_id: str
    user_id: int
    username: str
