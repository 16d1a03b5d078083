# stars/api/routes_auth.py

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response

from stars.api.deps import get_store, require_session, session_token
from stars.core.config_loader import settings
from stars.core.logger import logger
from stars.db.storage import Storage
from stars.models.user_models import AuthOut, LoginIn, LogoutOut, MeOut, RegisterIn, SessionContext
from stars.services import auth_service
from stars.services.session_service import close_session, open_session

router = APIRouter(prefix="/api/auth", tags=["auth"])


# --------------------------
# UTILS
# --------------------------
def _set_session_cookie(response: Response, token: str):
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_max_age_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
    )


# --------------------------
# REGISTER
# --------------------------
@router.post("/register", response_model=AuthOut, status_code=201)
def register(data: RegisterIn, response: Response, storage: Storage = Depends(get_store)):
    try:
        user = auth_service.register_user(storage, data)
    except auth_service.UsernameTaken:
        raise HTTPException(400, "Username already exists")
    except auth_service.EmailTaken:
        raise HTTPException(400, "Email already registered")
    except Exception:
        logger.exception("Registration error")
        raise HTTPException(500, "Failed to register user")

    token, _ = open_session(storage, user)
    _set_session_cookie(response, token)
    return {"user": auth_service.public_user(user), "is_authenticated": True}


# --------------------------
# LOGIN
# --------------------------
@router.post("/login", response_model=AuthOut)
def login(data: LoginIn, response: Response, storage: Storage = Depends(get_store)):
    try:
        user = auth_service.authenticate(storage, data.username, data.password)
    except auth_service.InvalidCredentials:
        raise HTTPException(401, "Invalid username or password")

    token, ctx = open_session(storage, user)
    _set_session_cookie(response, token)
    logger.info(f"User {ctx.username} logged in")
    return {"user": auth_service.public_user(user), "is_authenticated": True}


# --------------------------
# LOGOUT
# --------------------------
@router.post("/logout", response_model=LogoutOut)
def logout(
    response: Response,
    token: Optional[str] = Depends(session_token),
    storage: Storage = Depends(get_store),
):
    if close_session(storage, token):
        logger.info("Session closed")
    response.delete_cookie(settings.session_cookie_name)
    return {"message": "Logged out successfully", "is_authenticated": False}


# --------------------------
# ME
# --------------------------
@router.get("/me", response_model=MeOut)
def me(ctx: SessionContext = Depends(require_session)):
    return {"is_authenticated": True, "user_id": ctx.user_id, "username": ctx.username}
