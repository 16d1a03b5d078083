# stars/api/deps.py

from typing import Optional

from fastapi import Depends, HTTPException, Request

from stars.agents.advisor_agent import AdvisorAgent
from stars.core.config_loader import settings
from stars.db.storage import Storage, get_storage
from stars.models.user_models import SessionContext
from stars.services.session_service import resolve_session


def get_store() -> Storage:
    return get_storage()


def get_advisor(storage: Storage = Depends(get_store)) -> AdvisorAgent:
    return AdvisorAgent(storage)


def session_token(request: Request) -> Optional[str]:
    return request.cookies.get(settings.session_cookie_name)


# --------------------------
# Session gate
# --------------------------
def get_optional_session(
    token: Optional[str] = Depends(session_token),
    storage: Storage = Depends(get_store),
) -> Optional[SessionContext]:
    """Caller identity, or None for guests."""
    return resolve_session(storage, token)


def require_session(ctx: Optional[SessionContext] = Depends(get_optional_session)) -> SessionContext:
    if ctx is None:
        raise HTTPException(status_code=401, detail="Authentication required")
    return ctx
