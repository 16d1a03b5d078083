# stars/api/routes_chat.py

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response

from stars.agents.advisor_agent import AdvisorAgent
from stars.api.deps import get_advisor, get_optional_session, get_store, require_session
from stars.core.logger import logger
from stars.db.storage import Storage
from stars.models.chat_models import ChatMessageOut, ChatRequest, ChatResponse
from stars.models.user_models import SessionContext

router = APIRouter(prefix="/api/chat", tags=["chat"])


# -----------------------------
# Chat with the advisor (guests allowed)
# -----------------------------
@router.post("", response_model=ChatResponse, summary="Chat with the travel advisor")
def chat(
    req: ChatRequest,
    ctx: Optional[SessionContext] = Depends(get_optional_session),
    advisor: AdvisorAgent = Depends(get_advisor),
):
    """
    Guests get an answer but nothing is stored for them. For logged-in
    users the question and the answer are appended to their history.
    """
    try:
        response_text = advisor.generate_response(ctx, req.message)
    except Exception:
        logger.exception("Chat error")
        raise HTTPException(status_code=500, detail="Failed to generate response")

    return {"response": response_text}


# -----------------------------
# History
# -----------------------------
@router.get("", response_model=List[ChatMessageOut])
def chat_history(ctx: SessionContext = Depends(require_session), storage: Storage = Depends(get_store)):
    return storage.get_chat_messages(ctx.username)


@router.delete("", status_code=204)
def clear_chat(ctx: SessionContext = Depends(require_session), storage: Storage = Depends(get_store)):
    if not storage.clear_chat_messages(ctx.username):
        raise HTTPException(status_code=500, detail="Failed to clear chat history")
    return Response(status_code=204)
