# stars/models/chat_models.py

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from stars.models.base import CamelModel


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class ChatRequest(BaseModel):
    message: str = Field(min_length=1)


class ChatResponse(BaseModel):
    response: str


class ChatMessageOut(CamelModel):
    id: int
    user_id: str
    content: str
    role: str
    timestamp: datetime
