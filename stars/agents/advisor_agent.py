# stars/agents/advisor_agent.py

from typing import Any, Dict, List, Optional

import openai

from stars.agents.booking_tool import CREATE_BOOKING_TOOL, TOOL_NAME, execute_create_booking
from stars.agents.prompts import SYSTEM_PROMPT, user_context_note
from stars.core.config_loader import settings
from stars.core.llm import chat_completion, get_llm_client
from stars.core.logger import logger
from stars.db.storage import Record, Storage
from stars.models.chat_models import ChatRole
from stars.models.user_models import SessionContext


GUEST_USER_ID = "guest"
MAX_HISTORY_MESSAGES = 100

AUTH_FALLBACK = (
    "There seems to be an issue with the AI service authentication. "
    "Please check the API key configuration."
)
RATE_LIMIT_FALLBACK = (
    "The AI service is currently experiencing high demand. Please try again in a few moments."
)
GENERIC_FALLBACK = (
    "I'm sorry, I encountered an error while processing your request. Please try again later."
)
EMPTY_REPLY = "I apologize, but I couldn't generate a response. Please try again."


def fallback_for_error(error: Exception) -> str:
    """Maps a provider failure to the user-safe reply. No retries."""
    code = getattr(error, "code", None)
    message = str(error).lower()

    if (
        isinstance(error, openai.AuthenticationError)
        or code == "auth_error"
        or "api key" in message
        or "api_key" in message
    ):
        return AUTH_FALLBACK

    if isinstance(error, openai.RateLimitError) or code == "rate_limit_exceeded":
        return RATE_LIMIT_FALLBACK

    return GENERIC_FALLBACK


def _history_message(record: Record) -> Dict[str, str]:
    role = record["role"]
    if role not in (ChatRole.USER.value, ChatRole.ASSISTANT.value, ChatRole.SYSTEM.value):
        role = ChatRole.ASSISTANT.value
    return {"role": role, "content": record["content"]}


def _assistant_tool_message(message: Any) -> Dict[str, Any]:
    return {
        "role": "assistant",
        "content": message.content,
        "tool_calls": [
            {
                "id": call.id,
                "type": "function",
                "function": {"name": call.function.name, "arguments": call.function.arguments},
            }
            for call in message.tool_calls
        ],
    }


class AdvisorAgent:
    """
    Travel advisor backed by a hosted chat model.

    One external call = one user turn + one assistant turn in the chat log,
    however many createBooking round-trips happen in between. Tool cycles
    are capped by ``max_tool_rounds``; past the cap the model is asked
    once more with tools disabled so it has to answer in text.
    """

    def __init__(self, storage: Storage, client: Any = None, max_tool_rounds: Optional[int] = None):
        self.storage = storage
        self._client = client
        self.max_tool_rounds = settings.max_tool_rounds if max_tool_rounds is None else max_tool_rounds

    @property
    def client(self):
        if self._client is None:
            self._client = get_llm_client()
        return self._client

    # -----------------------------
    # Message assembly
    # -----------------------------
    def build_messages(self, user_id: str, history: List[Record], message: str, is_guest: bool) -> List[Dict[str, Any]]:
        messages: List[Dict[str, Any]] = [{"role": "system", "content": SYSTEM_PROMPT}]
        messages.extend(_history_message(r) for r in history[-MAX_HISTORY_MESSAGES:])
        messages.append({"role": "system", "content": user_context_note(user_id, is_guest)})
        messages.append({"role": "user", "content": message})
        return messages

    # -----------------------------
    # Model <-> tool loop
    # -----------------------------
    def _run_tool(self, ctx: Optional[SessionContext], call: Any) -> str:
        name = call.function.name
        logger.info(f"Advisor tool call {name} for {ctx.username if ctx else GUEST_USER_ID}")
        if name != TOOL_NAME:
            return f"Unknown tool: {name}"
        return execute_create_booking(self.storage, ctx, call.function.arguments)

    def _complete(self, ctx: Optional[SessionContext], messages: List[Dict[str, Any]]) -> str:
        tools = [CREATE_BOOKING_TOOL]

        for _ in range(self.max_tool_rounds):
            reply = chat_completion(self.client, messages, tools=tools).choices[0].message
            if not reply.tool_calls:
                return (reply.content or "").strip() or EMPTY_REPLY

            messages.append(_assistant_tool_message(reply))
            for call in reply.tool_calls:
                messages.append({
                    "role": "tool",
                    "tool_call_id": call.id,
                    "content": self._run_tool(ctx, call),
                })

        logger.info(f"Tool round cap ({self.max_tool_rounds}) reached, asking for a final answer")
        reply = chat_completion(self.client, messages, tools=tools, tool_choice="none").choices[0].message
        return (reply.content or "").strip() or EMPTY_REPLY

    # -----------------------------
    # Public entry point
    # -----------------------------
    def generate_response(self, ctx: Optional[SessionContext], message: str) -> str:
        """
        Answers ``message``. Guests (ctx is None) get an answer but nothing
        is stored and the booking tool refuses to run for them.
        """
        is_guest = ctx is None
        user_id = GUEST_USER_ID if is_guest else ctx.username
        history = [] if is_guest else self.storage.get_chat_messages(user_id)
        messages = self.build_messages(user_id, history, message, is_guest)

        try:
            response_text = self._complete(ctx, messages)
        except Exception as e:
            logger.error(f"Advisor LLM call failed ({type(e).__name__}): {e}")
            response_text = fallback_for_error(e)

        if not is_guest:
            self.storage.create_chat_message(user_id, message, ChatRole.USER.value)
            self.storage.create_chat_message(user_id, response_text, ChatRole.ASSISTANT.value)

        return response_text
