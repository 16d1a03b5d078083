# stars/core/llm.py

from functools import lru_cache
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from openai import OpenAI

from stars.core.config_loader import settings

load_dotenv()


@lru_cache(maxsize=1)
def get_llm_client() -> OpenAI:
    # created on first use so the app boots without a key
    return OpenAI(api_key=settings.OPENAI_API_KEY)


# ---------------------------------------------------------------------------
# CHAT COMPLETION (with optional tools)
# ---------------------------------------------------------------------------
def chat_completion(
    client: Any,
    messages: List[Dict[str, Any]],
    tools: Optional[List[Dict[str, Any]]] = None,
    tool_choice: Optional[str] = None,
):
    kwargs: Dict[str, Any] = {
        "model": settings.gpt_model,
        "messages": messages,
        "temperature": settings.llm_temperature,
        "max_tokens": settings.llm_max_tokens,
    }
    if tools:
        kwargs["tools"] = tools
        if tool_choice:
            kwargs["tool_choice"] = tool_choice

    return client.chat.completions.create(**kwargs)
