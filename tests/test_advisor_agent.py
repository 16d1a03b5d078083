"""
Advisor agent: message assembly, the createBooking tool loop and the
fallback replies for provider failures.
"""

from types import SimpleNamespace

import httpx
import openai
import pytest

from conftest import FakeLLM, text_reply, tool_reply

from stars.agents.advisor_agent import (
    AUTH_FALLBACK,
    EMPTY_REPLY,
    GENERIC_FALLBACK,
    RATE_LIMIT_FALLBACK,
    AdvisorAgent,
    fallback_for_error,
)
from stars.agents.booking_tool import execute_create_booking
from stars.agents.prompts import SYSTEM_PROMPT


MARS_VIP = {
    "destination": "mars",
    "departureDate": "2030-06-15",
    "travelClass": "vip",
    "numberOfTravelers": 1,
    "price": 1,
    "userId": "alice",
}


def api_error(cls, status):
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    return cls("provider said no", response=httpx.Response(status, request=request), body=None)


def tool_results(call):
    return [m for m in call["messages"] if m["role"] == "tool"]


class TestBuildMessages:

    def test_order_system_history_note_user(self, store):
        agent = AdvisorAgent(store, client=FakeLLM())
        history = [
            {"role": "user", "content": "hi"},
            {"role": "assistant", "content": "hello"},
        ]
        messages = agent.build_messages("alice", history, "book mars", is_guest=False)

        assert messages[0] == {"role": "system", "content": SYSTEM_PROMPT}
        assert messages[1:3] == [{"role": "user", "content": "hi"}, {"role": "assistant", "content": "hello"}]
        assert messages[3]["role"] == "system"
        assert "alice" in messages[3]["content"]
        assert messages[4] == {"role": "user", "content": "book mars"}

    def test_unknown_roles_become_assistant(self, store):
        agent = AdvisorAgent(store, client=FakeLLM())
        messages = agent.build_messages("alice", [{"role": "tool", "content": "x"}], "q", is_guest=False)
        assert messages[1]["role"] == "assistant"

    def test_history_is_capped(self, store):
        agent = AdvisorAgent(store, client=FakeLLM())
        history = [{"role": "user", "content": str(i)} for i in range(150)]
        messages = agent.build_messages("alice", history, "q", is_guest=False)
        assert len(messages) == 103
        assert messages[1]["content"] == "50"


class TestToolLoop:

    def test_tool_call_books_once_and_logs_one_exchange(self, store, alice_ctx):
        llm = FakeLLM(tool_reply(MARS_VIP), text_reply("Your Mars trip is booked!"))
        agent = AdvisorAgent(store, client=llm)

        reply = agent.generate_response(alice_ctx, "Book Mars VIP for 2030-06-15")

        assert reply == "Your Mars trip is booked!"
        bookings = store.get_bookings("alice")
        assert len(bookings) == 1
        assert bookings[0]["price"] == 750000
        assert bookings[0]["user_id"] == "alice"

        result = tool_results(llm.calls[1])[0]
        assert result["tool_call_id"] == "call_1"
        assert result["content"].startswith("Booking confirmed!")
        assert "$750,000" in result["content"]

        history = store.get_chat_messages("alice")
        assert [(m["role"], m["content"]) for m in history] == [
            ("user", "Book Mars VIP for 2030-06-15"),
            ("assistant", "Your Mars trip is booked!"),
        ]

    def test_tools_are_offered_on_every_round(self, store, alice_ctx):
        llm = FakeLLM(text_reply("Mars is lovely."))
        AdvisorAgent(store, client=llm).generate_response(alice_ctx, "tell me about mars")

        assert llm.calls[0]["tools"][0]["function"]["name"] == "createBooking"
        assert "tool_choice" not in llm.calls[0]

    def test_model_user_id_is_ignored(self, store, alice_ctx):
        store.create_user(username="bob", hashed_password="x")
        llm = FakeLLM(tool_reply(dict(MARS_VIP, userId="bob")), text_reply("done"))

        AdvisorAgent(store, client=llm).generate_response(alice_ctx, "book it")

        assert len(store.get_bookings("alice")) == 1
        assert store.get_bookings("bob") == []

    def test_invalid_destination_creates_nothing(self, store, alice_ctx):
        llm = FakeLLM(tool_reply(dict(MARS_VIP, destination="pluto")), text_reply("Pluto is not offered."))

        reply = AdvisorAgent(store, client=llm).generate_response(alice_ctx, "book pluto")

        assert reply == "Pluto is not offered."
        assert store.bookings == {}
        assert tool_results(llm.calls[1])[0]["content"].startswith("Booking not created")

    def test_round_cap_forces_a_text_answer(self, store, alice_ctx):
        broken = tool_reply("{not json")
        llm = FakeLLM(broken, broken, text_reply("Let me know the details."))

        reply = AdvisorAgent(store, client=llm, max_tool_rounds=2).generate_response(alice_ctx, "book")

        assert reply == "Let me know the details."
        assert len(llm.calls) == 3
        assert llm.calls[2]["tool_choice"] == "none"
        assert store.bookings == {}
        assert len(store.get_chat_messages("alice")) == 2

    def test_unknown_tool_name(self, store, alice_ctx):
        llm = FakeLLM(tool_reply({}, name="cancelBooking"), text_reply("ok"))
        AdvisorAgent(store, client=llm).generate_response(alice_ctx, "cancel")
        assert tool_results(llm.calls[1])[0]["content"] == "Unknown tool: cancelBooking"

    def test_empty_answer_gets_placeholder(self, store, alice_ctx):
        llm = FakeLLM(text_reply("   "))
        assert AdvisorAgent(store, client=llm).generate_response(alice_ctx, "?") == EMPTY_REPLY


class TestGuest:

    def test_guest_gets_answer_without_persistence(self, store):
        llm = FakeLLM(text_reply("Welcome aboard."))
        reply = AdvisorAgent(store, client=llm).generate_response(None, "hello")

        assert reply == "Welcome aboard."
        assert store.chat_messages == {}
        assert "guest" in llm.calls[0]["messages"][-2]["content"]

    def test_guest_cannot_book(self, store):
        llm = FakeLLM(tool_reply(MARS_VIP), text_reply("Please log in first."))
        AdvisorAgent(store, client=llm).generate_response(None, "book mars")

        assert store.bookings == {}
        assert "not logged in" in tool_results(llm.calls[1])[0]["content"]

    def test_tool_refuses_without_session(self, store):
        result = execute_create_booking(store, None, '{"destination": "mars"}')
        assert result.startswith("Booking not created")


class TestFallbacks:

    @pytest.mark.parametrize("error, expected", [
        (api_error(openai.AuthenticationError, 401), AUTH_FALLBACK),
        (api_error(openai.RateLimitError, 429), RATE_LIMIT_FALLBACK),
        (RuntimeError("Incorrect API key provided"), AUTH_FALLBACK),
        (RuntimeError("timeout"), GENERIC_FALLBACK),
    ])
    def test_mapping(self, error, expected):
        assert fallback_for_error(error) == expected

    def test_error_codes(self):
        assert fallback_for_error(SimpleNamespace(code="auth_error")) == AUTH_FALLBACK
        assert fallback_for_error(SimpleNamespace(code="rate_limit_exceeded")) == RATE_LIMIT_FALLBACK

    def test_failure_is_still_logged_as_one_exchange(self, store, alice_ctx):
        llm = FakeLLM(api_error(openai.RateLimitError, 429))
        reply = AdvisorAgent(store, client=llm).generate_response(alice_ctx, "hello?")

        assert reply == RATE_LIMIT_FALLBACK
        history = store.get_chat_messages("alice")
        assert [m["role"] for m in history] == ["user", "assistant"]
        assert history[1]["content"] == RATE_LIMIT_FALLBACK
