from unittest.mock import MagicMock, patch

import httpx
import pytest
from openai import APIConnectionError, RateLimitError

from genie.assistant import StoreAssistant
from genie.exceptions import AssistantError
from genie.schemas.chat_intent import ChatAction, ChatIntent, IntentParameters


def completion(content=None, parsed=None):
    message = MagicMock(content=content, parsed=parsed)
    return MagicMock(choices=[MagicMock(message=message)])


def rate_limit_error():
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    return RateLimitError("rate limited", response=httpx.Response(429, request=request), body=None)


@pytest.fixture
def openai_client():
    return MagicMock()


def test_reply_sends_system_and_user_messages(openai_client):
    openai_client.chat.completions.create.return_value = completion("Hi there")
    assistant = StoreAssistant(client=openai_client, model="gpt-test")

    assert assistant.reply("You are helpful", "hello", max_tokens=200) == "Hi there"

    kwargs = openai_client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "gpt-test"
    assert kwargs["max_tokens"] == 200
    assert kwargs["messages"] == [
        {"role": "system", "content": "You are helpful"},
        {"role": "user", "content": "hello"}
    ]


def test_reply_empty_content_is_none(openai_client):
    openai_client.chat.completions.create.return_value = completion("")
    assert StoreAssistant(client=openai_client).reply("p", "m", max_tokens=10) is None


def test_connection_error_is_wrapped(openai_client):
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    openai_client.chat.completions.create.side_effect = APIConnectionError(request=request)

    with pytest.raises(AssistantError):
        StoreAssistant(client=openai_client).reply("p", "m", max_tokens=10)


@patch("genie.assistant.time.sleep")
def test_rate_limit_is_retried(mock_sleep, openai_client):
    openai_client.chat.completions.create.side_effect = [rate_limit_error(), completion("ok")]

    assert StoreAssistant(client=openai_client).reply("p", "m", max_tokens=10) == "ok"
    assert mock_sleep.call_count == 1


@patch("genie.assistant.time.sleep")
def test_rate_limit_gives_up(mock_sleep, openai_client):
    openai_client.chat.completions.create.side_effect = rate_limit_error()

    with pytest.raises(AssistantError):
        StoreAssistant(client=openai_client).reply("p", "m", max_tokens=10)

    assert openai_client.chat.completions.create.call_count == 4


def test_parse_intent_uses_structured_output(openai_client):
    intent = ChatIntent(action=ChatAction.PRODUCT_QUERY, parameters=IntentParameters(productQuery="whey"),
                        response="Searching")
    openai_client.chat.completions.parse.return_value = completion(parsed=intent)

    assert StoreAssistant(client=openai_client).parse_intent("p", "find whey") is intent
    kwargs = openai_client.chat.completions.parse.call_args.kwargs
    assert kwargs["response_format"] is ChatIntent
    assert kwargs["temperature"] == 0


def test_parse_intent_without_parsed_output(openai_client):
    openai_client.chat.completions.parse.return_value = completion(parsed=None)

    with pytest.raises(AssistantError):
        StoreAssistant(client=openai_client).parse_intent("p", "???")
