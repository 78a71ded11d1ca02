from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest

from chefai.agents.planner_agent import GeneratedPlan
from chefai.ai.utils import normalize_model_id, usable_api_key
from chefai.core.ai_client import AIClient, AIRequestError, is_rate_limit_error
from chefai.settings import PLACEHOLDER_API_KEY


@pytest.mark.parametrize("raw,expected", [
    ("gemini-2.5-flash", "gemini-2.5-flash"),
    ('"gemini-2.5-flash"', "gemini-2.5-flash"),
    ("model='gemini-2.5-flash'", "gemini-2.5-flash"),
    (' MODEL = "gemini-2.5-pro" ', "gemini-2.5-pro"),
    ("", ""),
])
def test_normalize_model_id(raw, expected):
    assert normalize_model_id(raw) == expected


def test_usable_api_key():
    assert usable_api_key(" abc ") == "abc"
    assert usable_api_key(PLACEHOLDER_API_KEY) is None
    assert usable_api_key("  ") is None
    assert usable_api_key(None) is None


def test_rate_limit_detection():
    assert is_rate_limit_error(SimpleNamespace(code=429))
    assert is_rate_limit_error(Exception("429 RESOURCE_EXHAUSTED"))
    assert is_rate_limit_error(Exception("Quota exceeded for model"))
    assert not is_rate_limit_error(Exception("connection reset"))


def make_client(generate):
    with patch("chefai.core.ai_client.genai.Client") as client_cls:
        client_cls.return_value.aio.models.generate_content = generate
        return AIClient("test-key", model='"gemini-2.5-flash"')


@pytest.mark.asyncio
async def test_generate_json_sends_schema():
    generate = AsyncMock(return_value=SimpleNamespace(text='{"days": []}'))
    client = make_client(generate)

    raw = await client.generate_json("plan please", response_schema=GeneratedPlan, system_instruction="rules")
    assert raw == '{"days": []}'

    kwargs = generate.await_args.kwargs
    assert kwargs["model"] == "gemini-2.5-flash"
    assert kwargs["config"].response_mime_type == "application/json"
    assert kwargs["config"].system_instruction == "rules"


@pytest.mark.asyncio
async def test_sdk_failure_is_wrapped():
    client = make_client(AsyncMock(side_effect=Exception("429 RESOURCE_EXHAUSTED")))

    with pytest.raises(AIRequestError) as excinfo:
        await client.generate_text("hi")

    assert excinfo.value.rate_limited is True
    assert client.last_error.startswith("Exception")


@pytest.mark.asyncio
async def test_empty_response_is_an_error():
    client = make_client(AsyncMock(return_value=SimpleNamespace(text="")))

    with pytest.raises(AIRequestError) as excinfo:
        await client.generate_text("hi")
    assert excinfo.value.rate_limited is False
