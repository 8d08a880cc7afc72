"""
Tests for the OpenAI Completion Client
"""
import logging
import pytest
import httpx
import openai
from types import SimpleNamespace
from unittest.mock import Mock, AsyncMock

from vibesana.exceptions import ProviderError
from vibesana.llm_client import OpenAICompletionClient
from vibesana.prompts import Prompts


OPENAI_URL = "https://api.openai.com/v1/chat/completions"


def make_response(content, finish_reason="stop", usage=True):
    return SimpleNamespace(
        model="gpt-4o-mini-2024-07-18",
        choices=[SimpleNamespace(message=SimpleNamespace(content=content), finish_reason=finish_reason)],
        usage=SimpleNamespace(prompt_tokens=120, completion_tokens=340, total_tokens=460) if usage else None
    )


def make_status_error(status_code, body_text):
    request = httpx.Request("POST", OPENAI_URL)
    response = httpx.Response(status_code, text=body_text, request=request)
    return openai.APIStatusError(f"Error code: {status_code}", response=response, body={"error": body_text})


@pytest.fixture
def mock_openai():
    """Mock AsyncOpenAI client"""
    client = Mock()
    client.chat.completions.create = AsyncMock(return_value=make_response('[{"title": "A", "priority": "low"}]'))
    return client


@pytest.fixture
def completion_client(mock_openai):
    return OpenAICompletionClient(api_key="sk-test", client=mock_openai)


class TestOpenAICompletionClient:
    """Test cases for OpenAICompletionClient"""

    @pytest.mark.asyncio
    async def test_complete_returns_text_and_usage(self, completion_client):
        """Test the raw assistant text and token usage are returned"""
        result = await completion_client.complete(Prompts.build_breakdown_messages("Build a login page"))

        assert result.text == '[{"title": "A", "priority": "low"}]'
        assert result.finish_reason == "stop"
        assert result.model == "gpt-4o-mini-2024-07-18"
        assert result.usage.prompt_tokens == 120
        assert result.usage.completion_tokens == 340
        assert result.usage.total_tokens == 460

    @pytest.mark.asyncio
    async def test_request_parameters(self, completion_client, mock_openai):
        """Test model, sampling and token budget are sent with the messages"""
        messages = Prompts.build_breakdown_messages("Build a login page")
        await completion_client.complete(messages)

        mock_openai.chat.completions.create.assert_awaited_once_with(
            model="gpt-4o-mini",
            messages=messages,
            temperature=0.7,
            max_tokens=1000
        )

    @pytest.mark.asyncio
    async def test_missing_usage(self, completion_client, mock_openai):
        """Test usage is optional"""
        mock_openai.chat.completions.create.return_value = make_response("[]", usage=False)
        result = await completion_client.complete([])

        assert result.usage is None

    @pytest.mark.asyncio
    async def test_null_content_becomes_empty_string(self, completion_client, mock_openai):
        """Test a None message content is normalized to an empty string"""
        mock_openai.chat.completions.create.return_value = make_response(None)
        result = await completion_client.complete([])

        assert result.text == ""

    @pytest.mark.asyncio
    async def test_truncated_response_is_returned(self, completion_client, mock_openai, caplog):
        """Test finish_reason=length is logged but the text is still returned"""
        mock_openai.chat.completions.create.return_value = make_response('[{"title": "A"', finish_reason="length")

        with caplog.at_level(logging.WARNING, logger="vibesana.llm_client"):
            result = await completion_client.complete([])

        assert result.text == '[{"title": "A"'
        assert "truncated" in caplog.text

    @pytest.mark.asyncio
    async def test_rate_limit_raises_provider_error(self, completion_client, mock_openai, caplog):
        """Test a 429 becomes a ProviderError and the status is logged"""
        mock_openai.chat.completions.create.side_effect = make_status_error(429, "Rate limit reached for gpt-4o-mini")

        with caplog.at_level(logging.ERROR, logger="vibesana.llm_client"):
            with pytest.raises(ProviderError) as exc_info:
                await completion_client.complete([])

        assert exc_info.value.status_code == 429
        assert exc_info.value.body == "Rate limit reached for gpt-4o-mini"
        assert str(exc_info.value) == "OpenAI API error: 429"
        assert "status=429" in caplog.text
        assert "Rate limit reached" in caplog.text

    @pytest.mark.asyncio
    async def test_provider_body_not_in_message(self, completion_client, mock_openai):
        """Test the caller-facing message never includes the provider body"""
        mock_openai.chat.completions.create.side_effect = make_status_error(500, "internal upstream detail")

        with pytest.raises(ProviderError) as exc_info:
            await completion_client.complete([])

        assert "internal upstream detail" not in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_timeout_raises_provider_error(self, completion_client, mock_openai):
        """Test a timed out request becomes a ProviderError without status"""
        mock_openai.chat.completions.create.side_effect = openai.APITimeoutError(request=httpx.Request("POST", OPENAI_URL))

        with pytest.raises(ProviderError) as exc_info:
            await completion_client.complete([])

        assert exc_info.value.status_code is None
        assert "timed out" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_connection_error_raises_provider_error(self, completion_client, mock_openai):
        """Test a connection failure becomes a ProviderError"""
        mock_openai.chat.completions.create.side_effect = openai.APIConnectionError(request=httpx.Request("POST", OPENAI_URL))

        with pytest.raises(ProviderError) as exc_info:
            await completion_client.complete([])

        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_single_attempt(self, completion_client, mock_openai):
        """Test failures are not retried"""
        mock_openai.chat.completions.create.side_effect = make_status_error(503, "overloaded")

        with pytest.raises(ProviderError):
            await completion_client.complete([])

        assert mock_openai.chat.completions.create.await_count == 1

    @pytest.mark.asyncio
    async def test_no_choices_raises_provider_error(self, completion_client, mock_openai):
        """Test an empty choices list is a provider failure"""
        mock_openai.chat.completions.create.return_value = SimpleNamespace(model="gpt-4o-mini", choices=[], usage=None)

        with pytest.raises(ProviderError):
            await completion_client.complete([])

    def test_default_sdk_client_disables_retries(self):
        """Test the SDK client is built with a deadline and no retries"""
        client = OpenAICompletionClient(api_key="sk-test", timeout=12.5)

        assert isinstance(client.client, openai.AsyncOpenAI)
        assert client.client.max_retries == 0
        assert client.client.timeout == 12.5

    def test_from_config(self, mock_openai):
        """Test construction from Config.get_llm_config()"""
        client = OpenAICompletionClient.from_config({
            'api_key': 'sk-test',
            'model': 'gpt-4o',
            'temperature': 0.2,
            'max_tokens': 500,
            'timeout': 10.0,
            'base_url': None
        })

        assert client.model == "gpt-4o"
        assert client.temperature == 0.2
        assert client.max_tokens == 500
        assert client.timeout == 10.0
