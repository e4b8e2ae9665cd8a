"""Tests for LiteLLM generator (all mocked, no real API calls)."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from sigil_canvas.exceptions import GenerationError
from sigil_canvas.generators.litellm_generator import (
    DEFAULT_MODEL,
    LiteLLMGenerator,
    _extract_provider,
)

LITELLM = "sigil_canvas.generators.litellm_generator.litellm"

# ---------------------------------------------------------------------------
# Mock helpers
# ---------------------------------------------------------------------------


def _mock_response(content="Hello!", prompt_tokens=100, completion_tokens=20):
    """Create a mock LiteLLM ModelResponse (OpenAI-compatible)."""
    usage = SimpleNamespace(
        prompt_tokens=prompt_tokens,
        completion_tokens=completion_tokens,
        total_tokens=prompt_tokens + completion_tokens,
    )
    message = SimpleNamespace(content=content, tool_calls=None)
    choice = SimpleNamespace(message=message, finish_reason="stop")
    return SimpleNamespace(id="chatcmpl-test", choices=[choice], usage=usage)


def _mock_litellm(response=None, error=None):
    mock_litellm = MagicMock()
    if error is not None:
        mock_litellm.acompletion = AsyncMock(side_effect=error)
    else:
        mock_litellm.acompletion = AsyncMock(return_value=response or _mock_response())
    return mock_litellm


# ---------------------------------------------------------------------------
# _extract_provider
# ---------------------------------------------------------------------------


class TestExtractProvider:
    def test_gemini_prefix(self):
        assert _extract_provider("gemini/gemini-1.5-flash") == "gemini"

    def test_anthropic_prefix(self):
        assert _extract_provider("anthropic/claude-3-opus") == "anthropic"

    def test_bedrock_prefix(self):
        assert _extract_provider("bedrock/anthropic.claude-v2") == "bedrock"

    def test_bare_model_defaults_openai(self):
        assert _extract_provider("gpt-4o") == "openai"

    def test_empty_string(self):
        assert _extract_provider("") == "openai"


# ---------------------------------------------------------------------------
# LiteLLMGenerator
# ---------------------------------------------------------------------------


class TestLiteLLMGenerator:
    def test_default_model(self):
        gen = LiteLLMGenerator()
        assert gen.model == DEFAULT_MODEL == "gemini/gemini-1.5-flash"
        assert gen.provider == "gemini"

    @pytest.mark.asyncio
    async def test_generate_returns_text(self):
        mock_litellm = _mock_litellm(_mock_response(content="A crimson moon rises."))
        with patch(LITELLM, mock_litellm):
            text = await LiteLLMGenerator().generate("Describe the moon")
        assert text == "A crimson moon rises."

    @pytest.mark.asyncio
    async def test_sends_single_user_message(self):
        mock_litellm = _mock_litellm()
        with patch(LITELLM, mock_litellm):
            await LiteLLMGenerator(model="anthropic/claude-3-opus").generate("hi")
        mock_litellm.acompletion.assert_awaited_once_with(
            model="anthropic/claude-3-opus",
            messages=[{"role": "user", "content": "hi"}],
        )

    @pytest.mark.asyncio
    async def test_passes_api_key_and_timeout(self):
        mock_litellm = _mock_litellm()
        with patch(LITELLM, mock_litellm):
            await LiteLLMGenerator(api_key="sk-test", timeout=12.0).generate("hi")
        kwargs = mock_litellm.acompletion.call_args.kwargs
        assert kwargs["api_key"] == "sk-test"
        assert kwargs["timeout"] == 12.0

    @pytest.mark.asyncio
    async def test_records_trace(self):
        mock_litellm = _mock_litellm(_mock_response(prompt_tokens=7, completion_tokens=3))
        gen = LiteLLMGenerator()
        with patch(LITELLM, mock_litellm):
            await gen.generate("Describe the knight")
        trace = gen.last_trace
        assert trace.provider == "gemini"
        assert trace.model == DEFAULT_MODEL
        assert trace.prompt == "Describe the knight"
        assert trace.response == "Hello!"
        assert trace.usage == {"prompt_tokens": 7, "completion_tokens": 3, "total_tokens": 10}
        assert trace.latency_ms >= 0
        assert trace.timestamp
        assert len(trace.session_id) == 8
        assert trace.ok

    @pytest.mark.asyncio
    async def test_no_usage(self):
        response = _mock_response()
        response.usage = None
        gen = LiteLLMGenerator()
        with patch(LITELLM, _mock_litellm(response)):
            await gen.generate("hi")
        assert gen.last_trace.usage == {}

    @pytest.mark.asyncio
    async def test_provider_error_propagates_and_is_traced(self):
        mock_litellm = _mock_litellm(error=ConnectionError("network down"))
        gen = LiteLLMGenerator()
        with patch(LITELLM, mock_litellm):
            with pytest.raises(ConnectionError):
                await gen.generate("hi")
        assert not gen.last_trace.ok
        assert "network down" in gen.last_trace.error

    @pytest.mark.asyncio
    async def test_malformed_response_raises_generation_error(self):
        with patch(LITELLM, _mock_litellm(SimpleNamespace(choices=[]))):
            with pytest.raises(GenerationError):
                await LiteLLMGenerator().generate("hi")

    @pytest.mark.asyncio
    async def test_empty_content_raises_generation_error(self):
        with patch(LITELLM, _mock_litellm(_mock_response(content=None))):
            with pytest.raises(GenerationError):
                await LiteLLMGenerator().generate("hi")
