"""Tests for LLMProvider."""

from unittest.mock import AsyncMock, Mock, patch

import pytest

from insurebot.errors import UpstreamError
from insurebot.llm import LLMProvider
from insurebot.llm.llm_provider import reply_text


def make_client(text="Test response"):
    mock_client = Mock()
    mock_response = Mock()
    mock_response.content = [Mock(text=text)]
    mock_client.messages.create = AsyncMock(return_value=mock_response)
    return mock_client


class TestLLMProviderInit:
    """Tests for LLMProvider initialization."""

    def test_init_with_api_key(self, monkeypatch):
        """Test initialization with API key."""
        monkeypatch.setenv("ANTHROPIC_API_KEY", "test_key")

        with patch("insurebot.llm.llm_provider.anthropic.AsyncAnthropic"):
            provider = LLMProvider()
            assert provider is not None

    def test_init_without_api_key(self, monkeypatch):
        """Test initialization without API key raises error."""
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)

        with patch("insurebot.llm.llm_provider.anthropic.AsyncAnthropic"):
            with pytest.raises(ValueError):
                LLMProvider()

    def test_model_from_env(self, monkeypatch):
        """Test that ANTHROPIC_MODEL overrides the default model."""
        monkeypatch.setenv("ANTHROPIC_API_KEY", "test_key")
        monkeypatch.setenv("ANTHROPIC_MODEL", "claude-test")
        mock_client = make_client()

        with patch(
            "insurebot.llm.llm_provider.anthropic.AsyncAnthropic",
            return_value=mock_client,
        ):
            provider = LLMProvider()

        assert provider._model == "claude-test"


class TestLLMProviderComplete:
    """Tests for LLMProvider.complete() method."""

    @pytest.mark.asyncio
    async def test_complete_returns_response(self, monkeypatch):
        """Test that complete() returns LLM response."""
        monkeypatch.setenv("ANTHROPIC_API_KEY", "test_key")
        mock_client = make_client()

        with patch(
            "insurebot.llm.llm_provider.anthropic.AsyncAnthropic",
            return_value=mock_client,
        ):
            provider = LLMProvider()
            response = await provider.complete(
                messages=[{"role": "user", "content": "Hello"}]
            )

            assert response == "Test response"

    @pytest.mark.asyncio
    async def test_complete_sends_correct_format(self, monkeypatch):
        """Test that complete() sends correct format to API."""
        monkeypatch.setenv("ANTHROPIC_API_KEY", "test_key")
        monkeypatch.delenv("ANTHROPIC_MODEL", raising=False)
        mock_client = make_client("Response")

        with patch(
            "insurebot.llm.llm_provider.anthropic.AsyncAnthropic",
            return_value=mock_client,
        ):
            provider = LLMProvider()
            await provider.complete(
                messages=[
                    {"role": "user", "content": "Hello"},
                    {"role": "assistant", "content": "Hi"},
                ],
                system="You are helpful",
                max_tokens=2048,
            )

            mock_client.messages.create.assert_called_once()
            call_args = mock_client.messages.create.call_args

            assert call_args.kwargs["model"] == "claude-3-5-sonnet-20241022"
            assert call_args.kwargs["max_tokens"] == 2048
            assert call_args.kwargs["system"] == "You are helpful"
            assert len(call_args.kwargs["messages"]) == 2

    @pytest.mark.asyncio
    async def test_complete_with_default_params(self, monkeypatch):
        """Test complete() with default parameters."""
        monkeypatch.setenv("ANTHROPIC_API_KEY", "test_key")
        mock_client = make_client("Default response")

        with patch(
            "insurebot.llm.llm_provider.anthropic.AsyncAnthropic",
            return_value=mock_client,
        ):
            provider = LLMProvider()
            response = await provider.complete(
                messages=[{"role": "user", "content": "Test"}]
            )

            assert response == "Default response"
            call_args = mock_client.messages.create.call_args
            assert call_args.kwargs["max_tokens"] == 1024  # default
            assert "system" not in call_args.kwargs

    @pytest.mark.asyncio
    async def test_complete_wraps_errors(self, monkeypatch):
        """Test that API errors surface as UpstreamError."""
        monkeypatch.setenv("ANTHROPIC_API_KEY", "test_key")

        mock_client = Mock()
        mock_client.messages.create = AsyncMock(
            side_effect=Exception("API Error")
        )

        with patch(
            "insurebot.llm.llm_provider.anthropic.AsyncAnthropic",
            return_value=mock_client,
        ):
            provider = LLMProvider()

            with pytest.raises(UpstreamError, match="API Error"):
                await provider.complete(
                    messages=[{"role": "user", "content": "Test"}]
                )

    @pytest.mark.asyncio
    async def test_complete_empty_reply_is_error(self, monkeypatch):
        """Test that an empty reply is treated as a failure."""
        monkeypatch.setenv("ANTHROPIC_API_KEY", "test_key")
        mock_client = make_client("   ")

        with patch(
            "insurebot.llm.llm_provider.anthropic.AsyncAnthropic",
            return_value=mock_client,
        ):
            provider = LLMProvider()

            with pytest.raises(UpstreamError):
                await provider.complete(messages=[])


class TestLLMProviderGenerate:
    """Tests for LLMProvider.generate()."""

    @pytest.mark.asyncio
    async def test_generate_sends_instruction_pair(self, monkeypatch):
        """Test that generate() maps instructions to system and user turn."""
        monkeypatch.setenv("ANTHROPIC_API_KEY", "test_key")
        mock_client = make_client("Please send your passport")

        with patch(
            "insurebot.llm.llm_provider.anthropic.AsyncAnthropic",
            return_value=mock_client,
        ):
            provider = LLMProvider()
            reply = await provider.generate("Be polite", "Ask for the passport")

        assert reply == "Please send your passport"
        call_args = mock_client.messages.create.call_args
        assert call_args.kwargs["system"] == "Be polite"
        assert call_args.kwargs["messages"] == [
            {"role": "user", "content": "Ask for the passport"}
        ]


class TestReplyText:
    """Tests for reply_text()."""

    def test_joins_text_blocks(self):
        """Test that text blocks are concatenated."""
        response = Mock(content=[Mock(text="Hello, "), Mock(text="world")])

        assert reply_text(response) == "Hello, world"

    def test_no_content(self):
        """Test that a reply without blocks fails."""
        with pytest.raises(UpstreamError):
            reply_text(Mock(content=[]))

    def test_no_text_blocks(self):
        """Test that non-text blocks alone fail."""
        block = Mock(spec=["type"])
        block.type = "tool_use"

        with pytest.raises(UpstreamError):
            reply_text(Mock(content=[block]))
