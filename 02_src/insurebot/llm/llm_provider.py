"""LLM Provider implementation using Anthropic Claude API."""

import os
from typing import Any, Protocol

import anthropic

from ..config import DEFAULT_MODEL
from ..errors import UpstreamError


class ILLMProvider(Protocol):
    """Abstraction for LLM access."""

    async def generate(self, system_instruction: str, user_instruction: str) -> str:
        """Generate a reply for one instruction pair. Raises UpstreamError."""
        ...


def reply_text(response: Any) -> str:
    """Concatenate the text blocks of a Messages API response."""
    blocks = getattr(response, "content", None)
    if not blocks:
        raise UpstreamError("LLM returned no content")

    parts = [
        block.text
        for block in blocks
        if isinstance(getattr(block, "text", None), str)
    ]
    if not parts:
        raise UpstreamError("LLM returned no text content")

    text = "".join(parts).strip()
    if not text:
        raise UpstreamError("LLM returned an empty message")
    return text


class LLMProvider:
    """Anthropic Claude API provider."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        max_tokens: int = 1024,
    ):
        self._api_key = api_key or os.getenv("ANTHROPIC_API_KEY")
        if not self._api_key:
            raise ValueError("ANTHROPIC_API_KEY environment variable not set")

        self._model = model or os.getenv("ANTHROPIC_MODEL", DEFAULT_MODEL)
        self._max_tokens = max_tokens
        self._client = anthropic.AsyncAnthropic(api_key=self._api_key)

    async def complete(
        self,
        messages: list[dict],  # [{"role": "user", "content": "..."}]
        system: str | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Generate completion using Claude API."""
        kwargs: dict[str, Any] = {
            "model": self._model,
            "messages": messages,
            "max_tokens": max_tokens or self._max_tokens,
        }
        if system:
            kwargs["system"] = system

        try:
            response = await self._client.messages.create(**kwargs)
        except Exception as e:
            raise UpstreamError(f"LLM API error: {e}") from e

        return reply_text(response)

    async def generate(self, system_instruction: str, user_instruction: str) -> str:
        """Generate a reply from a system instruction and one user turn."""
        return await self.complete(
            messages=[{"role": "user", "content": user_instruction}],
            system=system_instruction,
        )
