"""Anthropic Claude advisory gateway.

Uses the official Anthropic Python SDK for async message creation.
Reference: https://github.com/anthropics/anthropic-sdk-python
"""

from collections.abc import Sequence
from typing import Any

from anthropic import AnthropicError, AsyncAnthropic

from ..chat.models import Message
from ..errors import GatewayError
from .base import AgentGateway


class AnthropicGateway(AgentGateway):
    """Advisory backend on the Anthropic Messages API.

    Hidden design decisions:
    - Anthropic API client initialization
    - Message format conversion (system prompt is a request field, not a message)
    - Mapping of SDK errors to GatewayError
    """

    def __init__(
        self,
        api_key: str,
        model: str = "claude-sonnet-4-20250514",
        base_url: str | None = None,
        system_prompt: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 4096,
        **client_kwargs: Any
    ):
        """Initialize Anthropic gateway.

        Args:
            api_key: Anthropic API key
            model: Model to use
            base_url: Optional custom API base URL
            system_prompt: Advisor instructions sent as the system field
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate (required by the API)
            **client_kwargs: Additional kwargs for AsyncAnthropic client
        """
        self._model = model
        self._system_prompt = system_prompt
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._client = AsyncAnthropic(
            api_key=api_key,
            base_url=base_url,
            **client_kwargs
        )

    @property
    def name(self) -> str:
        return "anthropic"

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    async def ask(self, context: Sequence[Message]) -> str:
        """Ask Claude for the next reply."""
        request_params: dict[str, Any] = {
            "model": self._model,
            "messages": [
                {"role": "user" if msg.is_user else "assistant", "content": msg.content}
                for msg in context
            ],
            "temperature": self._temperature,
            "max_tokens": self._max_tokens,
        }
        if self._system_prompt:
            request_params["system"] = self._system_prompt

        try:
            response = await self._client.messages.create(**request_params)
        except AnthropicError as e:
            raise GatewayError(str(e), gateway=self.name) from e

        # Concatenate text blocks; other block types carry no reply text
        content = "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )
        if not content:
            raise GatewayError("response has no text content", gateway=self.name)
        return content

    async def close(self) -> None:
        """Close the Anthropic client."""
        await self._client.close()
