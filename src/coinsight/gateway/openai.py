from collections.abc import Sequence
from typing import Any

from openai import AsyncOpenAI, OpenAIError

from ..chat.models import Message
from ..errors import GatewayError
from .base import AgentGateway


def _to_chat_messages(
    context: Sequence[Message],
    system_prompt: str | None
) -> list[dict[str, str]]:
    """Convert transcript messages to Chat Completions format.

    Transcript system entries are previous advisor replies, so they are sent
    with the 'assistant' role; the advisor instructions go first as 'system'.
    """
    chat_messages = []
    if system_prompt:
        chat_messages.append({"role": "system", "content": system_prompt})
    for msg in context:
        chat_messages.append({
            "role": "user" if msg.is_user else "assistant",
            "content": msg.content
        })
    return chat_messages


class OpenAIGateway(AgentGateway):
    """Advisory backend on the OpenAI Chat Completions API.

    Also serves OpenAI-compatible endpoints (DeepSeek) through ``base_url``.

    Hidden design decisions:
    - OpenAI API client initialization
    - Message format conversion
    - Mapping of SDK errors to GatewayError
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str | None = None,
        organization: str | None = None,
        system_prompt: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        name: str = "openai",
        **client_kwargs: Any
    ):
        """Initialize OpenAI gateway.

        Args:
            api_key: API key
            model: Chat model to use
            base_url: Optional custom API base URL
            organization: Optional organization ID
            system_prompt: Advisor instructions prepended to every request
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate (None for backend default)
            name: Identifier used in logs
            **client_kwargs: Additional kwargs for AsyncOpenAI client
        """
        self._model = model
        self._system_prompt = system_prompt
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._name = name
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            organization=organization,
            **client_kwargs
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._model

    async def ask(self, context: Sequence[Message]) -> str:
        """Ask the chat model for the next reply.

        Args:
            context: Conversation ending with the newest user prompt

        Returns:
            Reply text

        Raises:
            GatewayError: If the request fails or the reply is empty
        """
        request_params: dict[str, Any] = {
            "model": self._model,
            "messages": _to_chat_messages(context, self._system_prompt),
            "temperature": self._temperature,
        }
        if self._max_tokens is not None:
            request_params["max_tokens"] = self._max_tokens

        try:
            completion = await self._client.chat.completions.create(**request_params)
        except OpenAIError as e:
            raise GatewayError(str(e), gateway=self._name) from e

        if not completion.choices:
            raise GatewayError("response has no choices", gateway=self._name)
        content = completion.choices[0].message.content
        if not content:
            raise GatewayError("response has no content", gateway=self._name)
        return content

    async def close(self) -> None:
        """Close the OpenAI client."""
        await self._client.close()
