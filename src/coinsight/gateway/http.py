"""Gateway for a self-hosted advisory backend.

The backend exposes one RPC: it accepts an ordered list of
``{"role", "content"}`` entries and answers with the assistant text.
"""

from collections.abc import Sequence
from typing import Any

import httpx

from ..chat.models import Message
from ..errors import GatewayError
from .base import AgentGateway


def _extract_reply(payload: Any) -> str | None:
    """Pull the reply text out of the accepted response shapes."""
    if isinstance(payload, str):
        return payload
    if isinstance(payload, dict):
        for key in ("content", "reply"):
            value = payload.get(key)
            if isinstance(value, str):
                return value
    return None


class HttpAgentGateway(AgentGateway):
    """JSON-over-HTTP advisory backend.

    Request:  POST <url> {"messages": [{"role": "user" | "system", "content": "..."}]}
    Response: a JSON string, or an object with a "content" or "reply" string
    """

    def __init__(
        self,
        url: str,
        timeout: float = 60.0,
        headers: dict[str, str] | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize the gateway.

        Args:
            url: Backend chat endpoint
            timeout: Request timeout in seconds
            headers: Extra request headers
            http_client: Pre-built client (tests inject one with a mock transport)
        """
        self._url = url
        self._headers = headers or {}
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    @property
    def name(self) -> str:
        return "http"

    @property
    def url(self) -> str:
        return self._url

    async def ask(self, context: Sequence[Message]) -> str:
        """Post the conversation and return the backend's reply."""
        body = {
            "messages": [
                {"role": msg.role.value, "content": msg.content}
                for msg in context
            ]
        }
        try:
            resp = await self._client.post(self._url, json=body, headers=self._headers)
        except httpx.HTTPError as e:
            raise GatewayError(f"request failed: {e}", gateway=self.name) from e

        if not resp.is_success:
            raise GatewayError(f"HTTP {resp.status_code}", gateway=self.name)

        try:
            payload = resp.json()
        except ValueError as e:
            raise GatewayError(f"invalid JSON: {e}", gateway=self.name) from e

        reply = _extract_reply(payload)
        if reply is None:
            raise GatewayError("response has no reply text", gateway=self.name)
        return reply

    async def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()
