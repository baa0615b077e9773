from typing import Any

from .anthropic import AnthropicGateway
from .base import AgentGateway
from .http import HttpAgentGateway
from .openai import OpenAIGateway

DEEPSEEK_BASE_URL = "https://api.deepseek.com"


def create_agent_gateway(kind: str, **config: Any) -> AgentGateway:
    """Create an advisory gateway instance.

    This factory function hides the instantiation logic for different backends.

    Args:
        kind: Gateway type ('openai', 'deepseek', 'anthropic', 'http')
        **config: Gateway-specific configuration
            For OpenAI:
                - api_key: str (required)
                - model: str (default: 'gpt-4o-mini')
                - base_url: str | None
                - system_prompt: str | None
            For DeepSeek:
                - api_key: str (required)
                - model: str (default: 'deepseek-chat')
                - base_url: str (default: 'https://api.deepseek.com')
            For Anthropic (Claude):
                - api_key: str (required)
                - model: str (default: 'claude-sonnet-4-20250514')
                - system_prompt: str | None
            For HTTP:
                - url: str (required)
                - timeout: float (default: 60.0)

    Returns:
        Initialized gateway instance

    Raises:
        ValueError: If the gateway type is not supported
        TypeError: If required configuration is missing

    Examples:
        >>> gateway = create_agent_gateway(
        ...     "http",
        ...     url="http://localhost:8000/chat"
        ... )
    """
    kind_lower = kind.lower()

    if kind_lower == "openai":
        if "api_key" not in config:
            raise TypeError("OpenAI gateway requires 'api_key' in config")
        return OpenAIGateway(**config)

    if kind_lower == "deepseek":
        if "api_key" not in config:
            raise TypeError("DeepSeek gateway requires 'api_key' in config")
        config.setdefault("model", "deepseek-chat")
        config.setdefault("base_url", DEEPSEEK_BASE_URL)
        return OpenAIGateway(name="deepseek", **config)

    if kind_lower in ("anthropic", "claude"):
        if "api_key" not in config:
            raise TypeError("Anthropic gateway requires 'api_key' in config")
        return AnthropicGateway(**config)

    if kind_lower == "http":
        if "url" not in config:
            raise TypeError("HTTP gateway requires 'url' in config")
        return HttpAgentGateway(**config)

    raise ValueError(
        f"Unsupported gateway: {kind}. "
        f"Supported gateways: 'openai', 'deepseek', 'anthropic', 'http'"
    )
