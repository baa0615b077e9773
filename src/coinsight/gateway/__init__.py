from .anthropic import AnthropicGateway
from .base import AgentGateway
from .factory import create_agent_gateway
from .http import HttpAgentGateway
from .openai import OpenAIGateway

__all__ = [
    "AgentGateway",
    "AnthropicGateway",
    "HttpAgentGateway",
    "OpenAIGateway",
    "create_agent_gateway",
]
