from .controller import ERROR_REPLY, GREETING, PLACEHOLDER, ChatController
from .models import ChatView, ExchangeState, Message, Role
from .prompt import ADVICE_INSTRUCTION, build_prompt

__all__ = [
    "ADVICE_INSTRUCTION",
    "ERROR_REPLY",
    "GREETING",
    "PLACEHOLDER",
    "ChatController",
    "ChatView",
    "ExchangeState",
    "Message",
    "Role",
    "build_prompt",
]
