from .base import ChatSession, LLMProvider
from .factory import create_llm_provider
from .models import StreamingResponse, TokenUsage
from .providers import GeminiChatSession, GeminiProvider

__all__ = [
    "ChatSession",
    "LLMProvider",
    "create_llm_provider",
    "StreamingResponse",
    "TokenUsage",
    "GeminiChatSession",
    "GeminiProvider",
]
