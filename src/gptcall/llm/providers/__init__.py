"""Built-in LLM providers."""

from gptcall.llm.providers.base import (
    ChatMessage,
    Choice,
    CompletionRequest,
    CompletionResponse,
    LLMProvider,
)
from gptcall.llm.providers.openai_chat import OpenAIChatProvider

__all__ = [
    "ChatMessage",
    "Choice",
    "CompletionRequest",
    "CompletionResponse",
    "LLMProvider",
    "OpenAIChatProvider",
]
