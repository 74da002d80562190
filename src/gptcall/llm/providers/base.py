"""Chat-completion wire model and provider interface.

Providers must implement `chat()` and return the assistant text.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from gptcall.errors import DecodeError


@dataclass(frozen=True)
class ChatMessage:
    role: str
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}

    @classmethod
    def from_dict(cls, data: Any) -> "ChatMessage":
        if not isinstance(data, Mapping):
            raise DecodeError(f"Expected message object, got {type(data).__name__}")
        role = data.get("role")
        content = data.get("content")
        if not isinstance(role, str) or not isinstance(content, str):
            raise DecodeError("Message requires string 'role' and 'content'")
        return cls(role=role, content=content)


@dataclass(frozen=True)
class CompletionRequest:
    model: str
    messages: Tuple[ChatMessage, ...]
    temperature: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [m.to_dict() for m in self.messages],
            "temperature": self.temperature,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "CompletionRequest":
        if not isinstance(data, Mapping):
            raise DecodeError("Expected request object")
        messages = data.get("messages")
        if not isinstance(messages, list):
            raise DecodeError("Request requires a 'messages' list")
        model = data.get("model")
        if not isinstance(model, str):
            raise DecodeError("Request requires a string 'model'")
        temperature = data.get("temperature")
        if isinstance(temperature, bool) or not isinstance(temperature, (int, float)):
            raise DecodeError("Request requires a numeric 'temperature'")
        return cls(
            model=model,
            messages=tuple(ChatMessage.from_dict(m) for m in messages),
            temperature=temperature,
        )


@dataclass(frozen=True)
class Choice:
    message: ChatMessage
    finish_reason: Optional[str] = None


@dataclass(frozen=True)
class CompletionResponse:
    """Decoded response. Fields other than `choices` are kept in `raw`."""

    choices: Tuple[Choice, ...]
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, data: Any) -> "CompletionResponse":
        if not isinstance(data, Mapping):
            raise DecodeError(f"Expected JSON object, got {type(data).__name__}")
        choices = data.get("choices")
        if not isinstance(choices, list):
            raise DecodeError("Response is missing the 'choices' list")
        decoded: List[Choice] = []
        for item in choices:
            if not isinstance(item, Mapping) or "message" not in item:
                raise DecodeError("Choice is missing 'message'")
            finish_reason = item.get("finish_reason")
            decoded.append(
                Choice(
                    message=ChatMessage.from_dict(item["message"]),
                    finish_reason=finish_reason if isinstance(finish_reason, str) else None,
                )
            )
        return cls(choices=tuple(decoded), raw=dict(data))


class LLMProvider(abc.ABC):
    @abc.abstractmethod
    def chat(
        self,
        messages: Sequence[ChatMessage],
        model: str,
        temperature: float,
        timeout_s: Optional[float] = None,
    ) -> str:
        raise NotImplementedError
