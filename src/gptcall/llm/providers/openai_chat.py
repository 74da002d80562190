"""OpenAI chat-completions HTTP provider.

Posts to `POST https://api.openai.com/v1/chat/completions` with the
organization header set. One attempt per call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import threading
from typing import Any, Callable, Dict, Optional, Sequence

import requests

from gptcall.errors import (
    DecodeError,
    EmptyChoicesError,
    InvalidCredentialEncodingError,
    TransportError,
)
from gptcall.llm.providers.base import (
    ChatMessage,
    CompletionRequest,
    CompletionResponse,
    LLMProvider,
)


logger = logging.getLogger(__name__)

CHAT_COMPLETIONS_URL = "https://api.openai.com/v1/chat/completions"
ORGANIZATION_HEADER = "OpenAI-Organization"


def is_valid_header_value(value: str) -> bool:
    """Tab and visible ASCII only, and no leading space or tab."""
    if value[:1] in (" ", "\t"):
        return False
    return all(ch == "\t" or 0x20 <= ord(ch) <= 0x7E for ch in value)


def build_default_headers(api_key: str, api_org: str) -> Dict[str, str]:
    headers = {
        "authorization": f"Bearer {api_key}",
        ORGANIZATION_HEADER: api_org,
    }
    for name, value in headers.items():
        if not is_valid_header_value(value):
            raise InvalidCredentialEncodingError(name)
    return headers


def _error_message(data: Any) -> Optional[str]:
    if isinstance(data, dict) and isinstance(data.get("error"), dict):
        message = data["error"].get("message")
        if isinstance(message, str):
            return message
    return None


@dataclass
class OpenAIChatProvider(LLMProvider):
    api_key: str = field(repr=False)
    api_org: str
    url: str = CHAT_COMPLETIONS_URL
    session_factory: Callable[[], Any] = requests.Session
    _session: Any = field(default=None, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def _get_session(self) -> Any:
        with self._lock:
            if self._session is None:
                headers = build_default_headers(self.api_key, self.api_org)
                session = self.session_factory()
                session.headers.update(headers)
                self._session = session
            return self._session

    def close(self) -> None:
        with self._lock:
            if self._session is not None:
                self._session.close()
                self._session = None

    def send(
        self, request: CompletionRequest, timeout_s: Optional[float] = None
    ) -> CompletionResponse:
        session = self._get_session()
        logger.debug(
            "POST %s model=%s messages=%d", self.url, request.model, len(request.messages)
        )
        try:
            resp = session.post(self.url, json=request.to_dict(), timeout=timeout_s)
        except requests.RequestException as exc:
            raise TransportError(f"{type(exc).__name__}: {exc}") from exc

        status = resp.status_code
        try:
            data = resp.json()
        except ValueError as exc:
            raise DecodeError(f"Response body is not valid JSON: {exc}", status) from exc

        try:
            return CompletionResponse.from_dict(data)
        except DecodeError as exc:
            message = _error_message(data)
            detail = f"{exc.detail} ({message})" if message else exc.detail
            raise DecodeError(detail, status) from exc

    def chat(
        self,
        messages: Sequence[ChatMessage],
        model: str,
        temperature: float,
        timeout_s: Optional[float] = None,
    ) -> str:
        request = CompletionRequest(
            model=model, messages=tuple(messages), temperature=temperature
        )
        response = self.send(request, timeout_s=timeout_s)
        if not response.choices:
            raise EmptyChoicesError()
        return response.choices[0].message.content
