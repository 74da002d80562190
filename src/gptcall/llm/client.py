"""Completion client.

`CompletionClient.complete()` performs exactly one request/response cycle
against the chat-completions endpoint and returns the assistant's reply text.
It raises a `CallError` subclass on failure and never retries.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Callable, Optional, Sequence

import requests

from gptcall.config import CompletionConfig
from gptcall.llm.providers.base import ChatMessage, LLMProvider
from gptcall.llm.providers.openai_chat import CHAT_COMPLETIONS_URL, OpenAIChatProvider


logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4"
# Low temperature keeps answers consistent rather than exploratory.
DEFAULT_TEMPERATURE = 0.1


class CompletionClient:
    def __init__(
        self,
        config: CompletionConfig,
        url: str = CHAT_COMPLETIONS_URL,
        session_factory: Callable[[], Any] = requests.Session,
    ):
        self.config = config
        self.url = url
        self.session_factory = session_factory
        self.provider: LLMProvider = self._new_provider()

    def _new_provider(self) -> OpenAIChatProvider:
        return OpenAIChatProvider(
            api_key=self.config.api_key,
            api_org=self.config.api_org,
            url=self.url,
            session_factory=self.session_factory,
        )

    @classmethod
    def from_env(cls, project_root: Optional[str | Path] = None) -> "CompletionClient":
        """Load `.env` (if any), resolve both secrets and build the client.

        Raises `ConfigurationError` when a secret is missing.
        """
        return cls(CompletionConfig.from_env(project_root=project_root))

    def complete(self, messages: Sequence[ChatMessage]) -> str:
        """Send `messages` (non-empty, in turn order) and return the reply text."""
        return self._complete_with(self.provider, messages)

    def _complete_with(self, provider: LLMProvider, messages: Sequence[ChatMessage]) -> str:
        logger.info("Calling chat completions model=%s", DEFAULT_MODEL)
        text = provider.chat(
            messages=messages,
            model=DEFAULT_MODEL,
            temperature=DEFAULT_TEMPERATURE,
            timeout_s=self.config.timeout_s,
        )
        logger.debug("Completion response len=%d", len(text))
        return text

    async def acomplete(self, messages: Sequence[ChatMessage]) -> str:
        """Like `complete`, but run in a worker thread.

        `requests.Session` is not documented as thread-safe, so each call uses
        its own session instead of the cached one.
        """
        return await asyncio.to_thread(self._complete_isolated, list(messages))

    def _complete_isolated(self, messages: Sequence[ChatMessage]) -> str:
        provider = self._new_provider()
        try:
            return self._complete_with(provider, messages)
        finally:
            provider.close()

    def close(self) -> None:
        close = getattr(self.provider, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> "CompletionClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
