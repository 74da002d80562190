"""Caller-side retry policy.

`CompletionClient.complete()` makes a single attempt. Callers that want a
second try after a transport failure wrap the client here.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Sequence

import backoff

from gptcall.errors import TransportError
from gptcall.llm.client import CompletionClient
from gptcall.llm.providers.base import ChatMessage


logger = logging.getLogger(__name__)


def _log_retry(details: Dict[str, Any]) -> None:
    logger.warning(
        "Completion attempt %d failed, retrying in %.2fs",
        details["tries"],
        details["wait"],
    )


def with_retries(
    client: CompletionClient, max_tries: int = 2, factor: float = 0.5
) -> Callable[[Sequence[ChatMessage]], str]:
    """Return `complete` retried on `TransportError` with exponential backoff.

    Decode, empty-choice and credential errors propagate on the first attempt.
    """
    if max_tries < 1:
        raise ValueError("max_tries must be >= 1")

    @backoff.on_exception(
        backoff.expo,
        TransportError,
        max_tries=max_tries,
        factor=factor,
        jitter=None,
        on_backoff=_log_retry,
    )
    def _complete(messages: Sequence[ChatMessage]) -> str:
        return client.complete(messages)

    return _complete
