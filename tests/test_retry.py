from __future__ import annotations

import pytest
import requests

from _fakes import _FakeResponse, chat_body, make_session_factory
from gptcall.config import CompletionConfig
from gptcall.errors import DecodeError, TransportError
from gptcall.llm.client import CompletionClient
from gptcall.llm.providers.base import ChatMessage
from gptcall.retry import with_retries


MESSAGES = [ChatMessage(role="user", content="hi")]


def _client(config: CompletionConfig, responses: list[object]):
    factory, session, _ = make_session_factory(responses)
    return CompletionClient(config, session_factory=factory), session


def test_retries_transport_failure_then_succeeds(config: CompletionConfig) -> None:
    client, session = _client(
        config,
        [requests.ConnectionError("refused"), _FakeResponse(data=chat_body("second try"))],
    )
    complete = with_retries(client, max_tries=2, factor=0)
    assert complete(MESSAGES) == "second try"
    assert len(session.calls) == 2


def test_gives_up_after_max_tries(config: CompletionConfig) -> None:
    client, session = _client(
        config,
        [requests.ConnectionError("refused"), requests.ConnectionError("refused")],
    )
    with pytest.raises(TransportError):
        with_retries(client, max_tries=2, factor=0)(MESSAGES)
    assert len(session.calls) == 2


def test_decode_errors_are_not_retried(config: CompletionConfig) -> None:
    client, session = _client(
        config,
        [_FakeResponse(data={"unexpected": True}), _FakeResponse(data=chat_body("never"))],
    )
    with pytest.raises(DecodeError):
        with_retries(client, max_tries=3, factor=0)(MESSAGES)
    assert len(session.calls) == 1


def test_max_tries_must_be_positive(config: CompletionConfig) -> None:
    client, _ = _client(config, [])
    with pytest.raises(ValueError):
        with_retries(client, max_tries=0)
