from __future__ import annotations

from typing import Any


class _FakeResponse:
    def __init__(self, status_code: int = 200, data: Any = None, text: str | None = None):
        self.status_code = status_code
        self._data = data
        self._text = text

    def json(self) -> Any:
        if self._text is not None:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._data


class _FakeSession:
    def __init__(self, responses: list[object]):
        self._responses = list(responses)
        self.headers: dict[str, str] = {}
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    def post(self, url: str, json: Any = None, timeout: Any = None) -> _FakeResponse:
        self.calls.append({"url": url, "json": json, "timeout": timeout})
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response  # type: ignore[return-value]

    def close(self) -> None:
        self.closed = True


def chat_body(*contents: str) -> dict[str, Any]:
    return {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "usage": {"prompt_tokens": 9, "completion_tokens": 2, "total_tokens": 11},
        "choices": [
            {
                "index": i,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
            for i, content in enumerate(contents)
        ],
    }


def make_session_factory(responses: list[object]):
    session = _FakeSession(responses)
    created: list[_FakeSession] = []

    def factory() -> _FakeSession:
        created.append(session)
        return session

    return factory, session, created
