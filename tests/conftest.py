from __future__ import annotations

import pytest

from gptcall.config import CompletionConfig


@pytest.fixture
def config() -> CompletionConfig:
    return CompletionConfig(api_key="sk-test", api_org="org-test")
