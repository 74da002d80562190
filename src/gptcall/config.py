"""Configuration loader.

Two secrets are required: the API key (`OPEN_AI_KEY`) and the organization
identifier (`OPEN_AI_ORG`). They are resolved once, into a `CompletionConfig`,
before any client exists.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path
from typing import Mapping, Optional

from gptcall.errors import ConfigurationError
from gptcall.utils.env import load_project_dotenv


API_KEY_ENV = "OPEN_AI_KEY"
API_ORG_ENV = "OPEN_AI_ORG"


@dataclass(frozen=True)
class CompletionConfig:
    """Credentials and transport options for the completions endpoint."""

    api_key: str = field(repr=False)
    api_org: str
    timeout_s: Optional[float] = None

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        project_root: Optional[str | Path] = None,
        timeout_s: Optional[float] = None,
    ) -> "CompletionConfig":
        if environ is None:
            load_project_dotenv(Path(project_root) if project_root else Path.cwd())
            environ = os.environ
        return cls(
            api_key=_require(environ, API_KEY_ENV),
            api_org=_require(environ, API_ORG_ENV),
            timeout_s=timeout_s,
        )


def _require(environ: Mapping[str, str], name: str) -> str:
    value = environ.get(name)
    if value is None or value == "":
        raise ConfigurationError(name)
    return value
