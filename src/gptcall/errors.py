"""Error taxonomy.

`ConfigurationError` means the process was not launched correctly and is kept
apart from `CallError`, which covers everything that can go wrong in a single
request/response cycle.
"""

from __future__ import annotations

from typing import Optional


class ConfigurationError(RuntimeError):
    """A required secret could not be resolved."""

    def __init__(self, variable: str, message: Optional[str] = None):
        self.variable = variable
        super().__init__(message or f"{variable} not found in environment or .env")


class CallError(Exception):
    """Base class for failures of one completion call."""


class InvalidCredentialEncodingError(CallError):
    def __init__(self, header: str):
        self.header = header
        super().__init__(f"Value for header '{header}' is not a valid HTTP header value")


class TransportError(CallError):
    """The endpoint could not be reached (DNS, refused, timeout, TLS)."""


class DecodeError(CallError):
    def __init__(self, detail: str, status_code: Optional[int] = None):
        self.detail = detail
        self.status_code = status_code
        prefix = f"HTTP {status_code}: " if status_code is not None else ""
        super().__init__(prefix + detail)


class EmptyChoicesError(CallError):
    def __init__(self) -> None:
        super().__init__("Response contained no choices")
