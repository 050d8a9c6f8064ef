"""Completion failure taxonomy.

Every failure of a completion call is one of these. ``str()`` of any of them is
safe to show a user: credentials are redacted and raw response bodies are kept
off the message.
"""

from __future__ import annotations

from typing import Optional


class CompletionError(Exception):
    kind: str = "completion"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TransportError(CompletionError):
    """The request never produced a response (DNS, refused, TLS, timeout)."""

    kind = "transport"


class DecodeError(CompletionError):
    """The response body was not JSON or lacked ``choices[].text``."""

    kind = "decode"

    def __init__(self, message: str, body: Optional[str] = None):
        super().__init__(message)
        self.body = body


class EmptyResultError(CompletionError):
    """The response decoded fine but held zero choices."""

    kind = "empty_result"


class APIStatusError(CompletionError):
    """The endpoint rejected the request with a non-2xx status."""

    kind = "api_status"

    def __init__(self, status_code: int, detail: str = ""):
        message = f"{status_code} | {detail}" if detail else str(status_code)
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail
