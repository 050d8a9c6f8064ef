"""Error message sanitization to prevent credential leakage."""

from __future__ import annotations

import os
import re


def sanitize_error(message: str) -> str:
    """Strip API keys, bearer tokens and the user's home path from a message."""
    if not message:
        return message

    sanitized = message
    sanitized = re.sub(r"sk-[a-zA-Z0-9_-]{20,}", "[REDACTED_KEY]", sanitized)
    sanitized = re.sub(r"Bearer\s+\S+", "Bearer [REDACTED]", sanitized)
    sanitized = re.sub(r"api-key:\s*\S+", "api-key: [REDACTED]", sanitized, flags=re.IGNORECASE)
    sanitized = re.sub(r"Authorization:\s*\S+", "Authorization: [REDACTED]", sanitized)

    home = os.environ.get("USERPROFILE") or os.environ.get("HOME") or ""
    if home and home != os.sep:
        sanitized = sanitized.replace(home, "[USER_HOME]")

    return sanitized


# Shorter credentials would match ordinary text.
MIN_REDACTED_LENGTH = 6


def redact_credential(message: str, credential: str) -> str:
    """Remove one specific credential from a message, then sanitize the rest.

    Keys that do not follow the ``sk-`` shape would otherwise survive when the
    remote echoes them back in an error body.
    """
    if len(credential) >= MIN_REDACTED_LENGTH and message:
        message = message.replace(credential, "[REDACTED_KEY]")
    return sanitize_error(message)
