"""Caller-side helpers around :class:`CompletionClient`.

``ask`` turns every completion failure into a ``CompletionResult`` whose
``error`` is readable text, the way the original demo printed the error in
place of an answer. The ``*_sync`` variants run one call on a fresh event loop.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import httpx

from ..models.completion import CompletionResult
from ..providers.completions import CompletionClient
from ..utils.sanitize import sanitize_error
from .errors import CompletionError

logger = logging.getLogger(__name__)


async def ask(
    credential: str,
    context: str,
    question: str,
    max_tokens: int,
    config: Optional[dict] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> CompletionResult:
    client = CompletionClient(config, http_client=http_client)
    try:
        response = await client.create(credential, context, question, max_tokens)
        content = response.first_text()
    except CompletionError as e:
        logger.debug("completion failed: kind=%s", e.kind)
        return CompletionResult(
            success=False,
            error=sanitize_error(str(e)),
            error_kind=e.kind,
        )

    return CompletionResult(success=True, content=content, tokens_used=response.token_counts())


def ask_sync(
    credential: str,
    context: str,
    question: str,
    max_tokens: int,
    config: Optional[dict] = None,
) -> CompletionResult:
    return asyncio.run(ask(credential, context, question, max_tokens, config=config))


def complete_sync(
    credential: str,
    context: str,
    question: str,
    max_tokens: int,
    config: Optional[dict] = None,
) -> str:
    """Blocking ``CompletionClient.complete``. Raises ``CompletionError``."""
    client = CompletionClient(config)
    return asyncio.run(client.complete(credential, context, question, max_tokens))
