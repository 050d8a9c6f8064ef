"""OpenAI text-completion client.

Issues a single POST to the completions endpoint and hands back the text of
the first choice. There is no retry: every failure is raised once as a
:class:`~davinci.core.errors.CompletionError` subclass.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from ..core.config import completion_settings
from ..core.errors import APIStatusError, DecodeError, TransportError
from ..core.prompt import build_prompt
from ..models.completion import CompletionRequest, CompletionResponse
from ..utils.sanitize import redact_credential

logger = logging.getLogger(__name__)


class CompletionClient:
    name = "completions"

    def __init__(
        self,
        config: Optional[dict] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = completion_settings(config)
        self.endpoint: str = self.config["endpoint"]
        self.model: str = self.config["model"]
        self.prompt_template: str = self.config["prompt_template"]
        self.timeout: Optional[float] = self.config.get("timeout_seconds")
        self.parameters: dict = dict(self.config.get("parameters") or {})
        self._http_client = http_client

    def build_request(self, context: str, question: str, max_tokens: int) -> CompletionRequest:
        fields = dict(self.parameters)
        fields.update(
            model=self.model,
            prompt=build_prompt(context, question, self.prompt_template),
            max_tokens=max_tokens,
        )
        return CompletionRequest(**fields)

    async def create(
        self,
        credential: str,
        context: str,
        question: str,
        max_tokens: int,
    ) -> CompletionResponse:
        """Send one completion request and decode the reply."""
        body = self.build_request(context, question, max_tokens).to_body()
        headers = {
            "Authorization": f"Bearer {credential}",
            "Content-Type": "application/json",
        }

        logger.debug("POST %s model=%s max_tokens=%s", self.endpoint, self.model, max_tokens)
        try:
            response = await self._post(body, headers)
        except httpx.RequestError as e:
            logger.debug("completion transport failure: %s", type(e).__name__)
            detail = str(e) or type(e).__name__
            raise TransportError(redact_credential(detail, credential)) from e
        except (httpx.InvalidURL, UnicodeEncodeError) as e:
            # Raised while building the request: bad endpoint or a header value
            # that is not ASCII.
            logger.debug("completion request not sent: %s", type(e).__name__)
            raise TransportError(
                redact_credential(f"Request could not be sent: {e}", credential)
            ) from e

        logger.debug("completion response status=%s", response.status_code)
        if response.is_error:
            raise APIStatusError(
                response.status_code,
                redact_credential(_error_detail(response), credential),
            )

        try:
            data = response.json()
        except ValueError as e:
            raise DecodeError("Response body is not valid JSON", body=response.text) from e

        try:
            return CompletionResponse.model_validate(data)
        except ValidationError as e:
            fields = ", ".join(
                ".".join(str(part) for part in err["loc"]) or "<root>" for err in e.errors()
            )
            raise DecodeError(
                f"Response does not match the completion shape ({fields})",
                body=response.text,
            ) from e

    async def complete(
        self,
        credential: str,
        context: str,
        question: str,
        max_tokens: int,
    ) -> str:
        """Return the text of the first choice for ``context + question``."""
        response = await self.create(credential, context, question, max_tokens)
        return response.first_text()

    async def _post(self, body: dict, headers: dict) -> httpx.Response:
        if self._http_client is not None:
            return await self._http_client.post(self.endpoint, json=body, headers=headers)

        client_kwargs = {}
        if self.timeout is not None:
            client_kwargs["timeout"] = self.timeout
        async with httpx.AsyncClient(**client_kwargs) as client:
            return await client.post(self.endpoint, json=body, headers=headers)


def _error_detail(response: httpx.Response) -> str:
    """Pull ``error.message`` out of an error body, falling back to the reason."""
    try:
        data = response.json()
    except ValueError:
        return response.reason_phrase or ""
    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str):
            return error
    return response.reason_phrase or ""
