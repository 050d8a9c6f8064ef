"""Completion endpoint request/response models."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from ..core.errors import DecodeError, EmptyResultError


class CompletionRequest(BaseModel):
    # Extra sampling parameters from config are forwarded as-is.
    model_config = ConfigDict(extra="allow")

    model: str
    prompt: str
    max_tokens: int
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    frequency_penalty: Optional[float] = None
    presence_penalty: Optional[float] = None
    stop: Optional[list[str]] = None

    def to_body(self) -> dict:
        return self.model_dump(exclude_none=True)


class Choice(BaseModel):
    text: str


class Usage(BaseModel):
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None


class CompletionResponse(BaseModel):
    """Decoded reply.

    Only ``choices`` must be a list; ``choices[0].text`` is checked when read.
    Other choices and the metadata fields are carried unvalidated.
    """

    id: Any = None
    object: Any = None
    created: Any = None
    model: Any = None
    choices: list[Any]
    usage: Any = None

    def first_text(self) -> str:
        if not self.choices:
            raise EmptyResultError("Completion response contained no choices")
        try:
            return Choice.model_validate(self.choices[0]).text
        except ValidationError as e:
            raise DecodeError("Response does not match the completion shape (choices.0.text)") from e

    def token_counts(self) -> Optional[dict]:
        """``usage`` as ``{"input", "output"}``, or None when absent or unreadable."""
        if self.usage is None:
            return None
        try:
            usage = Usage.model_validate(self.usage)
        except ValidationError:
            return None
        return {"input": usage.prompt_tokens or 0, "output": usage.completion_tokens or 0}


class CompletionResult(BaseModel):
    success: bool
    content: Optional[str] = None
    tokens_used: Optional[dict] = None
    error: Optional[str] = None
    error_kind: Optional[str] = None
