"""Shared fixtures for completion client tests."""

from __future__ import annotations

import json
from typing import Callable

import httpx
import pytest


class RecordingEndpoint:
    """Mock completions endpoint that records every request it receives."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def last_body(self) -> dict:
        return json.loads(self.requests[-1].content)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


def _completion_payload(*texts: str, usage: bool = True) -> dict:
    payload = {
        "id": "cmpl-test",
        "object": "text_completion",
        "created": 1672531200,
        "model": "text-davinci-003",
        "choices": [
            {"text": text, "index": i, "logprobs": None, "finish_reason": "stop"}
            for i, text in enumerate(texts)
        ],
    }
    if usage:
        payload["usage"] = {"prompt_tokens": 5, "completion_tokens": 7, "total_tokens": 12}
    return payload


@pytest.fixture
def completion_payload() -> Callable[..., dict]:
    return _completion_payload


@pytest.fixture
def make_endpoint() -> Callable[..., RecordingEndpoint]:
    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> RecordingEndpoint:
        return RecordingEndpoint(handler)

    return _make


@pytest.fixture
def json_endpoint(make_endpoint) -> Callable[..., RecordingEndpoint]:
    """Endpoint answering every request with ``payload`` and ``status``."""

    def _make(payload, status: int = 200) -> RecordingEndpoint:
        return make_endpoint(lambda request: httpx.Response(status, json=payload))

    return _make


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "davinci.yaml"
    path.write_text(
        'completion:\n  model: "text-davinci-002"\n  parameters:\n    temperature: 0.2\n',
        encoding="utf-8",
    )
    return path
