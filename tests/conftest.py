"""
Shared fixtures: an in-memory transport and provider payload builders.
"""

import json

import pytest

from llm_session.sdk.transport import TransportResponse


class FakeTransport:
    """Transport that replays queued outcomes and records every request."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.requests = []

    def queue(self, *outcomes):
        self.outcomes.extend(outcomes)

    def post(self, url, body, headers):
        self.requests.append({"url": url, "body": json.loads(body), "headers": headers})
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def ok(payload):
    return TransportResponse(status_code=200, body=json.dumps(payload))


def claude_payload(text="Paris", input_tokens=1000, output_tokens=2000):
    return {
        "id": "msg_123",
        "type": "message",
        "role": "assistant",
        "content": [{"type": "text", "text": text}],
        "usage": {"input_tokens": input_tokens, "output_tokens": output_tokens},
    }


def openai_payload(text="Paris", prompt_tokens=1000, completion_tokens=2000):
    return {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "choices": [{"index": 0, "message": {"role": "assistant", "content": text}}],
        "usage": {
            "prompt_tokens": prompt_tokens,
            "completion_tokens": completion_tokens,
            "total_tokens": prompt_tokens + completion_tokens,
        },
    }


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def api_keys(monkeypatch):
    """Set both provider API keys for the duration of a test."""
    monkeypatch.setenv("ANTHROPIC_API_KEY", "test-anthropic-key")
    monkeypatch.setenv("OPENAI_API_KEY", "test-openai-key")
