"""
Error taxonomy.

Every failure raised by the session and the provider adapters derives from
LLMSessionError so callers can catch the whole family at once.
"""

from typing import Any, Optional


class LLMSessionError(Exception):
    """Base class for all LLM Session errors."""


class TransportFailure(LLMSessionError):
    """Connection-level failure while talking to a provider."""


class ProviderError(LLMSessionError):
    """Provider answered with a non-200 HTTP status."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"Provider returned HTTP {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class MalformedResponse(LLMSessionError):
    """A 200 response that does not have the expected success shape."""


class UnknownModel(LLMSessionError, ValueError):
    """Cost requested for a model missing from the pricing table."""

    def __init__(self, model: str, response_text: Optional[str] = None):
        super().__init__(f"Unknown model: {model}")
        self.model = model
        self.response_text = response_text


class NoInteractions(LLMSessionError, LookupError):
    """The session has no successful interactions yet."""

    def __init__(self):
        super().__init__("Session has no interactions yet")


class OptionProcessingError(LLMSessionError):
    """An option processor rejected the value it was given."""

    def __init__(self, key: str, value: Any, reason: str = ""):
        message = f"Cannot process option '{key}' with value {value!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.key = key
        self.value = value


class MissingCredentials(LLMSessionError):
    """Provider API key is not set in the environment."""

    def __init__(self, env_var: str):
        super().__init__(f"Environment variable {env_var} is not set")
        self.env_var = env_var


class SessionClosed(LLMSessionError):
    """Operation attempted on a session that has been closed."""
