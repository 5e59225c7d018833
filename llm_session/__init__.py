"""
LLM Session.

Multi-turn conversations with several LLM providers behind one interface,
with per-turn cost accounting.
"""

from .core.errors import (
    LLMSessionError,
    MalformedResponse,
    MissingCredentials,
    NoInteractions,
    OptionProcessingError,
    ProviderError,
    SessionClosed,
    TransportFailure,
    UnknownModel,
)
from .core.messages import Message, Role
from .core.session import Interaction, Session, SessionState, open_session
from .sdk import ClientConfig, get_adapter

__all__ = [
    "ClientConfig",
    "Interaction",
    "LLMSessionError",
    "MalformedResponse",
    "Message",
    "MissingCredentials",
    "NoInteractions",
    "OptionProcessingError",
    "ProviderError",
    "Role",
    "Session",
    "SessionClosed",
    "SessionState",
    "TransportFailure",
    "UnknownModel",
    "get_adapter",
    "open_session",
]
