"""
Provider SDK for LLM Session.

Adapters for each supported provider, the client configuration that binds
an adapter to its options, and the HTTP transport.
"""

from typing import Dict

from .base import ProviderAdapter
from .chatgpt import ChatGptAdapter
from .claude import ClaudeAdapter
from .client import ClientConfig
from .transport import RequestsTransport, Transport, TransportResponse

# Adapters are stateless; one shared instance per provider.
CLAUDE = ClaudeAdapter()
CHATGPT = ChatGptAdapter()

ADAPTERS: Dict[str, ProviderAdapter] = {
    "claude": CLAUDE,
    "anthropic": CLAUDE,
    "chatgpt": CHATGPT,
    "openai": CHATGPT,
}


def get_adapter(name: str) -> ProviderAdapter:
    """Look up a provider adapter by name (case-insensitive).

    Raises:
        ValueError: If the provider is not supported
    """
    adapter = ADAPTERS.get(name.strip().lower()) if isinstance(name, str) else None
    if adapter is None:
        raise ValueError(f"Unsupported provider: {name}. Known providers: {sorted(ADAPTERS)}")
    return adapter


__all__ = [
    "ADAPTERS",
    "CHATGPT",
    "CLAUDE",
    "ChatGptAdapter",
    "ClaudeAdapter",
    "ClientConfig",
    "ProviderAdapter",
    "RequestsTransport",
    "Transport",
    "TransportResponse",
    "get_adapter",
]
