"""
Client configuration.

Pairs a provider adapter with its resolved options. A ClientConfig is the
identity of a conversation: two sessions opened on equal configs talk to
the same model with the same settings.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Sequence

from ..core.messages import Message
from .base import ProviderAdapter
from .transport import Transport

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ClientConfig:
    """Immutable adapter + resolved options pair.

    Build instances with ``create`` or ``from_provider`` so the options go
    through the adapter's pipeline; ``options`` is a read-only view.
    """
    adapter: ProviderAdapter
    options: Mapping[str, Any]

    def __post_init__(self):
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))

    @classmethod
    def create(cls, adapter: ProviderAdapter, **options: Any) -> "ClientConfig":
        """Resolve ``options`` through the adapter's pipeline.

        Raises:
            OptionProcessingError: If an option value is unusable
        """
        resolved = adapter.process_options(options)
        logger.debug("Configured %s", adapter.display_name(resolved))
        return cls(adapter=adapter, options=resolved)

    @classmethod
    def from_provider(cls, provider: str, **options: Any) -> "ClientConfig":
        """Like ``create`` but looks the adapter up by provider name."""
        from . import get_adapter
        return cls.create(get_adapter(provider), **options)

    @property
    def model(self) -> Optional[str]:
        return self.options.get("model")

    @property
    def display_name(self) -> str:
        return self.adapter.display_name(self.options)

    def snapshot(self) -> Dict[str, Any]:
        """Fresh mutable copy of the resolved options."""
        return dict(self.options)

    def chat(self, messages: Sequence[Message], transport: Transport) -> Dict[str, Any]:
        return self.adapter.chat(messages, self.snapshot(), transport)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ClientConfig):
            return NotImplemented
        return self.adapter is other.adapter and dict(self.options) == dict(other.options)

    def __hash__(self) -> int:
        return hash((id(self.adapter), tuple(sorted(self.options))))

    def __repr__(self) -> str:
        return f"ClientConfig({self.display_name}, options={dict(self.options)!r})"
