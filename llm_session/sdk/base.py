"""
Provider adapter contract.

One adapter per provider hides everything provider-specific: endpoint,
auth headers, option names, response envelope and pricing. Adapters hold no
mutable state, so a single instance is shared by every session.
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Sequence, Tuple

from ..core.errors import MalformedResponse, OptionProcessingError, ProviderError
from ..core.messages import Message
from ..core.options import OptionProcessor, apply_processors
from ..core.pricing import PricingTable, calculate_cost
from ..core.token_counter import TokenUsage
from .transport import Transport

logger = logging.getLogger(__name__)


class ProviderAdapter(ABC):
    """Uniform chat and pricing contract implemented by every provider."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short human-readable provider name."""

    @abstractmethod
    def base_url(self) -> str:
        """Fixed base URL of the provider API."""

    @abstractmethod
    def auth_headers(self) -> Dict[str, str]:
        """Auth and version headers, built from the environment on each call."""

    @abstractmethod
    def option_processors(self) -> Dict[str, OptionProcessor]:
        """Option key -> processor, applied in declaration order."""

    @abstractmethod
    def extract_response_text(self, raw: Mapping[str, Any]) -> str:
        """Assistant text from a successful response."""

    @abstractmethod
    def extract_usage(self, raw: Mapping[str, Any]) -> TokenUsage:
        """Token usage from a successful response."""

    @abstractmethod
    def pricing_table(self) -> PricingTable:
        """Prices of the provider's canonical models."""

    def chat_request_endpoint(self) -> str:
        return "/chat/completions"

    def request_processors(self) -> Dict[str, OptionProcessor]:
        """Processors applied per call, once ``messages`` is in the payload."""
        return {}

    def aliases(self) -> Dict[str, str]:
        """Short model names accepted in place of canonical identifiers."""
        return {}

    def expand_model_name(self, model: str) -> str:
        """Map an alias to its canonical id; anything else passes through."""
        if not isinstance(model, str):
            raise TypeError(f"model must be a string, got {type(model).__name__}")
        return self.aliases().get(model, model)

    def process_options(self, options: Mapping[str, Any]) -> Dict[str, Any]:
        """Resolve raw caller options through the option pipeline.

        Raises:
            OptionProcessingError: If a value is rejected by its processor or
                cannot be sent as JSON
        """
        resolved = apply_processors(self.option_processors(), options)
        encode_payload(resolved)
        return resolved

    def build_request(
        self,
        messages: Sequence[Message],
        options: Mapping[str, Any],
    ) -> Tuple[str, str, Dict[str, str]]:
        """Build ``(url, json_body, headers)`` for a chat call.

        Raises:
            MissingCredentials: If the provider API key is not set
            OptionProcessingError: If a per-call option is unusable
        """
        payload = dict(options)
        payload["messages"] = [message.to_dict() for message in messages]
        payload = apply_processors(self.request_processors(), payload)
        # Unset options are left out rather than sent as null.
        payload = {key: value for key, value in payload.items() if value is not None}

        headers = self.auth_headers()
        headers.setdefault("Content-Type", "application/json")

        url = self.base_url() + self.chat_request_endpoint()
        return url, encode_payload(payload), headers

    def chat(
        self,
        messages: Sequence[Message],
        options: Mapping[str, Any],
        transport: Transport,
    ) -> Dict[str, Any]:
        """Send the conversation and return the decoded success payload.

        Raises:
            TransportFailure: Connection-level failure, from the transport
            ProviderError: Any non-200 status
            MalformedResponse: A 200 body that is not a JSON object
        """
        url, body, headers = self.build_request(messages, options)
        logger.debug("%s chat request: %d messages", self.name, len(messages))

        response = transport.post(url, body, headers)

        if response.status_code != 200:
            logger.warning("%s returned HTTP %d", self.name, response.status_code)
            raise ProviderError(response.status_code, response.body)

        try:
            decoded = json.loads(response.body)
        except ValueError as e:
            raise MalformedResponse(f"{self.name} returned invalid JSON: {e}") from e
        if not isinstance(decoded, dict):
            raise MalformedResponse(f"{self.name} returned a non-object JSON payload")
        return decoded

    def calculate_cost(self, model: str, usage: TokenUsage) -> float:
        """Cost of one call in USD.

        Raises:
            UnknownModel: If the model has no pricing entry
        """
        return calculate_cost(self.pricing_table(), model, usage)

    def display_name(self, options: Mapping[str, Any]) -> str:
        model = options.get("model")
        return f"{self.name}({model})" if model else self.name

    def __repr__(self) -> str:
        return f"<{type(self).__name__}>"


def read_usage(raw: Mapping[str, Any], provider: str, input_key: str, output_key: str) -> TokenUsage:
    """Read a provider ``usage`` block into TokenUsage."""
    usage = raw.get("usage")
    if not isinstance(usage, dict) or input_key not in usage or output_key not in usage:
        raise MalformedResponse(f"Unable to extract token usage from {provider} response")
    try:
        return TokenUsage(input_tokens=usage[input_key], output_tokens=usage[output_key])
    except (TypeError, ValueError) as e:
        raise MalformedResponse(f"Invalid token usage in {provider} response: {e}") from e


def first_item(items: Any) -> Any:
    if isinstance(items, list) and items:
        return items[0]
    return None


def encode_payload(payload: Mapping[str, Any]) -> str:
    """Serialize a request payload, naming the option that cannot be encoded."""
    try:
        return json.dumps(payload)
    except (TypeError, ValueError) as e:
        for key, value in payload.items():
            try:
                json.dumps(value)
            except (TypeError, ValueError):
                raise OptionProcessingError(key, value, str(e)) from e
        raise
