"""
OpenAI Chat Completions adapter.
"""

from typing import Any, Dict, Mapping

from ..core.errors import MalformedResponse
from ..core.options import (
    OptionProcessor,
    compose,
    positive_int,
    prepend_system_message,
    rename_key,
    set_default,
    text,
    transform_value,
)
from ..core.pricing import ModelPricing, PricingTable
from ..core.token_counter import TokenUsage
from .base import ProviderAdapter, first_item, read_usage
from .credentials import read_api_key

API_KEY_ENV = "OPENAI_API_KEY"
DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_MAX_TOKENS = 1024

MODEL_ALIASES = {
    "4o-mini": "gpt-4o-mini",
    "4o": "gpt-4o",
    "o1": "o1-preview",
}

# USD per million tokens
PRICING_TABLE = PricingTable({
    "gpt-4o-mini": ModelPricing.of("0.15", "0.60"),
    "gpt-4o": ModelPricing.of("2.50", "10.00"),
    "o1-preview": ModelPricing.of("15.00", "60.00"),
})


class ChatGptAdapter(ProviderAdapter):
    """Adapter for OpenAI chat models.

    OpenAI takes the output limit as ``max_completion_tokens`` and has no
    top-level system field, so ``system`` becomes a leading system message.
    """

    @property
    def name(self) -> str:
        return "ChatGpt"

    def base_url(self) -> str:
        return "https://api.openai.com/v1"

    def auth_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {read_api_key(API_KEY_ENV)}",
            "Content-Type": "application/json",
        }

    def aliases(self) -> Dict[str, str]:
        return MODEL_ALIASES

    def option_processors(self) -> Dict[str, OptionProcessor]:
        return {
            "model": compose([
                set_default("model", DEFAULT_MODEL),
                transform_value("model", self.expand_model_name),
            ]),
            # Order matters: the default applies after the rename.
            "max_tokens": rename_key("max_tokens", "max_completion_tokens"),
            "max_completion_tokens": compose([
                set_default("max_completion_tokens", DEFAULT_MAX_TOKENS),
                transform_value("max_completion_tokens", positive_int),
            ]),
            "system": transform_value("system", text),
        }

    def request_processors(self) -> Dict[str, OptionProcessor]:
        return {"system": prepend_system_message("system")}

    def extract_response_text(self, raw: Mapping[str, Any]) -> str:
        choice = first_item(raw.get("choices"))
        message = choice.get("message") if isinstance(choice, dict) else None
        if not isinstance(message, dict) or not isinstance(message.get("content"), str):
            raise MalformedResponse("Unexpected response format from OpenAI API")
        return message["content"]

    def extract_usage(self, raw: Mapping[str, Any]) -> TokenUsage:
        return read_usage(raw, "OpenAI", "prompt_tokens", "completion_tokens")

    def pricing_table(self) -> PricingTable:
        return PRICING_TABLE
