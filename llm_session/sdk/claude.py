"""
Anthropic Messages API adapter.
"""

from typing import Any, Dict, Mapping

from ..core.errors import MalformedResponse
from ..core.options import (
    OptionProcessor,
    compose,
    positive_int,
    set_default,
    text,
    transform_value,
)
from ..core.pricing import ModelPricing, PricingTable
from ..core.token_counter import TokenUsage
from .base import ProviderAdapter, first_item, read_usage
from .credentials import read_api_key

API_KEY_ENV = "ANTHROPIC_API_KEY"
API_VERSION = "2023-06-01"
DEFAULT_MODEL = "claude-3-haiku-20240307"
DEFAULT_MAX_TOKENS = 1024

MODEL_ALIASES = {
    "opus": "claude-3-opus-20240229",
    "sonnet": "claude-3-5-sonnet-20241022",
    "haiku": "claude-3-haiku-20240307",
}

# USD per million tokens
PRICING_TABLE = PricingTable({
    "claude-3-opus-20240229": ModelPricing.of("15.00", "75.00"),
    "claude-3-5-sonnet-20241022": ModelPricing.of("3.00", "15.00"),
    "claude-3-haiku-20240307": ModelPricing.of("0.25", "1.25"),
})


class ClaudeAdapter(ProviderAdapter):
    """Adapter for Anthropic's Claude models.

    The ``system`` option is sent as the top-level ``system`` field, which is
    where the Messages API expects it.
    """

    @property
    def name(self) -> str:
        return "Claude"

    def base_url(self) -> str:
        return "https://api.anthropic.com"

    def chat_request_endpoint(self) -> str:
        return "/v1/messages"

    def auth_headers(self) -> Dict[str, str]:
        return {
            "X-API-Key": read_api_key(API_KEY_ENV),
            "anthropic-version": API_VERSION,
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
            "max_tokens": compose([
                set_default("max_tokens", DEFAULT_MAX_TOKENS),
                transform_value("max_tokens", positive_int),
            ]),
            "system": transform_value("system", text),
        }

    def extract_response_text(self, raw: Mapping[str, Any]) -> str:
        block = first_item(raw.get("content"))
        if not isinstance(block, dict) or not isinstance(block.get("text"), str):
            raise MalformedResponse("Unexpected response format from Claude API")
        return block["text"]

    def extract_usage(self, raw: Mapping[str, Any]) -> TokenUsage:
        return read_usage(raw, "Claude", "input_tokens", "output_tokens")

    def pricing_table(self) -> PricingTable:
        return PRICING_TABLE
