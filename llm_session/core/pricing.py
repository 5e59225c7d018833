"""
Pricing calculations.

Per-million-token prices keyed by canonical model identifier, and the cost
formula shared by every provider adapter.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Union

from .errors import UnknownModel
from .token_counter import TokenUsage

ONE_MILLION = Decimal("1000000")


@dataclass(frozen=True)
class ModelPricing:
    """Per-token pricing for a specific model."""
    input_per_million: Decimal  # USD per 1M input tokens
    output_per_million: Decimal  # USD per 1M output tokens

    @classmethod
    def of(cls, input_price: Union[str, float], output_price: Union[str, float]) -> "ModelPricing":
        """Build pricing from plain numbers, keeping their decimal text exact."""
        return cls(Decimal(str(input_price)), Decimal(str(output_price)))


@dataclass(frozen=True)
class PricingTable:
    """Fixed pricing table for one provider's models."""
    prices: Dict[str, ModelPricing]

    def get_pricing(self, model: str) -> ModelPricing:
        """Get pricing for a specific model.

        Args:
            model: Canonical model identifier

        Returns:
            ModelPricing for the model

        Raises:
            UnknownModel: If the model has no pricing entry
        """
        if model not in self.prices:
            raise UnknownModel(model)
        return self.prices[model]

    def __contains__(self, model: str) -> bool:
        return model in self.prices


def calculate_cost(table: PricingTable, model: str, usage: TokenUsage) -> float:
    """Calculate the exact cost of one call.

    Args:
        table: Pricing table of the provider that served the call
        model: Canonical model identifier
        usage: Token usage reported for the call

    Returns:
        Cost in USD, unrounded

    Raises:
        UnknownModel: If the model is not in the pricing table
    """
    pricing = table.get_pricing(model)

    input_cost = Decimal(usage.input_tokens) / ONE_MILLION * pricing.input_per_million
    output_cost = Decimal(usage.output_tokens) / ONE_MILLION * pricing.output_per_million

    return float(input_cost + output_cost)
