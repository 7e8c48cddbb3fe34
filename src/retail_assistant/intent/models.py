from collections.abc import Callable
from enum import Enum
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field


class IntentCategory(str, Enum):
    """Closed set of buckets a query can be routed to."""

    SALES_TREND = "sales_trend"
    INVENTORY_STOCK = "inventory_stock"
    PRODUCT_RECOMMENDATION = "product_recommendation"
    PRICING_STRATEGY = "pricing_strategy"
    DEFAULT = "default"  # Catch-all, not an error


class Template(BaseModel):
    """A pre-authored multi-section response for one intent category."""

    model_config = ConfigDict(frozen=True)

    category: IntentCategory = Field(description="Category this template answers")
    body: str = Field(description="Response text, may contain $placeholders")


class IntentRule(NamedTuple):
    """A (predicate, category) pair evaluated against lower-cased text."""

    predicate: Callable[[str], bool]
    category: IntentCategory
