"""Keyword-based intent classification.

Routing is an ordered list of rules with first-match-wins semantics.
A prompt that mentions both "sales" and "price" is a sales question:
the order of ``INTENT_RULES`` is part of the public behaviour.
"""

from collections.abc import Callable, Sequence

from .models import IntentCategory, IntentRule


def keyword_predicate(*keywords: str) -> Callable[[str], bool]:
    """Build a predicate matching text that contains any of the keywords.

    Matching is plain substring containment on already lower-cased text,
    so "restock" matches "stock" and "trends" matches "trend".
    """
    lowered = tuple(keyword.lower() for keyword in keywords)

    def _matches(text: str) -> bool:
        return any(keyword in text for keyword in lowered)

    return _matches


INTENT_RULES: tuple[IntentRule, ...] = (
    IntentRule(keyword_predicate("sales", "trend"), IntentCategory.SALES_TREND),
    IntentRule(keyword_predicate("inventory", "stock"), IntentCategory.INVENTORY_STOCK),
    IntentRule(keyword_predicate("product", "recommend"), IntentCategory.PRODUCT_RECOMMENDATION),
    IntentRule(keyword_predicate("pricing", "price"), IntentCategory.PRICING_STRATEGY),
)


def classify(text: str, rules: Sequence[IntentRule] = INTENT_RULES) -> IntentCategory:
    """Classify a prompt into an intent category.

    Args:
        text: Free-text prompt
        rules: Ordered rules to evaluate (defaults to ``INTENT_RULES``)

    Returns:
        The category of the first matching rule, or ``IntentCategory.DEFAULT``
    """
    lowered = text.lower()
    for rule in rules:
        if rule.predicate(lowered):
            return rule.category
    return IntentCategory.DEFAULT
