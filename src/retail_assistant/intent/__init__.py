"""Intent routing: template catalog, classifier and response synthesizer."""

from .catalog import clear_cache, get_greeting, get_template, get_template_catalog
from .classifier import INTENT_RULES, classify, keyword_predicate
from .models import IntentCategory, IntentRule, Template
from .synthesizer import synthesize

__all__ = [
    "INTENT_RULES",
    "IntentCategory",
    "IntentRule",
    "Template",
    "classify",
    "clear_cache",
    "get_greeting",
    "get_template",
    "get_template_catalog",
    "keyword_predicate",
    "synthesize",
]
