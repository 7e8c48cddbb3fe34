"""
Retail Assistant: an intent-routed response engine for a retail dashboard.

Prompts are classified by ordered keyword rules, answered from a catalog
of multi-section report templates, and exchanged through a single-flight
conversation manager. Each module hides a specific design decision.
"""

__version__ = "0.1.0"

from .conversation import (
    QUICK_ACTIONS,
    ConversationManager,
    ConversationSession,
    Message,
    MessageRole,
    Notification,
    QuickAction,
    SessionStatus,
)
from .errors import AssistantError, PromptValidationError, ProviderError
from .intent import IntentCategory, classify, synthesize
from .providers import OfflineProvider, ResponseProvider, create_response_provider

__all__ = [
    "QUICK_ACTIONS",
    "AssistantError",
    "ConversationManager",
    "ConversationSession",
    "IntentCategory",
    "Message",
    "MessageRole",
    "Notification",
    "OfflineProvider",
    "PromptValidationError",
    "ProviderError",
    "QuickAction",
    "ResponseProvider",
    "SessionStatus",
    "classify",
    "create_response_provider",
    "synthesize",
]
