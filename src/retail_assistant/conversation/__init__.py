"""Conversation module for retail_assistant.

Provides the session transcript, the single-flight conversation manager
and the quick-action shortcuts.
"""

from .manager import ConversationManager, validate_prompt
from .models import (
    ConversationSession,
    Message,
    MessageRole,
    Notification,
    SessionStatus,
)
from .quick_actions import QUICK_ACTIONS, QuickAction, get_quick_action

__all__ = [
    "QUICK_ACTIONS",
    "ConversationManager",
    "ConversationSession",
    "Message",
    "MessageRole",
    "Notification",
    "QuickAction",
    "SessionStatus",
    "get_quick_action",
    "validate_prompt",
]
