"""
Extension modules attached to the brain's event stream.

Each module owns its state and lock; the brain only sees them through the
registry and through events the modules' hooks log.
"""

from .base import BrainModule  # noqa: F401
from .conversation import (  # noqa: F401
    CONVERSATION_EVENT,
    ConversationFeedback,
    ConversationModule,
    connect_conversation,
)
from .knowledge import KnowledgeModule  # noqa: F401
from .preferences import PreferencesModule  # noqa: F401
from .todo import TodoModule  # noqa: F401

__all__ = [
    "BrainModule",
    "CONVERSATION_EVENT",
    "ConversationFeedback",
    "ConversationModule",
    "KnowledgeModule",
    "PreferencesModule",
    "TodoModule",
    "connect_conversation",
]
