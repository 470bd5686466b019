"""
Conversation Module - Ordered message log with a feedback hook into the brain

WHAT: Append-only conversation history and the brain feedback loop
WHERE: agentcore/brain/modules/conversation.py
WHO: Channel adapters adding messages; the agent brain consuming them
TIME: add O(1), get_recent O(n) where n=requested window

``connect_conversation`` wires the module to a brain: each message becomes a
``conversation_message`` event, and every ``summarize_every`` messages the
module asks the brain to summarize. That second trigger counts additions
locally and is independent of the brain's reflection counter.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, List, Optional

from .base import BrainModule, OnAdd

if TYPE_CHECKING:
    from ..brain import Brain

logger = logging.getLogger(__name__)

CONVERSATION_EVENT = "conversation_message"


class ConversationModule(BrainModule[str]):
    name = "conversation"

    def __init__(self, *, on_add: Optional[OnAdd[str]] = None) -> None:
        super().__init__(on_add=on_add)
        self._messages: List[str] = []

    def add(self, message: str) -> None:
        with self._lock.write():
            self._messages.append(message)
        self._notify(message)

    def get_recent(self, n: int) -> List[str]:
        """Last ``min(n, len)`` messages, oldest first."""

        if n <= 0:
            return []
        with self._lock.read():
            return self._messages[-n:]

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._messages)


class ConversationFeedback:
    """on_add hook that mirrors messages into the brain and triggers summaries."""

    def __init__(self, brain: "Brain", *, summarize_every: int = 10) -> None:
        if summarize_every < 1:
            raise ValueError("summarize_every must be >= 1")
        self.brain = brain
        self.summarize_every = summarize_every
        self._count = 0
        self._count_lock = threading.Lock()

    def __call__(self, message: str) -> None:
        self.brain.log_event(CONVERSATION_EVENT, message)
        with self._count_lock:
            self._count += 1
            due = self._count % self.summarize_every == 0
        if due:
            try:
                self.brain.summarize()
            except Exception as exc:  # noqa: BLE001 - already reported through the sink
                logger.warning(f"Conversation-triggered summarization failed: {exc}")


def connect_conversation(brain: "Brain", conversation: ConversationModule, *, summarize_every: int = 10) -> ConversationFeedback:
    feedback = ConversationFeedback(brain, summarize_every=summarize_every)
    conversation.on_add = feedback
    return feedback


__all__ = [
    "CONVERSATION_EVENT",
    "ConversationFeedback",
    "ConversationModule",
    "connect_conversation",
]
