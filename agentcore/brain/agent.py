"""
Agent Brain - Explicit assembly of the brain and its standard modules

WHAT: Builds a Brain with volatile short-term and durable long-term memory,
      registers the standard modules and wires the conversation feedback loop
WHERE: agentcore/brain/agent.py - top of the brain package
WHO: Process startup code; tests wanting a fully wired instance
TIME: Construction opens one SQLite file; close() releases it

There is no process-wide instance: callers construct an ``AgentBrain`` once
and pass it to whatever needs it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .brain import Brain
from .config import AgentBrainConfig
from .memory_store import MemoryStore, VolatileMemoryStore
from .modules import (
    ConversationModule,
    KnowledgeModule,
    PreferencesModule,
    TodoModule,
    connect_conversation,
)
from .sqlite_store import SQLiteMemoryStore, open_long_term_store
from .telemetry import TelemetryClient

logger = logging.getLogger(__name__)


def log_report(summary: str) -> None:
    logger.info(summary)


@dataclass(slots=True)
class AgentBrain:
    brain: Brain
    conversation: ConversationModule
    knowledge: KnowledgeModule
    preferences: PreferencesModule
    todo: TodoModule

    @property
    def durable(self) -> bool:
        return isinstance(self.brain.long_term, SQLiteMemoryStore)

    def close(self) -> None:
        for module in (self.conversation, self.knowledge, self.preferences, self.todo):
            module.close()
        self.brain.close()
        if isinstance(self.brain.long_term, SQLiteMemoryStore):
            self.brain.long_term.close()

    def __enter__(self) -> AgentBrain:
        return self

    def __exit__(self, exc_type, exc, exc_tb) -> None:
        self.close()


def create_agent_brain(
    config: AgentBrainConfig | None = None,
    *,
    long_term: MemoryStore | None = None,
    telemetry: TelemetryClient | None = None,
) -> AgentBrain:
    cfg = config or AgentBrainConfig()
    short_term = VolatileMemoryStore()
    if long_term is None:
        long_term = open_long_term_store(cfg.data_dir, fallback=short_term)

    brain = Brain(short_term, long_term, config=cfg.brain, report_sink=log_report, telemetry=telemetry)

    conversation = ConversationModule()
    connect_conversation(brain, conversation, summarize_every=cfg.conversation_summarize_every)
    agent = AgentBrain(
        brain=brain,
        conversation=conversation,
        knowledge=KnowledgeModule(),
        preferences=PreferencesModule(),
        todo=TodoModule(),
    )
    for module in (agent.conversation, agent.knowledge, agent.preferences, agent.todo):
        brain.register_module(module.name, module)
    return agent


__all__ = [
    "AgentBrain",
    "create_agent_brain",
    "log_report",
]
