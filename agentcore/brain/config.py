"""
Brain Configuration

WHAT: Dataclass configs for the brain and the assembled agent brain
WHERE: agentcore/brain/config.py
WHO: Brain constructor, create_agent_brain, deployments setting env vars

Environment variables (all optional):
- AGENTCORE_BRAIN_DATA_DIR: directory of the durable long-term store
- AGENTCORE_REFLECT_EVERY: event-count reflection threshold
- AGENTCORE_REFLECT_EVENTS: comma separated event types that force reflection
- AGENTCORE_SUMMARIZE_EVERY: conversation additions between summarizations
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

DEFAULT_REFLECTION_EVENTS: tuple[str, ...] = ("inbound_message", "user_feedback")


@dataclass(slots=True)
class BrainConfig:
    reflection_frequency: int = 10
    reflection_events: tuple[str, ...] = DEFAULT_REFLECTION_EVENTS
    summary_entry_limit: int = 20
    reflection_queue_size: int = 64
    # Keep the timeline when the long-term write fails instead of dropping it.
    clear_on_persist_failure: bool = False

    def __post_init__(self) -> None:
        if self.reflection_frequency < 1:
            raise ValueError("reflection_frequency must be >= 1")
        if self.summary_entry_limit < 1:
            raise ValueError("summary_entry_limit must be >= 1")
        self.reflection_events = tuple(self.reflection_events)


@dataclass(slots=True)
class AgentBrainConfig:
    data_dir: str = "./brain_data"
    conversation_summarize_every: int = 10
    brain: BrainConfig = field(default_factory=BrainConfig)

    @staticmethod
    def from_env(environ: Optional[Mapping[str, str]] = None) -> "AgentBrainConfig":
        env = os.environ if environ is None else environ
        cfg = AgentBrainConfig()
        cfg.data_dir = env.get("AGENTCORE_BRAIN_DATA_DIR", cfg.data_dir)
        cfg.conversation_summarize_every = _int_env(env, "AGENTCORE_SUMMARIZE_EVERY", cfg.conversation_summarize_every)

        reflect_every = _int_env(env, "AGENTCORE_REFLECT_EVERY", cfg.brain.reflection_frequency)
        events = cfg.brain.reflection_events
        raw_events = env.get("AGENTCORE_REFLECT_EVENTS")
        if raw_events is not None:
            events = tuple(e.strip() for e in raw_events.split(",") if e.strip())
        cfg.brain = BrainConfig(reflection_frequency=reflect_every, reflection_events=events)
        return cfg


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


__all__ = [
    "AgentBrainConfig",
    "BrainConfig",
    "DEFAULT_REFLECTION_EVENTS",
]
