"""
Brain - Event timeline, reflection scheduling and summarization

WHAT: Aggregate owning the agent's event timeline, its two memory stores, the
      adaptive reflection policy, the report sink and the module registry
WHERE: agentcore/brain/brain.py - center of the brain dependency graph
WHO: Agent wiring, extension-module hooks, anything that observes the agent
TIME: log_event O(1) and never blocks on I/O; summarize is one store write

Scheduling policy:
- Every appended event increments a counter.
- An event whose type is in the trigger set, or a counter reaching the
  threshold, requests one reflection pass and resets the counter to zero.
- Reflection passes run on the brain's ReflectionWorker, never on the caller.

Summarization drains the timeline into the long-term store under the key
``summary:<YYYYMMDDThhmmss>`` (UTC). Only the first ``summary_entry_limit``
events appear in the digest; the whole timeline is drained.

Locking:
- One reader/writer lock guards the timeline, policy state, sink and
  registry. It is never held while calling a report sink, a module, or the
  reflection worker. The long-term write happens under it so no event can
  land between digest and drain.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Tuple, Type, TypeVar

from .callbacks import ReportSink, invoke_callback
from .config import BrainConfig
from .errors import ModuleNotRegisteredError
from .locks import ReadWriteLock
from .memory_store import MemoryStore
from .models import Event
from .reflection import ReflectionAnalyzer, ReflectionWorker, SelfReflectionAnalyzer
from .security import PassThroughSecurity, SecurityPolicy
from .summary import build_digest, reflection_report, summary_key
from .telemetry import NoOpTelemetryClient, TelemetryClient

logger = logging.getLogger(__name__)

M = TypeVar("M")


class Brain:
    """Timeline + reflection scheduler + summarization + module registry."""

    def __init__(
        self,
        short_term: MemoryStore,
        long_term: MemoryStore,
        *,
        config: BrainConfig | None = None,
        analyzer: ReflectionAnalyzer | None = None,
        security: SecurityPolicy | None = None,
        report_sink: ReportSink | None = None,
        telemetry: TelemetryClient | None = None,
    ) -> None:
        cfg = config or BrainConfig()
        self.short_term = short_term
        self.long_term = long_term
        self.analyzer: ReflectionAnalyzer = analyzer or SelfReflectionAnalyzer()
        self.security: SecurityPolicy = security or PassThroughSecurity()
        self._telemetry = telemetry or NoOpTelemetryClient()

        self._lock = ReadWriteLock()
        self._timeline: List[Event] = []
        self._event_count = 0
        self._reflect_every = cfg.reflection_frequency
        self._reflect_on: FrozenSet[str] = frozenset(cfg.reflection_events)
        self._summary_limit = cfg.summary_entry_limit
        self._clear_on_persist_failure = cfg.clear_on_persist_failure
        self._report_sink = report_sink
        self._modules: Dict[str, Any] = {}
        self._reflections_scheduled = 0

        self._worker = ReflectionWorker(self._reflect_and_report, maxsize=cfg.reflection_queue_size)

    # ---------------------- lifecycle ----------------------
    def close(self, timeout: float | None = 5.0) -> None:
        """Stop the reflection worker. Stores are owned and closed by the caller."""

        self._worker.close(timeout)

    def __enter__(self) -> Brain:
        return self

    def __exit__(self, exc_type, exc, exc_tb) -> None:
        self.close()

    # ---------------------- timeline -----------------------
    def log_event(self, event_type: str, payload: Any = None) -> Event:
        """Append an event and evaluate the reflection policy.

        Raises ``ValueError`` for an empty event type; nothing is appended
        in that case.
        """

        with self._lock.write():
            event = Event(type=event_type, payload=payload)
            self._timeline.append(event)
            self._event_count += 1
            triggered = event_type in self._reflect_on or self._event_count >= self._reflect_every
            if triggered:
                self._event_count = 0
                self._reflections_scheduled += 1

        if triggered:
            self._worker.submit()
        return event

    def timeline(self) -> Tuple[Event, ...]:
        with self._lock.read():
            return tuple(self._timeline)

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._timeline)

    # ---------------------- reflection policy --------------
    @property
    def event_count(self) -> int:
        with self._lock.read():
            return self._event_count

    @property
    def reflection_frequency(self) -> int:
        with self._lock.read():
            return self._reflect_every

    @property
    def reflection_events(self) -> FrozenSet[str]:
        with self._lock.read():
            return self._reflect_on

    @property
    def reflections_scheduled(self) -> int:
        with self._lock.read():
            return self._reflections_scheduled

    @property
    def dropped_reflections(self) -> int:
        return self._worker.dropped

    def set_reflection_frequency(self, n: int) -> None:
        if n < 1:
            raise ValueError(f"reflection frequency must be >= 1, got {n}")
        with self._lock.write():
            self._reflect_every = n

    def set_reflection_events(self, event_types: Iterable[str]) -> None:
        if isinstance(event_types, str):
            raise TypeError("event_types must be an iterable of event types, not a single string")
        events = frozenset(event_types)
        with self._lock.write():
            self._reflect_on = events

    def set_report_sink(self, sink: ReportSink | None) -> None:
        with self._lock.write():
            self._report_sink = sink

    def wait_for_reflections(self, timeout: float | None = None) -> bool:
        """Block until every queued reflection pass has finished."""

        return self._worker.wait_idle(timeout)

    def _report(self, message: str) -> None:
        with self._lock.read():
            sink = self._report_sink
        if sink is None:
            return
        invoke_callback(sink, message).log_failure("Report sink", logger)

    def _reflect_and_report(self) -> None:
        with self._telemetry.span("brain.reflect") as span:
            result = invoke_callback(self.analyzer.analyze)
            span.set_attribute("analyzer_ok", result.ok)
            if not result.ok:
                result.log_failure("Reflection analyzer", logger)
                self._report(f"[Brain] Reflection error: {result.error}")
            self._report(reflection_report())

    # ---------------------- summarization ------------------
    def summarize(self) -> Optional[str]:
        """Persist a digest of the timeline to long-term memory and drain it.

        Returns the summary key, or ``None`` when the timeline was empty.
        Re-raises the long-term store's error after reporting it; the
        timeline is kept in that case unless ``clear_on_persist_failure``.
        """

        with self._telemetry.span("brain.summarize") as span:
            with self._lock.write():
                if not self._timeline:
                    span.set_attribute("entries", 0)
                    return None
                entries = len(self._timeline)
                digest = build_digest(self._timeline, limit=self._summary_limit)
                key = summary_key()
                error: Exception | None = None
                try:
                    self.long_term.remember(key, digest)
                except Exception as exc:  # noqa: BLE001 - stores are pluggable
                    error = exc
                if error is None or self._clear_on_persist_failure:
                    self._timeline.clear()
            span.set_attribute("entries", entries)
            span.set_attribute("key", key)

            if error is not None:
                logger.error(f"Failed to persist summary {key} ({entries} events): {error}")
                self._report(f"[Brain] Error saving summary: {error}")
            else:
                logger.info(f"Summarized {entries} events into {key}")
            self._report(digest)

            if error is not None:
                raise error
            return key

    # ---------------------- module registry ----------------
    def register_module(self, name: str, module: Any) -> None:
        with self._lock.write():
            self._modules[name] = module

    def unregister_module(self, name: str) -> Any:
        with self._lock.write():
            return self._modules.pop(name, None)

    def get_module(self, name: str, default: Any = None) -> Any:
        with self._lock.read():
            return self._modules.get(name, default)

    def require_module(self, name: str, kind: Type[M]) -> M:
        """Typed lookup: the handle registered under ``name`` as an instance of ``kind``."""

        with self._lock.read():
            if name not in self._modules:
                raise ModuleNotRegisteredError(name)
            module = self._modules[name]
        if not isinstance(module, kind):
            raise TypeError(f"Module {name!r} is {type(module).__name__}, not {kind.__name__}")
        return module

    def module_names(self) -> List[str]:
        with self._lock.read():
            return list(self._modules)


__all__ = [
    "Brain",
]
