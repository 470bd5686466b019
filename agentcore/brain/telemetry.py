"""
Telemetry Collection - Brain operation spans

WHAT: Timed spans around summarization and reflection passes
WHERE: agentcore/brain/telemetry.py - observability layer
WHO: Brain (``brain.summarize``) and its reflection worker (``brain.reflect``)
TIME: One perf_counter pair per span; NoOp client emits nothing

Each finished span is handed to ``emit_span(name, attributes)`` with
``duration_ms`` and ``success`` added; an exception inside the span marks it
failed and still propagates.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BrainSpan:
    name: str
    attributes: Dict[str, Any] = field(default_factory=dict)
    started: float = field(default_factory=time.perf_counter)

    def set_attribute(self, key: str, value: Any) -> None:
        self.attributes[key] = value

    def finish(self, *, success: bool) -> Dict[str, Any]:
        attrs = dict(self.attributes)
        attrs["duration_ms"] = (time.perf_counter() - self.started) * 1000.0
        attrs.setdefault("success", success)
        return attrs


class TelemetryClient:
    """Subclasses implement ``emit_span``; ``span`` handles timing and outcome."""

    @contextmanager
    def span(self, name: str, **attributes: Any) -> Iterator[BrainSpan]:
        span = BrainSpan(name, dict(attributes))
        success = False
        try:
            yield span
            success = True
        finally:
            self.emit_span(span.name, span.finish(success=success))

    def emit_span(self, name: str, attributes: Dict[str, Any]) -> None:
        raise NotImplementedError


class NoOpTelemetryClient(TelemetryClient):
    def emit_span(self, name: str, attributes: Dict[str, Any]) -> None:
        return None


class LoggingTelemetryClient(TelemetryClient):
    """Writes finished spans to this module's logger."""

    def __init__(self, level: int = logging.DEBUG) -> None:
        self.level = level

    def emit_span(self, name: str, attributes: Dict[str, Any]) -> None:
        if not logger.isEnabledFor(self.level):
            return
        duration = attributes.get("duration_ms", 0.0)
        rest = {k: v for k, v in sorted(attributes.items()) if k != "duration_ms"}
        logger.log(self.level, f"{name} took {duration:.2f}ms {rest}")


__all__ = [
    "BrainSpan",
    "LoggingTelemetryClient",
    "NoOpTelemetryClient",
    "TelemetryClient",
]
