"""
Callback Invocation - Uniform failure capture for user-supplied hooks

WHAT: Runs report sinks and module hooks, returning an explicit result
WHERE: agentcore/brain/callbacks.py - shared by brain, reflection worker, modules
WHO: Any component calling code it does not own
TIME: Overhead of one try/except per call

Callers inspect ``CallbackResult.ok`` and log the failure themselves; nothing
raised inside a hook propagates into ``log_event``, ``add`` or the worker.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

ReportSink = Callable[[str], None]


@dataclass(slots=True, frozen=True)
class CallbackResult:
    ok: bool
    value: Any = None
    error: Optional[BaseException] = None

    def log_failure(self, where: str, log: logging.Logger | None = None) -> None:
        if self.ok:
            return
        (log or logger).warning(f"{where} failed: {self.error!r}", exc_info=self.error)


def invoke_callback(fn: Callable[..., Any], *args: Any, **kwargs: Any) -> CallbackResult:
    try:
        return CallbackResult(ok=True, value=fn(*args, **kwargs))
    except Exception as exc:  # noqa: BLE001 - hooks are untrusted
        return CallbackResult(ok=False, error=exc)


__all__ = [
    "CallbackResult",
    "ReportSink",
    "invoke_callback",
]
