"""
Reflection - Analyzer contract and the background reflection worker

WHAT: Pluggable analyzer hook plus a single long-lived worker thread that runs
      reflection passes requested by the brain's scheduler
WHERE: agentcore/brain/reflection.py - between the scheduler and the analyzer
WHO: Brain.log_event (producer), the analyzer and report sink (consumers)
TIME: submit() is O(1) and never blocks; each pass costs one analyze() call

Requests go through a bounded queue. When the queue is full a new request is
coalesced into the pending ones (dropped and counted) rather than spawning
more work, which bounds outstanding reflection passes and gives ``close()``
a natural stop point.
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from datetime import datetime
from typing import Callable, Optional, Protocol, runtime_checkable

from .callbacks import invoke_callback
from .models import utc_now

logger = logging.getLogger(__name__)

_STOP = object()


@runtime_checkable
class ReflectionAnalyzer(Protocol):
    def analyze(self) -> None:
        """Inspect memory and adapt; side effects only."""


class SelfReflectionAnalyzer:
    """Default analyzer: records when it last ran and how often."""

    def __init__(self) -> None:
        self.last_analysis: Optional[datetime] = None
        self.runs = 0
        self._lock = threading.Lock()

    def analyze(self) -> None:
        with self._lock:
            self.last_analysis = utc_now()
            self.runs += 1


class ReflectionWorker:
    """Single consumer thread draining a bounded queue of reflection requests."""

    def __init__(self, run: Callable[[], None], *, maxsize: int = 64, name: str = "brain-reflection") -> None:
        if maxsize < 1:
            raise ValueError("maxsize must be >= 1")
        self._run = run
        self._queue: "queue.Queue[object]" = queue.Queue(maxsize=maxsize)
        self._pending = 0
        self._idle = threading.Condition()
        self._closed = False
        self._stopping = threading.Event()
        self.dropped = 0
        self.completed = 0
        self._thread = threading.Thread(target=self._loop, name=name, daemon=True)
        self._thread.start()

    @property
    def closed(self) -> bool:
        return self._closed

    def submit(self) -> bool:
        """Queue one reflection pass; returns False if it was coalesced or the worker is closed."""

        with self._idle:
            if self._closed:
                return False
            try:
                self._queue.put_nowait(None)
            except queue.Full:
                self.dropped += 1
                logger.debug("Reflection queue full; coalescing request")
                return False
            self._pending += 1
            return True

    def wait_idle(self, timeout: Optional[float] = None) -> bool:
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._idle:
            while self._pending:
                remaining = None if deadline is None else deadline - time.monotonic()
                if remaining is not None and remaining <= 0:
                    return False
                self._idle.wait(remaining)
            return True

    def close(self, timeout: Optional[float] = 5.0) -> None:
        """Stop the worker; a pass already running finishes, queued ones are discarded."""

        with self._idle:
            if self._closed:
                return
            self._closed = True
            self._stopping.set()
        try:
            self._queue.put_nowait(_STOP)
        except queue.Full:
            # the loop sees _stopping once the running pass returns
            pass
        self._thread.join(timeout)

    def _loop(self) -> None:
        while True:
            item = self._queue.get()
            if item is _STOP:
                return
            if not self._stopping.is_set():
                result = invoke_callback(self._run)
                result.log_failure("Reflection pass", logger)
                self._done(completed=True)
            else:
                self._done(completed=False)
            if self._stopping.is_set():
                self._discard_queued()
                return

    def _done(self, *, completed: bool) -> None:
        with self._idle:
            self._pending -= 1
            if completed:
                self.completed += 1
            self._idle.notify_all()

    def _discard_queued(self) -> None:
        while True:
            try:
                item = self._queue.get_nowait()
            except queue.Empty:
                return
            if item is not _STOP:
                self._done(completed=False)


__all__ = [
    "ReflectionAnalyzer",
    "ReflectionWorker",
    "SelfReflectionAnalyzer",
]
