"""
Brain Module Base - Shared plumbing for extension modules

WHAT: Own lock, optional on-add hook and a single-thread hook dispatcher
WHERE: agentcore/brain/modules/base.py - parent of every extension module
WHO: Conversation, knowledge, preferences and todo modules
TIME: Hook dispatch O(1); hooks run in addition order on one thread

A module never holds its lock while its hook runs, and a failing hook is
logged and forgotten. Hooks are how a module feeds derived events back into
the brain through ``Brain.log_event``.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Generic, Optional, TypeVar

from ..callbacks import invoke_callback
from ..locks import ReadWriteLock

logger = logging.getLogger(__name__)

T = TypeVar("T")

OnAdd = Callable[[T], Any]


class BrainModule(Generic[T]):
    """Base class; subclasses call ``_notify(item)`` after each mutation."""

    name: str = "module"

    def __init__(self, *, on_add: Optional[OnAdd[T]] = None) -> None:
        self._lock = ReadWriteLock()
        self._on_add = on_add
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"brain-{self.name}")
        self._closed = False

    @property
    def on_add(self) -> Optional[OnAdd[T]]:
        with self._lock.read():
            return self._on_add

    @on_add.setter
    def on_add(self, hook: Optional[OnAdd[T]]) -> None:
        with self._lock.write():
            self._on_add = hook

    def _notify(self, item: T) -> None:
        hook = self.on_add
        if hook is None:
            return
        try:
            self._executor.submit(self._run_hook, hook, item)
        except RuntimeError:
            logger.debug(f"{self.name} module closed; skipping on_add hook")

    def _run_hook(self, hook: OnAdd[T], item: T) -> None:
        invoke_callback(hook, item).log_failure(f"{self.name} on_add hook", logger)

    def flush(self, timeout: Optional[float] = None) -> None:
        """Wait for hooks dispatched so far to finish."""

        if self._closed:
            return
        try:
            marker = self._executor.submit(lambda: None)
        except RuntimeError:
            return
        marker.result(timeout)

    def close(self, wait: bool = True) -> None:
        self._closed = True
        self._executor.shutdown(wait=wait)


__all__ = [
    "BrainModule",
    "OnAdd",
]
