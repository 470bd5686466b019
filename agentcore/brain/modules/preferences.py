"""Preferences module: user settings keyed by name."""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from .base import BrainModule, OnAdd

Preference = Tuple[str, Any]


class PreferencesModule(BrainModule[Preference]):
    name = "preferences"

    def __init__(self, *, on_add: Optional[OnAdd[Preference]] = None) -> None:
        super().__init__(on_add=on_add)
        self._prefs: Dict[str, Any] = {}

    def set(self, key: str, value: Any) -> None:
        with self._lock.write():
            self._prefs[key] = value
        self._notify((key, value))

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock.read():
            return self._prefs.get(key, default)

    def __contains__(self, key: object) -> bool:
        with self._lock.read():
            return key in self._prefs

    def as_dict(self) -> Dict[str, Any]:
        with self._lock.read():
            return dict(self._prefs)


__all__ = ["Preference", "PreferencesModule"]
