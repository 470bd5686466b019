"""Knowledge module: question/answer facts with exact-match lookup."""

from __future__ import annotations

from typing import List, Optional

from ..models import KnowledgeEntry
from .base import BrainModule, OnAdd


class KnowledgeModule(BrainModule[KnowledgeEntry]):
    name = "knowledge"

    def __init__(self, *, on_add: Optional[OnAdd[KnowledgeEntry]] = None) -> None:
        super().__init__(on_add=on_add)
        self._entries: List[KnowledgeEntry] = []

    def add(self, question: str, answer: str) -> KnowledgeEntry:
        entry = KnowledgeEntry(question=question, answer=answer)
        with self._lock.write():
            self._entries.append(entry)
        self._notify(entry)
        return entry

    def find(self, question: str) -> Optional[str]:
        """Answer of the first entry whose question matches exactly."""

        with self._lock.read():
            for entry in self._entries:
                if entry.question == question:
                    return entry.answer
        return None

    def entries(self) -> List[KnowledgeEntry]:
        with self._lock.read():
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._entries)


__all__ = ["KnowledgeModule"]
