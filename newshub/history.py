# File: newshub/history.py
"""newshub.history: история поисковых запросов (последние N, без дублей без учёта регистра)."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional, Union

from newshub.logger import get_logger

log = get_logger("history")

DEFAULT_LIMIT = 5


class SearchHistory:
    """Упорядоченный список запросов: самый свежий первым, не больше ``limit`` записей.

    Файл читается при создании (``load()``) и перезаписывается после каждого
    изменения. Повреждённый файл не мешает работе: история считается пустой.
    """

    def __init__(self, path: Union[str, Path, None] = None, limit: int = DEFAULT_LIMIT) -> None:
        if limit < 1:
            raise ValueError("limit must be >= 1")
        self.path = Path(path).expanduser() if path is not None else None
        self.limit = limit
        self._terms: List[str] = []
        self.load()

    @property
    def terms(self) -> List[str]:
        return list(self._terms)

    def __len__(self) -> int:
        return len(self._terms)

    def __iter__(self):
        return iter(list(self._terms))

    def load(self) -> List[str]:
        self._terms = []
        if self.path is None or not self.path.exists():
            return self.terms
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            log.error("Error loading search history from %s: %s", self.path, exc)
            return self.terms
        if not isinstance(data, list):
            log.error("Search history in %s is not a list, ignoring it", self.path)
            return self.terms
        for term in data:
            if isinstance(term, str) and term.strip():
                self._insert_last(term.strip())
        return self.terms

    def save(self) -> None:
        if self.path is None:
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(self._terms, ensure_ascii=False), encoding="utf-8")
        except OSError as exc:
            log.error("Error saving search history to %s: %s", self.path, exc)

    def add(self, term: str) -> List[str]:
        """Добавляет запрос в начало; прежняя запись с тем же текстом (без учёта регистра) удаляется."""
        trimmed = (term or "").strip()
        if not trimmed:
            return self.terms
        self._terms = [t for t in self._terms if t.lower() != trimmed.lower()]
        self._terms.insert(0, trimmed)
        del self._terms[self.limit :]
        self.save()
        return self.terms

    def remove(self, term: str) -> List[str]:
        self._terms = [t for t in self._terms if t != term]
        self.save()
        return self.terms

    def clear(self) -> None:
        self._terms = []
        self.save()

    def suggestions(self, text: Optional[str] = None) -> List[str]:
        """Запросы, содержащие text (без учёта регистра); все, если text пуст."""
        needle = (text or "").strip().lower()
        if not needle:
            return self.terms
        return [t for t in self._terms if needle in t.lower()]

    def _insert_last(self, term: str) -> None:
        if len(self._terms) >= self.limit:
            return
        if any(t.lower() == term.lower() for t in self._terms):
            return
        self._terms.append(term)


__all__ = ["SearchHistory", "DEFAULT_LIMIT"]
