from __future__ import annotations
from collections import OrderedDict
from typing import Any, Callable, Dict, Iterable, List, Optional, Union
import re
import threading
import time

from config import settings
from models.flavor import RecipeSummary
from models.suggestion import SuggestionEntry, SuggestionKind
from utils.logger import setup_logger

logger = setup_logger(__name__)

PREFIX_BONUS = 220
CONTAINS_BONUS = 140
TOKEN_BONUS = 30
MAX_HIT_BONUS = 25
MIN_QUERY_LENGTH = 2
BOOTSTRAP_MAX = 1000

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")

Observation = Union[Dict[str, Any], RecipeSummary, str]


def normalize_text(value: Any) -> str:
    if value is None:
        return ""
    lowered = _NON_ALNUM.sub(" ", str(value).lower())
    return _WHITESPACE.sub(" ", lowered).strip()


def _title_and_kind(item: Observation):
    if isinstance(item, str):
        return item, SuggestionKind.RECIPE
    if isinstance(item, RecipeSummary):
        return item.title, SuggestionKind.RECIPE
    title = item.get("title") or item.get("Recipe_title") or item.get("dish_name")
    kind = item.get("kind") or SuggestionKind.RECIPE
    try:
        return title, SuggestionKind(kind)
    except ValueError:
        logger.warning("Unknown suggestion kind, indexing as recipe", extra={"title": title, "kind": str(kind)})
        return title, SuggestionKind.RECIPE


class SuggestionIndex:
    """Autocomplete over every dish and ingredient name the service has seen.

    Bounded to ``max_entries``; once full, the least recently seen entry goes first.
    """

    def __init__(
        self,
        max_entries: Optional[int] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.max_entries = max_entries or settings.SUGGESTION_INDEX_MAX_ENTRIES
        self._clock = clock
        self._entries: "OrderedDict[str, SuggestionEntry]" = OrderedDict()
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, title: str) -> Optional[SuggestionEntry]:
        with self._lock:
            return self._entries.get(normalize_text(title))

    def observe(self, items: Iterable[Observation], source: str = "search") -> int:
        observed = 0
        evicted = 0
        with self._lock:
            for item in items or []:
                raw_title, kind = _title_and_kind(item)
                if not raw_title:
                    continue
                title = str(raw_title).strip()
                key = normalize_text(title)
                if not key:
                    continue

                now = self._clock()
                existing = self._entries.get(key)
                if existing is not None:
                    existing.title = title
                    existing.kind = kind
                    existing.hit_count += 1
                    existing.last_seen = now
                    self._entries.move_to_end(key)
                else:
                    self._entries[key] = SuggestionEntry(
                        title=title,
                        key=key,
                        source_tag=source,
                        kind=kind,
                        last_seen=now,
                    )
                observed += 1

                while len(self._entries) > self.max_entries:
                    self._entries.popitem(last=False)
                    evicted += 1

        if evicted:
            logger.info(
                "Suggestion index evicted stale entries",
                extra={"evicted": evicted, "max_entries": self.max_entries}
            )
        return observed

    def _score(self, entry: SuggestionEntry, query: str, tokens: List[str]) -> int:
        score = 0
        if entry.key.startswith(query):
            score += PREFIX_BONUS
        if query in entry.key:
            score += CONTAINS_BONUS
        for token in tokens:
            if len(token) > 1 and token in entry.key:
                score += TOKEN_BONUS
        score += min(entry.hit_count, MAX_HIT_BONUS)
        return score

    def rank(self, query: str, limit: Optional[int] = None) -> List[SuggestionEntry]:
        normalized = normalize_text(query)
        if len(normalized) < MIN_QUERY_LENGTH:
            return []
        limit = limit or settings.SUGGESTION_LIMIT
        tokens = [t for t in normalized.split(" ") if t]

        with self._lock:
            entries = [e.model_copy() for e in self._entries.values()]

        scored = []
        for entry in entries:
            score = self._score(entry, normalized, tokens)
            if score > 0:
                scored.append((score, entry))

        scored.sort(key=lambda pair: (-pair[0], -pair[1].hit_count, -pair[1].last_seen))
        return [entry for _, entry in scored[:limit]]

    def bootstrap(self, limit: int = 400) -> List[SuggestionEntry]:
        limit = max(0, min(limit, BOOTSTRAP_MAX))
        with self._lock:
            entries = [e.model_copy() for e in self._entries.values()]
        entries.sort(key=lambda e: (-e.hit_count, -e.last_seen))
        return entries[:limit]
