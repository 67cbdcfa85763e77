from __future__ import annotations
from typing import Dict, List, Optional, Tuple
import re

from data.knowledge_base import FOOD_KNOWLEDGE_BASE, MENU_HEADER_FILLERS, MENU_SECTION_WORDS
from models.dish import DishCandidate, KnowledgeEntry
from services.fuzzy_matching import is_fuzzy_match
from utils.logger import setup_logger

logger = setup_logger(__name__)

MIN_LINE_LENGTH = 5
MIN_TOKEN_LENGTH = 3
MIN_NAME_LENGTH = 4
TITLE_MIN_LENGTH = 6
TITLE_MAX_LENGTH = 60

_PRICE_ONLY = re.compile(r"^\s*[$€£¥₹]?\s*[\d][\d,.\s]*[$€£¥₹]?\s*$")
_NON_LETTERS = re.compile(r"[^a-z\s]")
_WHITESPACE = re.compile(r"\s+")
_LEADING_JUNK = re.compile(r"^[^a-zA-Z]+")
_TRAILING_JUNK = re.compile(r"[^a-zA-Z)]+$")


def _header_word(word: str) -> str:
    letters = re.sub(r"[^a-z]", "", word.lower())
    if len(letters) > 3 and letters.endswith("s"):
        letters = letters[:-1]
    return letters


def is_section_header(line: str) -> bool:
    """True when every word of the line is a section word or filler ("Desserts & Drinks")."""
    words = [w for w in (_header_word(w) for w in line.split()) if w]
    if not words:
        return False
    allowed = set(MENU_SECTION_WORDS) | set(MENU_HEADER_FILLERS)
    return any(w in MENU_SECTION_WORDS for w in words) and all(w in allowed for w in words)


def is_price_only(line: str) -> bool:
    return bool(_PRICE_ONLY.match(line))


def tokenize(line: str) -> List[str]:
    cleaned = _NON_LETTERS.sub(" ", line.lower())
    return [w for w in cleaned.split() if len(w) >= MIN_TOKEN_LENGTH]


def display_name(line: str) -> str:
    collapsed = _WHITESPACE.sub(" ", line.strip())
    capitalized = " ".join(w[:1].upper() + w[1:] for w in collapsed.split(" "))
    return _TRAILING_JUNK.sub("", _LEADING_JUNK.sub("", capitalized)).strip()


def normalized_name(name: str) -> str:
    return _WHITESPACE.sub(" ", name.strip().lower())


class DishCandidateExtractor:
    """Turns OCR menu text into dish candidates, one line at a time."""

    def __init__(self, knowledge_base: Optional[Dict[str, Dict]] = None):
        self.knowledge_base = knowledge_base if knowledge_base is not None else FOOD_KNOWLEDGE_BASE

    def _entry(self, key: str) -> KnowledgeEntry:
        return KnowledgeEntry(name=key, **self.knowledge_base[key])

    def match_line(self, line: str) -> List[Tuple[str, KnowledgeEntry]]:
        tokens = tokenize(line)
        if not tokens:
            return []
        phrase = " ".join(tokens)

        matches: List[Tuple[str, KnowledgeEntry]] = []
        for key in self.knowledge_base:
            keyword = key.lower()
            if " " in keyword:
                hit = f" {keyword} " in f" {phrase} "
            else:
                hit = any(is_fuzzy_match(token, keyword) for token in tokens)
            if hit:
                matches.append((key, self._entry(key)))
        return matches

    def _candidate(self, line: str) -> Optional[DishCandidate]:
        stripped = line.strip()
        if len(stripped) < MIN_LINE_LENGTH:
            return None
        if is_price_only(stripped) or is_section_header(stripped):
            return None

        matches = self.match_line(stripped)
        if matches:
            name = display_name(stripped)
            if len(name) < MIN_NAME_LENGTH:
                return None
            return DishCandidate(
                name=name,
                original_text=stripped,
                matched_ingredients=[key for key, _ in matches],
                ingredient_profiles=[entry for _, entry in matches],
                confidence=len(matches),
                is_analyzed=True,
            )

        if stripped[0].isupper() and TITLE_MIN_LENGTH < len(stripped) < TITLE_MAX_LENGTH:
            name = _TRAILING_JUNK.sub("", _LEADING_JUNK.sub("", _WHITESPACE.sub(" ", stripped))).strip()
            if len(name) < MIN_NAME_LENGTH:
                return None
            return DishCandidate(name=name, original_text=stripped, is_analyzed=False)

        return None

    def extract(self, raw_text: Optional[str]) -> List[DishCandidate]:
        if not raw_text:
            return []

        candidates: List[DishCandidate] = []
        seen = set()
        lines = raw_text.splitlines()
        for line in lines:
            candidate = self._candidate(line)
            if candidate is None:
                continue
            key = normalized_name(candidate.name)
            if key in seen:
                continue
            seen.add(key)
            candidates.append(candidate)

        logger.info(
            "Dish candidates extracted",
            extra={
                "lines": len(lines),
                "candidates": len(candidates),
                "analyzed": sum(1 for c in candidates if c.is_analyzed),
            }
        )
        return candidates
