from __future__ import annotations
from typing import Dict, Iterable, List, Optional, Set
import re

from data.hidden_triggers import HIDDEN_TRIGGERS, TRIGGER_EXCEPTIONS
from data.synonyms import INGREDIENT_SYNONYMS


_NON_LETTERS = re.compile(r"[^a-z\s]")
_WHITESPACE = re.compile(r"\s+")


def _build_reverse_index(synonyms: Dict[str, List[str]]) -> Dict[str, str]:
    reverse: Dict[str, str] = {}
    for canonical, varieties in synonyms.items():
        for variety in varieties:
            # first owner wins, mirroring a scan of the table in order
            reverse.setdefault(variety.strip().lower(), canonical)
    return reverse


_SYNONYM_OWNERS = _build_reverse_index(INGREDIENT_SYNONYMS)


def clean_term(term: Optional[str]) -> str:
    if not term:
        return ""
    return _WHITESPACE.sub(" ", term.strip().lower())


def canonicalize(term: Optional[str]) -> str:
    """Resolve a free-text ingredient to its canonical name.

    Known canonical keys map to themselves, synonyms map to their owning key and
    anything else passes through cleaned, so the function is total and idempotent.
    """
    cleaned = clean_term(term)
    if not cleaned:
        return ""
    if cleaned in INGREDIENT_SYNONYMS:
        return cleaned
    return _SYNONYM_OWNERS.get(cleaned, cleaned)


def _trigger_applies(key: str, form: str) -> bool:
    if key not in form:
        return False
    return not any(exc in form for exc in TRIGGER_EXCEPTIONS.get(key, []))


def expand_hidden_triggers(canonical_term: str, raw_term: Optional[str] = None) -> Set[str]:
    forms = {f for f in (clean_term(canonical_term), clean_term(raw_term)) if f}
    expanded: Set[str] = set(forms)
    for key, implied in HIDDEN_TRIGGERS.items():
        if any(_trigger_applies(key, form) for form in forms):
            expanded.update(implied)
    return expanded


def matching_term(user_terms: Iterable[str], expanded: Set[str]) -> Optional[str]:
    """Return the first user term contained in any member of ``expanded``."""
    for term in user_terms:
        if term and any(term in member for member in expanded):
            return term
    return None


def canonical_user_terms(terms: Iterable[str]) -> List[str]:
    seen: List[str] = []
    for t in sorted(terms or []):
        c = canonicalize(t)
        if c and c not in seen:
            seen.append(c)
    return seen


def title_terms(title: str) -> Set[str]:
    """Canonicalized and expanded unigrams and bigrams of a dish title."""
    words = _NON_LETTERS.sub(" ", (title or "").lower()).split()
    grams = list(words) + [f"{a} {b}" for a, b in zip(words, words[1:])]
    terms: Set[str] = set()
    for gram in grams:
        terms |= expand_hidden_triggers(canonicalize(gram), gram)
    return terms
