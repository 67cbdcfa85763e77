from rapidfuzz.distance import Levenshtein


MAX_LENGTH_DIFFERENCE = 2
MIN_FUZZY_WORD_LENGTH = 4
SHORT_KEY_LENGTH = 6


def allowed_edits(keyword: str) -> int:
    return 2 if len(keyword) > SHORT_KEY_LENGTH else 1


def is_fuzzy_match(word: str, keyword: str) -> bool:
    w = word.lower()
    k = keyword.lower()

    if w == k:
        return True

    if abs(len(w) - len(k)) > MAX_LENGTH_DIFFERENCE:
        return False

    # short OCR fragments only match exactly
    if len(w) < MIN_FUZZY_WORD_LENGTH:
        return False

    limit = allowed_edits(k)
    return Levenshtein.distance(w, k, score_cutoff=limit) <= limit
