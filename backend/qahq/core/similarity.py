"""
Question text matching

Two policies live here:
- normalize_question_key: exact key (lower-case + trim) used by the daily
  pipeline before auto-publishing
- are_questions_similar: fuzzy word-overlap match used by the admin
  idea-status cleanup, where a human reviews the result
"""

import re

SIMILARITY_THRESHOLD = 0.8
# Words of this length or shorter are ignored by the overlap score
MIN_WORD_LENGTH = 2

_PUNCTUATION_RE = re.compile(r"[^\w\s]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_question_key(text: str | None) -> str:
    """Exact-match key: lower-case and trimmed"""
    return (text or "").lower().strip()


def normalize_text(text: str | None) -> str:
    """Lower-case, drop punctuation, collapse whitespace, trim"""
    normalized = _PUNCTUATION_RE.sub("", (text or "").lower())
    normalized = _WHITESPACE_RE.sub(" ", normalized)
    return normalized.strip()


def _significant_words(normalized: str) -> set[str]:
    return {w for w in normalized.split() if len(w) > MIN_WORD_LENGTH}


def word_overlap(question1: str, question2: str) -> float:
    """
    |A ∩ B| / max(|A|, |B|) over the significant words of both texts
    0.0 when either side has no significant words
    """
    words1 = _significant_words(normalize_text(question1))
    words2 = _significant_words(normalize_text(question2))
    if not words1 or not words2:
        return 0.0
    return len(words1 & words2) / max(len(words1), len(words2))


def are_questions_similar(
    question1: str,
    question2: str,
    threshold: float = SIMILARITY_THRESHOLD,
) -> bool:
    """
    Whether two question texts cover the same topic

    Identical non-empty normalized texts match; otherwise the word overlap
    must reach the threshold. Text that normalizes to nothing never matches.
    """
    normalized1 = normalize_text(question1)
    normalized2 = normalize_text(question2)

    if normalized1 and normalized1 == normalized2:
        return True

    return word_overlap(normalized1, normalized2) >= threshold
