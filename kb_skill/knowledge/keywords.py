"""Term counting and per-document keyword extraction."""

from typing import Dict, Iterable, List

from kb_skill.config import MAX_KEYWORDS


def build_term_counts(terms: Iterable[str]) -> Dict[str, int]:
    """
    Count occurrences of each term.

    The returned dict preserves the order in which terms were first seen,
    which :func:`extract_keywords` relies on for tie-breaking.
    """
    counts: Dict[str, int] = {}
    for term in terms:
        counts[term] = counts.get(term, 0) + 1
    return counts


def extract_keywords(term_counts: Dict[str, int], max_keywords: int = MAX_KEYWORDS) -> List[str]:
    """
    Pick the most frequent terms of a document.

    Parameters
    ----------
    term_counts : dict
        Term -> count mapping in first-occurrence order.
    max_keywords : int
        Upper bound on the number of keywords returned.

    Returns
    -------
    list of str
        Terms by descending count; equal counts keep first-occurrence order.
    """
    if max_keywords <= 0:
        return []
    # sorted() is stable, so ties stay in insertion order
    ranked = sorted(term_counts.items(), key=lambda item: item[1], reverse=True)
    return [term for term, _ in ranked[:max_keywords]]
