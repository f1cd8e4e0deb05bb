"""
Text tokenization and stop-word filtering.

Terms are lower-cased runs of ASCII letters and digits. Internal hyphens
are kept (``server-side`` is one term); everything else separates terms.
"""

import re
from typing import Iterator, List

from kb_skill.config import MIN_TOKEN_LENGTH

_TERM_RE = re.compile(r"[a-z0-9]+(?:-[a-z0-9]+)*")

STOP_WORDS = frozenset({
    "a", "an", "the", "is", "it", "in", "on", "at", "to", "for", "of", "and",
    "or", "but", "not", "with", "this", "that", "from", "by", "as", "be", "was",
    "were", "been", "are", "am", "has", "had", "have", "do", "does", "did", "will",
    "would", "could", "should", "may", "might", "can", "shall", "if", "then",
    "than", "so", "no", "yes", "up", "out", "about", "into", "over", "after",
    "before", "between", "under", "above", "below", "each", "every", "all", "any",
    "both", "few", "more", "most", "other", "some", "such", "only", "own", "same",
    "too", "very", "just", "because", "through", "during", "while", "what", "which",
    "who", "whom", "how", "when", "where", "why", "here", "there", "its", "my",
    "your", "his", "her", "our", "their", "we", "you", "he", "she", "they", "me",
    "him", "us", "them", "i",
})


def tokenize(text: str) -> Iterator[str]:
    """
    Yield normalized terms from ``text``.

    Lower-cases the input and drops terms shorter than two characters.
    Stop words are NOT removed here; see :func:`index_terms`.
    Non-string or empty input yields nothing.
    """
    if not isinstance(text, str) or not text:
        return
    for match in _TERM_RE.finditer(text.lower()):
        term = match.group(0)
        if len(term) >= MIN_TOKEN_LENGTH:
            yield term


def is_stop_word(term: str) -> bool:
    """Return True if ``term`` is a common word excluded from indexing."""
    return term in STOP_WORDS


def index_terms(text: str) -> List[str]:
    """Tokenize ``text`` and drop stop words -- the terms that get indexed or queried."""
    return [t for t in tokenize(text) if not is_stop_word(t)]


def query_terms(text: str) -> List[str]:
    """Like :func:`index_terms` but de-duplicated, keeping first-occurrence order."""
    return list(dict.fromkeys(index_terms(text)))
