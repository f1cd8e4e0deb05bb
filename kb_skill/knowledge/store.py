"""
In-memory document store.

Holds one :class:`Document` per key, in insertion order. Re-adding a key
replaces the document's content in place; deleting it forgets the key
entirely. All access goes through a single re-entrant lock so a search
never sees a half-written document.
"""

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Iterator, List, Tuple

from kb_skill.config import KEYWORD_LIMIT, MAX_KEYWORDS
from kb_skill.errors import ErrorCode, KeyNotFoundError, require_text
from .keywords import build_term_counts, extract_keywords
from .tokenizer import index_terms

logger = logging.getLogger(__name__)


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class Document:
    """A stored knowledge entry with its precomputed index data."""

    key: str
    content: str
    term_counts: Dict[str, int] = field(default_factory=dict)
    keywords: List[str] = field(default_factory=list)
    added_at: str = field(default_factory=_utc_now)

    @property
    def token_count(self) -> int:
        """Number of distinct indexed terms."""
        return len(self.term_counts)

    def reindex(self, content: str, max_keywords: int = MAX_KEYWORDS) -> None:
        """Replace content and rebuild term counts and keywords."""
        term_counts = build_term_counts(index_terms(content))
        self.content = content
        self.term_counts = term_counts
        self.keywords = extract_keywords(term_counts, max_keywords)


class KnowledgeStore:
    """Process-local collection of documents keyed by caller-supplied ids."""

    def __init__(self, max_keywords: int = MAX_KEYWORDS):
        self.max_keywords = min(max_keywords, KEYWORD_LIMIT)
        self._docs: Dict[str, Document] = {}
        self._lock = threading.RLock()

    def add(self, key: str, content: str) -> Tuple[Document, bool]:
        """
        Create or replace the document stored under ``key``.

        Parameters
        ----------
        key : str
            Entry identifier; surrounding whitespace is stripped.
        content : str
            Raw text, kept verbatim.

        Returns
        -------
        tuple
            ``(document, is_update)`` where ``is_update`` tells whether the
            key already existed.
        """
        key = require_text(key, ErrorCode.INVALID_KEY,
                           "key is required and must be a non-empty string.")
        require_text(content, ErrorCode.INVALID_CONTENT,
                     "content is required and must be a non-empty string.")

        with self._lock:
            doc = self._docs.get(key)
            is_update = doc is not None
            if doc is None:
                doc = Document(key=key, content=content)
                self._docs[key] = doc
            # addedAt is creation time and survives updates
            doc.reindex(content, self.max_keywords)

        logger.debug("%s entry %r (%d terms)", "updated" if is_update else "added",
                     key, doc.token_count)
        return doc, is_update

    def get(self, key: str) -> Document:
        """Return the document for ``key`` or raise :class:`KeyNotFoundError`."""
        key = key.strip() if isinstance(key, str) else key
        with self._lock:
            try:
                return self._docs[key]
            except KeyError:
                raise KeyNotFoundError(key) from None

    def delete(self, key: str) -> int:
        """Remove ``key`` and return the number of remaining documents."""
        key = require_text(key, ErrorCode.INVALID_KEY, "key is required for delete action.")
        with self._lock:
            if key not in self._docs:
                raise KeyNotFoundError(key)
            del self._docs[key]
            remaining = len(self._docs)
        logger.debug("deleted entry %r, %d remaining", key, remaining)
        return remaining

    def list(self) -> List[Document]:
        """Documents in insertion order."""
        with self._lock:
            return list(self._docs.values())

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._docs)

    @property
    def lock(self) -> threading.RLock:
        """The lock guarding the store; hold it to read several documents consistently."""
        return self._lock

    def __len__(self) -> int:
        return len(self._docs)

    def __contains__(self, key: object) -> bool:
        return key in self._docs

    def __iter__(self) -> Iterator[Document]:
        return iter(self.list())
