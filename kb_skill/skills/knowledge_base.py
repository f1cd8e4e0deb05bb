"""
Knowledge Base Skill
====================

Keyword search over an in-memory corpus of short text entries.

Actions:
    add     -- store or replace an entry (key, content)
    search  -- TF-IDF ranked search (query)
    list    -- all entries in insertion order
    delete  -- remove an entry (key)

Hosts that load skills as modules use the module-level ``meta``,
``validate`` and ``execute``, which share one process-wide store.
Everything else should build its own :class:`KnowledgeBaseSkill`.
"""

import logging
import time
from typing import Dict, List, Optional

from kb_skill.config import (
    KEYWORD_BONUS,
    KEYWORDS_SHOWN,
    LIST_PREVIEW_CHARS,
    MAX_RESULTS,
    RESULT_LIMIT,
    SEARCH_PREVIEW_CHARS,
)
from kb_skill.errors import ErrorCode, SkillError, require_text
from kb_skill.knowledge.scoring import SearchOutcome, search_store
from kb_skill.knowledge.store import Document, KnowledgeStore
from kb_skill.knowledge.tokenizer import query_terms
from .base import Skill, success

logger = logging.getLogger(__name__)

VALID_ACTIONS = ["search", "add", "list", "delete"]


def _preview(content: str, limit: int) -> str:
    """Cut ``content`` to ``limit`` characters, marking the cut with '...'."""
    if len(content) > limit:
        return content[:limit] + "..."
    return content


def _format_hits(outcome: SearchOutcome) -> str:
    lines = []
    for i, hit in enumerate(outcome.hits, 1):
        doc = hit.document
        lines.append(
            f"{i}. [{doc.key}] (score: {hit.score:.4f})\n"
            f"   {_preview(doc.content, SEARCH_PREVIEW_CHARS)}\n"
            f"   Keywords: {', '.join(doc.keywords[:KEYWORDS_SHOWN])}"
        )
    return "\n\n".join(lines)


def _format_entries(entries: List[Dict]) -> str:
    return "\n\n".join(
        f"{i}. [{e['key']}] ({e['tokenCount']} tokens, added {e['addedAt']})\n"
        f"   {e['contentPreview']}\n"
        f"   Keywords: {', '.join(e['keywords'][:KEYWORDS_SHOWN])}"
        for i, e in enumerate(entries, 1)
    )


class KnowledgeBaseSkill(Skill):
    """Skill wrapping a :class:`KnowledgeStore` with add/search/list/delete actions."""

    name = "knowledge-base"
    version = "1.0.0"
    description = (
        "In-memory knowledge base with automatic keyword extraction "
        "and TF-IDF ranked search."
    )
    actions = VALID_ACTIONS

    def __init__(
        self,
        store: Optional[KnowledgeStore] = None,
        max_results: int = MAX_RESULTS,
        keyword_bonus: float = KEYWORD_BONUS,
    ):
        self.store = store if store is not None else KnowledgeStore()
        self.max_results = min(max_results, RESULT_LIMIT)
        self.keyword_bonus = keyword_bonus

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def check_params(self, action: str, params: Dict) -> None:
        if action == "add":
            require_text(params.get("key"), ErrorCode.INVALID_KEY,
                         "key is required and must be a non-empty string.")
            require_text(params.get("content"), ErrorCode.INVALID_CONTENT,
                         "content is required and must be a non-empty string.")
        elif action == "search":
            query = require_text(params.get("query"), ErrorCode.INVALID_QUERY,
                                 "query is required and must be a non-empty string.")
            if not query_terms(query):
                raise SkillError(
                    ErrorCode.EMPTY_QUERY_TOKENS,
                    "query contains no searchable terms after removing stop words.",
                )
        elif action == "delete":
            require_text(params.get("key"), ErrorCode.INVALID_KEY,
                         "key is required for delete action.")

    def dispatch(self, action: str, params: Dict, context: Optional[Dict]) -> Dict:
        # context is accepted for the host contract; everything here is local
        if action == "add":
            return self.add(params["key"], params["content"])
        if action == "search":
            return self.search(params["query"])
        if action == "list":
            return self.list()
        return self.delete(params["key"])

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def add(self, key: str, content: str) -> Dict:
        """Add or replace an entry and report its extracted keywords."""
        doc, is_update = self.store.add(key, content)
        verb = "updated" if is_update else "added"
        return success(
            f'Knowledge entry "{doc.key}" {verb} successfully.\n'
            f"Keywords: {', '.join(doc.keywords)}\n"
            f"Tokens indexed: {doc.token_count}",
            action="add",
            id=doc.key,
            key=doc.key,
            isUpdate=is_update,
            keywords=list(doc.keywords),
            keywordCount=len(doc.keywords),
            tokenCount=doc.token_count,
        )

    def search(self, query: str) -> Dict:
        """
        Rank entries against ``query``.

        Returns
        -------
        dict
            Response envelope. ``resultCount`` and ``returnedCount`` are the
            number of results returned (at most ``max_results``);
            ``matchCount`` is the number of matching entries before the cap.
        """
        terms = query_terms(query)
        if not terms:
            raise SkillError(
                ErrorCode.EMPTY_QUERY_TOKENS,
                "query contains no searchable terms after removing stop words.",
            )

        base = {"action": "search", "query": query, "queryTokens": terms}
        started = time.perf_counter()

        # hold the lock while formatting so hits cannot change underneath us
        with self.store.lock:
            if len(self.store) == 0:
                return success(
                    'The knowledge base is empty. Add entries first using the "add" action.',
                    **base, resultCount=0, returnedCount=0, matchCount=0,
                    truncated=False, results=[],
                )

            outcome = search_store(self.store, terms, self.max_results, self.keyword_bonus)
            results = [
                {
                    "key": hit.document.key,
                    "score": hit.score,
                    "contentPreview": hit.document.content[:SEARCH_PREVIEW_CHARS],
                    "keywords": list(hit.document.keywords),
                }
                for hit in outcome.hits
            ]
            text = _format_hits(outcome)

        logger.debug("search %r: %d/%d results in %.2f ms", query, len(results),
                     outcome.match_count, (time.perf_counter() - started) * 1000)

        counts = {
            "resultCount": len(results),
            "returnedCount": len(results),
            "matchCount": outcome.match_count,
            "truncated": outcome.truncated,
        }
        if not results:
            return success(f'No matching entries found for query: "{query}".',
                           **base, **counts, results=[])
        return success(
            f'Search results for "{query}" ({len(results)} of {outcome.match_count} matches):'
            f"\n\n{text}",
            **base, **counts, results=results,
        )

    def list(self) -> Dict:
        """Describe every entry in insertion order."""
        with self.store.lock:
            entries = [self._entry_summary(doc) for doc in self.store.list()]
        if not entries:
            return success("The knowledge base is empty.",
                           action="list", count=0, entryCount=0, entries=[])
        return success(
            f"Knowledge base entries ({len(entries)}):\n\n{_format_entries(entries)}",
            action="list",
            count=len(entries),
            entryCount=len(entries),
            entries=entries,
        )

    def delete(self, key: str) -> Dict:
        """Remove an entry; NOT_FOUND if the key is absent."""
        remaining = self.store.delete(key)
        key = key.strip()
        return success(
            f'Knowledge entry "{key}" deleted successfully.',
            action="delete",
            key=key,
            remainingEntries=remaining,
        )

    @staticmethod
    def _entry_summary(doc: Document) -> Dict:
        return {
            "key": doc.key,
            "contentPreview": _preview(doc.content, LIST_PREVIEW_CHARS),
            "keywords": list(doc.keywords),
            "tokenCount": doc.token_count,
            "addedAt": doc.added_at,
        }


# ---------------------------------------------------------------------------
# Module-level entry points for hosts that load skills as modules
# ---------------------------------------------------------------------------

_default_skill = KnowledgeBaseSkill()

meta = _default_skill.meta


def validate(params: Optional[Dict]) -> Dict:
    """Validate ``params`` against the process-wide knowledge base."""
    return _default_skill.validate(params)


def execute(params: Optional[Dict], context: Optional[Dict] = None) -> Dict:
    """Run one request against the process-wide knowledge base."""
    return _default_skill.execute(params, context)
