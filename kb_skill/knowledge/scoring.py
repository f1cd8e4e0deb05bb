"""
TF-IDF relevance scoring over a KnowledgeStore.

Document frequencies are derived from the store at query time, so adds and
deletes are reflected immediately with no index to maintain. Scores are
computed on a (documents x query terms) count matrix:

    score(d) = sum_t tf(t, d) * idf(t)  +  sum_{t in keywords(d)} bonus * (1 + idf(t))
    idf(t)   = ln(N / df(t))

A document matches if it contains at least one query term, whatever its score.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from kb_skill.config import KEYWORD_BONUS, MAX_RESULTS
from .store import Document, KnowledgeStore

logger = logging.getLogger(__name__)


@dataclass
class SearchHit:
    document: Document
    score: float


@dataclass
class SearchOutcome:
    """Ranked hits plus the counts needed to describe them."""

    hits: List[SearchHit]
    match_count: int
    corpus_size: int

    @property
    def truncated(self) -> bool:
        return self.match_count > len(self.hits)


def term_count_matrix(docs: Sequence[Document], terms: Sequence[str]) -> np.ndarray:
    """Raw term counts, one row per document and one column per term."""
    return np.array(
        [[doc.term_counts.get(t, 0) for t in terms] for doc in docs],
        dtype=np.float64,
    ).reshape(len(docs), len(terms))


def inverse_document_frequency(tf: np.ndarray) -> np.ndarray:
    """
    Compute ``ln(N / df)`` per column of a term count matrix.

    Terms absent from every document get an idf of 0.
    """
    n_docs = tf.shape[0]
    df = np.count_nonzero(tf, axis=0)
    idf = np.zeros(tf.shape[1], dtype=np.float64)
    present = df > 0
    idf[present] = np.log(n_docs / df[present])
    return idf


def score_documents(
    docs: Sequence[Document],
    terms: Sequence[str],
    keyword_bonus: float = KEYWORD_BONUS,
    tf: Optional[np.ndarray] = None,
) -> np.ndarray:
    """
    Score every document against ``terms``.

    Returns
    -------
    np.ndarray
        One score per document; documents without any query term score 0.
    """
    if tf is None:
        tf = term_count_matrix(docs, terms)
    if tf.size == 0:
        return np.zeros(len(docs), dtype=np.float64)

    idf = inverse_document_frequency(tf)
    in_keywords = np.array(
        [[t in doc.keywords for t in terms] for doc in docs], dtype=bool
    ).reshape(tf.shape)
    salient = in_keywords & (tf > 0)

    return (tf * idf).sum(axis=1) + (salient * (keyword_bonus * (1.0 + idf))).sum(axis=1)


def rank(scores: np.ndarray, matched: np.ndarray, limit: int) -> np.ndarray:
    """
    Indices of matched documents ordered by descending score.

    Ties keep document order (earlier additions first).
    """
    candidates = np.flatnonzero(matched)
    order = np.argsort(-scores[candidates], kind="stable")
    return candidates[order][:max(limit, 0)]


def search_store(
    store: KnowledgeStore,
    terms: Sequence[str],
    max_results: int = MAX_RESULTS,
    keyword_bonus: float = KEYWORD_BONUS,
) -> SearchOutcome:
    """
    Rank the documents of ``store`` against already-normalized query ``terms``.

    Parameters
    ----------
    store : KnowledgeStore
        Corpus to search. Read under the store lock.
    terms : sequence of str
        Query terms (tokenized, stop words removed).
    max_results : int
        Cap on the number of hits returned.
    keyword_bonus : float
        Weight of the bonus for terms found in a document's keywords.

    Returns
    -------
    SearchOutcome
    """
    with store.lock:
        docs = store.list()
        tf = term_count_matrix(docs, terms)
        scores = score_documents(docs, terms, keyword_bonus, tf=tf)
    matched = tf.any(axis=1)

    top = rank(scores, matched, max_results)
    hits = [SearchHit(document=docs[i], score=float(scores[i])) for i in top]
    outcome = SearchOutcome(hits=hits, match_count=int(matched.sum()), corpus_size=len(docs))
    logger.debug("query %s matched %d of %d documents", list(terms),
                 outcome.match_count, outcome.corpus_size)
    return outcome
