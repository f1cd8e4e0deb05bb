"""Knowledge module -- tokenization, document store, and TF-IDF retrieval."""

from .tokenizer import tokenize, is_stop_word, index_terms, STOP_WORDS
from .keywords import build_term_counts, extract_keywords
from .store import Document, KnowledgeStore
from .scoring import search_store
from .loader import load_all_docs, seed_store
