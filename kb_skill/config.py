"""Configuration for the knowledge base skill."""

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = Path(__file__).parent.parent
DOCS_DIR = Path(os.getenv("KB_DOCS_DIR", str(PROJECT_ROOT / "docs")))

# Indexing; settings may lower the hard caps but never raise them
KEYWORD_LIMIT = 20
MAX_KEYWORDS = min(int(os.getenv("KB_MAX_KEYWORDS", str(KEYWORD_LIMIT))), KEYWORD_LIMIT)
MIN_TOKEN_LENGTH = 2

# Search defaults
RESULT_LIMIT = 10
MAX_RESULTS = min(int(os.getenv("KB_MAX_RESULTS", str(RESULT_LIMIT))), RESULT_LIMIT)
KEYWORD_BONUS = float(os.getenv("KB_KEYWORD_BONUS", "0.1"))

# Response formatting
SEARCH_PREVIEW_CHARS = int(os.getenv("KB_SEARCH_PREVIEW_CHARS", "200"))
LIST_PREVIEW_CHARS = int(os.getenv("KB_LIST_PREVIEW_CHARS", "100"))
KEYWORDS_SHOWN = 8

LOG_LEVEL = os.getenv("KB_LOG_LEVEL", "WARNING")
