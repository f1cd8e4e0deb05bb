"""Load Markdown documents and seed a knowledge store with their sections."""

import logging
import re
from pathlib import Path
from typing import Dict, List, Optional

from kb_skill.config import DOCS_DIR
from .store import KnowledgeStore

logger = logging.getLogger(__name__)


def load_all_docs(docs_dir: Optional[Path] = None) -> List[Dict]:
    """
    Load all .md files from ``docs_dir`` (defaults to DOCS_DIR).

    Returns list of dicts with keys: title, content, sections, filename.
    """
    docs_dir = Path(docs_dir) if docs_dir is not None else DOCS_DIR
    docs = []
    if not docs_dir.exists():
        logger.info("docs directory %s does not exist", docs_dir)
        return docs

    for md_file in sorted(docs_dir.glob("*.md")):
        text = md_file.read_text(encoding="utf-8")
        docs.append({
            "title": md_file.stem.replace("_", " ").title(),
            "content": text,
            "sections": _parse_sections(text),
            "filename": md_file.name,
        })
    return docs


def _parse_sections(text: str) -> List[Dict[str, str]]:
    """
    Split Markdown into sections by ## headings.

    Text before the first heading becomes an "Introduction" section.
    Top-level "# " title lines are not section content, and headings
    with nothing under them are dropped.
    """
    sections: List[Dict[str, str]] = []
    heading, lines = "Introduction", []

    def flush():
        body = "\n".join(lines).strip()
        if body:
            sections.append({"heading": heading, "body": body})

    for line in text.splitlines():
        if line.startswith("## "):
            flush()
            heading, lines = line[3:].strip(), []
        elif not line.startswith("# "):
            lines.append(line)
    flush()

    return sections


def _slugify(heading: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", heading.lower()).strip("-") or "section"


def section_key(filename: str, heading: str) -> str:
    """Store key for a document section, e.g. ``kpi_definitions#wape``."""
    return f"{Path(filename).stem}#{_slugify(heading)}"


def seed_store(store: KnowledgeStore, docs: List[Dict]) -> int:
    """
    Add every non-empty section of ``docs`` to ``store``.

    Parameters
    ----------
    store : KnowledgeStore
        Target store; existing keys are updated.
    docs : list of dict
        Output of :func:`load_all_docs`.

    Returns
    -------
    int
        Number of sections added or updated.
    """
    count = 0
    for doc in docs:
        for section in doc["sections"]:
            if not section["body"]:
                continue
            store.add(section_key(doc["filename"], section["heading"]), section["body"])
            count += 1
    logger.debug("seeded %d sections from %d documents", count, len(docs))
    return count
