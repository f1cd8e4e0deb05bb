"""
Search Knowledge Base Script
============================

Seed a fresh knowledge base from Markdown docs and run one search:
1. Load .md files and split them into sections
2. Add each section as a knowledge entry
3. Run the query and print ranked results

Usage:
    python -m kb_skill.scripts.search_kb "forecast accuracy"
    python -m kb_skill.scripts.search_kb --docs path/to/docs --top 3 "pump failure"
"""

import argparse
from pathlib import Path
from typing import List, Optional

from kb_skill import configure_logging
from kb_skill.config import DOCS_DIR, MAX_RESULTS
from kb_skill.knowledge.loader import load_all_docs, seed_store
from kb_skill.skills.knowledge_base import KnowledgeBaseSkill


def run_search(query: str, docs_dir: Path = DOCS_DIR, top: int = MAX_RESULTS,
               verbose: bool = True) -> dict:
    """
    Build a knowledge base from ``docs_dir`` and search it.

    Parameters
    ----------
    query : str
        Free-text query.
    docs_dir : Path
        Directory of Markdown files.
    top : int
        Maximum number of results.
    verbose : bool
        Whether to print progress messages.

    Returns
    -------
    dict
        The search response envelope.
    """
    skill = KnowledgeBaseSkill(max_results=top)

    if verbose:
        print(f"[1/2] Loading docs from {docs_dir}...")
    docs = load_all_docs(docs_dir)
    n_sections = seed_store(skill.store, docs)
    if verbose:
        print(f"      Documents: {len(docs)}")
        print(f"      Sections indexed: {n_sections}")
        print(f"\n[2/2] Searching for: {query}\n")

    return skill.execute({"action": "search", "query": query})


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Search a Markdown knowledge base with TF-IDF ranking"
    )
    parser.add_argument("query", nargs="+", help="Search terms")
    parser.add_argument(
        "--docs", "-d",
        type=str,
        default=None,
        help=f"Directory of Markdown files (default: {DOCS_DIR})"
    )
    parser.add_argument(
        "--top", "-n",
        type=int,
        default=MAX_RESULTS,
        help="Maximum number of results"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress progress messages"
    )

    args = parser.parse_args(argv)
    configure_logging()

    docs_dir = Path(args.docs) if args.docs else DOCS_DIR
    response = run_search(" ".join(args.query), docs_dir=docs_dir, top=args.top,
                          verbose=not args.quiet)
    print(response["result"])
    return 0 if response["metadata"]["success"] else 1


if __name__ == "__main__":
    raise SystemExit(main())
