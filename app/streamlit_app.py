"""
Knowledge Base -- Streamlit Dashboard

Interactive demo for adding, searching, and browsing entries of the
in-memory TF-IDF knowledge base skill.
"""

import streamlit as st
import pandas as pd
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from kb_skill.config import DOCS_DIR, MAX_RESULTS
from kb_skill.knowledge.loader import load_all_docs, seed_store
from kb_skill.skills.knowledge_base import KnowledgeBaseSkill


# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="Knowledge Base",
    page_icon="",
    layout="wide",
)

st.title("Knowledge Base")
st.caption("Keyword extraction + TF-IDF ranked search over an in-memory corpus")

if "kb_skill" not in st.session_state:
    st.session_state.kb_skill = KnowledgeBaseSkill()
skill: KnowledgeBaseSkill = st.session_state.kb_skill


def show_response(response: dict) -> None:
    """Render a skill response as success or error."""
    meta = response["metadata"]
    if meta["success"]:
        st.success(response["result"].split("\n", 1)[0])
    else:
        st.error(f"{meta['error']}: {response['result']}")


# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------

with st.sidebar:
    st.header("Corpus")
    st.metric("Entries", len(skill.store))

    st.markdown(f"**Seed directory:** `{DOCS_DIR}`")
    if st.button("Load Markdown docs", disabled=not DOCS_DIR.exists()):
        n = seed_store(skill.store, load_all_docs(DOCS_DIR))
        st.info(f"Indexed {n} sections.")

    st.markdown("---")
    st.markdown("**Tech Stack:**")
    st.text("NumPy TF-IDF scoring")
    st.text("Stop-word filtering")
    st.text("No external index")


# ---------------------------------------------------------------------------
# Tabs
# ---------------------------------------------------------------------------

tab_search, tab_add, tab_browse = st.tabs(["Search", "Add Entry", "Browse"])

with tab_search:
    st.subheader("Search the Knowledge Base")
    query = st.text_input("Query", placeholder="e.g., kubernetes deployment")

    if st.button("Search") and query:
        response = skill.execute({"action": "search", "query": query})
        show_response(response)
        meta = response["metadata"]
        if meta["success"] and meta["results"]:
            st.caption(
                f"Query terms: {', '.join(meta['queryTokens'])} -- "
                f"showing {meta['returnedCount']} of {meta['matchCount']} matches "
                f"(cap {MAX_RESULTS})"
            )
            df = pd.DataFrame(meta["results"])
            df["keywords"] = df["keywords"].apply(lambda kws: ", ".join(kws[:8]))
            st.dataframe(df[["key", "score", "contentPreview", "keywords"]],
                         use_container_width=True)

with tab_add:
    st.subheader("Add or Update an Entry")
    key = st.text_input("Key", placeholder="e.g., k8s-basics")
    content = st.text_area("Content", height=200)

    if st.button("Save Entry"):
        response = skill.execute({"action": "add", "key": key, "content": content})
        show_response(response)
        if response["metadata"]["success"]:
            st.text(f"Keywords: {', '.join(response['metadata']['keywords'])}")

with tab_browse:
    st.subheader("All Entries")
    listing = skill.execute({"action": "list"})["metadata"]

    if listing["entryCount"] == 0:
        st.info("The knowledge base is empty.")
    else:
        df = pd.DataFrame(listing["entries"])
        df["keywords"] = df["keywords"].apply(lambda kws: ", ".join(kws[:8]))
        st.dataframe(df, use_container_width=True)

        to_delete = st.selectbox("Delete entry", [e["key"] for e in listing["entries"]])
        if st.button("Delete"):
            show_response(skill.execute({"action": "delete", "key": to_delete}))
            st.rerun()
