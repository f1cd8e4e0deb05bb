"""Tests for Markdown loading and store seeding."""

import tempfile
from pathlib import Path
from unittest.mock import patch

from kb_skill.knowledge.loader import _parse_sections, load_all_docs, section_key, seed_store
from kb_skill.knowledge.store import KnowledgeStore


# ---------------------------------------------------------------------------
# Section parsing
# ---------------------------------------------------------------------------

class TestParseSections:
    def test_splits_on_h2(self):
        text = "Intro text\n## Section A\nBody A\n## Section B\nBody B"
        sections = _parse_sections(text)
        assert len(sections) == 3
        assert sections[0]["heading"] == "Introduction"
        assert sections[1]["heading"] == "Section A"
        assert sections[2]["heading"] == "Section B"
        assert sections[2]["body"] == "Body B"

    def test_no_headings(self):
        sections = _parse_sections("Just some text\nwithout headings")
        assert len(sections) == 1
        assert sections[0]["heading"] == "Introduction"

    def test_title_lines_are_not_content(self):
        sections = _parse_sections("# Title\nIntro body\n## Part\n### Detail\ntext")
        assert sections[0] == {"heading": "Introduction", "body": "Intro body"}
        assert sections[1] == {"heading": "Part", "body": "### Detail\ntext"}

    def test_empty_sections_dropped(self):
        sections = _parse_sections("# Title\n\n## Empty\n\n## Full\nbody")
        assert sections == [{"heading": "Full", "body": "body"}]


# ---------------------------------------------------------------------------
# Document loading
# ---------------------------------------------------------------------------

class TestLoadAllDocs:
    def test_loads_from_temp_dir(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            (Path(tmpdir) / "test_doc.md").write_text(
                "# Test\n\n## Section One\nContent here.\n## Section Two\nMore content."
            )
            with patch("kb_skill.knowledge.loader.DOCS_DIR", Path(tmpdir)):
                docs = load_all_docs()
                assert len(docs) == 1
                assert docs[0]["title"] == "Test Doc"
                assert docs[0]["filename"] == "test_doc.md"
                assert [s["heading"] for s in docs[0]["sections"]] == ["Section One", "Section Two"]

    def test_explicit_dir(self, tmp_path):
        (tmp_path / "a.md").write_text("alpha")
        (tmp_path / "notes.txt").write_text("ignored")
        docs = load_all_docs(tmp_path)
        assert [d["filename"] for d in docs] == ["a.md"]

    def test_empty_dir(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            assert load_all_docs(Path(tmpdir)) == []

    def test_nonexistent_dir(self):
        with patch("kb_skill.knowledge.loader.DOCS_DIR", Path("/nonexistent/path")):
            assert load_all_docs() == []


# ---------------------------------------------------------------------------
# Seeding
# ---------------------------------------------------------------------------

class TestSeedStore:
    def test_section_key(self):
        assert section_key("kpi_definitions.md", "WAPE / MAPE") == "kpi_definitions#wape-mape"
        assert section_key("x.md", "!!!") == "x#section"

    def test_adds_non_empty_sections(self):
        docs = [{
            "title": "Ops",
            "content": "",
            "filename": "ops.md",
            "sections": [
                {"heading": "Introduction", "body": ""},
                {"heading": "Pumps", "body": "ESP pump failure and restart"},
                {"heading": "Wells", "body": "Well F-11 water cut rising"},
            ],
        }]
        store = KnowledgeStore()
        assert seed_store(store, docs) == 2
        assert store.keys() == ["ops#pumps", "ops#wells"]
        assert store.get("ops#pumps").content == "ESP pump failure and restart"

    def test_reseeding_updates(self, tmp_path):
        (tmp_path / "doc.md").write_text("## Part\nfirst body")
        store = KnowledgeStore()
        seed_store(store, load_all_docs(tmp_path))
        (tmp_path / "doc.md").write_text("## Part\nsecond body")
        seed_store(store, load_all_docs(tmp_path))
        assert len(store) == 1
        assert store.get("doc#part").content == "second body"

    def test_bundled_docs_seed(self):
        from kb_skill.config import PROJECT_ROOT

        store = KnowledgeStore()
        assert seed_store(store, load_all_docs(PROJECT_ROOT / "docs")) > 0
        assert "kubernetes_basics#pods" in store
