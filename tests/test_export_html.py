"""Tests for HTML export of stored records."""

import json
import tempfile
from pathlib import Path

from handoffnotes.adapters.fs_storage import FsStorage
from handoffnotes.adapters.yaml_codec import MarkdownRecordCodec
from handoffnotes.core.model import HandoffRecord
from handoffnotes.core.store import RecordStore
from handoffnotes.export.html import HtmlExportAdapter
from handoffnotes.render.renderer import DocumentRenderer
from handoffnotes.render.theme import Theme


def _store(tmpdir: str) -> RecordStore:
    return RecordStore(FsStorage(Path(tmpdir) / "notes"), MarkdownRecordCodec())


def test_export_all_writes_pages_and_index():
    """Each record gets a page and an index entry."""
    with tempfile.TemporaryDirectory() as tmpdir:
        store = _store(tmpdir)
        store.put(HandoffRecord(id="bed4", meta={"patient": "J. Doe"}, notes="# Plan\n- **NPO**\n"))
        store.put(HandoffRecord(id="bed5", meta={}, notes="stable"))

        out = Path(tmpdir) / "site"
        index = HtmlExportAdapter(store, out).export_all()

        assert [r["id"] for r in index["records"]] == ["bed4", "bed5"]
        assert index["records"][0]["title"] == "J. Doe"
        assert index["records"][1]["title"] == "bed5"

        page = (out / "bed4.html").read_text(encoding="utf-8")
        assert page.startswith("<!DOCTYPE html>")
        assert "<title>J. Doe</title>" in page
        assert "NPO</strong>" in page
        assert "patient:" not in page

        on_disk = json.loads((out / "index.json").read_text(encoding="utf-8"))
        assert on_disk == index


def test_export_uses_renderer_theme():
    """The configured label reaches the exported page."""
    with tempfile.TemporaryDirectory() as tmpdir:
        store = _store(tmpdir)
        store.put(HandoffRecord(id="a", meta={}, notes="x"))
        out = Path(tmpdir) / "site"
        renderer = DocumentRenderer(theme=Theme(label="Day Shift"))
        HtmlExportAdapter(store, out, renderer=renderer).export_all()
        assert "Day Shift" in (out / "a.html").read_text(encoding="utf-8")


def test_remove_record():
    """Removing a record deletes its page and tolerates missing pages."""
    with tempfile.TemporaryDirectory() as tmpdir:
        store = _store(tmpdir)
        record = HandoffRecord(id="a", meta={}, notes="x")
        store.put(record)
        out = Path(tmpdir) / "site"
        exporter = HtmlExportAdapter(store, out)
        path = exporter.export_record(record)
        assert path.exists()

        exporter.remove_record("a")
        assert not path.exists()
        exporter.remove_record("a")


def test_export_empty_store():
    """An empty notes directory exports an empty index."""
    with tempfile.TemporaryDirectory() as tmpdir:
        out = Path(tmpdir) / "site"
        index = HtmlExportAdapter(_store(tmpdir), out).export_all()
        assert index == {"records": []}
        assert (out / "index.json").exists()
