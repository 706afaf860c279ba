import json
import logging
from pathlib import Path
from typing import Any

from ..core.model import HandoffRecord
from ..core.ports import ExportAdapter
from ..core.store import RecordStore
from ..render.html import html_page, render_html
from ..render.renderer import DocumentRenderer, build_document

logger = logging.getLogger(__name__)


def _title(record: HandoffRecord) -> str:
    for key in ("title", "patient", "room"):
        value = record.meta.get(key)
        if value:
            return str(value)
    return record.id


class HtmlExportAdapter(ExportAdapter):
    """Render every stored record to ``<out>/<id>.html`` plus an ``index.json``."""

    def __init__(self, store: RecordStore, out: Path, renderer: DocumentRenderer | None = None):
        self.store = store
        self.out = out
        self.renderer = renderer or DocumentRenderer()

    def export_record(self, record: HandoffRecord, out: Path | None = None) -> Path:
        out = self.out if out is None else out
        out.mkdir(parents=True, exist_ok=True)
        tree = self.renderer.render(build_document(record.notes))
        path = out / f"{record.id}.html"
        path.write_text(html_page(render_html(tree, indent=True), title=_title(record)), encoding="utf-8")
        return path

    def remove_record(self, id: str, out: Path | None = None) -> None:
        path = (self.out if out is None else out) / f"{id}.html"
        if path.exists():
            path.unlink()

    def export_all(self, out_dir: str | None = None) -> dict[str, Any]:
        out = self.out if out_dir is None else Path(out_dir)
        out.mkdir(parents=True, exist_ok=True)

        index: dict[str, Any] = {"records": []}
        for rid in self.store.list_ids():
            record = self.store.get(rid)
            if record is None:
                continue
            path = self.export_record(record, out)
            index["records"].append({"id": rid, "title": _title(record), "file": path.name})
            logger.debug("exported %s", path)

        (out / "index.json").write_text(json.dumps(index, indent=2), encoding="utf-8")
        return index
