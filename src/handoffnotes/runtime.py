"""Runtime wiring helper for CLI and API."""

from dataclasses import dataclass
from pathlib import Path

from .adapters.block_segmenter import MarkdownSegmenter
from .adapters.fs_storage import FsStorage
from .adapters.inline_parser import InlineParser
from .adapters.yaml_codec import MarkdownRecordCodec, YamlFrontmatter
from .config import HandoffConfig, load_config
from .core.model import Document, Element
from .core.store import RecordStore
from .render.renderer import DocumentRenderer, build_document


@dataclass
class Runtime:
    """Container for all wired components."""
    store: RecordStore
    segmenter: MarkdownSegmenter
    renderer: DocumentRenderer
    config: HandoffConfig

    def document(self, notes: str | None) -> Document:
        return build_document(notes, self.segmenter)

    def render(self, notes: str | None) -> Element:
        return self.renderer.render(self.document(notes))


def build_runtime(
    notes_path: Path | None = None,
    config_path: Path | None = None,
) -> Runtime:
    """Build and wire all components for a notes directory."""
    config = load_config(config_path=config_path, notes_path=notes_path)

    if notes_path is None:
        notes_path = config.notes.root

    store = RecordStore(FsStorage(notes_path), MarkdownRecordCodec(YamlFrontmatter()))
    renderer = DocumentRenderer(theme=config.render.theme(), inline=InlineParser())

    return Runtime(
        store=store,
        segmenter=MarkdownSegmenter(),
        renderer=renderer,
        config=config,
    )
