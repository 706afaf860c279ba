"""Parse and render shift-handoff notes written in a small markdown dialect."""

__version__ = "0.1.0"

from .adapters.block_segmenter import MarkdownSegmenter, parse_blocks
from .adapters.inline_parser import InlineParser, parse_inline
from .core.model import (
    Code,
    Document,
    Element,
    Emphasis,
    Heading,
    HorizontalRule,
    ListBlock,
    Paragraph,
    Spacer,
    Strong,
    Text,
)
from .render.renderer import DocumentRenderer, build_document, render_notes

__all__ = [
    "__version__",
    "MarkdownSegmenter",
    "parse_blocks",
    "InlineParser",
    "parse_inline",
    "DocumentRenderer",
    "build_document",
    "render_notes",
    "Document",
    "Element",
    "Heading",
    "HorizontalRule",
    "ListBlock",
    "Paragraph",
    "Spacer",
    "Text",
    "Strong",
    "Emphasis",
    "Code",
]
