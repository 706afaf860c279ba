"""Rendering of parsed handoff notes."""

from .html import HtmlSerializer, render_html
from .renderer import DocumentRenderer, build_document, render_notes
from .terminal import TerminalSerializer, render_text
from .theme import DEFAULT_LABEL, Theme

__all__ = [
    "DocumentRenderer",
    "build_document",
    "render_notes",
    "HtmlSerializer",
    "render_html",
    "TerminalSerializer",
    "render_text",
    "Theme",
    "DEFAULT_LABEL",
]
