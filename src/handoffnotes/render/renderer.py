"""Document renderer: blocks in, presentation tree out."""

import logging
from typing import Iterable

from ..adapters.block_segmenter import MarkdownSegmenter
from ..adapters.inline_parser import InlineParser
from ..core.model import (
    Block,
    Code,
    Document,
    Element,
    Emphasis,
    Heading,
    HorizontalRule,
    Inline,
    ListBlock,
    Paragraph,
    Spacer,
    Strong,
    Text,
    plain_text,
)
from ..core.ports import BlockSegmenter, DocumentRendererPort, InlineFormatter
from ..core.utils import slugify
from .theme import Theme

logger = logging.getLogger(__name__)


class DocumentRenderer(DocumentRendererPort):
    """
    Map blocks to styled elements, running the inline formatter over every
    piece of block text. Purely structural: no parsing happens here beyond
    delegating to the inline formatter.
    """

    def __init__(self, theme: Theme | None = None, inline: InlineFormatter | None = None):
        self.theme = theme or Theme()
        self.inline = inline or InlineParser()

    def render(self, document: Document | Iterable[Block]) -> Element:
        blocks = document.blocks if isinstance(document, Document) else tuple(document)
        children = [self._element("label", "div", text=self.theme.label)]
        children.extend(self.render_block(b) for b in blocks)
        logger.debug("rendered %d blocks", len(blocks))
        return self._element("container", "div", children=children)

    def render_block(self, block: Block) -> Element:
        if isinstance(block, Heading):
            spans = self.inline.parse(block.content)
            return self._element(
                f"heading-{block.level}",
                "div",
                children=self.render_inline(spans),
                attrs={"level": block.level, "anchor": slugify(plain_text(spans))},
            )
        if isinstance(block, Paragraph):
            return self._element(
                "paragraph", "p", children=self.render_inline(self.inline.parse(block.content))
            )
        if isinstance(block, ListBlock):
            items = [
                self._element("list-item", "li", children=self.render_inline(self.inline.parse(item)))
                for item in block.items
            ]
            if block.ordered:
                return self._element("list-ordered", "ol", children=items, attrs={"ordered": True})
            return self._element("list-unordered", "ul", children=items, attrs={"ordered": False})
        if isinstance(block, HorizontalRule):
            return self._element("divider", "hr")
        if isinstance(block, Spacer):
            return self._element("spacer", "div")
        raise TypeError(f"Unknown block type: {type(block).__name__}")

    def render_inline(self, nodes: Iterable[Inline]) -> list[Element]:
        out: list[Element] = []
        for node in nodes:
            if isinstance(node, Text):
                out.append(Element(role="text", tag="#text", text=node.value))
            elif isinstance(node, Code):
                out.append(self._element("code", "code", text=node.value))
            elif isinstance(node, Strong):
                out.append(self._element("strong", "strong", children=self.render_inline(node.children)))
            elif isinstance(node, Emphasis):
                out.append(self._element("emphasis", "em", children=self.render_inline(node.children)))
        return out

    def _element(
        self,
        role: str,
        tag: str,
        children: list[Element] | None = None,
        text: str | None = None,
        attrs: dict | None = None,
    ) -> Element:
        return Element(
            role=role,
            tag=tag,
            style=self.theme.style_for(role),
            children=tuple(children or ()),
            text=text,
            attrs=attrs or {},
        )


def build_document(text: str | None, segmenter: BlockSegmenter | None = None) -> Document:
    """Segment notes text into a Document. ``None`` counts as empty."""
    segmenter = segmenter or MarkdownSegmenter()
    return Document(blocks=tuple(segmenter.segment(text or "")))


def render_notes(text: str | None, theme: Theme | None = None) -> Element:
    """Run the whole pipeline: notes text to presentation tree."""
    return DocumentRenderer(theme=theme).render(build_document(text))
