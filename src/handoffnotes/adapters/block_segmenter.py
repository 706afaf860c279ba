import logging
import re

from ..core.model import (
    Block,
    Heading,
    HorizontalRule,
    ListBlock,
    ListKind,
    Paragraph,
    Spacer,
)
from ..core.ports import BlockSegmenter
from ..core.utils import split_lines

logger = logging.getLogger(__name__)

# At most three hashes, then whitespace: "#### x" never matches.
HEADING_RE = re.compile(r"^(#{1,3})\s+(.+)")
RULE_RE = re.compile(r"^---+$")
BULLET_RE = re.compile(r"^[-*]\s+(.+)")
NUMBERED_RE = re.compile(r"^[0-9]+\.\s+(.+)")


class _ListAccumulator:
    """Collects consecutive list items of one kind until flushed."""

    def __init__(self, out: list[Block]):
        self.out = out
        self.kind: ListKind | None = None
        self.items: list[str] = []

    def add(self, kind: ListKind, item: str) -> None:
        if self.kind != kind:
            self.flush()
            self.kind = kind
        self.items.append(item)

    def flush(self) -> None:
        if self.kind is not None:
            self.out.append(ListBlock(list_kind=self.kind, items=tuple(self.items)))
        self.kind = None
        self.items = []


class MarkdownSegmenter(BlockSegmenter):
    def segment(self, text: str | None) -> list[Block]:
        blocks: list[Block] = []
        if not text:
            return blocks

        pending = _ListAccumulator(blocks)

        for raw in split_lines(text):
            # U+FEFF is not whitespace to str.strip but must not block classification
            line = raw.strip().strip("\ufeff").strip()

            # Blank line
            if not line:
                pending.flush()
                blocks.append(Spacer())
                continue

            m = HEADING_RE.match(line)
            if m:
                pending.flush()
                blocks.append(Heading(level=len(m.group(1)), content=m.group(2)))
                continue

            if RULE_RE.match(line):
                pending.flush()
                blocks.append(HorizontalRule())
                continue

            m = BULLET_RE.match(line)
            if m:
                pending.add("unordered", m.group(1))
                continue

            m = NUMBERED_RE.match(line)
            if m:
                pending.add("ordered", m.group(1))
                continue

            pending.flush()
            blocks.append(Paragraph(content=line))

        pending.flush()
        logger.debug("segmented %d blocks", len(blocks))
        return blocks


def parse_blocks(text: str | None) -> list[Block]:
    """Segment notes text into blocks with the default segmenter."""
    return MarkdownSegmenter().segment(text)
