import logging
import re

from ..core.model import Code, Emphasis, Inline, Strong, Text
from ..core.ports import InlineFormatter

logger = logging.getLogger(__name__)

# Any character a renderer keeps on the same visual line.
_CH = r"[^\n\r\u2028\u2029]"

STRONG_RE = re.compile(rf"\*\*({_CH}+?)\*\*")
EMPHASIS_RE = re.compile(rf"_({_CH}+?)_")
CODE_RE = re.compile(rf"`({_CH}+?)`")

# Order only matters for equal start positions, which the distinct opening
# characters rule out.
PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("strong", STRONG_RE),
    ("emphasis", EMPHASIS_RE),
    ("code", CODE_RE),
)


class InlineParser(InlineFormatter):
    """
    Recursive-descent parser for ``**bold**``, ``_italic_`` and ``` `code` ```.

    Works on ``(start, end)`` windows of the original string instead of slicing
    off a shrinking remainder. At every step the candidate that starts
    leftmost wins, whatever its type.
    """

    def parse(self, text: str) -> tuple[Inline, ...]:
        if not text:
            return ()
        return tuple(self._parse_span(text, 0, len(text)))

    def _parse_span(self, text: str, start: int, end: int) -> list[Inline]:
        out: list[Inline] = []
        pos = start
        # Last match per pattern; still valid while it starts at or after pos.
        cache: dict[str, re.Match[str] | None] = {}

        while pos < end:
            best: re.Match[str] | None = None
            best_kind = ""
            for kind, pattern in PATTERNS:
                if kind not in cache or (cache[kind] is not None and cache[kind].start() < pos):
                    cache[kind] = pattern.search(text, pos, end)
                m = cache[kind]
                if m is not None and (best is None or m.start() < best.start()):
                    best, best_kind = m, kind

            if best is None:
                out.append(Text(text[pos:end]))
                break

            if best.start() > pos:
                out.append(Text(text[pos:best.start()]))

            inner_start, inner_end = best.span(1)
            if best_kind == "strong":
                out.append(Strong(tuple(self._parse_span(text, inner_start, inner_end))))
            elif best_kind == "emphasis":
                out.append(Emphasis(tuple(self._parse_span(text, inner_start, inner_end))))
            else:
                out.append(Code(text[inner_start:inner_end]))

            pos = best.end()

        return out


_default = InlineParser()


def parse_inline(text: str | None) -> tuple[Inline, ...]:
    """Parse one line of text into inline nodes with the default parser."""
    nodes = _default.parse(text or "")
    logger.debug("parsed %d inline nodes", len(nodes))
    return nodes
