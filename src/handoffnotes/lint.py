"""Markup diagnostics for handoff notes.

Nothing here ever stops a document from rendering; findings only point at
lines whose markup will degrade to literal text.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Protocol

from .adapters.block_segmenter import MarkdownSegmenter
from .adapters.inline_parser import InlineParser
from .core.model import Code, Heading, Inline, ListBlock, Paragraph, Text
from .core.utils import split_lines

DEEP_HEADING_RE = re.compile(r"^#{4,}\s+\S")
BARE_MARKER_RE = re.compile(r"^(?:[-*]|#{1,3}|[0-9]+\.)$")

DELIMITERS = (
    ("**", "warn", "Unclosed ** renders literally"),
    ("`", "warn", "Unclosed ` renders literally"),
    ("_", "info", "Unpaired _ renders literally"),
)


@dataclass
class Finding:
    severity: str  # "info" | "warn"
    message: str
    line: int  # 1-based
    rule: str = ""

    def to_dict(self) -> dict:
        return {
            "rule": self.rule,
            "severity": self.severity,
            "line": self.line,
            "message": self.message,
        }


class LintRule(Protocol):
    id: str

    def check(self, lineno: int, line: str) -> list[Finding]:
        pass


class DeepHeadingRule:
    id = "deep-heading"

    def check(self, lineno: int, line: str) -> list[Finding]:
        if DEEP_HEADING_RE.match(line):
            return [Finding("warn", "Only #, ## and ### are headings; this line renders as a paragraph", lineno, self.id)]
        return []


class ShortRuleRule:
    id = "short-rule"

    def check(self, lineno: int, line: str) -> list[Finding]:
        if line == "--":
            return [Finding("info", "'--' renders as text; a divider needs at least three hyphens", lineno, self.id)]
        return []


class EmptyMarkerRule:
    id = "empty-marker"

    def check(self, lineno: int, line: str) -> list[Finding]:
        if BARE_MARKER_RE.match(line):
            return [Finding("info", f"Marker '{line}' has no content and renders as a paragraph", lineno, self.id)]
        return []


def _literal_text(nodes: Iterable[Inline]) -> Iterable[str]:
    for node in nodes:
        if isinstance(node, Text):
            yield node.value
        elif not isinstance(node, Code):
            yield from _literal_text(node.children)


class UnclosedDelimiterRule:
    id = "unclosed-delimiter"

    def __init__(self) -> None:
        self.segmenter = MarkdownSegmenter()
        self.inline = InlineParser()

    def _contents(self, line: str) -> list[str]:
        out: list[str] = []
        for block in self.segmenter.segment(line):
            if isinstance(block, (Heading, Paragraph)):
                out.append(block.content)
            elif isinstance(block, ListBlock):
                out.extend(block.items)
        return out

    def check(self, lineno: int, line: str) -> list[Finding]:
        out: list[Finding] = []
        for content in self._contents(line):
            leftover = "".join(_literal_text(self.inline.parse(content)))
            for delim, severity, message in DELIMITERS:
                if delim in leftover:
                    out.append(Finding(severity, message, lineno, self.id))
        return out


DEFAULT_RULES: tuple[type, ...] = (
    DeepHeadingRule,
    ShortRuleRule,
    EmptyMarkerRule,
    UnclosedDelimiterRule,
)


def lint_notes(text: str | None, rules: Iterable[LintRule] | None = None) -> list[Finding]:
    """Run every rule over every non-blank line of the notes."""
    active = list(rules) if rules is not None else [r() for r in DEFAULT_RULES]
    findings: list[Finding] = []
    if not text:
        return findings
    for lineno, raw in enumerate(split_lines(text), start=1):
        line = raw.strip()
        if not line:
            continue
        for rule in active:
            findings.extend(rule.check(lineno, line))
    return findings
