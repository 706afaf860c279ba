"""Serialize a presentation tree to an HTML fragment."""

import html
import re
from typing import Any

from ..core.model import Element
from ..core.ports import TreeSerializer

VOID_TAGS = frozenset({"hr"})
_CAMEL = re.compile(r"(?<!^)([A-Z])")


def css_property(name: str) -> str:
    """``backgroundColor`` -> ``background-color``."""
    return _CAMEL.sub(r"-\1", name).lower()


def css_declarations(style: dict[str, Any]) -> str:
    return "; ".join(f"{css_property(k)}: {v}" for k, v in style.items())


class HtmlSerializer(TreeSerializer):
    def __init__(self, inline_styles: bool = True, indent: bool = False):
        self.inline_styles = inline_styles
        self.indent = indent

    def serialize(self, tree: Element) -> str:
        parts: list[str] = []
        self._write(tree, parts, depth=0)
        return "".join(parts)

    def _attrs(self, el: Element) -> str:
        attrs: list[tuple[str, str]] = [("class", f"handoff-{el.role}")]
        anchor = el.attrs.get("anchor")
        if anchor:
            attrs.append(("id", anchor))
        if self.inline_styles and el.style:
            attrs.append(("style", css_declarations(el.style)))
        return "".join(f' {k}="{html.escape(v, quote=True)}"' for k, v in attrs)

    def _write(self, el: Element, parts: list[str], depth: int) -> None:
        if el.role == "text":
            parts.append(html.escape(el.text or "", quote=False))
            return

        # Block-level children go on their own lines when indenting
        block = self.indent and el.role not in ("strong", "emphasis", "code")
        pad = "  " * depth if block else ""

        if el.tag in VOID_TAGS:
            parts.append(f"{pad}<{el.tag}{self._attrs(el)}>")
            if block:
                parts.append("\n")
            return

        parts.append(f"{pad}<{el.tag}{self._attrs(el)}>")
        if el.text is not None:
            parts.append(html.escape(el.text, quote=False))

        nested = block and el.role in ("container", "list-ordered", "list-unordered")
        if nested:
            parts.append("\n")
        for child in el.children:
            self._write(child, parts, depth + 1 if nested else 0)
        if nested:
            parts.append(pad)
        parts.append(f"</{el.tag}>")
        if block:
            parts.append("\n")


def render_html(tree: Element, inline_styles: bool = True, indent: bool = False) -> str:
    return HtmlSerializer(inline_styles=inline_styles, indent=indent).serialize(tree)


def html_page(fragment: str, title: str = "Handoff Notes") -> str:
    """Wrap a fragment in a minimal standalone HTML page."""
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '<meta charset="utf-8">\n'
        f"<title>{html.escape(title)}</title>\n"
        "</head>\n"
        "<body>\n"
        f"{fragment}"
        "\n</body>\n"
        "</html>\n"
    )
