"""Serialize a presentation tree to plain or ANSI-styled terminal text."""

from ..core.model import Element
from ..core.ports import TreeSerializer

BOLD = "\033[1m"
ITALIC = "\033[3m"
DIM = "\033[2m"
REVERSE = "\033[7m"
RESET = "\033[0m"

RULE_WIDTH = 40


class TerminalSerializer(TreeSerializer):
    def __init__(self, colors: bool = True):
        self.colors = colors

    def _wrap(self, code: str, text: str) -> str:
        return f"{code}{text}{RESET}" if self.colors and text else text

    def inline(self, el: Element) -> str:
        if el.role == "text":
            return el.text or ""
        if el.role == "code":
            return self._wrap(REVERSE, el.text or "") if self.colors else f"`{el.text}`"
        inner = "".join(self.inline(c) for c in el.children)
        if el.role == "strong":
            return self._wrap(BOLD, inner)
        if el.role == "emphasis":
            return self._wrap(ITALIC, inner)
        return inner

    def serialize(self, tree: Element) -> str:
        lines: list[str] = []
        for el in tree.children:
            if el.role == "label":
                lines.append(self._wrap(DIM, (el.text or "").upper()))
            elif el.role.startswith("heading-"):
                text = "".join(self.inline(c) for c in el.children)
                level = el.attrs.get("level", 1)
                lines.append(self._wrap(BOLD, text.upper() if level == 1 else text))
            elif el.role == "paragraph":
                lines.append("".join(self.inline(c) for c in el.children))
            elif el.role in ("list-ordered", "list-unordered"):
                for n, item in enumerate(el.children, start=1):
                    marker = f"{n}." if el.role == "list-ordered" else "•"
                    lines.append(f"  {marker} " + "".join(self.inline(c) for c in item.children))
            elif el.role == "divider":
                lines.append("─" * RULE_WIDTH)
            elif el.role == "spacer":
                lines.append("")
        return "\n".join(lines) + "\n"


def render_text(tree: Element, colors: bool = False) -> str:
    return TerminalSerializer(colors=colors).serialize(tree)
