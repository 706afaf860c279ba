from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, ClassVar, Literal, Union

ListKind = Literal["ordered", "unordered"]
RecordId = str


# --- Block nodes ---


@dataclass(frozen=True)
class Heading:
    kind: ClassVar[str] = "heading"
    level: int  # 1..3
    content: str

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "level": self.level, "content": self.content}


@dataclass(frozen=True)
class HorizontalRule:
    kind: ClassVar[str] = "hr"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind}


@dataclass(frozen=True)
class ListBlock:
    kind: ClassVar[str] = "list"
    list_kind: ListKind
    items: tuple[str, ...]  # raw item text, inline markup not yet parsed

    @property
    def ordered(self) -> bool:
        return self.list_kind == "ordered"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "list_kind": self.list_kind, "items": list(self.items)}


@dataclass(frozen=True)
class Paragraph:
    kind: ClassVar[str] = "paragraph"
    content: str

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "content": self.content}


@dataclass(frozen=True)
class Spacer:
    kind: ClassVar[str] = "spacer"  # one blank source line

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind}


Block = Union[Heading, HorizontalRule, ListBlock, Paragraph, Spacer]


# --- Inline nodes ---


@dataclass(frozen=True)
class Text:
    kind: ClassVar[str] = "text"
    value: str

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "value": self.value}


@dataclass(frozen=True)
class Strong:
    kind: ClassVar[str] = "strong"
    children: tuple[Inline, ...]

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "children": [c.to_dict() for c in self.children]}


@dataclass(frozen=True)
class Emphasis:
    kind: ClassVar[str] = "emphasis"
    children: tuple[Inline, ...]

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "children": [c.to_dict() for c in self.children]}


@dataclass(frozen=True)
class Code:
    kind: ClassVar[str] = "code"
    value: str  # literal, never re-parsed

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "value": self.value}


Inline = Union[Text, Strong, Emphasis, Code]


def plain_text(nodes: tuple[Inline, ...] | list[Inline]) -> str:
    """Concatenate the visible text of an inline sequence, markup removed."""
    out: list[str] = []
    for node in nodes:
        if isinstance(node, (Text, Code)):
            out.append(node.value)
        else:
            out.append(plain_text(node.children))
    return "".join(out)


@dataclass(frozen=True)
class Document:
    blocks: tuple[Block, ...] = ()

    def __len__(self) -> int:
        return len(self.blocks)

    def to_dict(self) -> dict[str, Any]:
        return {"blocks": [b.to_dict() for b in self.blocks]}


# --- Presentation tree ---


@dataclass(frozen=True)
class Element:
    role: str  # "container" | "label" | "heading-1" | ... | "text"
    tag: str
    style: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)
    children: tuple[Element, ...] = ()
    text: str | None = None
    attrs: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def iter(self):
        """Yield this element and every descendant, depth first."""
        yield self
        for child in self.children:
            yield from child.iter()

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"role": self.role, "tag": self.tag}
        if self.style:
            out["style"] = dict(self.style)
        if self.attrs:
            out["attrs"] = dict(self.attrs)
        if self.text is not None:
            out["text"] = self.text
        if self.children:
            out["children"] = [c.to_dict() for c in self.children]
        return out


# --- Stored notes ---


@dataclass
class HandoffRecord:
    id: RecordId
    meta: dict[str, Any]
    notes: str
