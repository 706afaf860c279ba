from typing import Protocol, Iterable, Any
from .model import Block, Document, Element, HandoffRecord, Inline, RecordId


class BlockSegmenter(Protocol):
    """
    Split notes text into an ordered sequence of blocks. Total over all input:
    anything unrecognised degrades to a paragraph.
    """

    def segment(self, text: str | None) -> list[Block]:
        pass


class InlineFormatter(Protocol):
    """
    Resolve emphasis markers in one line of text. Unterminated delimiters stay
    literal text.
    """

    def parse(self, text: str) -> tuple[Inline, ...]:
        pass


class DocumentRendererPort(Protocol):
    def render(self, document: Document | Iterable[Block]) -> Element:
        pass


class TreeSerializer(Protocol):
    """
    Turn a presentation tree into a concrete output format.
    """

    def serialize(self, tree: Element) -> str:
        pass


class StorageStrategy(Protocol):
    """
    Flat store: one directory, files named <id>.md
    """

    def read_raw(self, id: RecordId) -> str | None:
        pass

    def write_raw(self, id: RecordId, contents: str) -> None:
        pass

    def list_all_ids(self) -> Iterable[RecordId]:
        pass


class RecordCodec(Protocol):
    """
    Split a stored file into free-form front matter and the notes body.
    """

    def decode_file(self, text: str, id: RecordId) -> HandoffRecord:
        pass

    def encode_file(self, record: HandoffRecord) -> str:
        pass


class ExportAdapter(Protocol):
    def export_all(self, out_dir: str | None = None) -> Any:
        pass
