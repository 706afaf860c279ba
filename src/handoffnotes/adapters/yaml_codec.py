import logging
import re, io
import yaml
from typing import Any
from ..core.ports import RecordCodec
from ..core.model import HandoffRecord

logger = logging.getLogger(__name__)

# The closing fence eats one line break only; blank lines after it belong to the notes.
_FM = re.compile(r"^\s*---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|$)", re.DOTALL)

# Written when a record without meta has notes that would otherwise read as front matter
EMPTY_HEADER = "---\n{}\n---\n"


class YamlFrontmatter:
    def decode(self, text: str) -> tuple[dict[str, Any], str]:
        m = _FM.match(text)
        if not m or not m.group(1).strip():
            # An empty section between two rules is notes, not front matter
            return {}, text
        fm = yaml.safe_load(io.StringIO(m.group(1)))
        if fm is None:
            fm = {}
        if not isinstance(fm, dict):
            # A scalar or list between the fences is not front matter
            return {}, text
        return fm, text[m.end() :]

    def encode(self, meta: dict[str, Any], body: str = "") -> str:
        if not meta:
            return EMPTY_HEADER if _FM.match(body) else ""
        buf = io.StringIO()
        yaml.safe_dump(meta, buf, sort_keys=False, allow_unicode=True)
        return f"---\n{buf.getvalue()}---\n"


class MarkdownRecordCodec(RecordCodec):
    """
    A record file is optional YAML front matter (patient, room, updated, ...)
    followed by the notes body. The schema of the front matter is never enforced.
    """

    def __init__(self, fm: YamlFrontmatter | None = None):
        self.fm = fm or YamlFrontmatter()

    def decode_file(self, text: str, id: str) -> HandoffRecord:
        # A byte-order mark would hide the opening fence
        text = text.removeprefix("\ufeff")
        try:
            meta, body = self.fm.decode(text)
        except yaml.YAMLError as e:
            # Notes must still render; keep the whole file as the body
            logger.warning("Invalid front matter in record %s, treating it as notes: %s", id, e)
            meta, body = {}, text
        return HandoffRecord(id=id, meta=meta, notes=body)

    def encode_file(self, record: HandoffRecord) -> str:
        return self.fm.encode(dict(record.meta), record.notes) + record.notes
