from collections.abc import Iterable

from .model import HandoffRecord, RecordId
from .ports import RecordCodec, StorageStrategy


class RecordStore:
    def __init__(self, storage: StorageStrategy, codec: RecordCodec):
        self.storage = storage
        self.codec = codec

    def get(self, id: RecordId) -> HandoffRecord | None:
        raw = self.storage.read_raw(id)
        if raw is None:
            return None
        return self.codec.decode_file(raw, id)

    def put(self, record: HandoffRecord) -> None:
        self.storage.write_raw(record.id, self.codec.encode_file(record))

    def list_ids(self) -> Iterable[RecordId]:
        return self.storage.list_all_ids()
