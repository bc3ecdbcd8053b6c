"""Record store."""

from rfp_desk.store.ids import IdGenerator
from rfp_desk.store.record_store import RecordStore

__all__ = ["IdGenerator", "RecordStore"]
