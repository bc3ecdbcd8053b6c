"""RFP Desk - local store, views and sharing for Request For Proposal records."""

__version__ = "1.0.0"

from rfp_desk.models.records import RFPRecord, RFPStatus
from rfp_desk.query.engine import QueryEngine, Tab
from rfp_desk.store.record_store import RecordStore

__all__ = [
    "QueryEngine",
    "RFPRecord",
    "RFPStatus",
    "RecordStore",
    "Tab",
]
