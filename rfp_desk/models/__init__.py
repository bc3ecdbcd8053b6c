"""Data models for the RFP desk."""

from rfp_desk.models.records import (
    SEED_ID_PREFIX,
    EncodedAttachment,
    ExternalAttachment,
    RFPRecord,
    RFPStatus,
)
from rfp_desk.models.requests import RFPCreate, RFPPatch, UploadedFile
from rfp_desk.models.results import (
    DecodeResult,
    ExportDocument,
    ImportMode,
    ImportReport,
    ShareLink,
)

__all__ = [
    "SEED_ID_PREFIX",
    "DecodeResult",
    "EncodedAttachment",
    "ExportDocument",
    "ExternalAttachment",
    "ImportMode",
    "ImportReport",
    "RFPCreate",
    "RFPPatch",
    "RFPRecord",
    "RFPStatus",
    "ShareLink",
    "UploadedFile",
]
