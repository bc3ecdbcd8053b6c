"""Built-in example records shown while the store is empty."""

from datetime import datetime
from urllib.parse import quote

from rfp_desk.models.records import BLANK_DOCUMENT_URL, RFPRecord, RFPStatus
from rfp_desk.utils.dates import calculate_duration_days, format_timestamp

SAMPLE_PDF_NAME = "REQUEST FOR PROPOSAL (RFP) (2).pdf"

_SEEDS = (
    (
        "default-dmrc",
        "DELHI METRO RAIL CORPORATION (DMRC)",
        "Supply of Control and Communications grade Copper Cables",
        "2026-04-30",
        RFPStatus.OPEN,
        quote("/" + SAMPLE_PDF_NAME, safe="/()"),
        SAMPLE_PDF_NAME,
    ),
    (
        "default-drl",
        "DELHI RAIL LIMITED (DRL)",
        "Supply and Installation of Station Networking Equipment",
        "2026-06-15",
        RFPStatus.OPEN,
        BLANK_DOCUMENT_URL,
        "Document",
    ),
    (
        "default-dmrc-phase4",
        "DELHI METRO RAIL CORPORATION (DMRC) - PHASE 4",
        "Supply of Industrial Grade Fiber Optic Cables",
        "2026-05-20",
        RFPStatus.EXTENDED,
        BLANK_DOCUMENT_URL,
        "Document",
    ),
)


def seed_records(now: datetime) -> list[RFPRecord]:
    """Fresh copies of the seed records as of ``now``."""
    uploaded_at = format_timestamp(now)
    return [
        RFPRecord(
            id=record_id,
            project_name=project_name,
            product_summary=summary,
            deadline=deadline,
            duration_days=calculate_duration_days(deadline, now),
            status=status,
            uploaded_at=uploaded_at,
            file_url=file_url,
            file_name=file_name,
        )
        for record_id, project_name, summary, deadline, status, file_url, file_name in _SEEDS
    ]
