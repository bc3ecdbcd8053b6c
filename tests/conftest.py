"""Pytest configuration and fixtures."""

import os
from datetime import datetime, timedelta, timezone

import pytest

# Set test environment variables before importing modules
os.environ["ENVIRONMENT"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"

from rfp_desk.attachments.resolver import AttachmentResolver
from rfp_desk.config import Settings
from rfp_desk.models.records import RFPRecord, RFPStatus
from rfp_desk.storage.backends import InMemoryStorage
from rfp_desk.store.record_store import RecordStore

NOW = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """A clock that only moves when told to."""

    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


def make_record(record_id: str, **overrides) -> RFPRecord:
    """Build a stored-looking record with sensible defaults."""
    fields = {
        "id": record_id,
        "project_name": f"Project {record_id}",
        "product_summary": "Supply of cables",
        "deadline": "2026-03-01",
        "duration_days": 59,
        "status": RFPStatus.OPEN,
        "uploaded_at": "2025-12-01T09:00:00.000Z",
    }
    fields.update(overrides)
    return RFPRecord(**fields)


@pytest.fixture
def clock() -> FakeClock:
    """Fixed clock at 2026-01-01 12:00 UTC."""
    return FakeClock()


@pytest.fixture
def storage() -> InMemoryStorage:
    """Empty in-memory key/value storage."""
    return InMemoryStorage()


@pytest.fixture
def resolver(tmp_path) -> AttachmentResolver:
    """Resolver writing handles into a per-test directory."""
    return AttachmentResolver(handle_directory=tmp_path / "handles")


@pytest.fixture
def store(storage, resolver, clock) -> RecordStore:
    """Record store over in-memory storage and the fixed clock."""
    return RecordStore(storage, "rfp_data", resolver=resolver, clock=clock)


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings isolated from any .env file."""
    return Settings(
        _env_file=None,
        storage_file=tmp_path / "rfp_storage.json",
        handle_directory=tmp_path / "handles",
        environment="test",
    )


@pytest.fixture
def sample_records() -> list[RFPRecord]:
    """Three stored records with distinct statuses, deadlines and upload times."""
    return [
        make_record(
            "1001",
            project_name="Mumbai Metro Line 3",
            status=RFPStatus.OPEN,
            deadline="2025-11-15",
            uploaded_at="2025-10-01T08:00:00.000Z",
        ),
        make_record(
            "1002",
            project_name="Chennai Port Cranes",
            product_summary="Ship-to-shore crane maintenance",
            status=RFPStatus.EXTENDED,
            deadline="2026-02-10",
            uploaded_at="2025-12-20T08:00:00.000Z",
        ),
        make_record(
            "1003",
            project_name="Bengaluru Water Board",
            product_summary="Smart water meters",
            status=RFPStatus.CLOSED,
            deadline="2025-12-31",
            uploaded_at="2025-11-05T08:00:00.000Z",
        ),
    ]


@pytest.fixture
def pdf_bytes() -> bytes:
    """A tiny PDF-looking payload."""
    return b"%PDF-1.4\n1 0 obj << /Type /Catalog >> endobj\n%%EOF\n"
