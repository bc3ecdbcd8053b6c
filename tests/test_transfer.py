"""Tests for export, import and share links."""

import json
from urllib.parse import parse_qs, urlsplit

import pytest

from rfp_desk.errors import InvalidFormatError
from rfp_desk.models.results import ImportMode
from rfp_desk.services.transfer import TransferService
from rfp_desk.storage.backends import InMemoryStorage
from rfp_desk.store.record_store import RecordStore

from tests.conftest import make_record


@pytest.fixture
def transfer(store, storage, settings, clock) -> TransferService:
    return TransferService(store, storage, settings, clock=clock)


class TestExport:
    """Tests for export."""

    def test_export_document(self, transfer, store, sample_records):
        store.replace_all(sample_records)
        data = json.loads(transfer.export_data())
        assert data["version"] == "1.0"
        assert data["exportDate"] == "2026-01-01T12:00:00.000Z"
        assert len(data["rfps"]) == 3

    def test_export_then_import_elsewhere(self, transfer, store, sample_records, settings, clock):
        store.replace_all(sample_records)
        exported = transfer.export_data()

        other_storage = InMemoryStorage()
        other_store = RecordStore(other_storage, "rfp_data", clock=clock)
        other = TransferService(other_store, other_storage, settings, clock=clock)
        report = other.import_data(exported, mode=ImportMode.REPLACE)

        assert report.imported == 3
        assert other_store.list() == sample_records


class TestImport:
    """Tests for import."""

    def test_merge_is_default(self, transfer, store):
        store.replace_all([make_record("1", project_name="A"), make_record("3")])
        incoming = json.dumps([make_record("1", project_name="B").to_storage(), make_record("2").to_storage()])

        report = transfer.import_data(incoming)

        assert report.mode is ImportMode.MERGE
        assert report.imported == 2
        assert report.total == 3
        assert [r.id for r in store.list()] == ["1", "3", "2"]
        assert store.get("1").project_name == "B"

    def test_replace(self, transfer, store, sample_records):
        store.replace_all(sample_records)
        incoming = json.dumps({"version": "1.0", "rfps": [make_record("9").to_storage()]})

        report = transfer.import_data(incoming, mode="replace")

        assert report.mode is ImportMode.REPLACE
        assert report.total == 1
        assert [r.id for r in store.list()] == ["9"]

    def test_corrupt_file_preserves_state(self, transfer, store, sample_records):
        store.replace_all(sample_records)
        with pytest.raises(InvalidFormatError):
            transfer.import_data('{"rfps": [{"broken": true}]}', mode=ImportMode.REPLACE)
        assert store.list() == sample_records


class TestShare:
    """Tests for share links."""

    def test_link_carries_collection(self, transfer, store, sample_records):
        store.replace_all(sample_records)
        link = transfer.share_link("https://rfp.example.org/browse.html")

        assert not link.via_session
        assert link.records == 3
        assert link.url.startswith("https://rfp.example.org/browse.html?data=")

        store.clear()
        result = transfer.load_shared_url(link.url)
        assert result.ok
        assert store.list() == sample_records

    def test_base_url_query_is_kept(self, transfer, store, sample_records):
        store.replace_all(sample_records[:1])
        link = transfer.share_link("https://rfp.example.org/browse.html?lang=en")
        query = parse_qs(urlsplit(link.url).query)
        assert query["lang"] == ["en"]
        assert "data" in query

    def test_long_payload_goes_to_session_key(self, store, storage, settings, clock, sample_records):
        settings.max_share_url_length = 64
        transfer = TransferService(store, storage, settings, clock=clock)
        store.replace_all(sample_records)

        link = transfer.share_link()

        assert link.via_session
        assert link.url.endswith("?shared=session")
        assert storage.get(settings.share_storage_key)

        store.clear()
        result = transfer.load_shared({"shared": "session"})
        assert result.ok
        assert store.list() == sample_records

    def test_invalid_share_data_changes_nothing(self, transfer, store, sample_records):
        store.replace_all(sample_records)
        result = transfer.load_shared({"data": "not-base64-json"})
        assert not result.ok
        assert store.list() == sample_records

    def test_absent_share_data(self, transfer, store):
        result = transfer.load_shared({})
        assert not result.ok
        assert result.reason == "no share data"

    def test_session_marker_without_stored_payload(self, transfer):
        assert not transfer.load_shared({"shared": "session"}).ok
