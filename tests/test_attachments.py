"""Tests for attachment encoding and resolution."""

import asyncio
import base64

from rfp_desk.attachments.resolver import AttachmentResolver, ResourceHandle
from rfp_desk.models.requests import UploadedFile

from tests.conftest import make_record


class TestEncode:
    """Tests for encoding uploads."""

    def test_encode_pdf(self, resolver, pdf_bytes):
        encoded = resolver.encode(pdf_bytes, "tender.pdf")
        assert encoded.data.startswith("data:application/pdf;base64,")
        assert encoded.file_name == "tender.pdf"
        assert encoded.file_size == len(pdf_bytes)
        assert base64.b64decode(encoded.data.split(",", 1)[1]) == pdf_bytes

    def test_media_type_from_name(self, resolver):
        assert resolver.encode(b"hi", "notes.txt").media_type == "text/plain"

    def test_unknown_extension_defaults_to_pdf(self, resolver):
        assert resolver.encode(b"hi", "blob").media_type == "application/pdf"

    def test_encode_upload_is_async(self, resolver, pdf_bytes):
        upload = UploadedFile(file_name="a.pdf", content=pdf_bytes)
        encoded = asyncio.run(resolver.encode_upload(upload))
        assert encoded.file_size == len(pdf_bytes)

    def test_read_file(self, resolver, tmp_path, pdf_bytes):
        path = tmp_path / "data sheet.pdf"
        path.write_bytes(pdf_bytes)
        upload = asyncio.run(resolver.read_file(path))
        assert upload.file_name == "data sheet.pdf"
        assert upload.content == pdf_bytes


class TestResolve:
    """Tests for resolving stored payloads."""

    def test_resolve_round_trip(self, resolver, pdf_bytes):
        encoded = resolver.encode(pdf_bytes, "tender.pdf")
        result = resolver.resolve(encoded.data)

        assert result.ok
        handle = result.value
        assert isinstance(handle, ResourceHandle)
        assert handle.media_type == "application/pdf"
        assert handle.url.startswith("file://")
        assert handle.read_bytes() == pdf_bytes
        handle.release()

    def test_release_removes_file(self, resolver, pdf_bytes):
        handle = resolver.resolve(resolver.encode(pdf_bytes, "a.pdf").data).value
        handle.release()
        assert handle.released
        assert not handle.path.exists()
        handle.release()

    def test_context_manager_releases(self, resolver, pdf_bytes):
        with resolver.resolve(resolver.encode(pdf_bytes, "a.pdf").data).value as handle:
            assert handle.path.exists()
        assert not handle.path.exists()

    def test_each_resolve_is_a_new_handle(self, resolver, pdf_bytes):
        payload = resolver.encode(pdf_bytes, "a.pdf").data
        first = resolver.resolve(payload).value
        second = resolver.resolve(payload).value
        assert first.path != second.path
        first.release()
        second.release()

    def test_bare_base64_payload(self, resolver):
        result = resolver.resolve(base64.b64encode(b"raw").decode())
        assert result.ok
        assert result.value.read_bytes() == b"raw"
        result.value.release()

    def test_corrupt_payload_falls_back(self, resolver):
        payload = "data:application/pdf;base64,@@not-base64@@"
        result = resolver.resolve(payload)
        assert not result.ok
        assert result.fallback == payload
        assert "base64" in result.reason

    def test_data_url_without_payload_falls_back(self, resolver):
        result = resolver.resolve("data:application/pdf;base64")
        assert not result.ok
        assert result.fallback == "data:application/pdf;base64"


class TestLocate:
    """Tests for locating a record's document."""

    def test_external_reference_bypasses_resolver(self, resolver):
        record = make_record("1", file_url="/docs/rfp.pdf")
        assert resolver.locate(record) == "/docs/rfp.pdf"

    def test_embedded_payload_is_resolved(self, resolver, pdf_bytes):
        encoded = resolver.encode(pdf_bytes, "a.pdf")
        record = make_record("1", file_data=encoded.data, file_name="a.pdf")
        result = resolver.locate(record)
        assert result.ok
        result.value.release()

    def test_no_attachment(self, resolver):
        assert resolver.locate(make_record("1")) is None

    def test_blank_placeholder_is_no_attachment(self, resolver):
        record = make_record("1", file_url="about:blank", file_name="Document")
        assert resolver.locate(record) is None

    def test_default_handle_directory(self, pdf_bytes):
        resolver = AttachmentResolver()
        handle = resolver.resolve(resolver.encode(pdf_bytes, "a.pdf").data).value
        assert handle.path.exists()
        handle.release()
