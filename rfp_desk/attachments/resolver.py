"""Attachment encoding and resolution.

Uploaded files are stored only in encoded form: a base64 data URL plus
the original file name. Resolving turns that payload back into bytes on
disk that a viewer or a download can point at.
"""

import asyncio
import base64
import binascii
import mimetypes
import os
import tempfile
from pathlib import Path

from rfp_desk.errors import AttachmentDecodeError
from rfp_desk.models.records import BLANK_DOCUMENT_URL, EncodedAttachment, ExternalAttachment, RFPRecord
from rfp_desk.models.requests import UploadedFile
from rfp_desk.models.results import DecodeResult
from rfp_desk.utils.logging import LoggerMixin

DEFAULT_MEDIA_TYPE = "application/pdf"


class ResourceHandle:
    """A resolved attachment written to a temporary file.

    The handle belongs to whoever asked for it. Call :meth:`release` (or
    use the handle as a context manager) once the document is no longer
    shown; the resolver does not keep track of handles it has issued.
    """

    def __init__(self, path: Path, media_type: str = DEFAULT_MEDIA_TYPE):
        self.path = path
        self.media_type = media_type
        self._released = False

    @property
    def url(self) -> str:
        return self.path.as_uri()

    @property
    def released(self) -> bool:
        return self._released

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()

    def release(self) -> None:
        """Delete the backing file. Safe to call more than once."""
        if self._released:
            return
        self.path.unlink(missing_ok=True)
        self._released = True

    def __enter__(self) -> "ResourceHandle":
        return self

    def __exit__(self, *exc_info) -> None:
        self.release()

    def __repr__(self) -> str:
        state = "released" if self._released else "live"
        return f"ResourceHandle({str(self.path)!r}, {state})"


class AttachmentResolver(LoggerMixin):
    """Encodes uploads and resolves stored payloads into handles."""

    def __init__(self, handle_directory: Path | None = None):
        """Initialize the resolver.

        Args:
            handle_directory: Where resolved files are written. Defaults to
                the system temporary directory.
        """
        self._handle_directory = handle_directory
        if handle_directory is not None:
            Path(handle_directory).mkdir(parents=True, exist_ok=True)

    @staticmethod
    def guess_media_type(file_name: str) -> str:
        media_type, _ = mimetypes.guess_type(file_name)
        return media_type or DEFAULT_MEDIA_TYPE

    def encode(self, content: bytes, file_name: str) -> EncodedAttachment:
        """Encode raw file bytes as a self-describing data URL."""
        media_type = self.guess_media_type(file_name)
        payload = base64.b64encode(content).decode("ascii")
        return EncodedAttachment(
            data=f"data:{media_type};base64,{payload}",
            file_name=file_name,
            file_size=len(content),
        )

    async def encode_upload(self, upload: UploadedFile) -> EncodedAttachment:
        """Encode an uploaded file off the event loop."""
        encoded = await asyncio.to_thread(self.encode, upload.content, upload.file_name)
        self.log_debug("Attachment encoded", file_name=upload.file_name, size=encoded.file_size)
        return encoded

    async def read_file(self, path: Path) -> UploadedFile:
        """Read a file from disk into an upload."""
        path = Path(path)
        content = await asyncio.to_thread(path.read_bytes)
        return UploadedFile(file_name=path.name, content=content)

    def decode(self, payload: str) -> bytes:
        """Decode a data URL (or bare base64) into bytes.

        Raises:
            AttachmentDecodeError: The payload is not valid base64.
        """
        if not payload:
            raise AttachmentDecodeError("attachment payload is empty")
        encoded = payload
        if payload.startswith("data:"):
            _, sep, encoded = payload.partition(",")
            if not sep:
                raise AttachmentDecodeError("data URL has no payload")
        try:
            return base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as e:
            raise AttachmentDecodeError(f"attachment payload is not base64: {e}") from e

    def resolve(self, payload: str) -> DecodeResult[ResourceHandle]:
        """Turn a stored payload into a handle typed ``application/pdf``.

        On decode failure the result carries the original payload as its
        fallback, which callers can still hand to a viewer as-is.
        """
        try:
            content = self.decode(payload)
        except AttachmentDecodeError as e:
            self.log_warning("Attachment decode failed, using raw payload", error=str(e))
            return DecodeResult.failure(str(e), fallback=payload)

        fd, name = tempfile.mkstemp(suffix=".pdf", prefix="rfp-", dir=self._handle_directory)
        with os.fdopen(fd, "wb") as f:
            f.write(content)
        handle = ResourceHandle(Path(name), media_type=DEFAULT_MEDIA_TYPE)
        self.log_debug("Attachment resolved", path=name, size=len(content))
        return DecodeResult.success(handle)

    def locate(self, record: RFPRecord) -> DecodeResult[ResourceHandle] | str | None:
        """Find something a viewer can open for a record.

        Returns the external reference as a string, a resolve result for
        embedded payloads, or None when the record has no attachment. A
        blank placeholder reference counts as no attachment.
        """
        attachment = record.attachment
        if isinstance(attachment, ExternalAttachment):
            if attachment.url == BLANK_DOCUMENT_URL:
                return None
            return attachment.url
        if isinstance(attachment, EncodedAttachment):
            return self.resolve(attachment.data)
        return None
