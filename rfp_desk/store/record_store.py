"""Record store: the single owner of the persisted RFP collection."""

from pydantic import ValidationError

from rfp_desk.attachments.resolver import AttachmentResolver
from rfp_desk.codec.json_codec import dumps_collection, loads_stored_collection
from rfp_desk.errors import (
    InvalidFormatError,
    ReadOnlyRecordError,
    RecordNotFoundError,
    RecordValidationError,
)
from rfp_desk.models.records import SEED_ID_PREFIX, RFPRecord
from rfp_desk.models.requests import RFPCreate, RFPPatch, UploadedFile
from rfp_desk.models.results import DecodeResult
from rfp_desk.storage.backends import KeyValueStorage
from rfp_desk.store.ids import IdGenerator
from rfp_desk.utils.dates import (
    Clock,
    calculate_duration_days,
    format_timestamp,
    parse_deadline,
    utc_now,
)
from rfp_desk.utils.logging import LoggerMixin

IMMUTABLE_FIELDS = ("id", "uploaded_at")


class RecordStore(LoggerMixin):
    """CRUD over the RFP collection kept under one storage key.

    Every mutation reads the whole collection, changes it in memory and
    writes the whole collection back. Nothing is written when an
    operation fails, so a failed call leaves the previous state intact.
    The pattern is not safe against a second writer on the same storage:
    the last write wins.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        storage_key: str = "rfp_data",
        resolver: AttachmentResolver | None = None,
        clock: Clock = utc_now,
    ):
        """Initialize the store.

        Args:
            storage: Key/value persistence medium.
            storage_key: Key holding the collection.
            resolver: Encodes uploaded attachments.
            clock: Source of the current time.
        """
        self._storage = storage
        self._key = storage_key
        self._resolver = resolver or AttachmentResolver()
        self._clock = clock
        self._ids = IdGenerator()

    @property
    def storage_key(self) -> str:
        return self._key

    def load(self) -> DecodeResult[list[RFPRecord]]:
        """Read the persisted collection, reporting corruption instead of raising.

        Records that fail validation are dropped one by one with a warning;
        the rest of the collection is kept.
        """
        raw = self._storage.get(self._key)
        if raw is None:
            return DecodeResult.success([])
        try:
            records, rejected = loads_stored_collection(raw)
        except InvalidFormatError as e:
            self.log_warning("Persisted RFP data is corrupt, treating as empty", key=self._key, error=str(e))
            return DecodeResult.failure(str(e), fallback=[])

        for position, reason in rejected:
            self.log_warning("Dropping unreadable RFP record", key=self._key, position=position, error=reason)
        return DecodeResult.success(records)

    def get(self, record_id: str) -> RFPRecord:
        for record in self.list():
            if record.id == record_id:
                return record
        raise RecordNotFoundError(record_id)

    def _write(self, collection: list[RFPRecord]) -> None:
        self._storage.set(self._key, dumps_collection(collection))

    def replace_all(self, collection: list[RFPRecord]) -> None:
        """Make ``collection`` the whole persisted collection."""
        self._write(list(collection))
        self.log_info("Collection replaced", count=len(collection))

    def clear(self) -> None:
        self._write([])

    @staticmethod
    def _validate_input(data: RFPCreate) -> None:
        missing = [
            name
            for name in ("project_name", "product_summary", "deadline")
            if not (getattr(data, name) or "").strip()
        ]
        if missing:
            raise RecordValidationError(f"Missing required field(s): {', '.join(missing)}", fields=missing)
        if parse_deadline(data.deadline) is None:
            raise RecordValidationError(f"Deadline is not a date: {data.deadline!r}", fields=["deadline"])

    async def create(self, data: RFPCreate, upload: UploadedFile | None = None) -> RFPRecord:
        """Validate, encode the attachment, then append and persist a new RFP.

        Raises:
            RecordValidationError: A required field is missing or invalid.
        """
        self._validate_input(data)
        if upload is not None and data.file_url:
            raise RecordValidationError(
                "Provide either an uploaded file or a file URL, not both",
                fields=["file_url"],
            )

        encoded = await self._resolver.encode_upload(upload) if upload is not None else None

        # The collection is read after the encode so a write made while it
        # was pending is not lost.
        collection = self.list()
        now = self._clock()
        deadline = data.deadline.strip()
        duration = data.duration_days
        if duration is None:
            duration = calculate_duration_days(deadline, now)

        record = RFPRecord(
            id=self._ids.next_id(now, {r.id for r in collection}),
            project_name=data.project_name.strip(),
            product_summary=data.product_summary.strip(),
            deadline=deadline,
            duration_days=duration,
            status=data.status,
            uploaded_at=format_timestamp(now),
            file_url=data.file_url or None,
            file_data=encoded.data if encoded else None,
            file_name=encoded.file_name if encoded else None,
            file_size=encoded.file_size if encoded else None,
        )
        collection.append(record)
        self._write(collection)
        self.log_info("RFP created", id=record.id, project=record.project_name, attachment=encoded is not None)
        return record

    def _index_of(self, collection: list[RFPRecord], record_id: str) -> int:
        if record_id.startswith(SEED_ID_PREFIX):
            raise ReadOnlyRecordError(record_id)
        for index, record in enumerate(collection):
            if record.id == record_id:
                return index
        raise RecordNotFoundError(record_id)

    def update(self, record_id: str, patch: RFPPatch | dict) -> RFPRecord:
        """Shallow-merge ``patch`` onto a record and persist.

        ``id`` and ``uploadedAt`` never change. When the deadline changes
        without an explicit duration, the duration is derived again.

        Raises:
            RecordNotFoundError: No record has ``record_id``.
            RecordValidationError: The merged record is invalid.
        """
        if isinstance(patch, dict):
            try:
                patch = RFPPatch.model_validate(patch)
            except ValidationError as e:
                raise RecordValidationError(f"Invalid update: {e.errors()[0]['msg']}") from e

        collection = self.list()
        index = self._index_of(collection, record_id)
        current = collection[index]

        changes = {k: v for k, v in patch.changes().items() if k not in IMMUTABLE_FIELDS}
        if "deadline" in changes and "duration_days" not in changes:
            changes["duration_days"] = calculate_duration_days(changes["deadline"], self._clock())

        merged = current.model_dump() | changes
        try:
            updated = RFPRecord.model_validate(merged)
        except ValidationError as e:
            raise RecordValidationError(f"Invalid update: {e.errors()[0]['msg']}") from e

        collection[index] = updated
        self._write(collection)
        self.log_info("RFP updated", id=record_id, fields=sorted(changes))
        return updated

    def delete(self, record_id: str) -> None:
        """Remove a record and persist.

        Raises:
            RecordNotFoundError: No record has ``record_id``; nothing changes.
        """
        collection = self.list()
        index = self._index_of(collection, record_id)
        del collection[index]
        self._write(collection)
        self.log_info("RFP deleted", id=record_id)

    def list(self) -> "list[RFPRecord]":
        """Return the full collection; empty when nothing or garbage is stored."""
        result = self.load()
        return result.value if result.ok else result.fallback
