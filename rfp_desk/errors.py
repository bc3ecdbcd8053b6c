"""Error taxonomy for the RFP desk.

Every failure in the data layer maps to one of these classes. None of them
is fatal: validation and not-found errors are reported to the caller,
format errors leave the previous collection untouched, and attachment
decode errors are turned into a fallback by the resolver.
"""


class RFPDeskError(Exception):
    """Base class for all RFP desk errors."""


class RecordValidationError(RFPDeskError):
    """A record is missing a required field or holds an invalid value."""

    def __init__(self, message: str, fields: list[str] | None = None):
        super().__init__(message)
        self.fields = fields or []


class RecordNotFoundError(RFPDeskError):
    """No record with the given id exists in the collection."""

    def __init__(self, record_id: str):
        super().__init__(f"RFP not found: {record_id}")
        self.record_id = record_id


class ReadOnlyRecordError(RFPDeskError):
    """A mutation targeted one of the built-in seed records."""

    def __init__(self, record_id: str):
        super().__init__(f"Seed record is read-only: {record_id}")
        self.record_id = record_id


class InvalidFormatError(RFPDeskError):
    """Persisted, imported or shared data could not be decoded."""


class AttachmentDecodeError(RFPDeskError):
    """An embedded attachment payload is not valid base64 data."""
