"""Plain JSON encoding of RFP collections, plus the export envelope."""

import json
from datetime import datetime

from pydantic import TypeAdapter, ValidationError

from rfp_desk.errors import InvalidFormatError
from rfp_desk.models.records import RFPRecord
from rfp_desk.models.results import ExportDocument
from rfp_desk.utils.dates import format_timestamp

_collection_adapter = TypeAdapter(list[RFPRecord])


def dumps_collection(collection: list[RFPRecord]) -> str:
    """Encode a collection as the JSON array kept in storage."""
    return json.dumps([record.to_storage() for record in collection], ensure_ascii=False)


def validate_collection(data: object) -> list[RFPRecord]:
    """Check that decoded JSON is a sequence of record-shaped objects."""
    if not isinstance(data, list):
        raise InvalidFormatError(f"expected a list of RFP records, got {type(data).__name__}")
    try:
        return _collection_adapter.validate_python(data)
    except ValidationError as e:
        raise InvalidFormatError(f"invalid RFP record: {e.error_count()} error(s): {e.errors()[0]['msg']}") from e


def _decode_json(text: str) -> object:
    try:
        return json.loads(text)
    except (TypeError, json.JSONDecodeError) as e:
        raise InvalidFormatError(f"not valid JSON: {e}") from e


def loads_collection(text: str) -> list[RFPRecord]:
    """Decode a JSON array of records, all or nothing.

    Raises:
        InvalidFormatError: The text is not JSON or any element is not a record.
    """
    return validate_collection(_decode_json(text))


def loads_stored_collection(text: str) -> tuple[list[RFPRecord], list[tuple[int, str]]]:
    """Decode the stored JSON array one record at a time.

    Returns the records that validate and, for each one that does not,
    its position in the array and the first validation message.

    Raises:
        InvalidFormatError: The text is not JSON or not a list.
    """
    data = _decode_json(text)
    if not isinstance(data, list):
        raise InvalidFormatError(f"expected a list of RFP records, got {type(data).__name__}")

    records: list[RFPRecord] = []
    rejected: list[tuple[int, str]] = []
    for position, item in enumerate(data):
        try:
            records.append(RFPRecord.model_validate(item))
        except ValidationError as e:
            rejected.append((position, e.errors()[0]["msg"]))
    return records, rejected


def export_document(collection: list[RFPRecord], now: datetime, version: str = "1.0") -> str:
    """Build the export file body: ``{version, exportDate, rfps}``."""
    document = ExportDocument(
        version=version,
        export_date=format_timestamp(now),
        rfps=list(collection),
    )
    return document.to_json()


def parse_import(text: str) -> list[RFPRecord]:
    """Read an export file, or a bare JSON array of records.

    Raises:
        InvalidFormatError: The file is neither shape.
    """
    try:
        data = json.loads(text)
    except (TypeError, json.JSONDecodeError) as e:
        raise InvalidFormatError(f"import file is not valid JSON: {e}") from e

    if isinstance(data, dict):
        if "rfps" not in data:
            raise InvalidFormatError("import file has no 'rfps' list")
        data = data["rfps"]
    return validate_collection(data)
