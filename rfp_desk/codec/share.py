"""Share encoding: a reversible, URL-safe text form of a collection.

The JSON text is UTF-8 encoded and then base64 encoded. This does not
make the payload smaller; it only makes it safe to carry in a query
parameter (after the usual percent-encoding of ``+``, ``/`` and ``=``).
"""

import base64
import binascii

from rfp_desk.codec.json_codec import dumps_collection, loads_collection
from rfp_desk.errors import InvalidFormatError
from rfp_desk.models.records import RFPRecord
from rfp_desk.models.results import DecodeResult
from rfp_desk.utils.logging import get_logger

logger = get_logger(__name__)


def serialize(collection: list[RFPRecord]) -> str:
    """Encode a collection for a share link."""
    return base64.b64encode(dumps_collection(collection).encode("utf-8")).decode("ascii")


def deserialize(text: str) -> list[RFPRecord]:
    """Decode a share payload.

    Raises:
        InvalidFormatError: The payload is not base64 of a JSON record list.
    """
    if not text or not text.strip():
        raise InvalidFormatError("share payload is empty")
    try:
        raw = base64.b64decode(text.strip(), validate=True)
        json_text = raw.decode("utf-8")
    except (binascii.Error, ValueError) as e:
        raise InvalidFormatError(f"share payload is not base64 text: {e}") from e
    return loads_collection(json_text)


def decode_share(text: str | None) -> DecodeResult[list[RFPRecord]]:
    """Non-raising form of :func:`deserialize` for page-load handling."""
    if not text:
        return DecodeResult.failure("no share payload")
    try:
        return DecodeResult.success(deserialize(text))
    except InvalidFormatError as e:
        logger.warning("Ignoring invalid share payload", error=str(e))
        return DecodeResult.failure(str(e))
