"""Collection codecs: storage JSON, export files and share links."""

from rfp_desk.codec.json_codec import (
    dumps_collection,
    export_document,
    loads_collection,
    loads_stored_collection,
    parse_import,
)
from rfp_desk.codec.merge import import_merge, import_replace
from rfp_desk.codec.share import decode_share, deserialize, serialize

__all__ = [
    "decode_share",
    "deserialize",
    "dumps_collection",
    "export_document",
    "import_merge",
    "import_replace",
    "loads_collection",
    "loads_stored_collection",
    "parse_import",
    "serialize",
]
