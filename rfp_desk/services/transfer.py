"""Export, import and share-link handling on top of the record store."""

from collections.abc import Mapping
from urllib.parse import parse_qs, urlencode, urlsplit, urlunsplit

from rfp_desk.codec.json_codec import export_document, parse_import
from rfp_desk.codec.merge import import_merge, import_replace
from rfp_desk.codec.share import decode_share, serialize
from rfp_desk.config import Settings, get_settings
from rfp_desk.models.results import DecodeResult, ImportMode, ImportReport, ShareLink
from rfp_desk.models.records import RFPRecord
from rfp_desk.storage.backends import KeyValueStorage
from rfp_desk.store.record_store import RecordStore
from rfp_desk.utils.dates import Clock, utc_now
from rfp_desk.utils.logging import LoggerMixin

SESSION_MARKER = "session"


class TransferService(LoggerMixin):
    """Moves whole collections in and out of the record store."""

    def __init__(
        self,
        store: RecordStore,
        storage: KeyValueStorage,
        settings: Settings | None = None,
        clock: Clock = utc_now,
    ):
        self._store = store
        self._storage = storage
        self._settings = settings or get_settings()
        self._clock = clock

    def export_data(self) -> str:
        """JSON export document of the current collection."""
        collection = self._store.list()
        self.log_info("Exporting RFPs", count=len(collection))
        return export_document(collection, self._clock(), version=self._settings.export_version)

    def import_data(self, text: str, mode: ImportMode = ImportMode.MERGE) -> ImportReport:
        """Import an export file (or bare record array) and persist the result.

        Raises:
            InvalidFormatError: The file is unreadable; the store is untouched.
        """
        incoming = parse_import(text)
        mode = ImportMode(mode)
        if mode is ImportMode.REPLACE:
            collection = import_replace(incoming)
        else:
            collection = import_merge(self._store.list(), incoming)

        self._store.replace_all(collection)
        self.log_info("Imported RFPs", mode=mode.value, imported=len(incoming), total=len(collection))
        return ImportReport(mode=mode, imported=len(incoming), total=len(collection))

    def _with_query(self, base_url: str, params: dict[str, str]) -> str:
        parts = urlsplit(base_url)
        query = parse_qs(parts.query)
        query.update({k: [v] for k, v in params.items()})
        return urlunsplit(parts._replace(query=urlencode(query, doseq=True)))

    def share_link(self, base_url: str | None = None) -> ShareLink:
        """Build a link carrying the whole collection.

        Payloads that would make the link longer than the configured
        limit are parked under the secondary storage key instead.
        """
        base_url = base_url or self._settings.share_base_url
        collection = self._store.list()
        encoded = serialize(collection)
        param = self._settings.share_query_param

        url = self._with_query(base_url, {param: encoded})
        if len(url) <= self._settings.max_share_url_length:
            return ShareLink(url=url, records=len(collection))

        self._storage.set(self._settings.share_storage_key, encoded)
        self.log_info("Share payload too long for a URL, stored for session", length=len(url))
        return ShareLink(
            url=self._with_query(base_url, {"shared": SESSION_MARKER}),
            records=len(collection),
            via_session=True,
        )

    def load_shared(self, params: Mapping[str, str]) -> DecodeResult[list[RFPRecord]]:
        """Apply share data found in page-load query parameters.

        A valid payload replaces the stored collection. A missing or
        invalid one is reported in the result and changes nothing.
        """
        payload = params.get(self._settings.share_query_param)
        if not payload and params.get("shared") == SESSION_MARKER:
            payload = self._storage.get(self._settings.share_storage_key)
        if not payload:
            return DecodeResult.failure("no share data")

        result = decode_share(payload)
        if result.ok:
            self._store.replace_all(result.value)
            self.log_info("Loaded shared RFPs", count=len(result.value))
        return result

    def load_shared_url(self, url: str) -> DecodeResult[list[RFPRecord]]:
        """Same as :meth:`load_shared`, reading the parameters from a full URL."""
        query = parse_qs(urlsplit(url).query)
        return self.load_shared({k: v[0] for k, v in query.items() if v})
