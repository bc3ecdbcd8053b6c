"""Query engine: tab views and free-text search over a collection.

Nothing here mutates its input. ``now`` is always passed in, so the
moving "completed" view is deterministic for a given clock.
"""

from datetime import datetime, timezone
from enum import Enum

from rfp_desk.models.records import RFPRecord, RFPStatus
from rfp_desk.query.seeds import seed_records
from rfp_desk.utils.dates import (
    Clock,
    as_utc,
    format_deadline,
    parse_deadline,
    parse_timestamp,
    utc_now,
)

OLDEST = datetime.min.replace(tzinfo=timezone.utc)


class Tab(str, Enum):
    """Named lifecycle views of the collection."""

    RECENT = "recent"
    OPEN = "open"
    EXTENDED = "extended"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, value: "str | Tab | None") -> "Tab":
        """Unknown or missing tab names fall back to ``recent``."""
        if isinstance(value, Tab):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.RECENT


def is_completed(record: RFPRecord, now: datetime) -> bool:
    """Derived status: the deadline lies strictly before ``now``."""
    deadline = parse_deadline(record.deadline)
    return deadline is not None and deadline < as_utc(now)


def _uploaded_key(record: RFPRecord) -> datetime:
    return parse_timestamp(record.uploaded_at) or OLDEST


def _deadline_key(record: RFPRecord) -> datetime:
    return parse_deadline(record.deadline) or OLDEST


def by_tab(tab: "str | Tab", collection: list[RFPRecord], now: datetime) -> list[RFPRecord]:
    """Records for a tab, in display order.

    An empty collection is replaced by the seed records before filtering.
    """
    tab = Tab.parse(tab)
    now = as_utc(now)
    records = collection or seed_records(now)

    if tab is Tab.COMPLETED:
        selected = [r for r in records if is_completed(r, now)]
        return sorted(selected, key=_deadline_key, reverse=True)

    if tab is Tab.OPEN:
        selected = [r for r in records if r.status is RFPStatus.OPEN]
    elif tab is Tab.EXTENDED:
        selected = [r for r in records if r.status is RFPStatus.EXTENDED]
    else:
        selected = list(records)
    return sorted(selected, key=_uploaded_key, reverse=True)


def search_text(record: RFPRecord) -> str:
    """The text a search term is matched against, lower-cased."""
    parts = (
        record.project_name,
        record.product_summary,
        record.status.value,
        format_deadline(record.deadline),
    )
    return " ".join(parts).lower()


def search(collection: list[RFPRecord], term: str | None) -> list[RFPRecord]:
    """Case-insensitive substring search; a blank term matches everything."""
    needle = (term or "").strip().lower()
    if not needle:
        return list(collection)
    return [r for r in collection if needle in search_text(r)]


class QueryEngine:
    """Derives the browse view from the store's collection."""

    def __init__(self, clock: Clock = utc_now):
        self._clock = clock

    def view(
        self,
        collection: list[RFPRecord],
        tab: "str | Tab" = Tab.RECENT,
        term: str | None = None,
        now: datetime | None = None,
    ) -> list[RFPRecord]:
        """Tab filter first, then search."""
        now = as_utc(now or self._clock())
        return search(by_tab(tab, collection, now), term)
