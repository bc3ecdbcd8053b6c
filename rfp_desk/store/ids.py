"""Record id generation."""

from collections.abc import Collection
from datetime import datetime


class IdGenerator:
    """Issues millisecond-timestamp ids that never repeat within a process.

    Two calls in the same millisecond, or a clock that steps backwards,
    get the next free integer instead of a duplicate.
    """

    def __init__(self) -> None:
        self._last = 0

    def next_id(self, now: datetime, taken: Collection[str] = ()) -> str:
        candidate = max(int(now.timestamp() * 1000), self._last + 1)
        while str(candidate) in taken:
            candidate += 1
        self._last = candidate
        return str(candidate)
