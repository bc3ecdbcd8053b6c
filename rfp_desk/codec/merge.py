"""Pure functions combining an imported collection with an existing one."""

from rfp_desk.models.records import RFPRecord


def import_merge(existing: list[RFPRecord], incoming: list[RFPRecord]) -> list[RFPRecord]:
    """Replace records whose id matches in place, append the rest.

    Existing records keep their positions. If ``incoming`` repeats an id,
    the last occurrence wins.
    """
    merged = list(existing)
    positions = {record.id: index for index, record in enumerate(merged)}

    for record in incoming:
        index = positions.get(record.id)
        if index is None:
            positions[record.id] = len(merged)
            merged.append(record)
        else:
            merged[index] = record
    return merged


def import_replace(incoming: list[RFPRecord]) -> list[RFPRecord]:
    """The imported collection becomes the whole collection."""
    return list(incoming)
