"""Type and level filtering of flattened records."""

from __future__ import annotations

from auditview_core.models import FilterSelection, ReportRecord


def matches(record: ReportRecord, selection: FilterSelection) -> bool:
    if selection.types and record.category.value not in selection.types:
        return False
    if selection.levels and record.level not in selection.levels:
        return False
    return True


def apply_filters(records: list[ReportRecord], selection: FilterSelection | None) -> list[ReportRecord]:
    """Return the records that pass ``selection``, in their original order."""
    if selection is None:
        return list(records)
    return [r for r in records if matches(r, selection)]
