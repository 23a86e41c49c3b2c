"""Sorting and fixed-size pagination of the filtered record sequence.

By default only the requested page is sorted, after the sequence has been
chunked. That is how listings have always behaved, so sorting by a column
reorders rows within the current page but never moves a row to another page.
Pass ``global_sort=True`` to sort the whole sequence before chunking instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from auditview_core.models import PAGE_SIZE, SORT_FIELDS, ReportRecord, SortSelection

logger = logging.getLogger(__name__)


@dataclass
class PageSlice:
    records: list[ReportRecord]
    total: int
    page: int
    page_size: int


def chunk(records: list[ReportRecord], size: int = PAGE_SIZE) -> list[list[ReportRecord]]:
    """Split ``records`` into consecutive chunks of at most ``size``."""
    if size < 1:
        raise ValueError(f"page size must be at least 1, got {size}")
    return [records[i : i + size] for i in range(0, len(records), size)]


def _sort_value(record: ReportRecord, name: str) -> bytes:
    value = getattr(record, name)
    value = getattr(value, "value", value)
    # Compare on UTF-8 bytes so ordering is byte-wise, not locale-aware.
    return str(value).encode("utf-8", "surrogatepass")


def is_sort_field(name: str) -> bool:
    return name in SORT_FIELDS


def sort_records(records: list[ReportRecord], sort: SortSelection | None) -> list[ReportRecord]:
    """Return ``records`` ordered by ``sort``.

    Ascending sort is stable. Descending reverses the ascending result, so
    ties come out in reverse order too. An empty or unknown field leaves the
    order as-is before the direction is applied.
    """
    if sort is None:
        return list(records)

    if is_sort_field(sort.order):
        ordered = sorted(records, key=lambda r: _sort_value(r, sort.order))
    else:
        if sort.order:
            logger.debug("Ignoring unknown sort field %r", sort.order)
        ordered = list(records)

    if sort.descending:
        ordered.reverse()
    return ordered


def paginate(
    records: list[ReportRecord],
    page: int = 0,
    sort: SortSelection | None = None,
    page_size: int = PAGE_SIZE,
    global_sort: bool = False,
) -> PageSlice:
    """Return the records on ``page`` (0-indexed) plus the total count.

    An out-of-range page yields no records; ``total`` is always the length of
    ``records`` whatever page is asked for.
    """
    total = len(records)
    if global_sort:
        records = sort_records(records, sort)

    chunks = chunk(records, page_size)
    if not 0 <= page < len(chunks):
        logger.debug("Page %d out of range (%d page(s))", page, len(chunks))
        return PageSlice(records=[], total=total, page=page, page_size=page_size)

    selected = chunks[page] if global_sort else sort_records(chunks[page], sort)
    return PageSlice(records=selected, total=total, page=page, page_size=page_size)
