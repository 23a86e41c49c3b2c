"""Report listing orchestration.

Ties discovery, parsing, filtering, paging and URL resolution together for a
single listing request. Nothing is cached between calls; each call re-reads
the directory.
"""

from __future__ import annotations

import logging
from pathlib import Path

from auditview_core.discovery import MAP_FILE_NAME, discover
from auditview_core.errors import AuditorError, DirectoryUnavailable, FileParseError, MapUnavailable, UnknownSortField
from auditview_core.filters import apply_filters
from auditview_core.models import PAGE_SIZE, SORT_FIELDS, FilterSelection, ReportPage, ReportRecord, SortSelection
from auditview_core.paging import is_sort_field, paginate
from auditview_core.parser import parse_reports
from auditview_core.resolver import load_url_map, resolve_rows

logger = logging.getLogger(__name__)


def collect_records(
    directory: str | Path,
    recursive: bool = False,
    strict: bool = False,
    map_file: str = MAP_FILE_NAME,
    cancel=None,
) -> tuple[list[ReportRecord], Path | None, list[AuditorError]]:
    """Read every report file under ``directory`` into a flat record list.

    Returns ``(records, map_path, warnings)``. A missing or unreadable
    directory gives no records and a DirectoryUnavailable warning.
    """
    try:
        found = discover(directory, map_file_name=map_file, recursive=recursive)
    except DirectoryUnavailable as e:
        return [], None, [e]

    result = parse_reports(found.reports, strict=strict, cancel=cancel)
    return result.records, found.map_file, result.warnings


def list_reports(
    directory: str | Path,
    selection: FilterSelection | None = None,
    sort: SortSelection | None = None,
    page: int = 0,
    page_size: int = PAGE_SIZE,
    global_sort: bool = False,
    recursive: bool = False,
    strict: bool = False,
    map_file: str = MAP_FILE_NAME,
    cancel=None,
) -> ReportPage:
    """Build one page of the report listing.

    Records are filtered, chunked and sorted first; only the records on the
    requested page have their filename resolved through the URL map, so sort
    order is always based on the raw filename.

    Malformed input never raises: problems are recovered and returned on
    ``ReportPage.warnings``. ListingCancelled propagates if ``cancel`` is set
    while report files are being read.
    """
    records, map_path, warnings = collect_records(
        directory, recursive=recursive, strict=strict, map_file=map_file, cancel=cancel
    )

    filtered = apply_filters(records, selection)

    if strict and sort is not None and sort.order and not is_sort_field(sort.order):
        warnings.append(
            UnknownSortField(f"cannot sort by {sort.order!r}; expected one of {', '.join(SORT_FIELDS)}")
        )

    sliced = paginate(filtered, page=page, sort=sort, page_size=page_size, global_sort=global_sort)

    rows = []
    if sliced.records:
        try:
            url_map = load_url_map(map_path)
        except (MapUnavailable, FileParseError) as e:
            warnings.append(e)
            url_map = {}
        rows, misses = resolve_rows(sliced.records, url_map)
        warnings.extend(misses)

    for w in warnings:
        logger.warning("%s: %s", type(w).__name__, w)

    return ReportPage(rows=rows, total=sliced.total, page=page, page_size=page_size, warnings=warnings)


def list_reports_from_config(
    config: dict,
    selection: FilterSelection | None = None,
    sort: SortSelection | None = None,
    page: int = 0,
    cancel=None,
) -> ReportPage:
    """Run list_reports() with directory and paging options taken from ``config``."""
    return list_reports(
        config["reports_dir"],
        selection=selection,
        sort=sort,
        page=page,
        page_size=config["page_size"],
        global_sort=config["global_sort"],
        recursive=config["recursive"],
        strict=config["strict"],
        map_file=config["map_file"],
        cancel=cancel,
    )
