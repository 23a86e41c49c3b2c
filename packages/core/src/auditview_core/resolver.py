"""Swap report filenames for the source URLs recorded in the map file."""

from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import urlsplit

from auditview_core.errors import AuditorError, FileParseError, MapLookupMiss, MapUnavailable
from auditview_core.models import DisplayRow, ReportRecord
from auditview_core.parser import load_json

logger = logging.getLogger(__name__)


def load_url_map(path: Path | None) -> dict[str, str]:
    """Load ``{filename: absolute_url}`` from the map file.

    Raises MapUnavailable when there is no map file and FileParseError when it
    cannot be decoded or is not an object. Non-string values are dropped.
    """
    if path is None:
        raise MapUnavailable("no URL map file found; filenames will be shown as-is")

    data = load_json(path)
    if not isinstance(data, dict):
        raise FileParseError(f"expected a JSON object, got {type(data).__name__}", path=str(path))

    url_map = {k: v for k, v in data.items() if isinstance(v, str)}
    if len(url_map) != len(data):
        logger.debug("Dropped %d non-string entries from %s", len(data) - len(url_map), path)
    return url_map


def resolve(record: ReportRecord, url_map: dict[str, str]) -> DisplayRow:
    """Return the display row for ``record``.

    The label is the path part of the mapped URL and the target the full URL.
    Raises MapLookupMiss if the filename is not in the map.
    """
    uri = url_map.get(record.file)
    if uri is None:
        raise MapLookupMiss(f"no URL mapped for {record.file!r}", path=record.source or None)
    return DisplayRow(label=urlsplit(uri).path or "/", target=uri, record=record)


def resolve_rows(records: list[ReportRecord], url_map: dict[str, str]) -> tuple[list[DisplayRow], list[AuditorError]]:
    """Resolve every record, keeping the raw filename as label and target on a miss.

    One MapLookupMiss warning is returned per distinct missing filename.
    """
    rows: list[DisplayRow] = []
    warnings: list[AuditorError] = []
    missed: set[str] = set()
    for record in records:
        try:
            rows.append(resolve(record, url_map))
        except MapLookupMiss as e:
            rows.append(DisplayRow(label=record.file, target=record.file, record=record))
            if record.file not in missed:
                missed.add(record.file)
                warnings.append(e)
    return rows, warnings
