"""Locate report files and the URL map inside a report directory."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from auditview_core.errors import DirectoryUnavailable

logger = logging.getLogger(__name__)

REPORT_FILE_PATTERN = re.compile(r"[a-z0-9]+-report\.json")
MAP_FILE_NAME = "map.json"


@dataclass
class DiscoveredFiles:
    reports: list[Path] = field(default_factory=list)
    map_file: Path | None = None


def is_report_file(name: str) -> bool:
    return REPORT_FILE_PATTERN.fullmatch(name) is not None


def discover(directory: str | Path, map_file_name: str = MAP_FILE_NAME, recursive: bool = False) -> DiscoveredFiles:
    """Return the report files and map file found in ``directory``.

    Report paths are sorted so the flattened record order is the same on
    every run. The map file is looked up directly in ``directory`` only.

    Raises DirectoryUnavailable if the directory is missing or cannot be
    listed. The engine turns that into an empty listing.
    """
    root = Path(directory)
    if not root.is_dir():
        raise DirectoryUnavailable("report directory does not exist", path=str(root))

    try:
        candidates = root.rglob("*") if recursive else root.iterdir()
        reports = sorted(p for p in candidates if p.is_file() and is_report_file(p.name))
        map_path = root / map_file_name
        map_file = map_path if map_path.is_file() else None
    except OSError as e:
        raise DirectoryUnavailable(f"cannot read report directory ({e.strerror or e})", path=str(root)) from e

    found = DiscoveredFiles(reports=reports, map_file=map_file)
    logger.debug("Found %d report file(s) in %s (map: %s)", len(found.reports), root, found.map_file)
    return found
