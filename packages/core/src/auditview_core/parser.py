"""Decode report files and flatten them into ReportRecords.

A report file looks like ``{category: {filename: [entry, ...]}}``. Decoding
happens in two steps: JSON into a plain tree, then a shape check per level
before anything is read out of it. Blocks that fail the check are skipped,
never guessed at.
"""

from __future__ import annotations

import json
import logging
import posixpath
from dataclasses import dataclass, field
from pathlib import Path

from auditview_core.errors import AuditorError, FileParseError, ListingCancelled, MalformedEntry, UnknownCategory
from auditview_core.models import EXTRACTION_RULES, Category, ReportRecord, category_for_key

logger = logging.getLogger(__name__)


@dataclass
class ParseResult:
    records: list[ReportRecord] = field(default_factory=list)
    warnings: list[AuditorError] = field(default_factory=list)


def load_json(path: Path) -> object:
    """Read ``path`` as UTF-8 JSON. Raises FileParseError on bad bytes, bad JSON or runaway nesting."""
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise FileParseError(f"not valid UTF-8 ({e.reason})", path=str(path)) from e
    except OSError as e:
        raise FileParseError(f"cannot read file ({e.strerror or e})", path=str(path)) from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise FileParseError(f"invalid JSON at line {e.lineno} column {e.colno}: {e.msg}", path=str(path)) from e
    except RecursionError as e:
        raise FileParseError("JSON nested too deeply", path=str(path)) from e


def extract_record(category: Category, filename: str, entry: dict, source: str = "") -> ReportRecord:
    """Build a record from one raw entry using the category's extraction rule.

    Raises MalformedEntry if a field the rule needs is missing or not a string.
    """
    rule = EXTRACTION_RULES[category]
    where = f"{category.value} entry for {filename!r}"

    message = entry.get(rule.message_field)
    if not isinstance(message, str):
        raise MalformedEntry(f"{where} has no string {rule.message_field!r}", source or None)

    if rule.level_field is None:
        level = rule.level_literal
    else:
        level = entry.get(rule.level_field)
        if not isinstance(level, str):
            raise MalformedEntry(f"{where} has no string {rule.level_field!r}", source or None)

    return ReportRecord(
        file=posixpath.basename(filename),
        category=category,
        level=level,
        message=message,
        source=source,
    )


def parse_tree(tree: object, source: str = "", strict: bool = False) -> ParseResult:
    """Flatten an already-decoded report tree.

    Raises FileParseError if the top level is not an object. Everything below
    that is recovered per block and reported through ``ParseResult.warnings``.
    """
    if not isinstance(tree, dict):
        raise FileParseError(f"expected a JSON object, got {type(tree).__name__}", path=source or None)

    result = ParseResult()
    for key, files in tree.items():
        category = category_for_key(key)
        if category is None:
            logger.debug("Ignoring unknown category %r in %s", key, source)
            if strict:
                result.warnings.append(UnknownCategory(f"unknown category {key!r}", source or None))
            continue

        if not isinstance(files, dict):
            result.warnings.append(MalformedEntry(f"{key!r} block is not an object", source or None))
            continue

        for filename, entries in files.items():
            if not isinstance(entries, list):
                result.warnings.append(MalformedEntry(f"entries for {filename!r} are not a list", source or None))
                continue
            for entry in entries:
                if not isinstance(entry, dict):
                    result.warnings.append(
                        MalformedEntry(f"{key} entry for {filename!r} is not an object", source or None)
                    )
                    continue
                try:
                    result.records.append(extract_record(category, filename, entry, source))
                except MalformedEntry as e:
                    result.warnings.append(e)

    return result


def parse_report_file(path: Path, strict: bool = False) -> ParseResult:
    """Load and flatten a single report file. Raises FileParseError."""
    return parse_tree(load_json(path), source=str(path), strict=strict)


def parse_reports(paths, strict: bool = False, cancel=None) -> ParseResult:
    """Flatten every report file in ``paths``, in order.

    A file that fails to parse contributes a warning instead of records; the
    remaining files are still read. ``cancel`` is anything with ``is_set()``
    and is checked before each file.
    """
    combined = ParseResult()
    for path in paths:
        if cancel is not None and cancel.is_set():
            raise ListingCancelled("listing cancelled while reading reports", path=str(path))
        try:
            result = parse_report_file(path, strict=strict)
        except FileParseError as e:
            logger.debug("Skipping report file: %s", e)
            combined.warnings.append(e)
            continue
        combined.records.extend(result.records)
        combined.warnings.extend(result.warnings)
    return combined
