"""Error taxonomy for report aggregation.

Most of these are recovered inside the engine and handed back to the caller
as warnings on the ReportPage. Only ListingCancelled and ConfigError are
expected to escape list_reports().
"""

from __future__ import annotations


class AuditorError(Exception):
    """Base class for every error the aggregation engine raises."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message


class DirectoryUnavailable(AuditorError):
    """The report directory is missing, not a directory, or unreadable."""


class FileParseError(AuditorError):
    """A report or map file could not be decoded."""


class MalformedEntry(AuditorError):
    """A category block or entry inside an otherwise valid report has the wrong shape."""


class MapUnavailable(AuditorError):
    """No URL map file was found next to the reports."""


class MapLookupMiss(AuditorError):
    """A record's filename has no entry in the URL map."""


class UnknownCategory(AuditorError):
    """A report file contains a top-level key that is not a known category."""


class UnknownSortField(AuditorError):
    """The requested sort field is not a record attribute."""


class ListingCancelled(AuditorError):
    """The caller cancelled the listing while report files were being read."""


class ConfigError(AuditorError):
    """Configuration values are invalid."""
