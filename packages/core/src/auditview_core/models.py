"""Report record data models.

Every finding, whatever report kind it came from, is flattened into a
ReportRecord. The per-category extraction rules live here so the parser and
the tests share a single table.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from auditview_core.errors import AuditorError

PAGE_SIZE = 25


class Category(str, Enum):
    ACCESSIBILITY = "accessibility"
    HTML5 = "html5"
    LINK = "link"


# Older audit tool versions misspell the accessibility key.
CATEGORY_ALIASES = {"assessibility": Category.ACCESSIBILITY}


@dataclass(frozen=True)
class Extraction:
    """Where a category's level and message come from in a raw entry.

    ``level_field`` of None means the level is the fixed ``level_literal``.
    """

    message_field: str
    level_field: str | None = None
    level_literal: str | None = None


EXTRACTION_RULES: dict[Category, Extraction] = {
    Category.ACCESSIBILITY: Extraction(message_field="message", level_field="type"),
    Category.HTML5: Extraction(message_field="message", level_field="type"),
    Category.LINK: Extraction(message_field="error", level_literal="error"),
}


def category_for_key(key: str) -> Category | None:
    """Map a top-level report key to a Category, or None if it is not one we know."""
    if key in CATEGORY_ALIASES:
        return CATEGORY_ALIASES[key]
    try:
        return Category(key)
    except ValueError:
        return None


@dataclass(frozen=True)
class ReportRecord:
    """A single finding flattened out of a report file."""

    file: str
    category: Category
    level: str
    message: str
    source: str = field(default="", compare=False)  # report file the record was read from


SORT_FIELDS = ("file", "category", "level", "message")


@dataclass(frozen=True)
class FilterSelection:
    """Inclusion sets chosen by the caller.

    None (or an empty set) on either dimension means no filtering on it.
    """

    types: frozenset[str] | None = None
    levels: frozenset[str] | None = None

    @classmethod
    def from_lists(cls, types=None, levels=None) -> FilterSelection:
        """Build a selection from raw option lists, accepting category aliases in ``types``."""
        return cls(
            types=frozenset(_normalise_type(t) for t in types) if types else None,
            levels=frozenset(levels) if levels else None,
        )


def _normalise_type(name: str) -> str:
    category = category_for_key(name)
    return category.value if category is not None else name


@dataclass(frozen=True)
class SortSelection:
    """Field and direction requested by the caller (``order`` / ``sort`` query params)."""

    order: str = ""
    direction: str = "asc"

    @property
    def descending(self) -> bool:
        return (self.direction or "").lower() == "desc"


@dataclass
class DisplayRow:
    """A record ready for rendering: ``file`` replaced by a link label and target."""

    label: str
    target: str
    record: ReportRecord

    @property
    def category(self) -> str:
        return self.record.category.value

    @property
    def level(self) -> str:
        return self.record.level

    @property
    def message(self) -> str:
        return self.record.message

    def to_dict(self) -> dict:
        return {
            "file": self.label,
            "url": self.target,
            "type": self.category,
            "level": self.level,
            "message": self.message,
        }


@dataclass
class ReportPage:
    """One page of the listing plus what a pager needs to render."""

    rows: list[DisplayRow]
    total: int
    page: int
    page_size: int = PAGE_SIZE
    warnings: list[AuditorError] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return math.ceil(self.total / self.page_size) if self.page_size else 0

    def to_dict(self) -> dict:
        return {
            "page": self.page,
            "page_size": self.page_size,
            "page_count": self.page_count,
            "total": self.total,
            "rows": [r.to_dict() for r in self.rows],
            "warnings": [str(w) for w in self.warnings],
        }
