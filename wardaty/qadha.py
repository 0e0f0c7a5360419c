"""Qadha (make-up worship) ledger aggregation.

The log itself lives in the caller's store; this module only folds over it.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any

from wardaty.cycle import parse_record_date

logger = logging.getLogger(__name__)


class QadhaKind(str, Enum):
    MISSED = "missed"
    MADE_UP = "made_up"


# Stored type strings, including the older "completed" spelling
_KIND_ALIASES = {
    "missed": QadhaKind.MISSED,
    "made_up": QadhaKind.MADE_UP,
    "completed": QadhaKind.MADE_UP,
}


@dataclass(frozen=True)
class QadhaLogEntry:
    date: date
    kind: QadhaKind
    note: str | None = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "QadhaLogEntry":
        """Build an entry from a stored log row.

        Raises ValueError for an unknown type or a missing or malformed date.
        """
        raw_kind = record.get("type", record.get("kind"))
        kind = _KIND_ALIASES.get(raw_kind)
        if kind is None:
            raise ValueError(f"Unknown qadha log type: {raw_kind!r}")
        return cls(
            date=parse_record_date(record),
            kind=kind,
            note=record.get("notes", record.get("note")),
        )


@dataclass(frozen=True)
class QadhaSummary:
    total_missed: int
    total_made_up: int
    remaining: int

    @property
    def progress(self) -> float:
        """Share of owed days already made up, 0.0 when nothing is owed."""
        if self.total_missed <= 0:
            return 0.0
        return min(self.total_made_up / self.total_missed, 1.0)

    @property
    def total_logged(self) -> int:
        return self.remaining + self.total_made_up

    def to_dict(self) -> dict:
        return {
            "total_missed": self.total_missed,
            "total_made_up": self.total_made_up,
            "remaining": self.remaining,
            "progress": self.progress,
        }


def _count(entries: Iterable[QadhaLogEntry], kind: QadhaKind) -> int:
    return sum(1 for entry in entries if entry.kind == kind)


def summarize(entries: Iterable[QadhaLogEntry], total_missed_override: int | None = None) -> QadhaSummary:
    """Fold a qadha log into totals.

    ``total_missed_override`` is the "I know I owe N days" figure entered up
    front; when given it replaces the count of logged missed days.
    """
    entries = list(entries)
    total_made_up = _count(entries, QadhaKind.MADE_UP)
    if total_missed_override is not None:
        total_missed = total_missed_override
    else:
        total_missed = _count(entries, QadhaKind.MISSED)
    if total_missed < 0:
        logger.warning(f"Negative total_missed={total_missed}, treating as 0")
        total_missed = 0
    return QadhaSummary(
        total_missed=total_missed,
        total_made_up=total_made_up,
        remaining=max(0, total_missed - total_made_up),
    )


def recalculate(entries: Iterable[QadhaLogEntry], base_total_missed: int = 0) -> QadhaSummary:
    """Initial owed days plus every missed day logged since."""
    entries = list(entries)
    return summarize(entries, total_missed_override=base_total_missed + _count(entries, QadhaKind.MISSED))


def made_up_dates(entries: Iterable[QadhaLogEntry], year: int, month: int) -> list[date]:
    """Dates in a Gregorian month with a made-up day logged, for calendar marks."""
    return [
        entry.date
        for entry in entries
        if entry.kind == QadhaKind.MADE_UP and entry.date.year == year and entry.date.month == month
    ]
