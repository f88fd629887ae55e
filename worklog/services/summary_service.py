"""
Summary Service - per-month totals and the rows behind the spreadsheet export.

Everything here is a pure function of the entry list; nothing is cached.
"""

import datetime
from typing import Iterable, List, Optional, Tuple

from pydantic import BaseModel, Field

from worklog.domain.models import Entry
from worklog.domain.timecalc import calc_duration, split_date, time_to_fraction
from worklog.i18n import tr

__all__ = [
    "calc_duration", "MonthSummary", "ExportRow", "month_summary",
    "export_rows", "available_months", "month_label",
]


class MonthSummary(BaseModel):
    """Entries of one month (most recent first) with their totals."""
    year: int
    month: int = Field(..., ge=1, le=12)
    hourly_wage: float = 0.0
    entries: List[Entry] = Field(default_factory=list)
    total_hours: float = 0.0
    total_pay: float = 0.0

    @property
    def label(self) -> str:
        return month_label(self.year, self.month)


class ExportRow(BaseModel):
    """One spreadsheet row: rounded numbers, times as fractions of a day."""
    date: Optional[datetime.date] = None
    date_text: str
    time_from: float
    time_to: float
    hours: float
    running_total: float
    pay: float


def _in_month(entry: Entry, year: int, month: int) -> bool:
    parts = split_date(entry.date)
    return parts is not None and parts[0] == year and parts[1] == month


def month_summary(entries: Iterable[Entry], year: int, month: int, wage: float) -> MonthSummary:
    """
    Filter entries to one month and total them.

    Sorted by date descending, then start time descending.
    """
    selected = [e for e in entries if _in_month(e, year, month)]
    selected.sort(key=lambda e: (e.date, e.from_), reverse=True)
    total_hours = sum(e.hours for e in selected)
    return MonthSummary(
        year=year,
        month=month,
        hourly_wage=wage,
        entries=selected,
        total_hours=total_hours,
        total_pay=total_hours * wage,
    )


def _to_date(value: str) -> Optional[datetime.date]:
    parts = split_date(value)
    if parts is None:
        return None
    try:
        return datetime.date(*parts)
    except ValueError:
        return None


def export_rows(summary: MonthSummary) -> List[ExportRow]:
    """Rows in chronological order with a running hour total"""
    rows = []
    running = 0.0
    for entry in sorted(summary.entries, key=lambda e: (e.date, e.from_)):
        running += entry.hours
        rows.append(ExportRow(
            date=_to_date(entry.date),
            date_text=entry.date,
            time_from=time_to_fraction(entry.from_),
            time_to=time_to_fraction(entry.to),
            hours=round(entry.hours, 2),
            running_total=round(running, 2),
            pay=round(entry.hours * summary.hourly_wage, 2),
        ))
    return rows


def available_months(entries: Iterable[Entry], today: Optional[datetime.date] = None) -> List[Tuple[int, int]]:
    """Every (year, month) that has entries, plus the current one; newest first"""
    today = today or datetime.date.today()
    months = {(today.year, today.month)}
    for entry in entries:
        parts = split_date(entry.date)
        if parts is not None and 1 <= parts[1] <= 12:
            months.add((parts[0], parts[1]))
    return sorted(months, reverse=True)


def month_label(year: int, month: int) -> str:
    """e.g. "März 2024" """
    return f"{tr(f'month.{month}')} {year}"
