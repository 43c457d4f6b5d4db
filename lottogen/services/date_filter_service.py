"""Date-range presets and filtering of the historical draw corpus."""

from __future__ import annotations

import calendar
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from lottogen.services.history_service import HistoricalDraw


DATE_PRESETS = ("all", "30days", "3months", "6months", "1year", "2years", "custom")

_PRESET_MONTHS = {"3months": 3, "6months": 6, "1year": 12, "2years": 24}
_PRESET_DAYS = {"30days": 30}


@dataclass(frozen=True)
class DateRange:
    start: date | datetime | None = None
    end: date | datetime | None = None

    @property
    def is_open(self) -> bool:
        return self.start is None and self.end is None


@dataclass(frozen=True)
class RangeCheck:
    valid: bool
    error: str | None = None


def _as_date(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


def _as_datetime(value: date | datetime, end_of_day: bool = False) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time(23, 59, 59) if end_of_day else time.min)


def _shift_months(moment: datetime, months: int) -> datetime:
    """Move back ``months`` calendar months, clamping the day to the month length."""

    year, month_index = divmod(moment.month - 1 - months, 12)
    year += moment.year
    month = month_index + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def preset_to_range(preset: str, now: datetime | None = None) -> DateRange:
    """Translate a preset name into a concrete range ending today.

    ``all`` and ``custom`` (and unknown names) give an open range; custom
    bounds are supplied by the caller.
    """

    now = now or datetime.now()
    end = datetime.combine(now.date(), time(23, 59, 59))

    if preset in _PRESET_DAYS:
        start = end - timedelta(days=_PRESET_DAYS[preset])
    elif preset in _PRESET_MONTHS:
        start = _shift_months(end, _PRESET_MONTHS[preset])
    else:
        return DateRange()

    return DateRange(start=start.replace(hour=0, minute=0, second=0, microsecond=0), end=end)


def filter_by_range(draws: Sequence[HistoricalDraw], date_range: DateRange) -> list[HistoricalDraw]:
    """Keep draws dated within the range, both ends inclusive.

    Bounds compare on calendar dates, so ``end`` covers its whole day. Draws
    without a date are dropped whenever a bound is set.
    """

    if date_range.is_open:
        return list(draws)

    start = _as_date(date_range.start) if date_range.start is not None else None
    end = _as_date(date_range.end) if date_range.end is not None else None

    kept: list[HistoricalDraw] = []
    for draw in draws:
        if draw.date is None:
            continue
        if start is not None and draw.date < start:
            continue
        if end is not None and draw.date > end:
            continue
        kept.append(draw)
    return kept


def validate_range(date_range: DateRange) -> RangeCheck:
    if date_range.start is None or date_range.end is None:
        return RangeCheck(valid=True)
    if _as_datetime(date_range.start) > _as_datetime(date_range.end, end_of_day=True):
        return RangeCheck(valid=False, error="Start date must be before end date")
    return RangeCheck(valid=True)


def get_date_bounds(draws: Sequence[HistoricalDraw]) -> tuple[date | None, date | None]:
    dates = [d.date for d in draws if d.date is not None]
    if not dates:
        return None, None
    return min(dates), max(dates)


def _format_day(value: date | datetime) -> str:
    day = _as_date(value)
    return f"{day:%b} {day.day}, {day.year}"


def format_range(date_range: DateRange) -> str:
    if date_range.start is not None and date_range.end is not None:
        return f"{_format_day(date_range.start)} - {_format_day(date_range.end)}"
    if date_range.start is not None:
        return f"From {_format_day(date_range.start)}"
    if date_range.end is not None:
        return f"Until {_format_day(date_range.end)}"
    return "All time"


def describe_filter(preset: str, date_range: DateRange) -> str:
    """One-line description of the active filter, for export metadata."""

    if preset == "custom" and not date_range.is_open:
        return f"custom ({format_range(date_range)})"
    return preset
