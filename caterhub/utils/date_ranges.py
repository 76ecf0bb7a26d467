# caterhub/utils/date_ranges.py
import enum
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

from dateutil.relativedelta import relativedelta

from caterhub.core.config import settings


class ReportPeriod(str, enum.Enum):
    TODAY = "today"
    LAST_7_DAYS = "7d"
    LAST_30_DAYS = "30d"
    THIS_MONTH = "thisMonth"
    LAST_MONTH = "lastMonth"
    THIS_QUARTER = "thisQuarter"
    THIS_YEAR = "thisYear"
    TRAILING_QUARTER = "quarter"
    TRAILING_YEAR = "year"
    CUSTOM = "custom"


PERIOD_LABELS = {
    ReportPeriod.TODAY: "Today",
    ReportPeriod.LAST_7_DAYS: "Last 7 days",
    ReportPeriod.LAST_30_DAYS: "Last 30 days",
    ReportPeriod.THIS_MONTH: "This month",
    ReportPeriod.LAST_MONTH: "Last month",
    ReportPeriod.THIS_QUARTER: "This quarter",
    ReportPeriod.THIS_YEAR: "This year",
    ReportPeriod.TRAILING_QUARTER: "Last quarter",
    ReportPeriod.TRAILING_YEAR: "Last year",
    ReportPeriod.CUSTOM: "Custom range",
}


@dataclass(frozen=True)
class DateRange:
    """Inclusive [start, end] range of calendar dates."""
    start: date
    end: date

    def __contains__(self, d: date) -> bool:
        return self.start <= d <= self.end

    def days(self):
        current = self.start
        while current <= self.end:
            yield current
            current += timedelta(days=1)


def business_today() -> date:
    return datetime.now(ZoneInfo(settings.business_timezone)).date()


def start_of_quarter(d: date) -> date:
    return date(d.year, 3 * ((d.month - 1) // 3) + 1, 1)


def resolve_date_range(
    period: ReportPeriod | str,
    custom_start: Optional[date] = None,
    custom_end: Optional[date] = None,
    today: Optional[date] = None,
) -> DateRange:
    """
    Turns a named report period into an inclusive date range ending today
    (business timezone) unless the period is a closed one like lastMonth.

    'custom' needs both dates; with either missing it behaves like '7d'.
    """
    period = ReportPeriod(period)
    today = today or business_today()

    if period == ReportPeriod.TODAY:
        return DateRange(today, today)
    if period == ReportPeriod.LAST_7_DAYS:
        return DateRange(today - timedelta(days=6), today)
    if period == ReportPeriod.LAST_30_DAYS:
        return DateRange(today - timedelta(days=29), today)
    if period == ReportPeriod.THIS_MONTH:
        return DateRange(today.replace(day=1), today)
    if period == ReportPeriod.LAST_MONTH:
        first_of_this_month = today.replace(day=1)
        last_of_prev = first_of_this_month - timedelta(days=1)
        return DateRange(last_of_prev.replace(day=1), last_of_prev)
    if period == ReportPeriod.THIS_QUARTER:
        return DateRange(start_of_quarter(today), today)
    if period == ReportPeriod.THIS_YEAR:
        return DateRange(date(today.year, 1, 1), today)
    if period == ReportPeriod.TRAILING_QUARTER:
        return DateRange(today - relativedelta(months=3), today)
    if period == ReportPeriod.TRAILING_YEAR:
        return DateRange(today - relativedelta(years=1), today)

    # custom
    if custom_start and custom_end:
        if custom_start > custom_end:
            raise ValueError("Custom start date must be on or before the end date")
        return DateRange(custom_start, custom_end)
    return DateRange(today - timedelta(days=6), today)
