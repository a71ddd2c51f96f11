# backend/inspection_payroll/domain/payroll.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Any

from .errors import ValidationFailedError


def day_start(d: date) -> datetime:
    return datetime.combine(d, time.min)


@dataclass(frozen=True)
class ReportPeriod:
    start_date: date
    end_date: date
    days: int

    @property
    def window(self) -> tuple[datetime, datetime]:
        """Half-open datetime bounds covering every moment of the end day."""
        return day_start(self.start_date), day_start(self.end_date + timedelta(days=1))


@dataclass(frozen=True)
class ReportSummary:
    total_inspections: int
    total_sundry_tasks: int
    total_sundry_cost: float


def report_period(start_date: date, end_date: date) -> ReportPeriod:
    if end_date < start_date:
        raise ValidationFailedError("endDate must not be earlier than startDate")
    return ReportPeriod(
        start_date=start_date,
        end_date=end_date,
        days=(end_date - start_date).days + 1,
    )


def trailing_window(today: date, days: int = 14) -> tuple[date, date]:
    """Inclusive window of `days` calendar days ending today."""
    return today - timedelta(days=int(days) - 1), today


def summarize(inspections: list[Any], sundry_tasks: list[Any]) -> ReportSummary:
    cost = 0.0
    for s in sundry_tasks:
        cost += float(getattr(s, "cost", 0.0) or 0.0)
    return ReportSummary(
        total_inspections=len(inspections),
        total_sundry_tasks=len(sundry_tasks),
        total_sundry_cost=round(cost, 2),
    )
