# backend/inspection_payroll/services/report_service.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Optional

from sqlalchemy import asc, desc, select
from sqlalchemy.orm import Session, selectinload

from ..config import settings
from ..domain.clock import Clock
from ..domain.payroll import (
    ReportPeriod,
    ReportSummary,
    day_start,
    report_period,
    summarize,
    trailing_window,
)
from ..models import InspectionRecord, SundryTask
from .sundry_service import sundry_to_out


@dataclass(frozen=True)
class PayrollReport:
    period: ReportPeriod
    summary: ReportSummary
    inspections: list[InspectionRecord]
    sundry_tasks: list[SundryTask]


def record_to_out(r: InspectionRecord) -> dict[str, Any]:
    return {
        "id": r.id,
        "property_id": r.property_id,
        "property_address": r.property.address if r.property is not None else None,
        "execution_date": r.execution_date,
        "type": r.type,
        "is_charged": bool(r.is_charged),
        "notes": r.notes or "",
        "task_id": r.task_id,
    }


def report_to_out(report: PayrollReport) -> dict[str, Any]:
    return {
        "period": {
            "start_date": report.period.start_date,
            "end_date": report.period.end_date,
            "days": report.period.days,
        },
        "summary": {
            "total_inspections": report.summary.total_inspections,
            "total_sundry_tasks": report.summary.total_sundry_tasks,
            "total_sundry_cost": report.summary.total_sundry_cost,
        },
        "inspections": [record_to_out(r) for r in report.inspections],
        "sundry_tasks": [sundry_to_out(s) for s in report.sundry_tasks],
    }


def list_records(
    db: Session,
    *,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> list[InspectionRecord]:
    q = select(InspectionRecord).options(selectinload(InspectionRecord.property))
    if start_date is not None and end_date is not None:
        report_period(start_date, end_date)
    if start_date is not None:
        q = q.where(InspectionRecord.execution_date >= day_start(start_date))
    if end_date is not None:
        q = q.where(InspectionRecord.execution_date < day_start(end_date + timedelta(days=1)))
    q = q.order_by(desc(InspectionRecord.execution_date), desc(InspectionRecord.id))
    return list(db.scalars(q).all())


def build_report(db: Session, *, start_date: date, end_date: date) -> PayrollReport:
    period = report_period(start_date, end_date)
    lo, hi = period.window

    inspections = list(
        db.scalars(
            select(InspectionRecord)
            .options(selectinload(InspectionRecord.property))
            .where(InspectionRecord.execution_date >= lo, InspectionRecord.execution_date < hi)
            .where(InspectionRecord.is_charged.is_(True))
            .order_by(asc(InspectionRecord.execution_date), asc(InspectionRecord.id))
        ).all()
    )

    sundry_tasks = list(
        db.scalars(
            select(SundryTask)
            .where(SundryTask.execution_date.is_not(None))
            .where(SundryTask.execution_date >= lo, SundryTask.execution_date < hi)
            .order_by(asc(SundryTask.execution_date), asc(SundryTask.id))
        ).all()
    )

    return PayrollReport(
        period=period,
        summary=summarize(inspections, sundry_tasks),
        inspections=inspections,
        sundry_tasks=sundry_tasks,
    )


def build_two_weeks_report(db: Session, *, clock: Clock) -> PayrollReport:
    start, end = trailing_window(clock.today(), settings.report_window_days)
    return build_report(db, start_date=start, end_date=end)
