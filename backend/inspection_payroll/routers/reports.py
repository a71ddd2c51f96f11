# backend/inspection_payroll/routers/reports.py
from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..db import get_db
from ..domain.clock import Clock, get_clock
from ..schemas import PayrollReportOut
from ..services.report_service import build_report, build_two_weeks_report, report_to_out

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/payroll", response_model=PayrollReportOut)
def payroll_report(
    start_date: date = Query(..., alias="startDate"),
    end_date: date = Query(..., alias="endDate"),
    db: Session = Depends(get_db),
):
    return report_to_out(build_report(db, start_date=start_date, end_date=end_date))


@router.get("/two-weeks", response_model=PayrollReportOut)
def two_weeks_report(db: Session = Depends(get_db), clock: Clock = Depends(get_clock)):
    return report_to_out(build_two_weeks_report(db, clock=clock))
