# backend/inspection_payroll/routers/inspection_records.py
from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas import InspectionRecordOut
from ..services.lookups import must_get_record
from ..services.report_service import list_records, record_to_out

router = APIRouter(prefix="/inspectionrecords", tags=["inspection-records"])


@router.get("", response_model=list[InspectionRecordOut])
def list_inspection_records(
    start_date: Optional[date] = Query(default=None, alias="startDate"),
    end_date: Optional[date] = Query(default=None, alias="endDate"),
    db: Session = Depends(get_db),
):
    return [record_to_out(r) for r in list_records(db, start_date=start_date, end_date=end_date)]


@router.get("/{record_id}", response_model=InspectionRecordOut)
def get_inspection_record(record_id: int, db: Session = Depends(get_db)):
    return record_to_out(must_get_record(db, record_id=record_id))
