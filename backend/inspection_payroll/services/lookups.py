# backend/inspection_payroll/services/lookups.py
from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from ..domain.errors import ConflictError, NotFoundError
from ..models import InspectionRecord, InspectionTask, Property, SundryTask


def must_get_property(db: Session, *, property_id: int) -> Property:
    row = db.get(Property, property_id)
    if not row:
        raise NotFoundError(f"property {property_id} not found")
    return row


def must_get_task(db: Session, *, task_id: int) -> InspectionTask:
    row = db.get(InspectionTask, task_id)
    if not row:
        raise NotFoundError(f"inspection task {task_id} not found")
    return row


def must_get_record(db: Session, *, record_id: int) -> InspectionRecord:
    row = db.get(InspectionRecord, record_id)
    if not row:
        raise NotFoundError(f"inspection record {record_id} not found")
    return row


def must_get_sundry_task(db: Session, *, sundry_task_id: int) -> SundryTask:
    row = db.get(SundryTask, sundry_task_id)
    if not row:
        raise NotFoundError(f"sundry task {sundry_task_id} not found")
    return row


def ensure_row_version(row, expected: Optional[int], *, label: str) -> None:
    """Client sent the version it last read; anything else means someone wrote in between."""
    if expected is None:
        return
    if int(expected) != int(row.row_version):
        raise ConflictError(f"{label} was modified by someone else; reload and try again")


def commit_or_conflict(db: Session, *, label: str) -> None:
    try:
        db.commit()
    except StaleDataError as e:
        db.rollback()
        raise ConflictError(f"{label} was modified by someone else; reload and try again") from e
