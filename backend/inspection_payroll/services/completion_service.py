# backend/inspection_payroll/services/completion_service.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from ..domain.audit import audit_write
from ..domain.billing_policy import resolve_billable
from ..domain.clock import Clock
from ..domain.enums import InspectionStatus
from ..domain.errors import ConflictError, ValidationFailedError
from ..models import InspectionRecord, InspectionTask, Property
from .lookups import must_get_task

log = logging.getLogger("inspection_payroll.completion")

# -----------------------------------------------------------------------------
# Task completion workflow
# -----------------------------------------------------------------------------
#   Pending | Ready  --complete(execution_date, notes)-->  Completed
#
# One transaction, three writes:
#   1) append an InspectionRecord (type + charged flag frozen from the task)
#   2) mark the task Completed
#   3) overwrite the property's last-inspection memory
#
# The property memory feeds every later billing decision, so the three writes
# commit together or the whole unit is rolled back.
# -----------------------------------------------------------------------------


def _append_record(
    db: Session,
    task: InspectionTask,
    *,
    execution_date: datetime,
    charged: bool,
    notes: Optional[str],
) -> InspectionRecord:
    record = InspectionRecord(
        property_id=task.property_id,
        execution_date=execution_date,
        type=task.type,
        is_charged=charged,
        notes=notes or "",
        task_id=task.id,
    )
    db.add(record)
    db.flush()
    return record


def _mark_completed(task: InspectionTask, *, completed_at: datetime) -> None:
    task.status = InspectionStatus.COMPLETED
    task.completed_at = completed_at


def _remember_on_property(prop: Property, task: InspectionTask, *, execution_date: datetime, charged: bool) -> None:
    prop.last_inspection_date = execution_date
    prop.last_inspection_type = task.type
    prop.last_inspection_was_charged = charged


def complete_task(
    db: Session,
    *,
    task_id: int,
    execution_date: datetime,
    notes: Optional[str] = None,
    clock: Clock,
) -> InspectionRecord:
    if execution_date is None:
        raise ValidationFailedError("executionDate is required")
    if notes is not None and len(notes) > 500:
        raise ValidationFailedError("notes must be at most 500 characters")

    task = must_get_task(db, task_id=task_id)
    if task.status == InspectionStatus.COMPLETED:
        raise ConflictError(f"inspection task {task_id} is already completed")

    prop = task.property
    charged = resolve_billable(task.is_billable, task.is_billable_override)
    before = {
        "status": task.status.value,
        "last_inspection_date": prop.last_inspection_date,
        "last_inspection_was_charged": bool(prop.last_inspection_was_charged),
    }

    try:
        record = _append_record(db, task, execution_date=execution_date, charged=charged, notes=notes)
        _mark_completed(task, completed_at=clock.now())
        _remember_on_property(prop, task, execution_date=execution_date, charged=charged)
        audit_write(
            db,
            action="inspection_task_completed",
            entity_type="inspection_task",
            entity_id=str(task.id),
            before=before,
            after={
                "status": task.status.value,
                "record_id": record.id,
                "last_inspection_date": execution_date,
                "last_inspection_was_charged": charged,
            },
            created_at=clock.now(),
        )
        db.commit()
    except StaleDataError as e:
        db.rollback()
        raise ConflictError(f"inspection task {task_id} was modified concurrently; reload and try again") from e
    except Exception:
        db.rollback()
        raise

    log.info(
        "inspection task completed charged=%s",
        charged,
        extra={"task_id": task.id, "property_id": prop.id, "record_id": record.id},
    )
    return record
