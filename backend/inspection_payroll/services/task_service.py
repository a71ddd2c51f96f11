# backend/inspection_payroll/services/task_service.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import desc, select
from sqlalchemy.orm import Session, selectinload

from ..config import settings
from ..domain.audit import audit_write
from ..domain.billing_policy import resolve_billable, should_charge
from ..domain.clock import Clock
from ..domain.enums import InspectionStatus, InspectionType, status_rank
from ..domain.errors import ConflictError, ValidationFailedError
from ..models import InspectionTask, Property
from .lookups import commit_or_conflict, ensure_row_version, must_get_task

log = logging.getLogger("inspection_payroll.tasks")


def _property_or_invalid(db: Session, property_id: int) -> Property:
    # on a task body an unknown property is a bad reference, not a missing resource
    prop = db.get(Property, property_id)
    if not prop:
        raise ValidationFailedError(f"property {property_id} does not exist")
    return prop


def _requested_status(raw: Any, *, current: InspectionStatus = InspectionStatus.PENDING) -> InspectionStatus:
    status = InspectionStatus(raw or current)
    if status == InspectionStatus.COMPLETED:
        raise ValidationFailedError("tasks are completed through /complete, not by setting status")
    return status


def _promoted(status: InspectionStatus, scheduled_at: Optional[datetime]) -> InspectionStatus:
    if scheduled_at is not None and status == InspectionStatus.PENDING:
        return InspectionStatus.READY
    return status


def _promote_if_scheduled(task: InspectionTask) -> None:
    task.status = _promoted(task.status, task.scheduled_at)


def compute_billable(prop: Property, inspection_type: InspectionType, *, clock: Clock) -> bool:
    return should_charge(
        prop,
        inspection_type,
        as_of=clock.now(),
        reset_months=settings.routine_toggle_reset_months,
    )


def task_to_out(task: InspectionTask) -> dict[str, Any]:
    prop = task.property
    return {
        "id": task.id,
        "property_id": task.property_id,
        "property_address": prop.address if prop is not None else None,
        "scheduled_at": task.scheduled_at,
        "type": task.type,
        "status": task.status,
        "is_billable": bool(task.is_billable),
        "is_billable_override": task.is_billable_override,
        "effective_is_billable": resolve_billable(task.is_billable, task.is_billable_override),
        "notes": task.notes,
        "created_at": task.created_at,
        "completed_at": task.completed_at,
        "last_inspection_date": prop.last_inspection_date if prop is not None else None,
        "last_inspection_type": prop.last_inspection_type if prop is not None else None,
        "last_inspection_was_charged": bool(prop.last_inspection_was_charged) if prop is not None else False,
        "billing_policy": prop.billing_policy if prop is not None else None,
        "billing_rule": prop.billing_rule if prop is not None else None,
        "row_version": task.row_version,
    }


def _audit_override(
    db: Session,
    task: InspectionTask,
    *,
    before: Optional[bool],
    after: Optional[bool],
    clock: Clock,
) -> None:
    audit_write(
        db,
        action="billable_override_set" if after is not None else "billable_override_cleared",
        entity_type="inspection_task",
        entity_id=str(task.id),
        before={"is_billable": bool(task.is_billable), "is_billable_override": before},
        after={"is_billable": bool(task.is_billable), "is_billable_override": after},
        created_at=clock.now(),
    )


def list_tasks(
    db: Session,
    *,
    status: Optional[InspectionStatus] = None,
    property_id: Optional[int] = None,
) -> list[InspectionTask]:
    q = select(InspectionTask).options(selectinload(InspectionTask.property))
    if status is not None:
        q = q.where(InspectionTask.status == InspectionStatus(status))
    if property_id is not None:
        q = q.where(InspectionTask.property_id == property_id)
    q = q.order_by(desc(InspectionTask.created_at), desc(InspectionTask.scheduled_at), desc(InspectionTask.id))
    return list(db.scalars(q).all())


def create_task(db: Session, *, payload: dict[str, Any], clock: Clock) -> InspectionTask:
    prop = _property_or_invalid(db, payload["property_id"])
    inspection_type = InspectionType(payload["type"])

    task = InspectionTask(
        property_id=prop.id,
        scheduled_at=payload.get("scheduled_at"),
        type=inspection_type,
        status=_requested_status(payload.get("status")),
        notes=payload.get("notes"),
        is_billable=compute_billable(prop, inspection_type, clock=clock),
        is_billable_override=payload.get("is_billable_override"),
        created_at=clock.now(),
    )
    _promote_if_scheduled(task)

    db.add(task)
    db.flush()

    if task.is_billable_override is not None:
        _audit_override(db, task, before=None, after=task.is_billable_override, clock=clock)

    db.commit()

    log.info(
        "inspection task created type=%s billable=%s",
        task.type.value,
        task.is_billable,
        extra={"task_id": task.id, "property_id": task.property_id},
    )
    return task


def update_task(db: Session, *, task_id: int, payload: dict[str, Any], clock: Clock) -> InspectionTask:
    task = must_get_task(db, task_id=task_id)
    ensure_row_version(task, payload.get("row_version"), label="inspection task")

    if task.status == InspectionStatus.COMPLETED:
        raise ConflictError("completed tasks cannot be changed")

    prop = _property_or_invalid(db, payload["property_id"])
    inspection_type = InspectionType(payload["type"])

    # omitted status keeps the current one; compare after auto-promotion
    status = _requested_status(payload.get("status"), current=task.status)
    status = _promoted(status, payload.get("scheduled_at"))
    if status_rank(status) < status_rank(task.status):
        raise ValidationFailedError(f"status cannot move back from {task.status.value} to {status.value}")

    rebill = prop.id != task.property_id or inspection_type != task.type

    task.property_id = prop.id
    task.property = prop
    task.type = inspection_type
    task.scheduled_at = payload.get("scheduled_at")
    task.notes = payload.get("notes")
    task.status = status

    if rebill:
        task.is_billable = compute_billable(prop, inspection_type, clock=clock)

    # absent from the body and explicit null both clear it
    new_override = payload.get("is_billable_override")
    if new_override != task.is_billable_override:
        _audit_override(db, task, before=task.is_billable_override, after=new_override, clock=clock)
        task.is_billable_override = new_override

    commit_or_conflict(db, label="inspection task")

    log.info("inspection task updated", extra={"task_id": task.id, "property_id": task.property_id})
    return task


def delete_task(db: Session, *, task_id: int) -> None:
    task = must_get_task(db, task_id=task_id)
    property_id = task.property_id
    db.delete(task)
    commit_or_conflict(db, label="inspection task")

    log.info("inspection task deleted", extra={"task_id": task_id, "property_id": property_id})
