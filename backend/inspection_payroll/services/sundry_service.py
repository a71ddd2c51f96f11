# backend/inspection_payroll/services/sundry_service.py
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from ..domain.clock import Clock
from ..models import SundryTask
from .lookups import commit_or_conflict, ensure_row_version, must_get_sundry_task

log = logging.getLogger("inspection_payroll.sundry")


def sundry_to_out(row: SundryTask) -> dict[str, Any]:
    return {
        "id": row.id,
        "description": row.description,
        "cost": float(row.cost or 0.0),
        "notes": row.notes,
        "created_at": row.created_at,
        "execution_date": row.execution_date,
        "row_version": row.row_version,
    }


def list_sundry_tasks(db: Session) -> list[SundryTask]:
    return list(db.scalars(select(SundryTask).order_by(desc(SundryTask.created_at), desc(SundryTask.id))).all())


def create_sundry_task(db: Session, *, payload: dict[str, Any], clock: Clock) -> SundryTask:
    row = SundryTask(
        description=payload["description"],
        cost=float(payload.get("cost") or 0.0),
        notes=payload.get("notes"),
        execution_date=payload.get("execution_date"),
        created_at=clock.now(),
    )
    db.add(row)
    db.commit()

    log.info("sundry task created cost=%.2f", row.cost, extra={"sundry_task_id": row.id})
    return row


def update_sundry_task(db: Session, *, sundry_task_id: int, payload: dict[str, Any]) -> SundryTask:
    row = must_get_sundry_task(db, sundry_task_id=sundry_task_id)
    ensure_row_version(row, payload.get("row_version"), label="sundry task")

    row.description = payload["description"]
    row.cost = float(payload.get("cost") or 0.0)
    row.notes = payload.get("notes")
    row.execution_date = payload.get("execution_date")

    commit_or_conflict(db, label="sundry task")

    log.info("sundry task updated", extra={"sundry_task_id": row.id})
    return row


def delete_sundry_task(db: Session, *, sundry_task_id: int) -> None:
    row = must_get_sundry_task(db, sundry_task_id=sundry_task_id)
    db.delete(row)
    commit_or_conflict(db, label="sundry task")

    log.info("sundry task deleted", extra={"sundry_task_id": sundry_task_id})
