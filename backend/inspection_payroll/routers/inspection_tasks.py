# backend/inspection_payroll/routers/inspection_tasks.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from ..db import get_db
from ..domain.clock import Clock, get_clock
from ..domain.enums import InspectionStatus
from ..schemas import (
    InspectionRecordOut,
    InspectionTaskCreate,
    InspectionTaskOut,
    InspectionTaskUpdate,
    TaskCompletion,
)
from ..services import task_service
from ..services.completion_service import complete_task
from ..services.lookups import must_get_task
from ..services.report_service import record_to_out

router = APIRouter(prefix="/inspectiontasks", tags=["inspection-tasks"])


@router.get("", response_model=list[InspectionTaskOut])
def list_tasks(
    status_: Optional[InspectionStatus] = Query(default=None, alias="status"),
    property_id: Optional[int] = Query(default=None, alias="propertyId"),
    db: Session = Depends(get_db),
):
    rows = task_service.list_tasks(db, status=status_, property_id=property_id)
    return [task_service.task_to_out(t) for t in rows]


@router.get("/{task_id}", response_model=InspectionTaskOut)
def get_task(task_id: int, db: Session = Depends(get_db)):
    return task_service.task_to_out(must_get_task(db, task_id=task_id))


@router.post("", response_model=InspectionTaskOut, status_code=status.HTTP_201_CREATED)
def create_task(payload: InspectionTaskCreate, db: Session = Depends(get_db), clock: Clock = Depends(get_clock)):
    row = task_service.create_task(db, payload=payload.model_dump(), clock=clock)
    return task_service.task_to_out(row)


@router.put("/{task_id}", response_model=InspectionTaskOut)
def update_task(
    task_id: int,
    payload: InspectionTaskUpdate,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    row = task_service.update_task(db, task_id=task_id, payload=payload.model_dump(), clock=clock)
    return task_service.task_to_out(row)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: int, db: Session = Depends(get_db)):
    task_service.delete_task(db, task_id=task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{task_id}/complete", response_model=InspectionRecordOut)
def complete(task_id: int, payload: TaskCompletion, db: Session = Depends(get_db), clock: Clock = Depends(get_clock)):
    record = complete_task(
        db,
        task_id=task_id,
        execution_date=payload.execution_date,
        notes=payload.notes,
        clock=clock,
    )
    return record_to_out(record)
