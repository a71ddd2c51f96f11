# backend/inspection_payroll/routers/sundry_tasks.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ..db import get_db
from ..domain.clock import Clock, get_clock
from ..schemas import SundryTaskCreate, SundryTaskOut, SundryTaskUpdate
from ..services import sundry_service
from ..services.lookups import must_get_sundry_task

router = APIRouter(prefix="/sundrytasks", tags=["sundry-tasks"])


@router.get("", response_model=list[SundryTaskOut])
def list_sundry_tasks(db: Session = Depends(get_db)):
    return [sundry_service.sundry_to_out(r) for r in sundry_service.list_sundry_tasks(db)]


@router.get("/{sundry_task_id}", response_model=SundryTaskOut)
def get_sundry_task(sundry_task_id: int, db: Session = Depends(get_db)):
    return sundry_service.sundry_to_out(must_get_sundry_task(db, sundry_task_id=sundry_task_id))


@router.post("", response_model=SundryTaskOut, status_code=status.HTTP_201_CREATED)
def create_sundry_task(payload: SundryTaskCreate, db: Session = Depends(get_db), clock: Clock = Depends(get_clock)):
    row = sundry_service.create_sundry_task(db, payload=payload.model_dump(), clock=clock)
    return sundry_service.sundry_to_out(row)


@router.put("/{sundry_task_id}", response_model=SundryTaskOut)
def update_sundry_task(sundry_task_id: int, payload: SundryTaskUpdate, db: Session = Depends(get_db)):
    row = sundry_service.update_sundry_task(db, sundry_task_id=sundry_task_id, payload=payload.model_dump())
    return sundry_service.sundry_to_out(row)


@router.delete("/{sundry_task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_sundry_task(sundry_task_id: int, db: Session = Depends(get_db)):
    sundry_service.delete_sundry_task(db, sundry_task_id=sundry_task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
