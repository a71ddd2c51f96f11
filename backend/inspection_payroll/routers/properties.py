# backend/inspection_payroll/routers/properties.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ..db import get_db
from ..domain.clock import Clock, get_clock
from ..schemas import PropertyCreate, PropertyOut, PropertyUpdate
from ..services import property_service
from ..services.lookups import must_get_property

router = APIRouter(prefix="/properties", tags=["properties"])


@router.get("", response_model=list[PropertyOut])
def list_properties(db: Session = Depends(get_db)):
    return property_service.list_properties(db)


@router.get("/{property_id}", response_model=PropertyOut)
def get_property(property_id: int, db: Session = Depends(get_db)):
    return must_get_property(db, property_id=property_id)


@router.post("", response_model=PropertyOut, status_code=status.HTTP_201_CREATED)
def create_property(payload: PropertyCreate, db: Session = Depends(get_db), clock: Clock = Depends(get_clock)):
    return property_service.create_property(db, payload=payload.model_dump(), clock=clock)


@router.put("/{property_id}", response_model=PropertyOut)
def update_property(
    property_id: int,
    payload: PropertyUpdate,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    return property_service.update_property(db, property_id=property_id, payload=payload.model_dump(), clock=clock)


@router.delete("/{property_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_property(property_id: int, db: Session = Depends(get_db), clock: Clock = Depends(get_clock)):
    property_service.delete_property(db, property_id=property_id, clock=clock)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
