# backend/inspection_payroll/cli/seed_demo.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from inspection_payroll.domain.clock import Clock
from inspection_payroll.models import Property
from inspection_payroll.services.completion_service import complete_task
from inspection_payroll.services.property_service import create_property
from inspection_payroll.services.sundry_service import create_sundry_task
from inspection_payroll.services.task_service import create_task

DEMO_PROPERTIES = [
    ("12 Harbour Street, Unit 4", "ThreeMonthToggle", "PolicyFlag"),
    ("88 Hill Road, Apartment 2B", "SixMonthFree", "PolicyFlag"),
    ("5 Station Lane", "ThreeMonthToggle", "FixedType"),
]


@dataclass(frozen=True)
class SeedResult:
    property_ids: list[int] = field(default_factory=list)
    task_ids: list[int] = field(default_factory=list)
    record_id: Optional[int] = None
    sundry_task_id: Optional[int] = None


def _get_or_create_property(db: Session, address: str, policy: str, rule: str, clock: Clock) -> Property:
    row = db.scalar(select(Property).where(Property.address == address))
    if row:
        return row
    return create_property(
        db,
        payload={"address": address, "billing_policy": policy, "billing_rule": rule},
        clock=clock,
    )


def seed_demo(db: Session, *, clock: Clock, complete_first: bool = True) -> SeedResult:
    now = clock.now()

    props = [_get_or_create_property(db, a, pol, rule, clock) for a, pol, rule in DEMO_PROPERTIES]

    tasks = [
        create_task(
            db,
            payload={"property_id": props[0].id, "type": "Routine", "scheduled_at": now - timedelta(days=3)},
            clock=clock,
        ),
        create_task(db, payload={"property_id": props[1].id, "type": "Routine"}, clock=clock),
        create_task(
            db,
            payload={"property_id": props[2].id, "type": "MoveIn", "scheduled_at": now + timedelta(days=2)},
            clock=clock,
        ),
    ]

    record_id = None
    if complete_first:
        record = complete_task(
            db,
            task_id=tasks[0].id,
            execution_date=now - timedelta(days=2),
            notes="demo: routine visit",
            clock=clock,
        )
        record_id = record.id

    sundry = create_sundry_task(
        db,
        payload={
            "description": "Replaced smoke alarm batteries",
            "cost": 24.5,
            "execution_date": now - timedelta(days=1),
        },
        clock=clock,
    )

    return SeedResult(
        property_ids=[p.id for p in props],
        task_ids=[t.id for t in tasks],
        record_id=record_id,
        sundry_task_id=sundry.id,
    )
