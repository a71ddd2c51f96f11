# backend/inspection_payroll/services/property_service.py
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import desc, exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..config import settings
from ..domain.audit import audit_write
from ..domain.clock import Clock
from ..domain.enums import BillingPolicy, BillingRule
from ..domain.errors import ConflictError, ValidationFailedError
from ..models import InspectionRecord, InspectionTask, Property
from .lookups import commit_or_conflict, ensure_row_version, must_get_property

log = logging.getLogger("inspection_payroll.properties")


def _property_to_dict(p: Property) -> dict[str, Any]:
    return {
        "id": int(p.id),
        "address": p.address,
        "billing_policy": BillingPolicy(p.billing_policy).value,
        "billing_rule": BillingRule(p.billing_rule).value,
    }


def list_properties(db: Session) -> list[Property]:
    return list(db.scalars(select(Property).order_by(desc(Property.id))).all())


def create_property(db: Session, *, payload: dict[str, Any], clock: Clock) -> Property:
    row = Property(
        address=payload["address"],
        billing_policy=BillingPolicy(payload.get("billing_policy") or settings.default_billing_policy),
        billing_rule=BillingRule(payload.get("billing_rule") or settings.default_billing_rule),
        last_inspection_was_charged=False,
    )
    db.add(row)
    db.flush()

    audit_write(
        db,
        action="property_created",
        entity_type="property",
        entity_id=str(row.id),
        before=None,
        after=_property_to_dict(row),
        created_at=clock.now(),
    )
    db.commit()

    log.info("property created", extra={"property_id": row.id})
    return row


def update_property(db: Session, *, property_id: int, payload: dict[str, Any], clock: Clock) -> Property:
    row = must_get_property(db, property_id=property_id)
    ensure_row_version(row, payload.get("row_version"), label="property")

    before = _property_to_dict(row)

    row.address = payload["address"]
    row.billing_policy = BillingPolicy(payload.get("billing_policy") or row.billing_policy)
    row.billing_rule = BillingRule(payload.get("billing_rule") or row.billing_rule)

    after = _property_to_dict(row)
    if before != after:
        audit_write(
            db,
            action="property_updated",
            entity_type="property",
            entity_id=str(row.id),
            before=before,
            after=after,
            created_at=clock.now(),
        )

    commit_or_conflict(db, label="property")

    log.info("property updated", extra={"property_id": row.id})
    return row


def delete_property(db: Session, *, property_id: int, clock: Clock) -> None:
    row = must_get_property(db, property_id=property_id)

    has_tasks = db.scalar(select(exists().where(InspectionTask.property_id == property_id)))
    has_records = db.scalar(select(exists().where(InspectionRecord.property_id == property_id)))
    if has_tasks or has_records:
        raise ValidationFailedError("property has inspection tasks or records and cannot be deleted")

    before = _property_to_dict(row)
    db.delete(row)
    audit_write(
        db,
        action="property_deleted",
        entity_type="property",
        entity_id=str(property_id),
        before=before,
        after=None,
        created_at=clock.now(),
    )

    try:
        db.commit()
    except IntegrityError as e:
        # a task or record slipped in between the check and the delete
        db.rollback()
        raise ConflictError("property is still referenced and cannot be deleted") from e

    log.info("property deleted", extra={"property_id": property_id})
