# backend/tests/test_property_delete_guard.py
from __future__ import annotations

from datetime import datetime

import pytest

from inspection_payroll.domain.errors import NotFoundError, ValidationFailedError
from inspection_payroll.models import AuditEvent, Property
from inspection_payroll.services.completion_service import complete_task
from inspection_payroll.services.property_service import delete_property, update_property
from inspection_payroll.services.task_service import create_task, delete_task


def test_property_with_open_task_cannot_be_deleted(db_session, clock, mk_property):
    prop = mk_property()
    create_task(db_session, payload={"property_id": prop.id, "type": "Routine"}, clock=clock)

    with pytest.raises(ValidationFailedError):
        delete_property(db_session, property_id=prop.id, clock=clock)

    assert db_session.get(Property, prop.id) is not None


def test_property_with_history_cannot_be_deleted_even_after_task_removal(db_session, clock, mk_property):
    prop = mk_property()
    task = create_task(db_session, payload={"property_id": prop.id, "type": "Routine"}, clock=clock)
    rec = complete_task(db_session, task_id=task.id, execution_date=datetime(2024, 1, 2), clock=clock)

    delete_task(db_session, task_id=task.id)
    db_session.refresh(rec)
    assert rec.task_id is None

    with pytest.raises(ValidationFailedError):
        delete_property(db_session, property_id=prop.id, clock=clock)


def test_unreferenced_property_is_deleted_and_audited(db_session, clock, mk_property):
    prop = mk_property()
    prop_id = prop.id

    delete_property(db_session, property_id=prop_id, clock=clock)

    assert db_session.get(Property, prop_id) is None
    actions = [
        a.action
        for a in db_session.query(AuditEvent)
        .filter(AuditEvent.entity_type == "property", AuditEvent.entity_id == str(prop_id))
        .order_by(AuditEvent.id)
    ]
    assert actions == ["property_created", "property_deleted"]

    with pytest.raises(NotFoundError):
        delete_property(db_session, property_id=prop_id, clock=clock)


def test_property_update_audits_only_real_changes(db_session, clock, mk_property):
    prop = mk_property("10 Quiet Close")

    update_property(
        db_session,
        property_id=prop.id,
        payload={"address": "10 Quiet Close", "row_version": prop.row_version},
        clock=clock,
    )
    update_property(
        db_session,
        property_id=prop.id,
        payload={"address": "10 Quiet Close", "billing_policy": "SixMonthFree"},
        clock=clock,
    )

    actions = [a.action for a in db_session.query(AuditEvent).filter(AuditEvent.entity_type == "property")]
    assert actions.count("property_updated") == 1
    db_session.refresh(prop)
    assert prop.billing_policy.value == "SixMonthFree"
