# backend/tests/test_billable_override_audit.py
from __future__ import annotations

import json

from inspection_payroll.domain.audit import audit_write
from inspection_payroll.models import AuditEvent
from inspection_payroll.services.task_service import create_task, update_task


def _override_events(db, task_id: int):
    rows = (
        db.query(AuditEvent)
        .filter(AuditEvent.entity_type == "inspection_task", AuditEvent.entity_id == str(task_id))
        .order_by(AuditEvent.id)
        .all()
    )
    return [r for r in rows if r.action.startswith("billable_override")]


def test_override_changes_are_audited(db_session, clock, mk_property):
    prop = mk_property()
    body = {"property_id": prop.id, "type": "Routine"}

    task = create_task(db_session, payload={**body, "is_billable_override": False}, clock=clock)
    task = update_task(db_session, task_id=task.id, payload={**body, "is_billable_override": False}, clock=clock)
    task = update_task(db_session, task_id=task.id, payload={**body, "is_billable_override": True}, clock=clock)
    task = update_task(db_session, task_id=task.id, payload=body, clock=clock)

    events = _override_events(db_session, task.id)
    assert [e.action for e in events] == [
        "billable_override_set",
        "billable_override_set",
        "billable_override_cleared",
    ]

    switched = events[1]
    assert json.loads(switched.before_json)["is_billable_override"] is False
    assert json.loads(switched.after_json)["is_billable_override"] is True
    assert switched.created_at == clock.now()

    assert task.is_billable_override is None


def test_no_override_no_audit(db_session, clock, mk_property):
    prop = mk_property()
    task = create_task(db_session, payload={"property_id": prop.id, "type": "MoveIn"}, clock=clock)
    assert _override_events(db_session, task.id) == []


def test_audit_rows_default_to_naive_utc(db_session):
    row = audit_write(db_session, action="property_note", entity_type="property", entity_id="1")
    assert row.created_at.tzinfo is None
