# backend/inspection_payroll/domain/audit.py
from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Optional

from sqlalchemy.orm import Session

from ..models import AuditEvent
from .clock import utc_now


def _dumps(v: Optional[dict[str, Any]]) -> Optional[str]:
    if v is None:
        return None
    return json.dumps(v, sort_keys=True, default=str)


def audit_write(
    db: Session,
    *,
    action: str,
    entity_type: str,
    entity_id: str,
    before: Optional[dict[str, Any]] = None,
    after: Optional[dict[str, Any]] = None,
    created_at: Optional[datetime] = None,
) -> AuditEvent:
    """
    Adds an audit row to the current unit of work.

    Never commits: the caller's change and its audit row land in the same
    transaction or not at all.
    """
    row = AuditEvent(
        action=action,
        entity_type=entity_type,
        entity_id=str(entity_id),
        before_json=_dumps(before),
        after_json=_dumps(after),
        created_at=created_at or utc_now(),
    )
    db.add(row)
    return row
