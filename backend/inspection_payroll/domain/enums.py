# backend/inspection_payroll/domain/enums.py
from __future__ import annotations

from enum import Enum


# Values are the symbolic names the UI sends and receives ("MoveIn", not "move_in").


class InspectionType(str, Enum):
    MOVE_IN = "MoveIn"
    MOVE_OUT = "MoveOut"
    ROUTINE = "Routine"


class InspectionStatus(str, Enum):
    PENDING = "Pending"
    READY = "Ready"
    COMPLETED = "Completed"


class BillingPolicy(str, Enum):
    SIX_MONTH_FREE = "SixMonthFree"
    THREE_MONTH_TOGGLE = "ThreeMonthToggle"


class BillingRule(str, Enum):
    """Which rule set decides charge/no-charge for a property."""

    POLICY_FLAG = "PolicyFlag"
    FIXED_TYPE = "FixedType"


STATUS_ORDER = [InspectionStatus.PENDING, InspectionStatus.READY, InspectionStatus.COMPLETED]


def status_rank(status: InspectionStatus) -> int:
    return STATUS_ORDER.index(InspectionStatus(status))
