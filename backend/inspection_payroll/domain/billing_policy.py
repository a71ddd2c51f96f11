# backend/inspection_payroll/domain/billing_policy.py
from __future__ import annotations

import calendar
from datetime import datetime
from typing import Any, Callable, Optional

from .enums import BillingPolicy, BillingRule, InspectionType

# -----------------------------------------------------------------------------
# Billing policy evaluator
# -----------------------------------------------------------------------------
# Two rule sets decide whether the next visit to a property is charged:
#
#   PolicyFlag  - the property's billing_policy decides.
#                 SixMonthFree      -> never charged
#                 ThreeMonthToggle  -> first visit charged, then strict
#                                      alternation on last_inspection_was_charged
#
#   FixedType   - MoveIn / MoveOut always charged. Routine alternates, but a
#                 routine visit after a long gap (>= reset_months) is charged
#                 again even if the previous one was.
#
# Each property names its rule in billing_rule; dispatch goes through RULES.
# Everything here is pure: callers pass the property (or anything shaped like
# one) and the reference time.
# -----------------------------------------------------------------------------

DEFAULT_RESET_MONTHS = 3

RuleFn = Callable[[Any, InspectionType, datetime, int], bool]


def add_months(d: datetime, months: int) -> datetime:
    y, m = divmod(d.month - 1 + months, 12)
    year, month = d.year + y, m + 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return d.replace(year=year, month=month, day=day)


def _has_prior(prop: Any) -> bool:
    return getattr(prop, "last_inspection_date", None) is not None


def _policy_flag_rule(prop: Any, inspection_type: InspectionType, as_of: datetime, reset_months: int) -> bool:
    policy = BillingPolicy(getattr(prop, "billing_policy", BillingPolicy.THREE_MONTH_TOGGLE))
    if policy == BillingPolicy.SIX_MONTH_FREE:
        return False

    if not _has_prior(prop):
        return True

    return not bool(getattr(prop, "last_inspection_was_charged", False))


def _fixed_type_rule(prop: Any, inspection_type: InspectionType, as_of: datetime, reset_months: int) -> bool:
    if InspectionType(inspection_type) in (InspectionType.MOVE_IN, InspectionType.MOVE_OUT):
        return True

    if not _has_prior(prop):
        return True

    last = prop.last_inspection_date
    if as_of >= add_months(last, reset_months):
        return True

    return not bool(getattr(prop, "last_inspection_was_charged", False))


RULES: dict[BillingRule, RuleFn] = {
    BillingRule.POLICY_FLAG: _policy_flag_rule,
    BillingRule.FIXED_TYPE: _fixed_type_rule,
}


def should_charge(
    prop: Any,
    inspection_type: InspectionType,
    *,
    as_of: datetime,
    reset_months: int = DEFAULT_RESET_MONTHS,
) -> bool:
    rule = BillingRule(getattr(prop, "billing_rule", None) or BillingRule.POLICY_FLAG)
    return bool(RULES[rule](prop, InspectionType(inspection_type), as_of, int(reset_months)))


def resolve_billable(is_billable: bool, override: Optional[bool]) -> bool:
    """A manual override wins over the computed value when one is set."""
    if override is None:
        return bool(is_billable)
    return bool(override)
