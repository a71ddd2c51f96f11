# backend/tests/test_billing_policy.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import pytest

from inspection_payroll.domain.billing_policy import add_months, resolve_billable, should_charge
from inspection_payroll.domain.enums import BillingPolicy, BillingRule, InspectionType


@dataclass
class P:
    billing_policy: BillingPolicy = BillingPolicy.THREE_MONTH_TOGGLE
    billing_rule: BillingRule = BillingRule.POLICY_FLAG
    last_inspection_date: Optional[datetime] = None
    last_inspection_type: Optional[InspectionType] = None
    last_inspection_was_charged: bool = False


NOW = datetime(2024, 6, 1, 12, 0)


@pytest.mark.parametrize("rule", list(BillingRule))
@pytest.mark.parametrize("itype", list(InspectionType))
def test_first_visit_is_billable_under_every_rule(rule, itype):
    prop = P(billing_rule=rule)
    assert should_charge(prop, itype, as_of=NOW) is True


def test_three_month_toggle_strictly_alternates():
    charged_last = P(last_inspection_date=datetime(2024, 5, 30), last_inspection_was_charged=True)
    free_last = P(last_inspection_date=datetime(2024, 5, 30), last_inspection_was_charged=False)

    assert should_charge(charged_last, InspectionType.ROUTINE, as_of=NOW) is False
    assert should_charge(free_last, InspectionType.ROUTINE, as_of=NOW) is True


def test_three_month_toggle_ignores_elapsed_time():
    prop = P(last_inspection_date=datetime(2020, 1, 1), last_inspection_was_charged=True)
    assert should_charge(prop, InspectionType.ROUTINE, as_of=NOW) is False


@pytest.mark.parametrize("itype", list(InspectionType))
@pytest.mark.parametrize("last_charged", [True, False])
def test_six_month_free_never_charges(itype, last_charged):
    never_inspected = P(billing_policy=BillingPolicy.SIX_MONTH_FREE)
    inspected = P(
        billing_policy=BillingPolicy.SIX_MONTH_FREE,
        last_inspection_date=datetime(2024, 1, 1),
        last_inspection_was_charged=last_charged,
    )
    assert should_charge(never_inspected, itype, as_of=NOW) is False
    assert should_charge(inspected, itype, as_of=NOW) is False


def test_fixed_type_move_visits_always_charge():
    prop = P(
        billing_rule=BillingRule.FIXED_TYPE,
        last_inspection_date=datetime(2024, 5, 31),
        last_inspection_was_charged=True,
    )
    assert should_charge(prop, InspectionType.MOVE_IN, as_of=NOW) is True
    assert should_charge(prop, InspectionType.MOVE_OUT, as_of=NOW) is True


def test_fixed_type_routine_alternates_inside_window():
    charged = P(
        billing_rule=BillingRule.FIXED_TYPE,
        last_inspection_date=datetime(2024, 4, 1),
        last_inspection_was_charged=True,
    )
    free = P(
        billing_rule=BillingRule.FIXED_TYPE,
        last_inspection_date=datetime(2024, 4, 1),
        last_inspection_was_charged=False,
    )
    assert should_charge(charged, InspectionType.ROUTINE, as_of=NOW) is False
    assert should_charge(free, InspectionType.ROUTINE, as_of=NOW) is True


def test_fixed_type_routine_charges_again_after_three_months():
    prop = P(
        billing_rule=BillingRule.FIXED_TYPE,
        last_inspection_date=datetime(2024, 3, 1, 12, 0),
        last_inspection_was_charged=True,
    )
    # exactly three months later counts as "3 months old"
    assert should_charge(prop, InspectionType.ROUTINE, as_of=datetime(2024, 6, 1, 12, 0)) is True
    assert should_charge(prop, InspectionType.ROUTINE, as_of=datetime(2024, 6, 1, 11, 59)) is False


def test_fixed_type_ignores_billing_policy_flag():
    prop = P(billing_policy=BillingPolicy.SIX_MONTH_FREE, billing_rule=BillingRule.FIXED_TYPE)
    assert should_charge(prop, InspectionType.ROUTINE, as_of=NOW) is True


def test_reset_months_is_configurable():
    prop = P(
        billing_rule=BillingRule.FIXED_TYPE,
        last_inspection_date=datetime(2024, 4, 1),
        last_inspection_was_charged=True,
    )
    assert should_charge(prop, InspectionType.ROUTINE, as_of=NOW, reset_months=2) is True
    assert should_charge(prop, InspectionType.ROUTINE, as_of=NOW, reset_months=3) is False


def test_add_months_clamps_to_month_end():
    assert add_months(datetime(2024, 11, 30), 3) == datetime(2025, 2, 28)
    assert add_months(datetime(2023, 11, 30), 3) == datetime(2024, 2, 29)


def test_override_wins_when_set():
    assert resolve_billable(True, None) is True
    assert resolve_billable(True, False) is False
    assert resolve_billable(False, True) is True
