# backend/tests/test_payroll_report.py
from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from inspection_payroll.domain.errors import ValidationFailedError
from inspection_payroll.domain.payroll import report_period, summarize, trailing_window
from inspection_payroll.services.completion_service import complete_task
from inspection_payroll.services.report_service import build_report, build_two_weeks_report, list_records
from inspection_payroll.services.sundry_service import create_sundry_task
from inspection_payroll.services.task_service import create_task

D = date(2024, 3, 4)


def _complete(db, clock, prop_id: int, when: datetime, *, override=None):
    task = create_task(
        db,
        payload={"property_id": prop_id, "type": "Routine", "is_billable_override": override},
        clock=clock,
    )
    return complete_task(db, task_id=task.id, execution_date=when, clock=clock)


def _sundry(db, clock, when, cost=0.0, description="Gutter clearing"):
    return create_sundry_task(
        db,
        payload={"description": description, "cost": cost, "execution_date": when},
        clock=clock,
    )


def test_report_counts_charged_inspections_and_dated_sundry(db_session, clock, mk_property):
    a = mk_property("1 Alpha Road")
    b = mk_property("2 Beta Road")

    late = _complete(db_session, clock, a.id, datetime(2024, 3, 12, 10, 0), override=True)
    early = _complete(db_session, clock, b.id, datetime(2024, 3, 5, 8, 30), override=True)
    _complete(db_session, clock, a.id, datetime(2024, 3, 8), override=False)
    _complete(db_session, clock, b.id, datetime(2024, 2, 1), override=True)  # outside

    s = _sundry(db_session, clock, datetime(2024, 3, 9), cost=40.0)
    _sundry(db_session, clock, None, cost=99.0, description="Undated key cutting")
    _sundry(db_session, clock, datetime(2024, 4, 1), cost=10.0, description="Next month")

    report = build_report(db_session, start_date=D, end_date=D + timedelta(days=13))

    assert report.summary.total_inspections == 2
    assert report.summary.total_sundry_tasks == 1
    assert report.summary.total_sundry_cost == 40.0
    assert [r.id for r in report.inspections] == [early.id, late.id]
    assert [x.id for x in report.sundry_tasks] == [s.id]
    assert report.period.days == 14


def test_end_day_is_included_in_full(db_session, clock, mk_property):
    prop = mk_property()
    rec = _complete(db_session, clock, prop.id, datetime(2024, 3, 17, 23, 59, 59), override=True)
    _sundry(db_session, clock, datetime(2024, 3, 17, 18, 0), cost=5.0)
    _complete(db_session, clock, prop.id, datetime(2024, 3, 18, 0, 0), override=True)

    report = build_report(db_session, start_date=D, end_date=date(2024, 3, 17))

    assert [r.id for r in report.inspections] == [rec.id]
    assert report.summary.total_sundry_tasks == 1


def test_single_day_window(db_session, clock, mk_property):
    prop = mk_property()
    _complete(db_session, clock, prop.id, datetime(2024, 3, 4, 0, 0), override=True)

    report = build_report(db_session, start_date=D, end_date=D)
    assert report.summary.total_inspections == 1
    assert report.period.days == 1


def test_end_before_start_is_rejected(db_session):
    with pytest.raises(ValidationFailedError):
        build_report(db_session, start_date=D, end_date=D - timedelta(days=1))
    with pytest.raises(ValidationFailedError):
        report_period(D, D - timedelta(days=1))


def test_empty_window_gives_zero_totals(db_session):
    report = build_report(db_session, start_date=D, end_date=D + timedelta(days=13))
    assert report.summary.total_inspections == 0
    assert report.summary.total_sundry_tasks == 0
    assert report.summary.total_sundry_cost == 0.0
    assert report.inspections == []


def test_two_weeks_window_ends_today(db_session, clock, mk_property):
    # clock fixture reads 2024-01-15
    prop = mk_property()
    inside_first = _complete(db_session, clock, prop.id, datetime(2024, 1, 2, 7, 0), override=True)
    _complete(db_session, clock, prop.id, datetime(2024, 1, 1, 23, 0), override=True)
    inside_today = _complete(db_session, clock, prop.id, datetime(2024, 1, 15, 8, 0), override=True)

    report = build_two_weeks_report(db_session, clock=clock)

    assert report.period.start_date == date(2024, 1, 2)
    assert report.period.end_date == date(2024, 1, 15)
    assert [r.id for r in report.inspections] == [inside_first.id, inside_today.id]


def test_trailing_window_and_summary_helpers():
    assert trailing_window(date(2024, 1, 15)) == (date(2024, 1, 2), date(2024, 1, 15))
    assert trailing_window(date(2024, 1, 15), 7) == (date(2024, 1, 9), date(2024, 1, 15))

    class S:
        def __init__(self, cost):
            self.cost = cost

    summary = summarize([object(), object()], [S(0.1), S(0.2), S(None)])
    assert summary.total_inspections == 2
    assert summary.total_sundry_tasks == 3
    assert summary.total_sundry_cost == 0.3


def test_record_listing_filters_by_day_and_sorts_newest_first(db_session, clock, mk_property):
    prop = mk_property()
    r1 = _complete(db_session, clock, prop.id, datetime(2024, 3, 1, 9, 0))
    r2 = _complete(db_session, clock, prop.id, datetime(2024, 3, 5, 9, 0))
    r3 = _complete(db_session, clock, prop.id, datetime(2024, 3, 9, 9, 0))

    assert [r.id for r in list_records(db_session)] == [r3.id, r2.id, r1.id]
    assert [r.id for r in list_records(db_session, start_date=date(2024, 3, 5))] == [r3.id, r2.id]
    assert [r.id for r in list_records(db_session, end_date=date(2024, 3, 5))] == [r2.id, r1.id]

    with pytest.raises(ValidationFailedError):
        list_records(db_session, start_date=date(2024, 3, 5), end_date=date(2024, 3, 1))
