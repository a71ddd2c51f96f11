# backend/tests/conftest.py
from __future__ import annotations

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from inspection_payroll.db import get_db, init_db, make_engine, make_session_factory
from inspection_payroll.domain.clock import FixedClock, get_clock
from inspection_payroll.main import create_app
from inspection_payroll.services.property_service import create_property


@pytest.fixture
def engine(tmp_path):
    eng = make_engine(f"sqlite:///{tmp_path / 'inspections.db'}")
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def clock():
    return FixedClock(datetime(2024, 1, 15, 9, 0, 0))


@pytest.fixture
def mk_property(db_session, clock):
    def _mk(address: str = "12 Harbour Street", policy: str = "ThreeMonthToggle", rule: str = "PolicyFlag"):
        return create_property(
            db_session,
            payload={"address": address, "billing_policy": policy, "billing_rule": rule},
            clock=clock,
        )

    return _mk


@pytest.fixture
def client(session_factory, clock):
    app = create_app(create_schema=False)

    def _get_db():
        db = session_factory()
        try:
            yield db
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_clock] = lambda: clock

    with TestClient(app) as c:
        yield c
