# backend/inspection_payroll/models.py
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .db import Base
from .domain.clock import utc_now
from .domain.enums import BillingPolicy, BillingRule, InspectionStatus, InspectionType


def _enum(cls, name: str) -> Enum:
    # store the symbolic value ("MoveIn") as a plain string column
    return Enum(
        cls,
        name=name,
        native_enum=False,
        length=32,
        values_callable=lambda e: [x.value for x in e],
        validate_strings=True,
    )


# -----------------------------
# Properties
# -----------------------------
class Property(Base):
    __tablename__ = "properties"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    address: Mapped[str] = mapped_column(String(200), nullable=False, index=True)

    billing_policy: Mapped[BillingPolicy] = mapped_column(
        _enum(BillingPolicy, "billing_policy"), nullable=False, default=BillingPolicy.THREE_MONTH_TOGGLE
    )
    billing_rule: Mapped[BillingRule] = mapped_column(
        _enum(BillingRule, "billing_rule"), nullable=False, default=BillingRule.POLICY_FLAG
    )

    # memory of the last completed visit; written only by the completion workflow
    last_inspection_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    last_inspection_type: Mapped[Optional[InspectionType]] = mapped_column(
        _enum(InspectionType, "inspection_type"), nullable=True
    )
    last_inspection_was_charged: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    row_version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    tasks: Mapped[List["InspectionTask"]] = relationship(back_populates="property", passive_deletes="all")
    records: Mapped[List["InspectionRecord"]] = relationship(back_populates="property", passive_deletes="all")

    __mapper_args__ = {"version_id_col": row_version}


# -----------------------------
# Inspections: scheduled tasks + completed history
# -----------------------------
class InspectionTask(Base):
    __tablename__ = "inspection_tasks"
    __table_args__ = (
        Index("ix_inspection_tasks_status", "status"),
        Index("ix_inspection_tasks_scheduled_at", "scheduled_at"),
        Index("ix_inspection_tasks_created_at", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    property_id: Mapped[int] = mapped_column(
        ForeignKey("properties.id", ondelete="RESTRICT"), nullable=False, index=True
    )

    scheduled_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    type: Mapped[InspectionType] = mapped_column(_enum(InspectionType, "inspection_type"), nullable=False)
    status: Mapped[InspectionStatus] = mapped_column(
        _enum(InspectionStatus, "inspection_status"), nullable=False, default=InspectionStatus.PENDING
    )

    # computed by the billing evaluator; never set from a request body
    is_billable: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_billable_override: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)

    notes: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utc_now)
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    row_version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    property: Mapped["Property"] = relationship(back_populates="tasks")

    __mapper_args__ = {"version_id_col": row_version}


class InspectionRecord(Base):
    __tablename__ = "inspection_records"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    property_id: Mapped[int] = mapped_column(
        ForeignKey("properties.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    execution_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    type: Mapped[InspectionType] = mapped_column(_enum(InspectionType, "inspection_type"), nullable=False)
    is_charged: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    notes: Mapped[str] = mapped_column(String(500), nullable=False, default="")

    task_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("inspection_tasks.id", ondelete="SET NULL"), nullable=True, index=True
    )

    property: Mapped["Property"] = relationship(back_populates="records")


# -----------------------------
# Sundry ledger
# -----------------------------
class SundryTask(Base):
    __tablename__ = "sundry_tasks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    description: Mapped[str] = mapped_column(String(200), nullable=False)
    cost: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    notes: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utc_now, index=True)
    execution_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True, index=True)

    row_version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    __mapper_args__ = {"version_id_col": row_version}


# -----------------------------
# Audit trail
# -----------------------------
class AuditEvent(Base):
    __tablename__ = "audit_events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    action: Mapped[str] = mapped_column(String(80), nullable=False)
    entity_type: Mapped[str] = mapped_column(String(80), nullable=False, index=True)
    entity_id: Mapped[str] = mapped_column(String(80), nullable=False, index=True)

    before_json: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    after_json: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utc_now)
