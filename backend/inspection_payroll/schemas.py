# backend/inspection_payroll/schemas.py
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional, List

from pydantic import BaseModel, Field, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from .domain.enums import BillingPolicy, BillingRule, InspectionStatus, InspectionType


class ApiModel(BaseModel):
    """camelCase on the wire, snake_case in Python; either is accepted on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OrmModel(ApiModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


def naive_utc(v: Optional[datetime]) -> Optional[datetime]:
    """Columns hold naive UTC; offset-aware input is converted, naive input is taken as UTC."""
    if v is None or v.tzinfo is None:
        return v
    return v.astimezone(timezone.utc).replace(tzinfo=None)


# -------------------- Properties --------------------

class PropertyCreate(ApiModel):
    address: str = Field(min_length=5, max_length=200)
    # unset falls back to the configured defaults
    billing_policy: Optional[BillingPolicy] = None
    billing_rule: Optional[BillingRule] = None

    @field_validator("address", mode="before")
    @classmethod
    def strip_address(cls, v):
        return v.strip() if isinstance(v, str) else v


class PropertyUpdate(PropertyCreate):
    row_version: Optional[int] = None


class PropertyOut(OrmModel):
    id: int
    address: str
    billing_policy: BillingPolicy
    billing_rule: BillingRule
    last_inspection_date: Optional[datetime] = None
    last_inspection_type: Optional[InspectionType] = None
    last_inspection_was_charged: bool = False
    row_version: int


# -------------------- Inspection tasks --------------------

class InspectionTaskCreate(ApiModel):
    property_id: int
    scheduled_at: Optional[datetime] = None
    type: InspectionType
    status: InspectionStatus = InspectionStatus.PENDING
    notes: Optional[str] = Field(default=None, max_length=500)
    is_billable_override: Optional[bool] = None

    @field_validator("scheduled_at")
    @classmethod
    def scheduled_at_utc(cls, v):
        return naive_utc(v)


class InspectionTaskUpdate(InspectionTaskCreate):
    # omitted keeps the task's current status
    status: Optional[InspectionStatus] = None
    row_version: Optional[int] = None


class InspectionTaskOut(OrmModel):
    id: int
    property_id: int
    property_address: Optional[str] = None
    scheduled_at: Optional[datetime] = None
    type: InspectionType
    status: InspectionStatus
    is_billable: bool
    is_billable_override: Optional[bool] = None
    effective_is_billable: bool
    notes: Optional[str] = None
    created_at: datetime
    completed_at: Optional[datetime] = None

    # property memory, so the UI can show why a visit is (not) billable
    last_inspection_date: Optional[datetime] = None
    last_inspection_type: Optional[InspectionType] = None
    last_inspection_was_charged: bool = False
    billing_policy: BillingPolicy = BillingPolicy.THREE_MONTH_TOGGLE
    billing_rule: BillingRule = BillingRule.POLICY_FLAG

    row_version: int


class TaskCompletion(ApiModel):
    execution_date: datetime
    notes: Optional[str] = Field(default=None, max_length=500)

    @field_validator("execution_date")
    @classmethod
    def execution_date_utc(cls, v):
        return naive_utc(v)


# -------------------- Inspection records --------------------

class InspectionRecordOut(OrmModel):
    id: int
    property_id: int
    property_address: Optional[str] = None
    execution_date: datetime
    type: InspectionType
    is_charged: bool
    notes: str = ""
    task_id: Optional[int] = None


# -------------------- Sundry tasks --------------------

class SundryTaskCreate(ApiModel):
    description: str = Field(min_length=1, max_length=200)
    cost: float = Field(default=0.0, ge=0, le=999999.99)
    notes: Optional[str] = Field(default=None, max_length=500)
    execution_date: Optional[datetime] = None

    @field_validator("description", mode="before")
    @classmethod
    def strip_description(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("execution_date")
    @classmethod
    def execution_date_utc(cls, v):
        return naive_utc(v)


class SundryTaskUpdate(SundryTaskCreate):
    row_version: Optional[int] = None


class SundryTaskOut(OrmModel):
    id: int
    description: str
    cost: float
    notes: Optional[str] = None
    created_at: datetime
    execution_date: Optional[datetime] = None
    row_version: int


# -------------------- Reports --------------------

class ReportPeriodOut(ApiModel):
    start_date: date
    end_date: date
    days: int


class ReportSummaryOut(ApiModel):
    total_inspections: int
    total_sundry_tasks: int
    total_sundry_cost: float


class PayrollReportOut(ApiModel):
    period: ReportPeriodOut
    summary: ReportSummaryOut
    inspections: List[InspectionRecordOut] = Field(default_factory=list)
    sundry_tasks: List[SundryTaskOut] = Field(default_factory=list)


# -------------------- Audit --------------------

class AuditEventOut(OrmModel):
    id: int
    action: str
    entity_type: str
    entity_id: str
    before_json: Optional[str] = None
    after_json: Optional[str] = None
    created_at: datetime
