"""init schema

Revision ID: 0001_init
Revises:
Create Date: 2024-06-01
"""
from alembic import op
import sqlalchemy as sa


revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "properties",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("address", sa.String(length=200), nullable=False),
        sa.Column("billing_policy", sa.String(length=32), nullable=False),
        sa.Column("billing_rule", sa.String(length=32), nullable=False, server_default="PolicyFlag"),
        sa.Column("last_inspection_date", sa.DateTime(), nullable=True),
        sa.Column("last_inspection_type", sa.String(length=32), nullable=True),
        sa.Column("last_inspection_was_charged", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("row_version", sa.Integer(), nullable=False, server_default="1"),
    )
    op.create_index("ix_properties_address", "properties", ["address"])

    op.create_table(
        "inspection_tasks",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "property_id",
            sa.Integer(),
            sa.ForeignKey("properties.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("scheduled_at", sa.DateTime(), nullable=True),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("is_billable", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("is_billable_override", sa.Boolean(), nullable=True),
        sa.Column("notes", sa.String(length=500), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("completed_at", sa.DateTime(), nullable=True),
        sa.Column("row_version", sa.Integer(), nullable=False, server_default="1"),
    )
    op.create_index("ix_inspection_tasks_property_id", "inspection_tasks", ["property_id"])
    op.create_index("ix_inspection_tasks_status", "inspection_tasks", ["status"])
    op.create_index("ix_inspection_tasks_scheduled_at", "inspection_tasks", ["scheduled_at"])
    op.create_index("ix_inspection_tasks_created_at", "inspection_tasks", ["created_at"])

    op.create_table(
        "inspection_records",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "property_id",
            sa.Integer(),
            sa.ForeignKey("properties.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("execution_date", sa.DateTime(), nullable=False),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("is_charged", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("notes", sa.String(length=500), nullable=False, server_default=""),
        sa.Column(
            "task_id",
            sa.Integer(),
            sa.ForeignKey("inspection_tasks.id", ondelete="SET NULL"),
            nullable=True,
        ),
    )
    op.create_index("ix_inspection_records_property_id", "inspection_records", ["property_id"])
    op.create_index("ix_inspection_records_execution_date", "inspection_records", ["execution_date"])
    op.create_index("ix_inspection_records_task_id", "inspection_records", ["task_id"])

    op.create_table(
        "sundry_tasks",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("description", sa.String(length=200), nullable=False),
        sa.Column("cost", sa.Float(), nullable=False, server_default="0"),
        sa.Column("notes", sa.String(length=500), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("execution_date", sa.DateTime(), nullable=True),
        sa.Column("row_version", sa.Integer(), nullable=False, server_default="1"),
    )
    op.create_index("ix_sundry_tasks_created_at", "sundry_tasks", ["created_at"])
    op.create_index("ix_sundry_tasks_execution_date", "sundry_tasks", ["execution_date"])

    op.create_table(
        "audit_events",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("action", sa.String(length=80), nullable=False),
        sa.Column("entity_type", sa.String(length=80), nullable=False),
        sa.Column("entity_id", sa.String(length=80), nullable=False),
        sa.Column("before_json", sa.Text(), nullable=True),
        sa.Column("after_json", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_audit_events_entity_type", "audit_events", ["entity_type"])
    op.create_index("ix_audit_events_entity_id", "audit_events", ["entity_id"])


def downgrade():
    op.drop_table("audit_events")
    op.drop_table("sundry_tasks")
    op.drop_table("inspection_records")
    op.drop_table("inspection_tasks")
    op.drop_table("properties")
