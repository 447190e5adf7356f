"""Initial schema — water_boxes, water_box_assignments, water_box_transfers.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

water_boxes.current_assignment_id and water_box_assignments.transfer_id are
plain integer columns (weak references) so the three tables form no FK cycle.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "water_boxes",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("organization_id", sa.String(64), nullable=False),
        sa.Column("box_code", sa.String(64), nullable=False),
        sa.Column("box_type", sa.String(20), nullable=False),
        sa.Column("installation_date", sa.Date, nullable=False),
        sa.Column("current_assignment_id", sa.Integer, nullable=True),
        sa.Column("status", sa.String(10), nullable=False, server_default="ACTIVE"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("version", sa.Integer, nullable=False, server_default="1"),
    )
    op.create_index("ix_water_boxes_status", "water_boxes", ["status"])
    op.create_index(
        "ix_water_boxes_current_assignment_id", "water_boxes", ["current_assignment_id"],
    )

    op.create_table(
        "water_box_assignments",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("water_box_id", sa.Integer, sa.ForeignKey("water_boxes.id"), nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("monthly_fee", sa.Numeric(10, 2), nullable=False),
        sa.Column("status", sa.String(10), nullable=False, server_default="ACTIVE"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("transfer_id", sa.Integer, nullable=True),
        sa.Column("version", sa.Integer, nullable=False, server_default="1"),
    )
    op.create_index(
        "ix_water_box_assignments_water_box_id", "water_box_assignments", ["water_box_id"],
    )
    op.create_index(
        "ix_water_box_assignments_status", "water_box_assignments", ["status"],
    )

    op.create_table(
        "water_box_transfers",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("water_box_id", sa.Integer, sa.ForeignKey("water_boxes.id"), nullable=False),
        sa.Column("old_assignment_id", sa.Integer, sa.ForeignKey("water_box_assignments.id"), nullable=False),
        sa.Column("new_assignment_id", sa.Integer, sa.ForeignKey("water_box_assignments.id"), nullable=False),
        sa.Column("transfer_reason", sa.Text, nullable=False),
        sa.Column("documents", sa.JSON, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index(
        "ix_water_box_transfers_water_box_id", "water_box_transfers", ["water_box_id"],
    )


def downgrade() -> None:
    op.drop_table("water_box_transfers")
    op.drop_table("water_box_assignments")
    op.drop_table("water_boxes")
