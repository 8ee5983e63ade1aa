"""create peer grading tables

Revision ID: 3f2c1a9d7b10
Revises:
Create Date: 2026-10-05 14:12:40.118302

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f2c1a9d7b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=True),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("role", sa.String(50), nullable=False),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "late_policies",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("instructor_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("penalty_per_unit", sa.Integer(), nullable=False),
        sa.Column("penalty_unit", sa.String(16), nullable=False),
        sa.Column("max_penalty", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        "assignments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("instructor_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("late_policy_id", sa.Integer(), sa.ForeignKey("late_policies.id"), nullable=True),
        sa.Column("submission_due_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("review_due_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("meta_review_due_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_assignments_late_policy_id", "assignments", ["late_policy_id"])

    op.create_table(
        "participants",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("parent_id", sa.Integer(), sa.ForeignKey("assignments.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("handle", sa.String(255), nullable=True),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("reviewed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("meta_reviewed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("submission_penalty", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("review_penalty", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("meta_review_penalty", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_penalty", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index("ix_participants_parent_id", "participants", ["parent_id"])

    op.create_table(
        "calculated_penalties",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("participant_id", sa.Integer(), sa.ForeignKey("participants.id", ondelete="CASCADE"), nullable=False),
        sa.Column("penalty_points", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("calculated_penalties")
    op.drop_index("ix_participants_parent_id", table_name="participants")
    op.drop_table("participants")
    op.drop_index("ix_assignments_late_policy_id", table_name="assignments")
    op.drop_table("assignments")
    op.drop_table("late_policies")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
