"""add penalty calculated flag and unique participant

Revision ID: 8b4e6d2c5a31
Revises: 3f2c1a9d7b10
Create Date: 2026-10-12 09:41:03.552907

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8b4e6d2c5a31'
down_revision: Union[str, Sequence[str], None] = '3f2c1a9d7b10'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    bind = op.get_bind()
    existing_cols = {c["name"] for c in sa.inspect(bind).get_columns("assignments")}

    if "is_penalty_calculated" not in existing_cols:
        op.add_column(
            "assignments",
            sa.Column("is_penalty_calculated", sa.Boolean(), nullable=False, server_default=sa.false()),
        )

    with op.batch_alter_table("participants", recreate="always") as batch_op:
        batch_op.create_unique_constraint(
            "uq_participant_assignment_user",
            ["parent_id", "user_id"],
        )


def downgrade() -> None:
    """Downgrade schema."""
    with op.batch_alter_table("participants", recreate="always") as batch_op:
        batch_op.drop_constraint(
            "uq_participant_assignment_user",
            type_="unique",
        )
    with op.batch_alter_table("assignments") as batch_op:
        batch_op.drop_column("is_penalty_calculated")
