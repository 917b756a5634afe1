"""add soft deletes and the role_user link table

Organizations, users and roles get a nullable deleted_at column. Unique
indexes keep covering soft-deleted rows, so a deleted organization's slug
or a deleted user's email stays taken.

Revision ID: 8c4e2d91a7f3
Revises: 3f9a1c2e7b40
Create Date: 2026-10-18 14:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "8c4e2d91a7f3"
down_revision: Union[str, Sequence[str], None] = "3f9a1c2e7b40"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_SOFT_DELETE_TABLES = ("organizations", "users", "roles")


def upgrade() -> None:
    """Upgrade schema."""
    for table in _SOFT_DELETE_TABLES:
        op.add_column(
            table,
            sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        )

    op.create_table(
        "role_user",
        sa.Column("role_id", sa.String(length=26), nullable=False),
        sa.Column("user_id", sa.String(length=26), nullable=False),
        sa.PrimaryKeyConstraint("role_id", "user_id"),
        sa.ForeignKeyConstraint(
            ["role_id"],
            ["roles.id"],
            name="fk_role_user_role_id",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name="fk_role_user_user_id",
            ondelete="CASCADE",
        ),
    )
    op.create_index("ix_role_user_user_id", "role_user", ["user_id"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_role_user_user_id", table_name="role_user")
    op.drop_table("role_user")
    for table in reversed(_SOFT_DELETE_TABLES):
        op.drop_column(table, "deleted_at")
