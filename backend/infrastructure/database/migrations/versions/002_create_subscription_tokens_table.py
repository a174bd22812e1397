"""Create subscription tokens table

Revision ID: 002
Revises: 001
Create Date: 2026-10-17

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: str | None = "001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "subscription_tokens",
        sa.Column("subscription_token", sa.Text(), nullable=False),
        sa.Column("subscriber_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.ForeignKeyConstraint(["subscriber_id"], ["subscriptions.id"]),
        sa.PrimaryKeyConstraint("subscription_token"),
    )

    op.create_index(
        "ix_subscription_tokens_subscriber_id",
        "subscription_tokens",
        ["subscriber_id"],
    )


def downgrade() -> None:
    op.drop_index("ix_subscription_tokens_subscriber_id", table_name="subscription_tokens")
    op.drop_table("subscription_tokens")
