"""Initial schema: world_state key/value table.

Revision ID: 001_world_state
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_world_state"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # "C" collation keeps ORDER BY key in bytewise order on PostgreSQL
    collation = "C" if op.get_bind().dialect.name == "postgresql" else None
    op.create_table(
        "world_state",
        sa.Column("key", sa.String(255, collation=collation), primary_key=True),
        sa.Column("value", sa.LargeBinary, nullable=False),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), nullable=False,
            server_default=sa.func.now(),
        ),
    )


def downgrade() -> None:
    op.drop_table("world_state")
