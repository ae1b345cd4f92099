"""WorldState ORM: one row per ledger key holding its canonical bytes.

Invariants:
    - key is the primary key (asset ID, caller-assigned), ordered bytewise
    - value holds canonical encoded bytes, never NULL
    - updated_at refreshed on every write

Design Decisions:
    - LargeBinary over JSON column: the ledger owns encoding, the database must
      not reformat the bytes
"""

from datetime import datetime, timezone

from sqlalchemy import String, LargeBinary, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from asset_ledger.db.base import Base


class WorldState(Base):
    """Key/value row of the ledger world state."""
    __tablename__ = "world_state"

    # "C" collation on PostgreSQL keeps ORDER BY key bytewise, as in the migration
    key: Mapped[str] = mapped_column(
        String(255).with_variant(String(255, collation="C"), "postgresql"),
        primary_key=True,
    )
    value: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
