"""ORM Models: SQLAlchemy declarative models for persisted ledger state.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - All models imported here so Base.metadata is complete before create_all
      or Alembic autogenerate runs
"""

from asset_ledger.models.world_state import WorldState  # noqa: F401
