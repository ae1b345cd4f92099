"""Infrastructure Layer: state store implementations, database sessions, logging.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Store implementations satisfy core.repository_protocols.StateStore

Design Decisions:
    - In-memory and SQL stores side by side: the ledger cannot tell them apart
"""
