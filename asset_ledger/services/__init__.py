"""Services Layer: the asset ledger, its transaction host, and chaincode-style dispatch.

Invariants:
    - Services talk to state only through core.repository_protocols.StateStore
    - Ledger operations return Result values; raising happens at the API boundary

Design Decisions:
    - Transaction dispatch uses an explicit dict mapping (no auto-discovery)
"""
