"""Core Layer: asset records, canonical encoding, errors and store contracts.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Encoding and decoding functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell: the ledger service in
      services/ drives IO through the StateStore protocol declared here
"""
