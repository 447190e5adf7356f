"""Core Layer — pure domain rules, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All rule checks are pure and deterministic (they return violations, never raise)

Design Decisions:
    - Functional core separated from imperative shell: services load rows, ask core
      whether a lifecycle step is allowed, then apply the writes
"""
