"""Services — imperative shell around the pure lifecycle rules.

Invariants:
    - Each service loads rows, asks core/ whether the step is allowed, then writes
    - Every multi-record write sequence runs inside one transaction()

Design Decisions:
    - One class per lifecycle (box, assignment, transfer) plus the read-only LinkAudit
"""
