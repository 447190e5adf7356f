"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All record-store IO is reached through these Protocol types
    - Implementations provided by shell (infrastructure/repositories.py)

Design Decisions:
    - Protocol over ABC: structural subtyping, ORM rows satisfy the *Like shapes as-is
    - Async in Protocol: store methods are async because implementations do IO,
      but core rule functions that read the *Like shapes are never async themselves
    - save() never commits: the caller owns the transaction boundary
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Protocol, Sequence

from waterbox.core.domain_types import (
    AssignmentId, BoxId, RecordStatus, TransferId,
)


class BoxLike(Protocol):
    """Structural contract for Box rows read by the rule checks."""
    id: int
    organization_id: str
    box_code: str
    installation_date: date
    status: str
    current_assignment_id: int | None


class AssignmentLike(Protocol):
    """Structural contract for Assignment rows read by the rule checks."""
    id: int
    water_box_id: int
    user_id: str
    start_date: datetime
    end_date: datetime | None
    monthly_fee: Decimal
    status: str
    transfer_id: int | None


class TransferLike(Protocol):
    """Structural contract for Transfer rows."""
    id: int
    water_box_id: int
    old_assignment_id: int
    new_assignment_id: int
    transfer_reason: str
    documents: list[str]


class BoxRepository(Protocol):
    """Contract for box persistence — implemented by shell."""
    async def get(self, box_id: BoxId) -> BoxLike | None: ...
    async def save(self, box: BoxLike) -> BoxLike: ...
    async def touch(self, box: BoxLike) -> BoxLike: ...
    async def find_by_status(self, status: RecordStatus) -> Sequence[BoxLike]: ...
    async def find_by_current_assignment(
        self, assignment_id: AssignmentId,
    ) -> BoxLike | None: ...


class AssignmentRepository(Protocol):
    """Contract for assignment persistence — implemented by shell."""
    async def get(self, assignment_id: AssignmentId) -> AssignmentLike | None: ...
    async def save(self, assignment: AssignmentLike) -> AssignmentLike: ...
    async def touch(self, assignment: AssignmentLike) -> AssignmentLike: ...
    async def find_by_status(
        self, status: RecordStatus,
    ) -> Sequence[AssignmentLike]: ...
    async def find_active_by_box(
        self, box_id: BoxId,
    ) -> Sequence[AssignmentLike]: ...


class TransferRepository(Protocol):
    """Contract for the append-only transfer log — implemented by shell."""
    async def get(self, transfer_id: TransferId) -> TransferLike | None: ...
    async def save(self, transfer: TransferLike) -> TransferLike: ...
    async def find_all(self) -> Sequence[TransferLike]: ...
