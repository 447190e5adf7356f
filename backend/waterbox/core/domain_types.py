"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - BoxId, AssignmentId, TransferId wrap ints — never mix them in domain logic
    - Every lifecycle state is an Enum member — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and store in String columns without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

BoxId = NewType("BoxId", int)
AssignmentId = NewType("AssignmentId", int)
TransferId = NewType("TransferId", int)


# ─── Enums ───────────────────────────────────────────────────────

class RecordStatus(str, Enum):
    """Soft-delete state shared by boxes and assignments."""
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class BoxType(str, Enum):
    """Physical kind of connection point."""
    CANO = "CANO"
    BOMBA = "BOMBA"
    OTRO = "OTRO"


class CallerRole(str, Enum):
    """Roles forwarded by the identity gateway."""
    CLIENT = "CLIENT"
    ADMIN = "ADMIN"
    SUPER_ADMIN = "SUPER_ADMIN"


class LinkViolation(str, Enum):
    """Ways a box's current-assignment pointer can disagree with stored rows."""
    POINTER_TO_MISSING = "POINTER_TO_MISSING"
    POINTER_TO_INACTIVE = "POINTER_TO_INACTIVE"
    POINTER_TO_FOREIGN_BOX = "POINTER_TO_FOREIGN_BOX"
    MULTIPLE_ACTIVE = "MULTIPLE_ACTIVE"
