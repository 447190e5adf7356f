"""Assignment Link — pure reading of the box -> current assignment pointer.

Invariants:
    - A pointer is valid only if it names an ACTIVE assignment of the same box
    - resolve_current_assignment() trusts a valid pointer first, then falls back to
      the latest ACTIVE assignment (start_date, then id), then None
    - audit_link() never mutates; it reports what a repair would need to change

Design Decisions:
    - Kept apart from the enforce_* modules: those gate writes, this module
      explains reads and powers the link-status endpoint
"""

from waterbox.core.domain_types import LinkViolation, RecordStatus
from waterbox.core.repository_protocols import AssignmentLike, BoxLike


def is_current_assignment(box: BoxLike, assignment: AssignmentLike) -> bool:
    """True when the box pointer names this assignment."""
    return box.current_assignment_id is not None and (
        box.current_assignment_id == assignment.id
    )


def pointer_violation(
    box: BoxLike, pointed: AssignmentLike | None,
) -> LinkViolation | None:
    """Classify a non-null pointer against the row it references."""
    if box.current_assignment_id is None:
        return None
    if pointed is None:
        return LinkViolation.POINTER_TO_MISSING
    if pointed.water_box_id != box.id:
        return LinkViolation.POINTER_TO_FOREIGN_BOX
    if pointed.status != RecordStatus.ACTIVE:
        return LinkViolation.POINTER_TO_INACTIVE
    return None


def resolve_current_assignment(
    box: BoxLike,
    pointed: AssignmentLike | None,
    active_assignments: list[AssignmentLike],
) -> AssignmentLike | None:
    """Recompute the current assignment without trusting a broken pointer."""
    if pointed is not None and pointer_violation(box, pointed) is None:
        return pointed
    candidates = [
        a for a in active_assignments
        if a.water_box_id == box.id and a.status == RecordStatus.ACTIVE
    ]
    if not candidates:
        return None
    return max(candidates, key=lambda a: (a.start_date, a.id))


def audit_link(
    box: BoxLike,
    pointed: AssignmentLike | None,
    active_assignments: list[AssignmentLike],
) -> dict:
    """Summarize pointer health for one box."""
    violations: list[LinkViolation] = []
    broken = pointer_violation(box, pointed)
    if broken is not None:
        violations.append(broken)
    if len(active_assignments) > 1:
        violations.append(LinkViolation.MULTIPLE_ACTIVE)

    resolved = resolve_current_assignment(box, pointed, active_assignments)
    return {
        "box_id": box.id,
        "current_assignment_id": box.current_assignment_id,
        "pointer_valid": broken is None,
        "resolved_assignment_id": resolved.id if resolved else None,
        "active_assignment_ids": sorted(a.id for a in active_assignments),
        "violations": [v.value for v in violations],
    }
