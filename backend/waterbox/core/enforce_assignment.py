"""Assignment Lifecycle Rules — pure checks for create, move, retire and restore.

Invariants:
    - Checks are PURE: they return a violation descriptor or None
    - New assignments only attach to ACTIVE boxes
    - An assignment that is its box's current assignment never moves to another box
      (moving it would leave the old box pointing at a foreign assignment)
    - should_claim_pointer() is the single rule for taking over an empty pointer,
      shared by create and reactivate

Design Decisions:
    - Create claims the pointer only when the box has none: a second ACTIVE
      assignment on an occupied box waits as the successor of a transfer
"""

from waterbox.core.domain_types import RecordStatus
from waterbox.core.repository_protocols import AssignmentLike, BoxLike


def check_assignment_creation(box: BoxLike) -> dict | None:
    """Create requires the target box to be ACTIVE."""
    if box.status == RecordStatus.INACTIVE:
        return {
            "error_code": "BOX_INACTIVE",
            "message": f"Cannot assign inactive water box {box.id}.",
        }
    return None


def check_assignment_move(
    assignment: AssignmentLike, target_box_id: int, owning_box: BoxLike | None,
) -> dict | None:
    """Update may change water_box_id only when the assignment is not current."""
    if target_box_id == assignment.water_box_id or owning_box is None:
        return None
    if owning_box.current_assignment_id == assignment.id:
        return {
            "error_code": "ASSIGNMENT_IS_CURRENT",
            "message": (
                f"Assignment {assignment.id} is the current assignment of water box "
                f"{owning_box.id} and cannot be moved to water box {target_box_id}. "
                f"Deactivate or transfer it first."
            ),
        }
    return None


def check_assignment_deactivation(assignment: AssignmentLike) -> dict | None:
    """Deactivate requires an ACTIVE assignment."""
    if assignment.status == RecordStatus.INACTIVE:
        return {
            "error_code": "ASSIGNMENT_ALREADY_INACTIVE",
            "message": f"Assignment {assignment.id} is already inactive.",
        }
    return None


def check_assignment_reactivation(assignment: AssignmentLike) -> dict | None:
    """Restore requires an INACTIVE assignment."""
    if assignment.status == RecordStatus.ACTIVE:
        return {
            "error_code": "ASSIGNMENT_ALREADY_ACTIVE",
            "message": f"Assignment {assignment.id} is already active.",
        }
    return None


def should_claim_pointer(box: BoxLike | None) -> bool:
    """True when the box exists and recognizes no current assignment."""
    return box is not None and box.current_assignment_id is None
