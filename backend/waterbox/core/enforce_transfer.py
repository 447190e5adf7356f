"""Transfer Preconditions — the ordered validation of the ownership handover.

Invariants:
    - Checks run in strict order: box, then old assignment, then new assignment
    - Within each step the first failing rule wins (fail fast, one message)
    - The old assignment must be the one the box currently recognizes;
      this is the guard that keeps a box at one current assignment
    - Functions are PURE: existence (404) is checked by the shell before calling

Design Decisions:
    - Three functions instead of one: the shell loads each row lazily, so a
      missing new assignment is never reported before an inactive box
"""

from waterbox.core.domain_types import RecordStatus
from waterbox.core.repository_protocols import AssignmentLike, BoxLike


def validate_transfer_box(box: BoxLike) -> dict | None:
    """Step 1: the box must be ACTIVE."""
    if box.status == RecordStatus.INACTIVE:
        return {
            "error_code": "TRANSFER_BOX_INACTIVE",
            "message": f"Cannot transfer inactive water box {box.id}.",
        }
    return None


def validate_old_assignment(
    box: BoxLike, old: AssignmentLike,
) -> dict | None:
    """Step 2: the old assignment belongs to the box, is ACTIVE and is current."""
    if old.water_box_id != box.id:
        return {
            "error_code": "OLD_ASSIGNMENT_WRONG_BOX",
            "message": (
                f"Old assignment {old.id} does not belong to water box {box.id}."
            ),
        }
    if old.status == RecordStatus.INACTIVE:
        return {
            "error_code": "OLD_ASSIGNMENT_INACTIVE",
            "message": f"Old assignment {old.id} is already inactive.",
        }
    if box.current_assignment_id is None or box.current_assignment_id != old.id:
        return {
            "error_code": "OLD_ASSIGNMENT_NOT_CURRENT",
            "message": (
                f"Old assignment {old.id} is not the current active assignment "
                f"of water box {box.id}."
            ),
        }
    return None


def validate_new_assignment(
    box: BoxLike, old: AssignmentLike, new: AssignmentLike,
) -> dict | None:
    """Step 3: the new assignment belongs to the box, is ACTIVE and differs from old."""
    if new.water_box_id != box.id:
        return {
            "error_code": "NEW_ASSIGNMENT_WRONG_BOX",
            "message": (
                f"New assignment {new.id} does not belong to water box {box.id}."
            ),
        }
    if new.status == RecordStatus.INACTIVE:
        return {
            "error_code": "NEW_ASSIGNMENT_INACTIVE",
            "message": f"New assignment {new.id} is inactive.",
        }
    if new.id == old.id:
        return {
            "error_code": "ASSIGNMENTS_IDENTICAL",
            "message": "Old and new assignment cannot be identical.",
        }
    return None
