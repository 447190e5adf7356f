"""Box Lifecycle Rules — pure checks for soft-deactivation and restore.

Invariants:
    - Checks are PURE: they return a violation descriptor or None, never mutate
    - A box pointing at a current assignment cannot be deactivated (conflict, not 400)
    - Repeating a transition is an error, not a silent no-op

Design Decisions:
    - Violation dicts (error_code + message) like the other enforce_* modules:
      the service layer decides which exception type to raise
"""

from waterbox.core.domain_types import RecordStatus
from waterbox.core.repository_protocols import BoxLike


def check_box_deactivation(box: BoxLike) -> dict | None:
    """Deactivate requires an ACTIVE box with no current assignment."""
    if box.status == RecordStatus.INACTIVE:
        return {
            "error_code": "BOX_ALREADY_INACTIVE",
            "message": f"Water box {box.id} is already inactive.",
        }
    if box.current_assignment_id is not None:
        return {
            "error_code": "BOX_HAS_CURRENT_ASSIGNMENT",
            "message": (
                f"Water box {box.id} has an active assignment "
                f"({box.current_assignment_id}). Deactivate the assignment first."
            ),
        }
    return None


def check_box_reactivation(box: BoxLike) -> dict | None:
    """Restore requires an INACTIVE box. The assignment pointer is left as-is."""
    if box.status == RecordStatus.ACTIVE:
        return {
            "error_code": "BOX_ALREADY_ACTIVE",
            "message": f"Water box {box.id} is already active.",
        }
    return None
