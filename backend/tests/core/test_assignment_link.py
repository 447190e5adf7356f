"""Assignment Link — tests for pointer classification, resolution and audit.

Tests cover:
    - is_current_assignment() ignores a null pointer
    - pointer_violation() classifies missing / foreign / inactive targets
    - resolve_current_assignment() prefers a valid pointer, then latest ACTIVE
    - audit_link() reports MULTIPLE_ACTIVE and never mutates the box
"""

from datetime import datetime
from types import SimpleNamespace

from waterbox.core.assignment_link import (
    audit_link,
    is_current_assignment,
    pointer_violation,
    resolve_current_assignment,
)
from waterbox.core.domain_types import LinkViolation


def _box(**kw):
    fields = {"id": 1, "status": "ACTIVE", "current_assignment_id": None}
    fields.update(kw)
    return SimpleNamespace(**fields)


def _assignment(id, start="2024-01-01", **kw):
    fields = {
        "id": id, "water_box_id": 1, "status": "ACTIVE",
        "start_date": datetime.fromisoformat(start),
    }
    fields.update(kw)
    return SimpleNamespace(**fields)


def test_is_current_assignment():
    a = _assignment(5)
    assert is_current_assignment(_box(current_assignment_id=5), a) is True
    assert is_current_assignment(_box(current_assignment_id=6), a) is False
    assert is_current_assignment(_box(), a) is False


def test_null_pointer_has_no_violation():
    assert pointer_violation(_box(), None) is None


def test_pointer_to_missing_row():
    assert pointer_violation(
        _box(current_assignment_id=9), None,
    ) == LinkViolation.POINTER_TO_MISSING


def test_pointer_to_foreign_box():
    assert pointer_violation(
        _box(current_assignment_id=5), _assignment(5, water_box_id=2),
    ) == LinkViolation.POINTER_TO_FOREIGN_BOX


def test_pointer_to_inactive_assignment():
    assert pointer_violation(
        _box(current_assignment_id=5), _assignment(5, status="INACTIVE"),
    ) == LinkViolation.POINTER_TO_INACTIVE


def test_valid_pointer_wins_over_newer_active():
    pointed = _assignment(5, start="2024-01-01")
    newer = _assignment(6, start="2024-06-01")
    box = _box(current_assignment_id=5)
    assert resolve_current_assignment(box, pointed, [pointed, newer]) is pointed


def test_broken_pointer_falls_back_to_latest_start_date():
    older = _assignment(7, start="2024-01-01")
    newer = _assignment(6, start="2024-06-01")
    box = _box(current_assignment_id=99)
    assert resolve_current_assignment(box, None, [older, newer]) is newer


def test_start_date_tie_broken_by_id():
    a = _assignment(3, start="2024-01-01")
    b = _assignment(4, start="2024-01-01")
    assert resolve_current_assignment(_box(), None, [b, a]) is b


def test_no_active_assignments_resolves_to_none():
    assert resolve_current_assignment(_box(), None, []) is None


def test_audit_healthy_box():
    a = _assignment(5)
    report = audit_link(_box(current_assignment_id=5), a, [a])
    assert report == {
        "box_id": 1,
        "current_assignment_id": 5,
        "pointer_valid": True,
        "resolved_assignment_id": 5,
        "active_assignment_ids": [5],
        "violations": [],
    }


def test_audit_reports_multiple_active_and_broken_pointer():
    box = _box(current_assignment_id=5)
    retired = _assignment(5, status="INACTIVE")
    active = [_assignment(8, start="2024-02-01"), _assignment(6)]
    report = audit_link(box, retired, active)
    assert report["pointer_valid"] is False
    assert report["violations"] == ["POINTER_TO_INACTIVE", "MULTIPLE_ACTIVE"]
    assert report["resolved_assignment_id"] == 8
    assert report["active_assignment_ids"] == [6, 8]
    assert box.current_assignment_id == 5
