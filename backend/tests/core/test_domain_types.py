"""Domain Types — verifies identity wrappers and enum values.

Tests:
    - NewType wrappers exist and are callable
    - Enums have expected members and compare equal to their stored strings
"""

from waterbox.core.domain_types import (
    AssignmentId, BoxId, TransferId,
    BoxType, CallerRole, LinkViolation, RecordStatus,
)


def test_identity_types_wrap_int():
    assert BoxId(3) == 3
    assert AssignmentId(4) == 4
    assert TransferId(5) == 5


def test_record_status_has_two_states():
    assert set(RecordStatus) == {RecordStatus.ACTIVE, RecordStatus.INACTIVE}


def test_box_type_members():
    assert {t.value for t in BoxType} == {"CANO", "BOMBA", "OTRO"}


def test_caller_roles():
    assert {r.value for r in CallerRole} == {"CLIENT", "ADMIN", "SUPER_ADMIN"}


def test_link_violation_has_four_kinds():
    assert len(LinkViolation) == 4


def test_str_enums_compare_to_stored_values():
    assert RecordStatus.ACTIVE == "ACTIVE"
    assert BoxType("BOMBA") is BoxType.BOMBA
