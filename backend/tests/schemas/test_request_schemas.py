"""Request Schemas — field validation at the API boundary.

Tests cover:
    - Identifiers and reasons are stripped; blank values rejected
    - monthly_fee bounds and precision
    - documents default to empty and reject blank entries
    - Identical old/new ids pass schema validation (checked in order by the service)
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from waterbox.core.domain_types import BoxType
from waterbox.schemas.assignment import AssignmentRequest
from waterbox.schemas.transfer import TransferRequest
from waterbox.schemas.water_box import WaterBoxRequest


def _box(**kw):
    data = {
        "organization_id": " org-1 ",
        "box_code": " WB-1 ",
        "box_type": "CANO",
        "installation_date": "2021-01-15",
    }
    data.update(kw)
    return WaterBoxRequest(**data)


def _assignment(**kw):
    data = {
        "water_box_id": 1,
        "user_id": "user-a",
        "start_date": "2024-01-01T08:00:00",
        "monthly_fee": "10.50",
    }
    data.update(kw)
    return AssignmentRequest(**data)


def _transfer(**kw):
    data = {
        "water_box_id": 1,
        "old_assignment_id": 1,
        "new_assignment_id": 2,
        "transfer_reason": "Sale",
    }
    data.update(kw)
    return TransferRequest(**data)


# ─── WaterBoxRequest ─────────────────────────────────────────────

def test_box_identifiers_are_stripped():
    box = _box()
    assert box.organization_id == "org-1"
    assert box.box_code == "WB-1"
    assert box.box_type is BoxType.CANO


def test_box_rejects_blank_code():
    with pytest.raises(ValidationError):
        _box(box_code="   ")


def test_box_rejects_unknown_type():
    with pytest.raises(ValidationError):
        _box(box_type="VALVE")


# ─── AssignmentRequest ───────────────────────────────────────────

def test_assignment_fee_parsed_as_decimal():
    assert _assignment().monthly_fee == Decimal("10.50")


@pytest.mark.parametrize("fee", ["-0.01", "1.234", "123456789.00"])
def test_assignment_rejects_bad_fee(fee):
    with pytest.raises(ValidationError):
        _assignment(monthly_fee=fee)


def test_assignment_rejects_non_positive_box_id():
    with pytest.raises(ValidationError):
        _assignment(water_box_id=0)


def test_assignment_rejects_blank_user():
    with pytest.raises(ValidationError):
        _assignment(user_id="  ")


# ─── TransferRequest ─────────────────────────────────────────────

def test_transfer_documents_default_empty():
    assert _transfer().documents == []


def test_transfer_reason_stripped():
    assert _transfer(transfer_reason="  Divorce  ").transfer_reason == "Divorce"


def test_transfer_rejects_blank_reason():
    with pytest.raises(ValidationError):
        _transfer(transfer_reason="   ")


def test_transfer_rejects_blank_document():
    with pytest.raises(ValidationError):
        _transfer(documents=["deed.pdf", " "])


def test_transfer_allows_identical_ids_at_schema_level():
    request = _transfer(new_assignment_id=1)
    assert request.old_assignment_id == request.new_assignment_id
