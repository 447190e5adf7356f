"""Assignment Schemas — create/update body and response shape.

Invariants:
    - monthly_fee is non-negative with at most two decimal places
    - user_id is stripped and non-empty
    - status, end_date and transfer_id are response-only
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from waterbox.core.domain_types import RecordStatus


class AssignmentRequest(BaseModel):
    """Assignment fields accepted on create and update."""
    water_box_id: int = Field(gt=0)
    user_id: str = Field(min_length=1, max_length=64)
    start_date: datetime
    monthly_fee: Decimal = Field(ge=0, max_digits=10, decimal_places=2)

    @field_validator("user_id")
    @classmethod
    def strip_user_id(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("user_id cannot be empty or whitespace")
        return v


class AssignmentResponse(BaseModel):
    """Assignment as returned by every assignment endpoint."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    water_box_id: int
    user_id: str
    start_date: datetime
    end_date: datetime | None = None
    monthly_fee: Decimal
    status: RecordStatus
    created_at: datetime
    transfer_id: int | None = None
