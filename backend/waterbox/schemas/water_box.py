"""Water Box Schemas — create/update body and response shape.

Invariants:
    - organization_id and box_code are stripped and non-empty
    - box_type is one of BoxType
    - Responses expose status and current_assignment_id; requests never set them
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from waterbox.core.domain_types import BoxType, RecordStatus


class WaterBoxRequest(BaseModel):
    """Mutable water box fields — shared by create and update."""
    organization_id: str = Field(min_length=1, max_length=64)
    box_code: str = Field(min_length=1, max_length=64)
    box_type: BoxType
    installation_date: date

    @field_validator("organization_id", "box_code")
    @classmethod
    def strip_identifier(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("value cannot be empty or whitespace")
        return v


class WaterBoxResponse(BaseModel):
    """Water box as returned by every box endpoint."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    organization_id: str
    box_code: str
    box_type: BoxType
    installation_date: date
    current_assignment_id: int | None = None
    status: RecordStatus
    created_at: datetime


class LinkStatusResponse(BaseModel):
    """Recomputed view of a box's current-assignment pointer."""
    box_id: int
    current_assignment_id: int | None
    pointer_valid: bool
    resolved_assignment_id: int | None
    active_assignment_ids: list[int]
    violations: list[str]
