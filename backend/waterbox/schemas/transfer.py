"""Transfer Schemas — handover request and audit record response.

Invariants:
    - transfer_reason is stripped and non-empty
    - documents is a list of non-empty strings (defaults to empty)
    - old_assignment_id == new_assignment_id is NOT rejected here: the
      orchestrator reports it in its documented precondition order
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TransferRequest(BaseModel):
    """Ownership handover from the current assignment to a successor."""
    water_box_id: int = Field(gt=0)
    old_assignment_id: int = Field(gt=0)
    new_assignment_id: int = Field(gt=0)
    transfer_reason: str = Field(min_length=1, max_length=2000)
    documents: list[str] = Field(default_factory=list, max_length=50)

    @field_validator("transfer_reason")
    @classmethod
    def strip_reason(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("transfer_reason cannot be empty or whitespace")
        return v

    @field_validator("documents")
    @classmethod
    def clean_documents(cls, v: list[str]) -> list[str]:
        cleaned = [d.strip() for d in v]
        if any(not d for d in cleaned):
            raise ValueError("documents cannot contain empty entries")
        return cleaned


class TransferResponse(BaseModel):
    """Immutable transfer record."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    water_box_id: int
    old_assignment_id: int
    new_assignment_id: int
    transfer_reason: str
    documents: list[str]
    created_at: datetime
