"""Transfer ORM — append-only audit record of a water box ownership handover.

Invariants:
    - Rows are inserted once and never updated or deleted
    - old_assignment_id != new_assignment_id, both belong to water_box_id
    - documents is a JSON array of strings (empty list when none supplied)

Design Decisions:
    - JSON column for documents: a real list, no delimiter escaping
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer, JSON, Text
from sqlalchemy.orm import Mapped, mapped_column

from waterbox.db.base import Base


class Transfer(Base):
    """Transfer entity — immutable fact linking old and new assignment."""
    __tablename__ = "water_box_transfers"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    water_box_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("water_boxes.id"), nullable=False, index=True,
    )
    old_assignment_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("water_box_assignments.id"), nullable=False,
    )
    new_assignment_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("water_box_assignments.id"), nullable=False,
    )
    transfer_reason: Mapped[str] = mapped_column(Text, nullable=False)
    documents: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
