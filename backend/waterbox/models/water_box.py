"""WaterBox ORM — persists a physical connection point and its current-assignment pointer.

Invariants:
    - id is an autoincrement integer primary key
    - status is ACTIVE or INACTIVE; rows are never hard-deleted
    - current_assignment_id, when set, names an ACTIVE assignment of this box
    - version is bumped by SQLAlchemy on every UPDATE (optimistic concurrency)

Design Decisions:
    - current_assignment_id carries no FOREIGN KEY: the pointer is a weak relation
      and a constraint would create a table cycle with water_box_assignments
    - version_id_col: two transactions re-pointing the same box cannot both commit;
      the loser gets StaleDataError, mapped to ConcurrencyError by the transaction helper
"""

from datetime import date, datetime, timezone

from sqlalchemy import Date, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from waterbox.core.domain_types import RecordStatus
from waterbox.db.base import Base


class WaterBox(Base):
    """Water box — owns the pointer to its current assignment."""
    __tablename__ = "water_boxes"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    organization_id: Mapped[str] = mapped_column(String(64), nullable=False)
    box_code: Mapped[str] = mapped_column(String(64), nullable=False)
    box_type: Mapped[str] = mapped_column(String(20), nullable=False)
    installation_date: Mapped[date] = mapped_column(Date, nullable=False)
    current_assignment_id: Mapped[int | None] = mapped_column(
        Integer, nullable=True, index=True,
    )
    status: Mapped[str] = mapped_column(
        String(10), nullable=False, default=RecordStatus.ACTIVE.value, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}
