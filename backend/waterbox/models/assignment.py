"""Assignment ORM — a time-bounded link between a water box and an end user.

Invariants:
    - Always references one water box (water_box_id FK)
    - end_date is set on retirement and cleared on restore
    - transfer_id is set only when a transfer retired the assignment
    - version is bumped on every UPDATE; a transfer re-checks it on the successor
      so a concurrent retire or move of that row aborts the transfer

Design Decisions:
    - user_id is an opaque string: users live in the identity provider, not here
    - transfer_id has no FOREIGN KEY: weak audit back-reference, avoids a cycle
      with water_box_transfers.old_assignment_id
    - Numeric(10, 2) for monthly_fee: money never goes through float
"""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from waterbox.core.domain_types import RecordStatus
from waterbox.db.base import Base


class Assignment(Base):
    """Assignment entity — who occupies a water box and for what fee."""
    __tablename__ = "water_box_assignments"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    water_box_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("water_boxes.id"), nullable=False, index=True,
    )
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    start_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    end_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    monthly_fee: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(10), nullable=False, default=RecordStatus.ACTIVE.value, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    transfer_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}
