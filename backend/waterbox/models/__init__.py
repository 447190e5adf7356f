"""ORM Models — SQLAlchemy declarative models for boxes, assignments and transfers.

Invariants:
    - All models inherit from Base (db/base.py)
    - WaterBox is the aggregate root: every pointer change goes through its version check

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all
      or alembic autogenerate runs
"""

from waterbox.models.water_box import WaterBox  # noqa: F401
from waterbox.models.assignment import Assignment  # noqa: F401
from waterbox.models.transfer import Transfer  # noqa: F401
