"""Service test fixtures — async DB, FastAPI test client and caller identities.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB sessions
    - db_manager patched so the readiness probe sees the test engine
    - Identity travels as gateway headers, exactly as in production

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for lifecycle
      and transfer tests (PostgreSQL-specific features not exercised here)
    - aiosqlite :memory: engines share one connection, so several sessions
      opened from test_session_factory see the same data
    - Seed helpers go through the services, not raw inserts, so the
      box pointer is always set the way production sets it
"""

from datetime import date, datetime
from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from waterbox.core.caller_context import build_caller_context
from waterbox.core.domain_types import BoxType
from waterbox.db.base import Base
from waterbox.infrastructure.database import get_db, DatabaseSessionManager
import waterbox.infrastructure.database as db_module
from waterbox.main import app
from waterbox.schemas.assignment import AssignmentRequest
from waterbox.schemas.water_box import WaterBoxRequest
from waterbox.services.assignment_lifecycle import AssignmentLifecycle
from waterbox.services.box_lifecycle import BoxLifecycle

ADMIN_HEADERS = {
    "X-User-Id": "admin-1", "X-Username": "admin", "X-User-Roles": "ADMIN",
}
CLIENT_HEADERS = {
    "X-User-Id": "client-1", "X-Username": "client", "X-User-Roles": "CLIENT",
}


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def admin_headers():
    return dict(ADMIN_HEADERS)


@pytest.fixture
def client_headers():
    return dict(CLIENT_HEADERS)


@pytest.fixture
def caller():
    """Write-capable caller for service-level tests."""
    return build_caller_context("admin-1", "admin", "ADMIN")


def box_request(code: str = "WB-001", **overrides) -> WaterBoxRequest:
    fields = {
        "organization_id": "org-1",
        "box_code": code,
        "box_type": BoxType.CANO,
        "installation_date": date(2023, 5, 10),
    }
    fields.update(overrides)
    return WaterBoxRequest(**fields)


def assignment_request(
    box_id: int, user_id: str = "user-a", start: str = "2024-01-01T00:00:00",
    fee: str = "15.50",
) -> AssignmentRequest:
    return AssignmentRequest(
        water_box_id=box_id,
        user_id=user_id,
        start_date=datetime.fromisoformat(start),
        monthly_fee=Decimal(fee),
    )


@pytest.fixture
def seed(test_session_factory, caller):
    """Factory fixture: create boxes/assignments through the services.

    Each call runs in its own session and returns plain ids so tests never
    share identity-map state with the seeding step.
    """

    class _Seed:
        async def box(self, code: str = "WB-001") -> int:
            async with test_session_factory() as db:
                box = await BoxLifecycle(db, caller).create(box_request(code))
                return box.id

        async def assignment(self, box_id: int, **kw) -> int:
            async with test_session_factory() as db:
                assignment = await AssignmentLifecycle(db, caller).create(
                    assignment_request(box_id, **kw),
                )
                return assignment.id

    return _Seed()


@pytest.fixture
def box_body():
    """Factory for WaterBoxRequest bodies."""
    return box_request


@pytest.fixture
def assignment_body():
    """Factory for AssignmentRequest bodies."""
    return assignment_request
