"""Shared test fixtures — in-memory database, app client, seed helpers.

Every test gets fresh tables on a single shared SQLite connection
(aiosqlite + StaticPool), so the ``db`` fixture and the app's own
request sessions see the same data once ``db`` has committed.
"""

from __future__ import annotations

import os

# Settings are read at import time; point them at SQLite first
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("ENVIRONMENT", "test")

import uuid
from datetime import date, datetime, timezone
from typing import AsyncGenerator, Optional

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.pool import StaticPool

from employee_portal import database
from employee_portal.common.rate_limit import limiter
from employee_portal.core_hr.models import Branch, Employee
from employee_portal.main import create_app

# Every mapped table must be registered before create_all
import employee_portal.attendance.models  # noqa: F401
import employee_portal.leave.models  # noqa: F401
import employee_portal.notifications.models  # noqa: F401
import employee_portal.payroll.models  # noqa: F401
import employee_portal.performance.models  # noqa: F401


@compiles(PG_UUID, "sqlite")
def _uuid_sqlite(element, compiler, **kw):
    return "CHAR(36)"


engine = create_async_engine(
    "sqlite+aiosqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionFactory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture(autouse=True)
async def _fresh_schema():
    """Empty tables and rate-limit counters for every test."""
    limiter.reset()
    async with engine.begin() as conn:
        await conn.run_sync(database.Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(database.Base.metadata.drop_all)


# ── App and HTTP client ─────────────────────────────────────────────

@pytest.fixture
async def client(monkeypatch) -> AsyncGenerator[AsyncClient, None]:
    """Client for a fresh app whose ``get_db`` opens sessions on the test engine."""
    monkeypatch.setattr(database, "async_session_factory", TestSessionFactory)
    async with AsyncClient(
        transport=ASGITransport(app=create_app()),
        base_url="http://test",
    ) as ac:
        yield ac


# ── Direct session ──────────────────────────────────────────────────

@pytest.fixture
async def db() -> AsyncGenerator[AsyncSession, None]:
    async with TestSessionFactory() as session:
        yield session
        await session.commit()


# ── Seed helpers ────────────────────────────────────────────────────

async def seed_branch(db: AsyncSession, *, name: str = "Pune Plant", city: str = "Pune") -> Branch:
    branch = Branch(
        id=uuid.uuid4(),
        code=f"BR-{uuid.uuid4().hex[:6].upper()}",
        name=name,
        city=city,
        is_active=True,
    )
    db.add(branch)
    await db.flush()
    return branch


async def seed_employee(
    db: AsyncSession,
    *,
    department: str = "Engineering",
    branch_id: Optional[uuid.UUID] = None,
    first_name: str = "Test",
    last_name: str = "User",
    manager_id: Optional[uuid.UUID] = None,
) -> Employee:
    """Insert an active employee, creating a branch when none is given."""
    if branch_id is None:
        branch_id = (await seed_branch(db)).id

    now = datetime.now(timezone.utc)
    emp = Employee(
        id=uuid.uuid4(),
        employee_code=f"EMP-{uuid.uuid4().hex[:6].upper()}",
        first_name=first_name,
        last_name=last_name,
        email=f"{first_name}.{last_name}@example.com".lower(),
        designation="Engineer",
        department=department,
        branch_id=branch_id,
        manager_id=manager_id,
        date_of_joining=date(2022, 4, 1),
        is_active=True,
        created_at=now,
        updated_at=now,
    )
    db.add(emp)
    await db.flush()
    return emp


@pytest.fixture
def fixed_today(monkeypatch):
    """Pin the business "today" used by the leave and dashboard services."""

    def _pin(day: date) -> date:
        monkeypatch.setattr("employee_portal.common.clock.today", lambda: day)
        return day

    return _pin
