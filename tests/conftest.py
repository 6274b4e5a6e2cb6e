"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- A fake storage connection that records SQL and replays rows
- FastAPI test client wired to the fake connection
- A real PostgreSQL connection (only when TEST_DATABASE_URL is set)
"""
import os
from collections import deque
from decimal import Decimal

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine

from jobly.core.database import Base, get_db
from jobly.main import app
from jobly.repositories.company_repository import CompanyRepository
from jobly.repositories.job_repository import JobRepository
import jobly.models  # noqa: F401  (registers tables on Base.metadata)

TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL")


class FakeResult:
    """Just enough of a SQLAlchemy result for ``.mappings().all()``."""

    def __init__(self, rows):
        self._rows = rows

    def mappings(self):
        return self

    def all(self):
        return list(self._rows)


class FakeConnection:
    """
    Stands in for ``AsyncConnection``.

    Every statement is recorded as ``(sql, params)``; each call pops the
    next queued row list, or returns no rows when the queue is empty.
    A queued exception is raised instead.
    """

    def __init__(self):
        self.calls = []
        self._responses = deque()

    def queue(self, *row_sets):
        self._responses.extend(row_sets)

    async def exec_driver_sql(self, sql, params=None):
        self.calls.append((sql, params))
        rows = self._responses.popleft() if self._responses else []
        if isinstance(rows, Exception):
            raise rows
        return FakeResult(rows)

    @property
    def statements(self):
        return [sql for sql, _ in self.calls]


C1 = {
    "handle": "c1",
    "name": "C1",
    "description": "Desc1",
    "numEmployees": 1,
    "logoUrl": "http://c1.img",
}
C2 = {
    "handle": "c2",
    "name": "C2",
    "description": "Desc2",
    "numEmployees": 2,
    "logoUrl": "http://c2.img",
}
C3 = {
    "handle": "c3",
    "name": "C3",
    "description": "Desc3",
    "numEmployees": 3,
    "logoUrl": "http://c3.img",
}

# Rows as the driver returns them (NUMERIC comes back as Decimal)
J1_ROW = {"id": 1, "title": "j1", "salary": 100000, "equity": Decimal("0"), "companyHandle": "c1"}
J2_ROW = {"id": 2, "title": "j2", "salary": 200000, "equity": Decimal("0.1"), "companyHandle": "c2"}
J3_ROW = {"id": 3, "title": "j3", "salary": 300000, "equity": Decimal("0.2"), "companyHandle": "c3"}

J1 = {**J1_ROW, "equity": "0"}
J2 = {**J2_ROW, "equity": "0.1"}
J3 = {**J3_ROW, "equity": "0.2"}


@pytest.fixture
def fake_db():
    return FakeConnection()


@pytest.fixture
def company_repo():
    return CompanyRepository()


@pytest.fixture
def job_repo():
    return JobRepository()


@pytest.fixture
def client(fake_db):
    """
    FastAPI test client with the database dependency overridden.

    Lifespan is not run, so no real database is contacted.
    """
    async def override_get_db():
        yield fake_db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def pg_db():
    """
    Connection to a freshly created PostgreSQL schema seeded with
    companies c1-c3 and jobs j1-j3 (ids 1-3).

    Everything runs in one transaction that is rolled back afterwards.
    """
    if not TEST_DATABASE_URL:
        pytest.skip("TEST_DATABASE_URL not set")

    engine = create_async_engine(TEST_DATABASE_URL)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    companies = CompanyRepository()
    jobs = JobRepository()

    async with engine.connect() as conn:
        trans = await conn.begin()
        for company in (C1, C2, C3):
            await companies.create(conn, company)
        await jobs.create(conn, {"title": "j1", "salary": 100000, "equity": 0, "companyHandle": "c1"})
        await jobs.create(conn, {"title": "j2", "salary": 200000, "equity": 0.1, "companyHandle": "c2"})
        await jobs.create(conn, {"title": "j3", "salary": 300000, "equity": 0.2, "companyHandle": "c3"})
        try:
            yield conn
        finally:
            await trans.rollback()

    await engine.dispose()
