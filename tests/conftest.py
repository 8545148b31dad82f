"""
Pytest configuration and shared fixtures.
"""
from contextlib import asynccontextmanager
from decimal import Decimal
from typing import Any, Dict, List

import pytest
from fastapi.testclient import TestClient

from jobly.core.database import get_db
from jobly.core.rate_limit import limiter
from jobly.core.security import create_access_token, create_admin_token
from jobly.main import app


class FakeDatabase:
    """
    Stands in for ``jobly.core.database.Database``.

    Each ``query`` call is recorded as ``(sql, params)`` with whitespace in
    the SQL collapsed, and answered with the next scripted result (a list of
    rows). Once the script runs out every query returns no rows.
    """

    def __init__(self, *results: List[Dict[str, Any]]):
        self.results = list(results)
        self.calls: List[tuple] = []
        self.transactions = 0

    def script(self, *results: List[Dict[str, Any]]) -> "FakeDatabase":
        self.results.extend(results)
        return self

    async def query(self, sql: str, params=()) -> List[Dict[str, Any]]:
        self.calls.append((" ".join(sql.split()), list(params)))
        if not self.results:
            return []
        return [dict(row) for row in self.results.pop(0)]

    @asynccontextmanager
    async def transaction(self):
        self.transactions += 1
        yield self

    @property
    def sql(self) -> List[str]:
        return [sql for sql, _ in self.calls]

    @property
    def params(self) -> List[list]:
        return [params for _, params in self.calls]


@pytest.fixture
def fake_db() -> FakeDatabase:
    """Scripted database double; add results with ``fake_db.script(...)``."""
    return FakeDatabase()


@pytest.fixture
def client(fake_db):
    """TestClient whose requests all run against ``fake_db``."""
    app.dependency_overrides[get_db] = lambda: fake_db
    limiter.reset()
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_token() -> str:
    return create_admin_token()


@pytest.fixture
def user_token() -> str:
    return create_access_token({"sub": "u1", "is_admin": False})


@pytest.fixture
def admin_headers(admin_token) -> Dict[str, str]:
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def user_headers(user_token) -> Dict[str, str]:
    return {"Authorization": f"Bearer {user_token}"}


@pytest.fixture
def company_row() -> Dict[str, Any]:
    """A company as the database returns it (column aliases applied)."""
    return {
        "handle": "c1",
        "name": "C1",
        "description": "Desc1",
        "numEmployees": 1,
        "logoUrl": "http://c1.img",
    }


@pytest.fixture
def job_row() -> Dict[str, Any]:
    """A job as the database returns it: equity is still a Decimal."""
    return {
        "id": 7,
        "title": "Job1",
        "salary": 100,
        "equity": Decimal("0.1"),
        "companyHandle": "c1",
    }
