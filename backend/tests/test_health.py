# backend/tests/test_health.py
from contextlib import asynccontextmanager

import psycopg
import pytest
from fastapi.testclient import TestClient

from portfolio_contact.dependencies import get_store
from portfolio_contact.main import app, check_store

client = TestClient(app)


class ProbeCursor:
    def __init__(self, fail=False):
        self.fail = fail
        self.executed = []

    async def execute(self, sql, params=None):
        if self.fail:
            raise psycopg.OperationalError("could not connect to server")
        self.executed.append(sql)

    async def fetchone(self):
        return ("contact", "contact_user", "PostgreSQL 16.2")


class ProbeStore:
    pool = object()

    def __init__(self, has_table=True):
        self.has_table = has_table

    async def table_exists(self):
        return self.has_table


def make_db_conn(cursor):
    @asynccontextmanager
    async def _ctx(pool):
        yield None, cursor

    return _ctx


def test_health():
    """Basic health endpoint reports the API is up."""
    resp = client.get("/api/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "OK"
    assert data["message"] == "Contact API is running"
    assert "timestamp" in data


def test_health_db(monkeypatch):
    """DB health returns server info and table presence (DB patched)."""
    monkeypatch.setattr("portfolio_contact.routers.health.db_conn", make_db_conn(ProbeCursor()))
    app.dependency_overrides[get_store] = lambda: ProbeStore(has_table=False)
    try:
        resp = client.get("/api/health/db")
    finally:
        app.dependency_overrides.clear()

    assert resp.status_code == 200
    data = resp.json()
    assert data["ok"] is True
    assert data["database"] == "contact"
    assert data["user"] == "contact_user"
    assert data["server_version"] == "PostgreSQL 16.2"
    assert data["tables"] == {"contact_submissions": False}


def test_health_db_unreachable(monkeypatch):
    monkeypatch.setattr("portfolio_contact.routers.health.db_conn", make_db_conn(ProbeCursor(fail=True)))
    app.dependency_overrides[get_store] = lambda: ProbeStore()
    try:
        resp = client.get("/api/health/db")
    finally:
        app.dependency_overrides.clear()

    assert resp.status_code == 503
    assert resp.json()["ok"] is False



class UnreachableStore:
    async def table_exists(self):
        raise psycopg.OperationalError("connection refused")


@pytest.mark.asyncio
async def test_startup_check_reports_table_presence():
    assert await check_store(ProbeStore(has_table=True)) is True
    assert await check_store(ProbeStore(has_table=False)) is False


@pytest.mark.asyncio
async def test_startup_check_survives_unreachable_database():
    assert await check_store(UnreachableStore()) is False
