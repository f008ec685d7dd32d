# tests/conftest.py

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import insert

from biztime.db.engine import create_db_engine
from biztime.db.schema import companies, industries, metadata
from biztime.main import create_app


@pytest.fixture()
def engine(tmp_path):
    """A fresh SQLite database with the BizTime schema, one per test."""
    engine = create_db_engine(f"sqlite:///{tmp_path / 'biztime_test.sqlite'}")
    metadata.create_all(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture()
def client(engine):
    app = create_app(engine)
    with TestClient(app) as client:
        yield client


@pytest.fixture()
def company(engine) -> dict:
    row = {"code": "testcode", "name": "Test Company", "description": "Test description"}
    with engine.begin() as conn:
        conn.execute(insert(companies).values(**row))
    return row


@pytest.fixture()
def industry(engine) -> dict:
    row = {"code": "technology", "industry": "Technology"}
    with engine.begin() as conn:
        conn.execute(insert(industries).values(**row))
    return row
