"""
Tests for the diagnosis_results bootstrap script.
"""

import pytest
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.pool import StaticPool

from app.scripts.startup_bootstrap import bootstrap


@pytest.fixture
def empty_engine():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    yield engine
    engine.dispose()


def test_bootstrap_creates_missing_table(empty_engine):
    assert bootstrap(empty_engine) is True
    assert inspect(empty_engine).has_table("diagnosis_results")


def test_bootstrap_is_idempotent(empty_engine):
    bootstrap(empty_engine)
    assert bootstrap(empty_engine) is False


def test_bootstrap_rejects_incomplete_schema(empty_engine):
    with empty_engine.begin() as conn:
        conn.execute(text("CREATE TABLE diagnosis_results (id INTEGER PRIMARY KEY)"))

    with pytest.raises(RuntimeError, match="missing columns"):
        bootstrap(empty_engine)
