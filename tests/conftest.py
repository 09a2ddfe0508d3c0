"""Pytest configuration and shared fixtures for PayoffSage tests.

Provides an isolated SQLite database per test, repositories bound to it, and
factories for debts, so services and the CLI can be exercised without
touching a real data directory.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

import pytest
from sqlmodel import SQLModel, create_engine

from payoffsage.infra.database import create_session_factory
from payoffsage.infra.repositories import SQLModelDebtRepository, SQLModelPreferenceRepository
from payoffsage.models import Debt


@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path, monkeypatch):
    """Keep BaseConfig() from creating ./instance while tests run."""

    data_dir = tmp_path / "data"
    monkeypatch.setenv("PAYOFFSAGE_DATA_DIR", str(data_dir))
    monkeypatch.delenv("PAYOFFSAGE_DATABASE_URL", raising=False)
    monkeypatch.delenv("PAYOFFSAGE_DEFAULT_STRATEGY", raising=False)
    monkeypatch.delenv("PAYOFFSAGE_LOG_LEVEL", raising=False)
    return data_dir


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine with all tables created
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching the one the application wires up."""

    return create_session_factory(db_engine)


@pytest.fixture
def debt_repo(session_factory) -> SQLModelDebtRepository:
    return SQLModelDebtRepository(session_factory)


@pytest.fixture
def preference_repo(session_factory) -> SQLModelPreferenceRepository:
    return SQLModelPreferenceRepository(session_factory)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def make_debt():
    """Factory for unsaved debts (engine input).

    Returns:
        Callable: Function that builds Debt instances with explicit IDs
    """
    counter = {"next_id": 1}

    def _make_debt(
        name: str = "Test Debt",
        balance: float = 1000.0,
        interest_rate: float = 18.0,
        minimum_payment: float = 50.0,
        debt_id: int | None = None,
    ) -> Debt:
        if debt_id is None:
            debt_id = counter["next_id"]
        counter["next_id"] = max(counter["next_id"], debt_id) + 1
        return Debt(
            id=debt_id,
            name=name,
            balance=balance,
            interest_rate=interest_rate,
            minimum_payment=minimum_payment,
        )

    return _make_debt


@pytest.fixture
def debt_factory(debt_repo):
    """Factory for persisted debts.

    Returns:
        Callable: Function that saves Debt instances through the repository
    """

    def _create_debt(
        name: str = "Test Debt",
        balance: float = 1000.0,
        interest_rate: float = 18.0,
        minimum_payment: float = 50.0,
        debt_type: str = "Credit Card",
    ) -> Debt:
        debt = Debt(
            name=name,
            balance=balance,
            interest_rate=interest_rate,
            minimum_payment=minimum_payment,
            debt_type=debt_type,
        )
        return debt_repo.save(debt)

    return _create_debt


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by setup_logging so streams don't leak between tests."""

    yield
    logger = logging.getLogger("payoffsage")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
