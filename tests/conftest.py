"""
Pytest configuration and shared fixtures for the salary calculator tests.
"""

import os
from unittest.mock import patch

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from paycalc import create_app
from paycalc.config import Settings
from paycalc.database.base import Base, reset_engine
from paycalc.models import SalaryInput, SalaryStructure
from paycalc.services.record_service import RecordService


@pytest.fixture
def settings():
    """Settings for the testing environment, isolated from the host env."""
    env = {
        "SECRET_KEY": "test-secret-key-123",
        "APP_ENV": "testing",
        "DB_URL": "sqlite://",
        "SHARE_BASE_URL": "https://example.test/",
    }
    with patch.dict(os.environ, env, clear=True):
        return Settings(_env_file=None)


@pytest.fixture(scope="function")
def db_engine():
    """Create an in-memory SQLite database with all tables."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture
def record_service(session_factory):
    return RecordService(
        session_factory=session_factory, share_base_url="https://example.test"
    )


@pytest.fixture
def app(settings, record_service, monkeypatch):
    """Flask app whose record endpoints use the in-memory database."""
    monkeypatch.setattr(
        "paycalc.blueprints.records._service", lambda: record_service
    )
    yield create_app(settings)
    reset_engine()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def beijing_input():
    """Beijing, 10000 per month over 15 months, 12% housing fund."""
    return SalaryInput(
        monthly_base=10000,
        total_months=15,
        housing_fund_rate=12,
        additional_deduction=0,
        bonus_tax_mode="auto",
        city="beijing",
    )


@pytest.fixture
def standard_structure():
    """Fully official Beijing structure matching ``beijing_input``."""
    return SalaryStructure(
        city="beijing",
        monthly_base=10000,
        months=15,
        social_insurance_base_type="full",
        housing_fund_base_type="full",
        housing_fund_rate=12,
    )
