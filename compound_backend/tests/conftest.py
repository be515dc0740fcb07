from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from compound_backend.app import create_app
from compound_backend.config import Settings
from compound_backend.core.projection import FinancialParameters


@pytest.fixture()
def settings() -> Settings:
    return Settings(LOG_LEVEL="WARNING", RATE_SWEEP_STEP=0.5, DEFAULT_VARIANCE_RANGE=2.0)


@pytest.fixture()
def client(settings: Settings) -> FlaskClient:
    app = create_app(settings)
    app.config["TESTING"] = True
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture()
def base_params() -> FinancialParameters:
    """The calculator's default plan: 10k up front, 500 a month, 7% compounded monthly for 10 years."""
    return FinancialParameters(
        initial_principal=10000,
        monthly_contribution=500,
        annual_rate_percent=7,
        compounds_per_year=12,
        years=10,
    )
