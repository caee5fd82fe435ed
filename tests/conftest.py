import os
import sys

import pytest

# Ensure project root is on sys.path before imports
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from comp_rollup.config.models import BudgetSettings  # noqa: E402
from comp_rollup.state.employee import Employee  # noqa: E402
from comp_rollup.state.roster import Roster  # noqa: E402


# Define pytest markers for test categories
def pytest_configure(config):
    """
    Register custom markers to avoid pytest warnings.
    """
    config.addinivalue_line("markers", "unit: mark a test as a unit test")
    config.addinivalue_line("markers", "integration: mark a test as an integration test")
    config.addinivalue_line("markers", "engines: mark a test as an engines test")
    config.addinivalue_line("markers", "state: mark a test as a state test")
    config.addinivalue_line("markers", "reporting: mark a test as a reporting test")
    config.addinivalue_line("markers", "config: mark a test as a config test")
    config.addinivalue_line("markers", "storage: mark a test as a storage test")


@pytest.fixture
def default_settings():
    return BudgetSettings()


@pytest.fixture
def sample_roster():
    """Three employees across two levels and two currencies, already resolved."""
    settings = BudgetSettings()
    roster = Roster()
    roster.add(
        Employee(
            name="Ada",
            currency="USD",
            current_level="P3",
            current_base_salary=100000,
            merit_percent=4.0,
            current_stock=20000,
            proposed_stock=25000,
        ),
        settings,
    )
    roster.add(
        Employee(
            name="Grace",
            currency="GBP",
            current_level="P3",
            next_level="P4",
            current_base_salary=80000,
            merit_percent=3.0,
            promotion_percent=7.0,
            has_promotion=True,
            current_level_midpoint=85000,
            next_level_midpoint=100000,
        ),
        settings,
    )
    roster.add(
        Employee(
            name="Linus",
            currency="EUR",
            current_level="M2",
            current_base_salary=120000,
            merit_percent=2.0,
        ),
        settings,
    )
    return roster
