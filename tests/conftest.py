import os
import sys
from datetime import date

import numpy as np
import pytest

# Ensure project root is on sys.path before imports
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


# Define pytest markers for test categories
def pytest_configure(config):
    """
    Register custom markers to avoid pytest warnings.
    """
    config.addinivalue_line("markers", "unit: mark a test as a unit test")
    config.addinivalue_line("markers", "integration: mark a test as an integration test")
    config.addinivalue_line("markers", "slow: mark a test as a slow test")


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def make_config():
    """Build a raw scenario mapping with sensible defaults, overridable per test."""

    def _make(start=date(2024, 1, 1), end=date(2024, 12, 31), seed=123, **overrides):
        data = {
            "date_range": {"start": start, "end": end},
            "seed": seed,
            "rates": {
                "hire_rate": 0.3,
                "voluntary_termination_rate": 0.1,
                "involuntary_termination_rate": 0.05,
                "promotion_rate": 0.2,
            },
        }
        data.update(overrides)
        return data

    return _make
