"""Shared fixtures for the fieldtrace test suite."""

import pytest

from fieldtrace import Composite, PointCharge, configure, reset_config


@pytest.fixture(autouse=True)
def clean_config():
    """Every test starts from the default package configuration, without progress output."""
    reset_config()
    configure(show_progress=False)
    yield
    reset_config()


@pytest.fixture
def single_charge():
    """Point charge +50 at the origin."""
    return PointCharge(charge=50.0, pos=(0.0, 0.0))


@pytest.fixture
def charge_pair():
    """+50 at (0, 50) and -50 at (0, -50)."""
    return Composite([
        PointCharge(charge=50.0, pos=(0.0, 50.0)),
        PointCharge(charge=-50.0, pos=(0.0, -50.0)),
    ])
