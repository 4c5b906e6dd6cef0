"""
conftest.py - Shared pytest fixtures for share market tests

Provides common fixtures used across unit, functional and conformance tests:
- The default ladder and a shared game log
- Players with cash
- A corporation formed at $67 from a company worth 100
"""

import pytest

from sharemarket import GameLog, build_ladder

from tests.fakes import FakePlayer, form


@pytest.fixture
def ladder():
    return build_ladder()


@pytest.fixture
def log():
    return GameLog()


@pytest.fixture
def alice():
    return FakePlayer("alice", cash=500)


@pytest.fixture
def bob():
    return FakePlayer("bob", cash=200)


@pytest.fixture
def carol():
    return FakePlayer("carol", cash=300)


@pytest.fixture
def bear(alice, ladder, log):
    """
    Bear, formed by alice at $67 from BME (value 100).

    2 shares to alice, 2 to the bank, 6 unissued; treasury 168.
    """
    return form("Bear", alice, 100, 67, ladder, log, company_name="BME")
