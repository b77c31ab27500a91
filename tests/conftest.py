"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import random
import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import get_settings  # noqa: E402
from src.quizbank import QuestionBank, QuestionIdCounter  # noqa: E402


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "slow: Slow tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached; drop the cache so env overrides apply per test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def id_counter():
    """A counter starting at 0, independent of other tests."""
    return QuestionIdCounter()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def bank(rng):
    """An empty bank with a seeded RNG."""
    return QuestionBank(rng=rng)


@pytest.fixture
def capital_bank(bank):
    """A bank holding one question of each type."""
    bank.add_single_answer(
        "What is the capital of France?",
        None,
        "Paris",
        ["London", "Berlin"],
        "Paris has been the capital since 987.",
        10,
    )
    bank.add_multiple_answers(
        "Which letters are vowels?",
        None,
        ["A", "E"],
        ["B"],
        None,
        1,
    )
    bank.add_no_answer("Read the following passage carefully.", "<img src='map.png'>", None)
    return bank
