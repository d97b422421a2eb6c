# conftest.py
"""
Pytest fixtures shared by the function-style tests.
"""
import pytest


@pytest.fixture
def factory():
    """The same user / chain / client factories the TestCase suites use."""
    from core.tests.test_base import BaseTestMixin

    return BaseTestMixin()


@pytest.fixture
def referral_chain(db, factory):
    """Four users, each referred by the previous one."""
    return factory.create_chain(4)
