"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
For standard test utilities, see tests/__init__.py
"""

import pytest


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "db: marks tests as requiring database (deselect with '-m \"not db\"')"
    )


@pytest.fixture
def db_session():
    """Function-scoped session on a fresh in-memory SQLite database."""
    from tests import create_test_session

    session = create_test_session()
    try:
        yield session
    finally:
        session.close()
