"""Pytest configuration and fixtures for lineage tests."""

import pytest

from lineage import Environment


@pytest.fixture
def env() -> Environment:
    """Create a basic Environment."""
    return Environment()


@pytest.fixture
def small_env() -> Environment:
    """Environment with a tight block budget for recursion tests."""
    return Environment(max_block_count=20)
