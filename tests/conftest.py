"""Module to setup fixtures and other required artifacts for tests

    isort:skip_file
"""

from datetime import UTC, datetime

import pytest


@pytest.fixture
def catalog():
    from recordkit import Catalog

    return Catalog("Test")


@pytest.fixture
def frozen_year(monkeypatch):
    """Freeze the clock used by computed ages and year validators to 2026"""
    monkeypatch.setattr(
        "recordkit.utils.utcnow_func", lambda: datetime(2026, 10, 17, tzinfo=UTC)
    )
    return 2026
