"""
Pytest configuration for dateonly tests.

This file adds the project root to the Python path so that tests can import
the dateonly package without installing it.
"""

import sys
from pathlib import Path

import pytest

# Add the project root directory to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


@pytest.fixture(autouse=True)
def _no_configured_local_zone(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's .env / shell zone setting out of the tests."""

    monkeypatch.delenv("DATEONLY_LOCAL_TIMEZONE", raising=False)
