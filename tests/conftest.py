"""Pytest configuration for test environment setup.

- Forces ``DISABLE_FILE_LOGS=1`` to avoid writing log files during tests.
- Ensures the project root is available on ``sys.path`` for imports.
- Provides an ``airtable_env`` fixture with isolated Airtable settings.
"""

import os
import signal
import sys
from pathlib import Path

import pytest

os.environ.setdefault("DISABLE_FILE_LOGS", "1")  # Avoid creating log files during tests

# Ensure project root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

_TEST_TIMEOUT = int(os.environ.get("PYTEST_TEST_TIMEOUT", "10"))


def _timeout_handler(signum, frame):
    """Test Timeout handler."""
    raise TimeoutError(f"Test exceeded {_TEST_TIMEOUT} seconds timeout")


def pytest_runtest_setup(item):
    """Arm a per-test alarm where the platform supports SIGALRM."""
    if hasattr(signal, "SIGALRM"):
        signal.signal(signal.SIGALRM, _timeout_handler)
        signal.alarm(_TEST_TIMEOUT)


def pytest_runtest_teardown(item, nextitem):
    """Disarm the per-test alarm."""
    if hasattr(signal, "SIGALRM"):
        signal.alarm(0)


@pytest.fixture
def airtable_env(monkeypatch, tmp_path):
    """Set the required Airtable variables and keep the real ``.env`` out of reach."""
    import src.config as project_config

    monkeypatch.setattr(project_config, "PROJECT_ROOT", tmp_path)
    monkeypatch.setenv("AIRTABLE_PAT", "pat-test")
    monkeypatch.setenv("AIRTABLE_BASE_ID", "appTEST")
    for key in (
        "AIRTABLE_FORM_PAT",
        "AIRTABLE_API_URL",
        "AIRTABLE_CONTENT_URL",
        "AIRTABLE_REQUESTS_PER_SECOND",
        "REQUEST_TIMEOUT",
        "MAX_CONCURRENT_DOWNLOADS",
    ):
        monkeypatch.delenv(key, raising=False)
    return tmp_path
