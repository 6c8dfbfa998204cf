"""
Shared fixtures for the test suite.
"""

import matplotlib

matplotlib.use("Agg")

import pytest  # noqa: E402

from cdma_walsh_simulator.config_manager import reset_config  # noqa: E402
from cdma_walsh_simulator.error_handling import get_error_handler  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_workspace(tmp_path, monkeypatch):
    """Run each test in its own directory with a fresh global configuration."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CDMA_LOGGING__LEVEL", raising=False)
    reset_config()
    get_error_handler().clear_error_history()
    yield
    reset_config()
