"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Every test runs against a throwaway home directory with no ARKY_* variables
set, so the real ~/.arky/config.json is never read or written.
"""

from pathlib import Path

import logging

import pytest

from arky.core import logging as logging_module

ARKY_ENV_VARS = ("ARKY_BASE_URL", "ARKY_BUSINESS_ID", "ARKY_TOKEN", "ARKY_FORMAT")


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point Path.home() at a temporary directory and clear ARKY_* env vars."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setattr(Path, "home", lambda: home)
    for name in ARKY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return home


@pytest.fixture(autouse=True)
def _reset_logging_config():
    """Reload logging.yaml for every test and drop handlers the test installed."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    logging_module._logging_config = None
    yield
    logging_module._logging_config = None
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)
