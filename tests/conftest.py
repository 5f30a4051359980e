"""Pytest configuration and shared fixtures."""

import logging
from pathlib import Path

import pytest

from care_ledger.core.config import Settings


logger = logging.getLogger(__name__)


@pytest.fixture
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Run from an empty directory with no ledger-related environment variables set."""
    for name in ("DATA_DIR", "STORAGE_KEY", "LOGFIRE_TOKEN", "ENVIRONMENT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def test_settings(isolated_env: Path) -> Settings:
    """Settings pointing at a throwaway data directory."""
    return Settings(data_dir=isolated_env / "ledger", storage_key="CareEntries")
