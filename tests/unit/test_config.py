"""Tests for configuration loading."""

from pathlib import Path

import pytest

from care_ledger.core.config import Constants, Settings


@pytest.mark.unit
class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, isolated_env):
        """Without environment overrides, the ledger lives in ~/.care_ledger."""
        settings = Settings()

        assert settings.data_dir == Path.home() / ".care_ledger"
        assert settings.storage_key == "CareEntries"
        assert settings.logfire_token is None
        assert settings.log_level == "INFO"

    def test_environment_overrides(self, isolated_env, monkeypatch):
        """Settings are read from environment variables, case-insensitively."""
        monkeypatch.setenv("DATA_DIR", str(isolated_env / "elsewhere"))
        monkeypatch.setenv("storage_key", "TestEntries")

        settings = Settings()

        assert settings.data_dir == isolated_env / "elsewhere"
        assert settings.storage_key == "TestEntries"

    def test_dotenv_file(self, isolated_env):
        """A .env file in the working directory is honoured."""
        (isolated_env / ".env").write_text("STORAGE_KEY=FromDotenv\nUNRELATED=ignored\n", encoding="utf-8")

        assert Settings().storage_key == "FromDotenv"

    def test_resolved_data_dir_expands_home(self, isolated_env):
        """~ is expanded and the path made absolute."""
        settings = Settings(data_dir=Path("~/ledger"))

        assert settings.resolved_data_dir() == (Path.home() / "ledger").resolve()


@pytest.mark.unit
class TestConstants:
    """Tests for domain bounds."""

    def test_bounds_match_entry_form(self):
        """Bounds are the slider and stepper limits of the entry form."""
        assert (Constants.MIN_EMOTIONAL_WEIGHT, Constants.MAX_EMOTIONAL_WEIGHT) == (1, 5)
        assert (Constants.MIN_TIME_SPENT_MINUTES, Constants.MAX_TIME_SPENT_MINUTES) == (5, 300)
        assert Constants.MIN_EMOTIONAL_WEIGHT <= Constants.DEFAULT_EMOTIONAL_WEIGHT <= Constants.MAX_EMOTIONAL_WEIGHT
