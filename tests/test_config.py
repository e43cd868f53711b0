"""
Unit tests for configuration loading.
"""

import pytest
from pydantic import ValidationError

from utils.config import Config


class TestConfig:
    """Tests for Config validation."""

    def test_env_aliases(self, monkeypatch):
        monkeypatch.setenv("BRAND_NAME", "LoomCheck")
        monkeypatch.setenv("EXTRA_KNOWN_SECTIONS", "Packing, Washing ,")

        settings = Config()

        assert settings.brand_name == "LoomCheck"
        assert settings.extra_known_sections_list == ["Packing", "Washing"]

    def test_log_level_normalized(self):
        assert Config(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Config(log_level="verbose")

    def test_environment(self):
        settings = Config(environment="Production")

        assert settings.environment == "production"
        assert settings.is_production

    def test_label_budget_too_small(self):
        with pytest.raises(ValidationError):
            Config(description_max_chars=2)

    def test_report_dir_created(self, tmp_path):
        settings = Config(report_dir=str(tmp_path / "out"))

        assert settings.get_report_dir().is_dir()
