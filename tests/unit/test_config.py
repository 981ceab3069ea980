"""Tests for packager settings."""

import pytest
from pydantic import ValidationError

from core.config import PackagerSettings


class TestPackagerSettings:
    """Test settings defaults and environment overrides."""

    def test_defaults(self, monkeypatch):
        for name in ("LOG_LEVEL", "LOG_FORMAT", "DEFAULT_DEPTH"):
            monkeypatch.delenv(f"PNPM_PACKAGER_{name}", raising=False)

        settings = PackagerSettings(_env_file=None)

        assert settings.log_level == "WARNING"
        assert settings.log_format == "console"
        assert settings.default_depth == 1

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("PNPM_PACKAGER_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("PNPM_PACKAGER_LOG_FORMAT", "json")
        monkeypatch.setenv("PNPM_PACKAGER_DEFAULT_DEPTH", "3")

        settings = PackagerSettings(_env_file=None)

        assert settings.log_level == "DEBUG"
        assert settings.log_format == "json"
        assert settings.default_depth == 3

    def test_depth_must_be_positive(self, monkeypatch):
        monkeypatch.setenv("PNPM_PACKAGER_DEFAULT_DEPTH", "0")

        with pytest.raises(ValidationError):
            PackagerSettings(_env_file=None)
