"""Unit tests for Settings class and get_settings function."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from formlogic.config import get_settings, reload_settings
from formlogic.config.models import (
    DEFAULT_IMAGE_EXTENSIONS,
    LoggingConfig,
    RulesConfig,
)
from formlogic.config.settings import Settings


@pytest.fixture
def isolated_config(test_config_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point configuration loading at an empty temporary directory."""
    monkeypatch.setenv("FORMLOGIC_CONFIG_DIR", str(test_config_dir))
    monkeypatch.setenv("FORMLOGIC_ENV", "nonexistent")
    return test_config_dir


class TestSettings:
    """Tests for Settings model."""

    def test_default_values(self, isolated_config: Path) -> None:
        """Settings has sensible defaults."""
        settings = get_settings()
        assert settings.rules.warn_unknown is False
        assert settings.rules.image_extensions == DEFAULT_IMAGE_EXTENSIONS
        assert settings.expressions.log_failures is True

    def test_observability_defaults(self, isolated_config: Path) -> None:
        """Observability configuration has defaults."""
        settings = get_settings()
        assert settings.observability.logging.level == "INFO"
        assert settings.observability.logging.format == "json"
        assert settings.observability.logging.redact_values is True

    def test_init_overrides(self) -> None:
        """Constructor arguments take precedence."""
        settings = Settings(rules={"warn_unknown": True})
        assert settings.rules.warn_unknown is True


class TestConfigModels:
    """Tests for configuration section models."""

    def test_extensions_normalized(self) -> None:
        """Extensions are lowercased and lose leading dots."""
        config = RulesConfig(image_extensions=[".PNG", " jpg ", ""])
        assert config.image_extensions == ["png", "jpg"]

    def test_invalid_log_level(self) -> None:
        """Unknown log levels are rejected."""
        with pytest.raises(ValidationError):
            LoggingConfig(level="VERBOSE")

    def test_invalid_log_format(self) -> None:
        """Unknown log formats are rejected."""
        with pytest.raises(ValidationError):
            LoggingConfig(format="xml")


class TestGetSettings:
    """Tests for get_settings function."""

    def test_reads_toml(self, isolated_config: Path, mock_toml_files) -> None:
        """get_settings applies TOML values."""
        mock_toml_files({"default.toml": "[rules]\nimage_extensions = ['avif']"})

        settings = get_settings()
        assert isinstance(settings, Settings)
        assert settings.rules.image_extensions == ["avif"]

    def test_settings_cached(self, isolated_config: Path) -> None:
        """get_settings returns cached instance."""
        assert get_settings() is get_settings()

    def test_reload_settings_clears_cache(
        self, isolated_config: Path, mock_toml_files
    ) -> None:
        """reload_settings returns fresh instance."""
        mock_toml_files({"default.toml": "[rules]\nwarn_unknown = false"})
        assert get_settings().rules.warn_unknown is False

        mock_toml_files({"default.toml": "[rules]\nwarn_unknown = true"})
        assert reload_settings().rules.warn_unknown is True


class TestEnvironmentVariableOverrides:
    """Tests for environment variable configuration overrides."""

    def test_nested_override(
        self, isolated_config: Path, mock_toml_files, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Nested values can be overridden with double underscore."""
        mock_toml_files({"default.toml": "[rules]\nwarn_unknown = false"})
        monkeypatch.setenv("FORMLOGIC_RULES__WARN_UNKNOWN", "true")

        assert get_settings().rules.warn_unknown is True

    def test_deeply_nested_override(
        self, isolated_config: Path, mock_toml_files, env_override
    ) -> None:
        """Deeply nested values can be overridden."""
        mock_toml_files({"default.toml": "[observability.logging]\nlevel = 'INFO'"})

        with env_override({"FORMLOGIC_OBSERVABILITY__LOGGING__LEVEL": "DEBUG"}):
            assert get_settings().observability.logging.level == "DEBUG"
