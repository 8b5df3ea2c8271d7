# ABOUTME: Unit tests for environment settings, ApplicationConfig and logging setup
# ABOUTME: Tests defaults, case-insensitive validation, derived error output and sink configuration

import pytest
from loguru import logger
from pydantic import ValidationError

from onion.config import (
    ApplicationConfig,
    LoggerConfig,
    LoggingSettings,
    OnionSettings,
    get_logger,
    get_settings,
    setup_logging,
)
from onion.config._base import BaseOnionSettings


class TestBaseOnionSettings:
    """Test suite for BaseOnionSettings configuration class."""

    @pytest.mark.unit
    @pytest.mark.config
    def test_default_values(self):
        """Test that default values are set correctly."""
        settings = BaseOnionSettings()

        assert settings.ENV == "development"
        assert settings.OUTPUT_ERRORS is None
        assert settings.POWERED_BY is True
        assert settings.JSON_SPACES == 2
        assert settings.SUBDOMAIN_OFFSET == 2

    @pytest.mark.unit
    @pytest.mark.config
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("DEVELOPMENT", "development"),
            ("dev", "development"),
            ("  prod  ", "production"),
            ("Stage", "staging"),
            ("testing", "test"),
        ],
    )
    def test_env_case_insensitive_validation(self, value, expected):
        """Test ENV field accepts case-insensitive values and aliases."""
        assert BaseOnionSettings(ENV=value).ENV == expected

    @pytest.mark.unit
    @pytest.mark.config
    def test_env_invalid_value(self):
        """Test ENV field validation fails for invalid values."""
        with pytest.raises(ValidationError):
            BaseOnionSettings(ENV="qa")

    @pytest.mark.unit
    @pytest.mark.config
    def test_every_field_reaches_application_config(self):
        """Test each environment setting has a counterpart in ApplicationConfig."""
        assert set(BaseOnionSettings.model_fields) == {
            "ENV",
            "OUTPUT_ERRORS",
            "POWERED_BY",
            "JSON_SPACES",
            "SUBDOMAIN_OFFSET",
        }
        assert set(ApplicationConfig.model_fields) == {
            "environment",
            "output_errors",
            "powered_by",
            "json_spaces",
            "subdomain_offset",
        }

    @pytest.mark.unit
    @pytest.mark.config
    def test_negative_json_spaces_rejected(self):
        with pytest.raises(ValidationError):
            BaseOnionSettings(JSON_SPACES=-1)

    @pytest.mark.unit
    @pytest.mark.config
    def test_reads_environment(self, monkeypatch):
        """Test values come from environment variables."""
        monkeypatch.setenv("ENV", "prod")
        monkeypatch.setenv("JSON_SPACES", "0")
        monkeypatch.setenv("POWERED_BY", "false")

        settings = OnionSettings()

        assert settings.ENV == "production"
        assert settings.JSON_SPACES == 0
        assert settings.POWERED_BY is False

    @pytest.mark.unit
    @pytest.mark.config
    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()


class TestApplicationConfig:
    """Test suite for ApplicationConfig."""

    @pytest.mark.unit
    @pytest.mark.config
    def test_defaults(self):
        config = ApplicationConfig()

        assert config.environment == "development"
        assert config.output_errors is True
        assert config.powered_by is True
        assert config.json_spaces == 2
        assert config.subdomain_offset == 2

    @pytest.mark.unit
    @pytest.mark.config
    @pytest.mark.parametrize(
        "environment,expected", [("test", False), ("development", True), ("production", True)]
    )
    def test_output_errors_derived_from_environment(self, environment, expected):
        """Test error output is off only in the test environment."""
        assert ApplicationConfig(environment=environment).output_errors is expected

    @pytest.mark.unit
    @pytest.mark.config
    def test_explicit_output_errors_wins(self):
        assert ApplicationConfig(environment="test", output_errors=True).output_errors is True
        assert ApplicationConfig(environment="production", output_errors=False).output_errors is False

    @pytest.mark.unit
    @pytest.mark.config
    def test_config_is_frozen(self):
        config = ApplicationConfig()

        with pytest.raises(ValidationError):
            config.json_spaces = 4

    @pytest.mark.unit
    @pytest.mark.config
    def test_negative_json_spaces_rejected(self):
        with pytest.raises(ValidationError):
            ApplicationConfig(json_spaces=-2)

    @pytest.mark.unit
    @pytest.mark.config
    def test_from_settings(self):
        """Test building a config from explicit settings."""
        settings = OnionSettings(ENV="test", JSON_SPACES=4, POWERED_BY=False, SUBDOMAIN_OFFSET=3)

        config = ApplicationConfig.from_settings(settings)

        assert config.environment == "test"
        assert config.output_errors is False
        assert config.json_spaces == 4
        assert config.powered_by is False
        assert config.subdomain_offset == 3

    @pytest.mark.unit
    @pytest.mark.config
    def test_from_settings_uses_environment(self, monkeypatch):
        monkeypatch.setenv("ENV", "testing")
        get_settings.cache_clear()
        try:
            config = ApplicationConfig.from_settings()
        finally:
            get_settings.cache_clear()

        assert config.environment == "test"
        assert config.output_errors is False


class TestLoggingSetup:
    """Test suite for loguru setup helpers."""

    @pytest.fixture(autouse=True)
    def _restore_logger(self):
        yield
        logger.remove()
        logger.add(lambda message: None, level="DEBUG")

    @pytest.mark.unit
    @pytest.mark.config
    def test_setup_logging_with_file_output(self, tmp_path):
        """Test file output writes formatted records to the configured path."""
        log_file = tmp_path / "logs" / "onion.log"
        config = LoggerConfig(console_enabled=False, file_enabled=True, file_path=log_file, file_compression="zip")

        setup_logging(config)
        get_logger("onion.test").info("file sink works")
        logger.complete()

        assert log_file.exists()
        assert "file sink works" in log_file.read_text()

    @pytest.mark.unit
    @pytest.mark.config
    def test_get_logger_binds_name(self):
        records = []
        logger.add(lambda message: records.append(message.record), level="DEBUG")

        get_logger("onion.bound").debug("hello")

        assert records[-1]["extra"]["name"] == "onion.bound"
        assert records[-1]["message"] == "hello"

    @pytest.mark.unit
    @pytest.mark.config
    def test_logging_settings_normalize_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", " warning ")

        assert LoggingSettings().log_level == "WARNING"

    @pytest.mark.unit
    @pytest.mark.config
    def test_setup_logging_from_environment(self, monkeypatch, tmp_path):
        """Test setup without a config reads the logging settings from the environment."""
        log_file = tmp_path / "env.log"
        monkeypatch.setenv("LOG_LEVEL", "error")
        monkeypatch.setenv("LOG_FILE_ENABLED", "true")
        monkeypatch.setenv("LOG_FILE_PATH", str(log_file))

        setup_logging()
        get_logger("onion.env").warning("below threshold")
        get_logger("onion.env").error("above threshold")
        logger.complete()

        content = log_file.read_text()
        assert "above threshold" in content
        assert "below threshold" not in content
