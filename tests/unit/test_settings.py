"""Unit tests for settings and grouped configuration."""

import pytest
from pydantic import ValidationError

from dockhand.config import DockerConfig, LoggingConfig, Settings


class TestDefaults:
    """Tests for default values."""

    def test_docker_defaults(self):
        """Test Docker settings defaults."""
        settings = Settings()

        assert settings.docker_timeout == 60
        assert settings.docker_api_version == "auto"
        assert settings.docker_stop_timeout is None
        assert settings.docker_remove_on_start_failure is True

    def test_logging_defaults(self):
        """Test logging settings defaults."""
        settings = Settings()

        assert settings.log_level == "INFO"
        assert settings.log_format == "json"


class TestGroupedAccess:
    """Tests for grouped config properties."""

    def test_docker_group(self):
        """Test that the docker group mirrors the flat fields."""
        settings = Settings(
            docker_base_url="tcp://docker:2375",
            docker_timeout=15,
            docker_stop_timeout=2,
            docker_remove_on_start_failure=False,
        )

        docker = settings.docker

        assert isinstance(docker, DockerConfig)
        assert docker.base_url == "tcp://docker:2375"
        assert docker.timeout == 15
        assert docker.stop_timeout == 2
        assert docker.remove_on_start_failure is False

    def test_logging_group(self):
        """Test that the logging group mirrors the flat fields."""
        settings = Settings(log_level="debug", log_format="console", log_file="/tmp/dockhand.log")

        logging_config = settings.logging

        assert isinstance(logging_config, LoggingConfig)
        assert logging_config.level == "DEBUG"
        assert logging_config.format == "console"
        assert logging_config.file == "/tmp/dockhand.log"


class TestValidators:
    """Tests for field validation."""

    def test_environment_overrides(self, monkeypatch):
        """Test that environment variables are read."""
        monkeypatch.setenv("DOCKER_TIMEOUT", "120")
        monkeypatch.setenv("DOCKER_REMOVE_ON_START_FAILURE", "false")

        settings = Settings()

        assert settings.docker_timeout == 120
        assert settings.docker_remove_on_start_failure is False

    def test_invalid_log_level(self):
        """Test that unknown log levels are rejected."""
        with pytest.raises(ValidationError):
            Settings(log_level="LOUD")

    def test_invalid_log_format(self):
        """Test that only json and console formats are accepted."""
        with pytest.raises(ValidationError):
            Settings(log_format="xml")

    def test_invalid_base_url_scheme(self):
        """Test that unknown engine URL schemes are rejected."""
        with pytest.raises(ValidationError):
            Settings(docker_base_url="ftp://docker:2375")

    def test_timeout_must_be_positive(self):
        """Test the timeout lower bound."""
        with pytest.raises(ValidationError):
            Settings(docker_timeout=0)

    def test_negative_stop_timeout(self):
        """Test that a negative stop timeout is rejected."""
        with pytest.raises(ValidationError):
            Settings(docker_stop_timeout=-1)
