"""
Tests for configuration helpers (countriesdb/core/config.py)
"""

import importlib

import pytest

from countriesdb.core import config as config_module
from countriesdb.core.config import (
    COUNTRY_VALIDATION_PATH,
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    ENV_API_BASE_URL,
    ENV_API_KEY,
    ENV_API_TIMEOUT,
    ENV_LOG_LEVEL,
    SUBDIVISION_VALIDATION_PATH,
    Config,
    get_api_url,
)
from countriesdb.core.exceptions import ConfigurationError


class TestGetApiUrl:
    """Tests for get_api_url."""

    def test_join(self):
        """Test joining the default base URL and a path."""
        assert get_api_url(DEFAULT_BASE_URL, COUNTRY_VALIDATION_PATH) == (
            "https://api.countriesdb.com/api/validate/country"
        )

    def test_no_double_slash(self):
        """Test that slashes on both sides collapse to one."""
        assert get_api_url("http://localhost/", SUBDIVISION_VALIDATION_PATH) == (
            "http://localhost/api/validate/subdivision"
        )


class TestConfig:
    """Tests for the environment-backed Config properties."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in (ENV_API_KEY, ENV_API_BASE_URL, ENV_API_TIMEOUT, ENV_LOG_LEVEL):
            monkeypatch.delenv(name, raising=False)

    def test_defaults(self):
        """Test values when no variable is set."""
        config = Config()

        assert config.api_key == ""
        assert config.api_base_url == DEFAULT_BASE_URL
        assert config.api_timeout == DEFAULT_TIMEOUT
        assert config.log_level == "WARNING"

    def test_reads_on_access(self, monkeypatch):
        """Test that a single instance follows later environment changes."""
        config = Config()
        monkeypatch.setenv(ENV_API_KEY, "one")
        assert config.api_key == "one"

        monkeypatch.setenv(ENV_API_KEY, "two")
        monkeypatch.setenv(ENV_API_TIMEOUT, " 2.5 ")
        assert config.api_key == "two"
        assert config.api_timeout == 2.5

    def test_empty_values_use_defaults(self, monkeypatch):
        """Test that empty variables behave like unset ones."""
        monkeypatch.setenv(ENV_API_BASE_URL, "")
        monkeypatch.setenv(ENV_API_TIMEOUT, "")

        config = Config()

        assert config.api_base_url == DEFAULT_BASE_URL
        assert config.api_timeout == DEFAULT_TIMEOUT

    @pytest.mark.parametrize("value", ["abc", "0", "-1", "nan"])
    def test_bad_timeout(self, monkeypatch, value):
        """Test that a bad timeout raises ConfigurationError naming the variable."""
        monkeypatch.setenv(ENV_API_TIMEOUT, value)

        with pytest.raises(ConfigurationError) as exc_info:
            Config().api_timeout

        assert exc_info.value.config_key == ENV_API_TIMEOUT
        assert exc_info.value.details == {"value": value}

    def test_bad_timeout_does_not_break_import(self, monkeypatch):
        """Test that loading the module with a bad timeout set succeeds."""
        monkeypatch.setenv(ENV_API_TIMEOUT, "abc")

        reloaded = importlib.reload(config_module)

        assert reloaded.DEFAULT_TIMEOUT == DEFAULT_TIMEOUT
