"""
CountriesDB Validator Configuration
Centralized defaults and environment-driven settings.
"""
import os
from dotenv import find_dotenv, load_dotenv

from countriesdb.core.exceptions import ConfigurationError

# Load .env from the working directory with UTF-8 encoding (Windows compatibility)
load_dotenv(find_dotenv(usecwd=True), encoding="utf-8")

# =============================================================================
# API Defaults
# =============================================================================
DEFAULT_BASE_URL = "https://api.countriesdb.com"
DEFAULT_TIMEOUT = 10.0  # seconds

COUNTRY_VALIDATION_PATH = "/api/validate/country"
SUBDIVISION_VALIDATION_PATH = "/api/validate/subdivision"

# =============================================================================
# Environment variable names (read on access, never at import)
# =============================================================================
ENV_API_KEY = "COUNTRIESDB_API_KEY"
ENV_API_BASE_URL = "COUNTRIESDB_API_BASE_URL"
ENV_API_TIMEOUT = "COUNTRIESDB_API_TIMEOUT"
ENV_LOG_LEVEL = "COUNTRIESDB_LOG_LEVEL"

DEFAULT_LOG_LEVEL = "WARNING"


def get_api_url(base_url: str, path: str) -> str:
    """Join a base URL and an endpoint path without doubling slashes."""
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


# Configuration class for type safety
class Config:
    """
    Type-safe access to COUNTRIESDB_* settings.

    Every property reads the environment when accessed, so variables
    exported after import are picked up.
    """

    @property
    def api_key(self) -> str:
        return os.getenv(ENV_API_KEY, "")

    @property
    def api_base_url(self) -> str:
        return os.getenv(ENV_API_BASE_URL, "") or DEFAULT_BASE_URL

    @property
    def api_timeout(self) -> float:
        """
        Request timeout in seconds.

        Raises:
            ConfigurationError: If the variable is not a positive number
        """
        raw = os.getenv(ENV_API_TIMEOUT, "").strip()
        if not raw:
            return DEFAULT_TIMEOUT
        try:
            timeout = float(raw)
        except ValueError:
            timeout = 0.0
        if not timeout > 0:
            raise ConfigurationError(
                "timeout must be a positive number of seconds",
                details={"value": raw},
                config_key=ENV_API_TIMEOUT,
            )
        return timeout

    @property
    def log_level(self) -> str:
        return os.getenv(ENV_LOG_LEVEL, "") or DEFAULT_LOG_LEVEL


# Export configuration instance
config = Config()
