"""
CountriesDB Validator - client for the CountriesDB code validation API.

Validates ISO 3166-1 country codes and ISO 3166-2 subdivision codes
against https://api.countriesdb.com, one code or a batch per request.
"""

from .api import (
    AsyncValidator,
    CountryOptions,
    SubdivisionOptions,
    ValidationResult,
    Validator,
)
from .core.exceptions import (
    CountriesDBError,
    ConfigurationError,
    FormatError,
    SerializationError,
    ServerError,
    TransportError,
)
from .core.logging import install_null_handler, setup_logging

install_null_handler()

__version__ = "0.1.0"

__all__ = [
    "AsyncValidator",
    "ConfigurationError",
    "CountriesDBError",
    "CountryOptions",
    "FormatError",
    "SerializationError",
    "ServerError",
    "SubdivisionOptions",
    "setup_logging",
    "TransportError",
    "ValidationResult",
    "Validator",
]
