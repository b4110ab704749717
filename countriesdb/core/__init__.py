"""
Core infrastructure shared by the validators: configuration, exceptions, logging.
"""

from .exceptions import (
    CountriesDBError,
    ConfigurationError,
    FormatError,
    SerializationError,
    ServerError,
    TransportError,
)

__all__ = [
    "CountriesDBError",
    "ConfigurationError",
    "FormatError",
    "SerializationError",
    "ServerError",
    "TransportError",
]
