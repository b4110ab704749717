"""
CountriesDB API clients.

Validator sends blocking requests through requests; AsyncValidator
exposes the same operations as coroutines on top of aiohttp.
"""

from .models import CountryOptions, SubdivisionOptions, ValidationResult
from .validator import Validator
from .async_validator import AsyncValidator

__all__ = [
    "AsyncValidator",
    "CountryOptions",
    "SubdivisionOptions",
    "ValidationResult",
    "Validator",
]
