"""
CountriesDB Exception Hierarchy

Centralized exception classes for the CountriesDB validator client.
Provides specific exception types for each failure category of a validation call.
"""
from typing import Optional, Any


class CountriesDBError(Exception):
    """
    Base exception for all CountriesDB client errors.

    Callers can catch this single type to handle every failure raised
    by the validators.
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        """
        Initialize CountriesDBError.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
        """
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ConfigurationError(CountriesDBError):
    """
    Configuration errors.

    Raised when a validator is constructed with missing or blank settings.
    """

    def __init__(
        self,
        message: str,
        details: Optional[dict[str, Any]] = None,
        config_key: Optional[str] = None,
    ):
        """
        Initialize ConfigurationError.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
            config_key: The configuration key that is problematic
        """
        super().__init__(message, details)
        self.config_key = config_key

    def __str__(self) -> str:
        base = super().__str__()
        if self.config_key:
            return f"{base} | Key: {self.config_key}"
        return base


class FormatError(CountriesDBError):
    """
    Input shape errors.

    Raised by batch operations when a code does not have the expected
    shape. Detected locally, before any request is sent.
    """

    def __init__(
        self,
        message: str,
        details: Optional[dict[str, Any]] = None,
        field_name: Optional[str] = None,
        field_value: Optional[Any] = None,
    ):
        """
        Initialize FormatError.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
            field_name: The argument that failed the check
            field_value: The offending value
        """
        super().__init__(message, details)
        self.field_name = field_name
        self.field_value = field_value

    def __str__(self) -> str:
        base = super().__str__()
        parts = [base]
        if self.field_name:
            parts.append(f"Field: {self.field_name}")
        if self.field_value is not None:
            parts.append(f"Value: {self.field_value!r}")
        return " | ".join(parts) if len(parts) > 1 else base


class SerializationError(CountriesDBError):
    """
    JSON encoding/decoding errors.

    Raised when a request payload cannot be encoded or a successful
    response body cannot be decoded.
    """

    def __init__(
        self,
        message: str,
        details: Optional[dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message, details)
        self.original_error = original_error

    def __str__(self) -> str:
        base = super().__str__()
        if self.original_error:
            return f"{base} | Caused by: {type(self.original_error).__name__}: {self.original_error}"
        return base


class TransportError(CountriesDBError):
    """
    Network errors.

    Raised when the HTTP exchange itself fails: connection refused,
    DNS failure, timeout, broken connection.
    """

    def __init__(
        self,
        message: str,
        details: Optional[dict[str, Any]] = None,
        url: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        """
        Initialize TransportError.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
            url: The URL that failed
            original_error: The transport exception that caused this error
        """
        super().__init__(message, details)
        self.url = url
        self.original_error = original_error

    def __str__(self) -> str:
        base = super().__str__()
        parts = [base]
        if self.url:
            parts.append(f"URL: {self.url}")
        if self.original_error:
            parts.append(f"Caused by: {type(self.original_error).__name__}: {self.original_error}")
        return " | ".join(parts) if len(parts) > 1 else base


class ServerError(CountriesDBError):
    """
    API errors.

    Raised when the API answers with status >= 400. The message is the
    one reported by the server, or "http <status>" when the body carries
    none. str() returns the message alone; status and URL are attributes.
    """

    def __init__(
        self,
        message: str,
        details: Optional[dict[str, Any]] = None,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
    ):
        """
        Initialize ServerError.

        Args:
            message: Server-provided or generic error message
            details: Optional dictionary with additional error context
            status_code: HTTP status code of the response
            url: The URL that was requested
        """
        super().__init__(message, details)
        self.status_code = status_code
        self.url = url
