"""
CountriesDB Validator (blocking).
Validates ISO 3166 country and subdivision codes through the CountriesDB API
using a requests session.
"""
import logging
from typing import Any, List, Optional, Sequence

import requests

from countriesdb.api.base import BaseValidator, Payload, ResponseParser, encode_payload
from countriesdb.api.models import (
    CountryOptions,
    SubdivisionOptions,
    ValidationResult,
    parse_result,
    parse_results,
)
from countriesdb.core.config import COUNTRY_VALIDATION_PATH, SUBDIVISION_VALIDATION_PATH
from countriesdb.core.exceptions import TransportError

logger = logging.getLogger(__name__)


class Validator(BaseValidator):
    """
    Client for the CountriesDB validation endpoints.

    One instance can be shared between threads; nothing is mutated after
    construction. Each call sends at most one request and never retries.

    Example:
        >>> with Validator(os.environ["COUNTRIESDB_API_KEY"]) as validator:
        ...     result = validator.validate_country("us")
        ...     print(result.valid, result.message)
    """

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize the validator.

        Args:
            api_key: CountriesDB API key (required, must not be blank)
            base_url: API base URL (defaults to https://api.countriesdb.com)
            session: requests session to send requests with (defaults to a new one)
            timeout: Request timeout in seconds (defaults to 10)

        Raises:
            ConfigurationError: If api_key is missing or blank
        """
        super().__init__(api_key, base_url=base_url, timeout=timeout)
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()
        self._closed = False

    def close(self) -> None:
        """
        Close the session if this validator created it.

        The validator cannot be used afterwards; closing again is a no-op.
        """
        self._closed = True
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def _post(self, path: str, payload: Payload, parse: Optional[ResponseParser] = None) -> Any:
        """
        POST a JSON payload and parse the response.

        Args:
            path: API endpoint path (e.g., "/api/validate/country")
            payload: JSON object to send
            parse: Converts the decoded body; when None the body is ignored

        Returns:
            Result of parse(), or None when no parser is given

        Raises:
            SerializationError: If the payload or the response body is not valid JSON
            TransportError: If the request could not be completed
            ServerError: If the API answered with status >= 400
            RuntimeError: If the validator has been closed
        """
        if self._closed:
            raise RuntimeError(f"{type(self).__name__} is closed")

        url = self._url(path)
        body = encode_payload(payload)
        logger.debug(f"POST {path}")

        try:
            response = self.session.post(
                url,
                data=body,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning(f"POST {path} failed: {e}")
            raise TransportError(f"POST {path} failed", url=url, original_error=e) from e

        try:
            try:
                raw = response.content
            except requests.RequestException as e:
                logger.warning(f"Reading response of POST {path} failed: {e}")
                raise TransportError(
                    f"Reading response of POST {path} failed", url=url, original_error=e
                ) from e
            return self._handle_response(response.status_code, raw, url, parse)
        finally:
            response.close()

    def validate_country(
        self,
        code: str,
        options: Optional[CountryOptions] = None,
    ) -> ValidationResult:
        """
        Validate a single ISO 3166-1 alpha-2 country code.

        Codes that are not two characters long are rejected locally with
        ValidationResult(valid=False, message="Invalid country code.").

        Args:
            code: Country code, any case
            options: follow_upward toggle

        Returns:
            Validation result reported by the API
        """
        payload = self._country_payload(code, options)
        if payload is None:
            return ValidationResult.invalid_country()
        return self._post(COUNTRY_VALIDATION_PATH, payload, parse_result)

    def validate_countries(
        self,
        codes: Sequence[str],
        options: Optional[CountryOptions] = None,
    ) -> List[ValidationResult]:
        """
        Validate several country codes in one request.

        follow_upward is always disabled for batch validation.

        Args:
            codes: Country codes, any case
            options: Accepted for symmetry with validate_country

        Returns:
            One result per code, in the order the API returned them

        Raises:
            FormatError: If any code is not two characters long (nothing is sent)
        """
        payload = self._countries_payload(codes)
        if payload is None:
            return []
        return self._post(COUNTRY_VALIDATION_PATH, payload, parse_results)

    def validate_subdivision(
        self,
        code: str,
        country: str,
        options: Optional[SubdivisionOptions] = None,
    ) -> ValidationResult:
        """
        Validate an ISO 3166-2 subdivision code for a country.

        The subdivision code is sent unchanged; an empty string asks the API
        about the country alone. A country code that is not two characters
        long is rejected locally with a soft failure.

        Args:
            code: Subdivision code (e.g., "US-CA")
            country: Country code, any case
            options: follow_related / allow_parent_selection toggles

        Returns:
            Validation result reported by the API
        """
        payload = self._subdivision_payload(code, country, options)
        if payload is None:
            return ValidationResult.invalid_country()
        return self._post(SUBDIVISION_VALIDATION_PATH, payload, parse_result)

    def validate_subdivisions(
        self,
        codes: Sequence[str],
        country: str,
        options: Optional[SubdivisionOptions] = None,
    ) -> List[ValidationResult]:
        """
        Validate several subdivision codes of one country in one request.

        follow_related is always disabled for batch validation;
        allow_parent_selection is honoured.

        Raises:
            FormatError: If country is not two characters long (nothing is sent)
        """
        payload = self._subdivisions_payload(codes, country, options)
        if payload is None:
            return []
        return self._post(SUBDIVISION_VALIDATION_PATH, payload, parse_results)
