"""
CountriesDB Validator (asyncio).
Same operations as Validator, awaitable, built on aiohttp.
Cancelling the awaiting task aborts the request in flight.
"""
import asyncio
import logging
from typing import Any, List, Optional, Sequence

import aiohttp

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


class AsyncValidator(BaseValidator):
    """
    Asyncio client for the CountriesDB validation endpoints.

    Safe to share between tasks. The aiohttp session is created on first
    use, since aiohttp sessions must be created inside a running loop.

    Example:
        >>> async with AsyncValidator(api_key) as validator:
        ...     results = await validator.validate_countries(["us", "de"])
    """

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize the validator.

        Args:
            api_key: CountriesDB API key (required, must not be blank)
            base_url: API base URL (defaults to https://api.countriesdb.com)
            session: aiohttp session to send requests with (defaults to one created lazily)
            timeout: Request timeout in seconds (defaults to 10)

        Raises:
            ConfigurationError: If api_key is missing or blank
        """
        super().__init__(api_key, base_url=base_url, timeout=timeout)
        self._owns_session = session is None
        self._session = session
        self._closed = False

    async def _get_session(self) -> aiohttp.ClientSession:
        """
        Get the caller's session, or create our own on first use.

        Raises:
            RuntimeError: If the validator has been closed
        """
        if self._closed:
            raise RuntimeError(f"{type(self).__name__} is closed")
        if self._session is not None:
            return self._session

        self._session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.timeout),
        )
        return self._session

    async def close(self) -> None:
        """
        Close the session if this validator created it.

        The validator cannot be used afterwards; closing again is a no-op.
        """
        self._closed = True
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        await self._get_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _post(self, path: str, payload: Payload, parse: Optional[ResponseParser] = None) -> Any:
        """
        POST a JSON payload and parse the response.

        asyncio.CancelledError is never wrapped: a cancelled call re-raises it.

        Raises:
            SerializationError: If the payload or the response body is not valid JSON
            TransportError: If the request failed or timed out
            ServerError: If the API answered with status >= 400
            RuntimeError: If the validator has been closed
        """
        url = self._url(path)
        body = encode_payload(payload)
        session = await self._get_session()
        logger.debug(f"POST {path}")

        try:
            async with session.post(
                url,
                data=body,
                headers=self._headers(),
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                raw = await response.read()
                status = response.status
        except asyncio.TimeoutError as e:
            logger.warning(f"POST {path} timed out after {self.timeout}s")
            raise TransportError(
                f"POST {path} timed out after {self.timeout}s", url=url, original_error=e
            ) from e
        except aiohttp.ClientError as e:
            logger.warning(f"POST {path} failed: {e}")
            raise TransportError(f"POST {path} failed", url=url, original_error=e) from e

        return self._handle_response(status, raw, url, parse)

    async def validate_country(
        self,
        code: str,
        options: Optional[CountryOptions] = None,
    ) -> ValidationResult:
        """Validate a single country code. See Validator.validate_country."""
        payload = self._country_payload(code, options)
        if payload is None:
            return ValidationResult.invalid_country()
        return await self._post(COUNTRY_VALIDATION_PATH, payload, parse_result)

    async def validate_countries(
        self,
        codes: Sequence[str],
        options: Optional[CountryOptions] = None,
    ) -> List[ValidationResult]:
        """Validate several country codes in one request. See Validator.validate_countries."""
        payload = self._countries_payload(codes)
        if payload is None:
            return []
        return await self._post(COUNTRY_VALIDATION_PATH, payload, parse_results)

    async def validate_subdivision(
        self,
        code: str,
        country: str,
        options: Optional[SubdivisionOptions] = None,
    ) -> ValidationResult:
        """Validate a subdivision code. See Validator.validate_subdivision."""
        payload = self._subdivision_payload(code, country, options)
        if payload is None:
            return ValidationResult.invalid_country()
        return await self._post(SUBDIVISION_VALIDATION_PATH, payload, parse_result)

    async def validate_subdivisions(
        self,
        codes: Sequence[str],
        country: str,
        options: Optional[SubdivisionOptions] = None,
    ) -> List[ValidationResult]:
        """Validate several subdivision codes in one request. See Validator.validate_subdivisions."""
        payload = self._subdivisions_payload(codes, country, options)
        if payload is None:
            return []
        return await self._post(SUBDIVISION_VALIDATION_PATH, payload, parse_results)
