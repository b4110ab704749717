"""
Shared base for the blocking and asyncio validators.

Everything that does not depend on the HTTP library lives here:
construction checks, local code-shape checks, payload building,
JSON encoding and interpretation of the API response.
"""
import json
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, TypeVar

from countriesdb.api.models import CountryOptions, SubdivisionOptions
from countriesdb.core.config import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    ENV_API_KEY,
    config,
    get_api_url,
)
from countriesdb.core.exceptions import (
    ConfigurationError,
    FormatError,
    SerializationError,
    ServerError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Payloads are plain JSON objects
Payload = Dict[str, Any]
ResponseParser = Callable[[Any], T]


def encode_payload(payload: Payload) -> bytes:
    """
    Serialize a request payload to JSON bytes.

    Raises:
        SerializationError: If the payload is not JSON serializable
    """
    try:
        return json.dumps(payload).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError("Failed to encode request payload", original_error=e) from e


def decode_body(raw: bytes) -> Any:
    """
    Decode a JSON response body.

    Raises:
        SerializationError: If the body is empty or not valid JSON
    """
    try:
        return json.loads(raw)
    except ValueError as e:
        raise SerializationError("Failed to decode response body", original_error=e) from e


def normalize_country_code(code: str) -> Optional[str]:
    """
    Uppercase a country code if it is exactly two bytes long in UTF-8.

    The length is checked before and after uppercasing, since str.upper()
    can change the length (e.g. "ß" becomes "SS"). Returns None for
    codes of any other shape.
    """
    if len(code.encode("utf-8")) != 2:
        return None
    normalized = code.upper()
    if len(normalized.encode("utf-8")) != 2:
        return None
    return normalized


def error_from_response(status_code: int, raw: bytes, url: Optional[str] = None) -> ServerError:
    """
    Build the error for a response with status >= 400.

    Uses the "message" of the API error envelope when it is present and
    non-empty, "http <status>" otherwise.
    """
    message = None
    if raw:
        try:
            data = json.loads(raw)
        except ValueError:
            data = None
        if isinstance(data, Mapping):
            message = data.get("message")

    if not isinstance(message, str) or not message:
        message = f"http {status_code}"
    return ServerError(message, status_code=status_code, url=url)


class BaseValidator:
    """
    Configuration and request building shared by Validator and AsyncValidator.

    Subclasses add the transport: a session and a _post() helper that
    sends a payload and passes the response to _handle_response().
    """

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize the validator configuration.

        Args:
            api_key: CountriesDB API key (required, must not be blank)
            base_url: API base URL (defaults to https://api.countriesdb.com)
            timeout: Request timeout in seconds (defaults to 10)

        Raises:
            ConfigurationError: If api_key is missing or blank
        """
        if not api_key or not api_key.strip():
            raise ConfigurationError("api key is required", config_key="api_key")

        self.api_key = api_key
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self.timeout = timeout or DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls, **kwargs):
        """
        Create a validator from COUNTRIESDB_* environment variables.

        Keyword arguments override the environment values and are passed
        to the constructor unchanged.

        Raises:
            ConfigurationError: If COUNTRIESDB_API_KEY is unset or
                COUNTRIESDB_API_TIMEOUT is not a positive number
        """
        api_key = config.api_key
        if not api_key.strip():
            raise ConfigurationError("api key is required", config_key=ENV_API_KEY)
        if "base_url" not in kwargs:
            kwargs["base_url"] = config.api_base_url
        if "timeout" not in kwargs:
            kwargs["timeout"] = config.api_timeout
        return cls(api_key, **kwargs)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self.base_url!r}, timeout={self.timeout!r})"

    def _url(self, path: str) -> str:
        return get_api_url(self.base_url, path)

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    # -------------------------------------------------------------------------
    # Payload builders. None means "answer locally, send nothing".
    # -------------------------------------------------------------------------

    def _country_payload(self, code: str, options: Optional[CountryOptions]) -> Optional[Payload]:
        normalized = normalize_country_code(code)
        if normalized is None:
            logger.debug(f"Country code {code!r} is not 2 characters, skipping request")
            return None

        options = options or CountryOptions()
        return {
            "code": normalized,
            "follow_upward": options.follow_upward,
        }

    def _countries_payload(self, codes: Sequence[str]) -> Optional[Payload]:
        if not codes:
            return None

        normalized: List[str] = []
        for code in codes:
            upper = normalize_country_code(code)
            if upper is None:
                raise FormatError(
                    "Invalid country code format. All codes must be 2-character strings.",
                    field_name="codes",
                    field_value=code,
                )
            normalized.append(upper)

        return {
            "code": normalized,
            "follow_upward": False,  # Disabled for multi-select
        }

    def _subdivision_payload(
        self,
        code: str,
        country: str,
        options: Optional[SubdivisionOptions],
    ) -> Optional[Payload]:
        normalized_country = normalize_country_code(country)
        if normalized_country is None:
            logger.debug(f"Country code {country!r} is not 2 characters, skipping request")
            return None

        options = options or SubdivisionOptions()
        return {
            "code": code,
            "country": normalized_country,
            "follow_related": options.follow_related,
            "allow_parent_selection": options.allow_parent_selection,
        }

    def _subdivisions_payload(
        self,
        codes: Sequence[str],
        country: str,
        options: Optional[SubdivisionOptions],
    ) -> Optional[Payload]:
        normalized_country = normalize_country_code(country)
        if normalized_country is None:
            raise FormatError("Invalid country code.", field_name="country", field_value=country)

        if not codes:
            return None

        options = options or SubdivisionOptions()
        return {
            # Empty strings are sent as-is
            "code": list(codes),
            "country": normalized_country,
            "follow_related": False,  # Disabled for multi-select
            "allow_parent_selection": options.allow_parent_selection,
        }

    # -------------------------------------------------------------------------
    # Response handling
    # -------------------------------------------------------------------------

    def _handle_response(
        self,
        status_code: int,
        raw: bytes,
        url: str,
        parse: Optional[ResponseParser] = None,
    ) -> Any:
        """
        Turn a raw HTTP response into a parsed result or a ServerError.

        Args:
            status_code: HTTP status of the response
            raw: Response body
            url: Requested URL, for error context
            parse: Converts the decoded JSON body; when None the body is not decoded

        Raises:
            ServerError: If status_code >= 400
            SerializationError: If a successful body is not valid JSON
        """
        if status_code >= 400:
            error = error_from_response(status_code, raw, url)
            logger.warning(f"POST {url} returned {status_code}: {error}")
            raise error

        if parse is None:
            return None

        return parse(decode_body(raw))
