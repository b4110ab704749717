"""
Typed results and options for CountriesDB validation calls.
"""
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

from countriesdb.core.exceptions import SerializationError

INVALID_COUNTRY_MESSAGE = "Invalid country code."


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one code."""

    valid: bool
    message: Optional[str] = None  # reason, when invalid
    code: Optional[str] = None  # echoed back in batch responses

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ValidationResult":
        """
        Build a result from a decoded API object.

        Missing or null fields take their defaults; empty strings count as
        missing.

        Raises:
            SerializationError: If "valid" is not a boolean, or "message"
                or "code" is not a string
        """
        valid = data.get("valid")
        if valid is None:
            valid = False
        elif not isinstance(valid, bool):
            raise SerializationError(
                "Field 'valid' must be a boolean",
                details={"value": valid},
            )

        for name in ("message", "code"):
            value = data.get(name)
            if value is not None and not isinstance(value, str):
                raise SerializationError(
                    f"Field '{name}' must be a string",
                    details={"value": value},
                )

        return cls(
            valid=valid,
            message=data.get("message") or None,
            code=data.get("code") or None,
        )

    @classmethod
    def invalid_country(cls) -> "ValidationResult":
        """Result returned locally when a country code is not two characters long."""
        return cls(valid=False, message=INVALID_COUNTRY_MESSAGE)


@dataclass(frozen=True)
class CountryOptions:
    """Options for country validation."""

    follow_upward: bool = False  # ignored by batch validation


@dataclass(frozen=True)
class SubdivisionOptions:
    """Options for subdivision validation."""

    follow_related: bool = False  # ignored by batch validation
    allow_parent_selection: bool = False


def _expect_object(data: Any, what: str) -> Mapping[str, Any]:
    # JSON null decodes to an empty result
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise SerializationError(
            f"Unexpected {what} in response body",
            details={"type": type(data).__name__},
        )
    return data


def parse_result(data: Any) -> ValidationResult:
    """Parse a single-code response body."""
    return ValidationResult.from_dict(_expect_object(data, "single result"))


def parse_results(data: Any) -> List[ValidationResult]:
    """
    Parse a batch response envelope ({"results": [...]}).

    Results keep the order the server sent them in; no reordering or
    correlation by code is done.
    """
    items = _expect_object(data, "batch envelope").get("results") or []
    if not isinstance(items, list):
        raise SerializationError(
            "Unexpected results field in response body",
            details={"type": type(items).__name__},
        )
    return [ValidationResult.from_dict(_expect_object(item, "batch item")) for item in items]
