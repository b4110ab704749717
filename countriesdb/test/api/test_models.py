"""
Tests for results, options and response parsing (countriesdb/api/models.py)
"""

import dataclasses

import pytest

from countriesdb.api.models import (
    CountryOptions,
    SubdivisionOptions,
    ValidationResult,
    parse_result,
    parse_results,
)
from countriesdb.core.exceptions import SerializationError


class TestValidationResult:
    """Tests for ValidationResult."""

    def test_from_dict_full(self):
        """Test decoding every field."""
        result = ValidationResult.from_dict({"valid": False, "message": "Nope.", "code": "XX"})

        assert result == ValidationResult(valid=False, message="Nope.", code="XX")

    def test_from_dict_missing_fields(self):
        """Test that missing or empty fields become None/False."""
        assert ValidationResult.from_dict({}) == ValidationResult(valid=False)
        assert ValidationResult.from_dict({"valid": True, "message": ""}).message is None
        assert ValidationResult.from_dict({"valid": None}) == ValidationResult(valid=False)

    @pytest.mark.parametrize("valid", ["false", "true", 1, 0, [], {}])
    def test_non_boolean_valid(self, valid):
        """Test that a non-boolean "valid" raises instead of being coerced."""
        with pytest.raises(SerializationError, match="valid"):
            ValidationResult.from_dict({"valid": valid})

    @pytest.mark.parametrize("field", ["message", "code"])
    def test_non_string_text_fields(self, field):
        """Test that non-string message or code raise SerializationError."""
        with pytest.raises(SerializationError, match=field):
            ValidationResult.from_dict({"valid": False, field: 42})

    def test_string_false_in_batch(self):
        """Test that a batch item with "valid": "false" fails the whole parse."""
        with pytest.raises(SerializationError):
            parse_results({"results": [{"valid": True}, {"valid": "false"}]})

    def test_immutable(self):
        """Test that results cannot be modified."""
        result = ValidationResult(valid=True)

        with pytest.raises(dataclasses.FrozenInstanceError):
            result.valid = False

    def test_invalid_country(self):
        """Test the local soft-failure result."""
        assert ValidationResult.invalid_country() == ValidationResult(
            valid=False, message="Invalid country code."
        )


class TestOptions:
    """Tests for option defaults."""

    def test_defaults_are_false(self):
        """Test that all toggles default to False."""
        assert CountryOptions().follow_upward is False
        assert SubdivisionOptions().follow_related is False
        assert SubdivisionOptions().allow_parent_selection is False


class TestParseResult:
    """Tests for parse_result."""

    def test_null_body(self):
        """Test that a JSON null body yields an empty result."""
        assert parse_result(None) == ValidationResult(valid=False)

    @pytest.mark.parametrize("body", [[], "ok", 1])
    def test_non_object_body(self, body):
        """Test that non-object bodies are rejected."""
        with pytest.raises(SerializationError):
            parse_result(body)


class TestParseResults:
    """Tests for parse_results."""

    def test_order_preserved(self):
        """Test that results are returned in server order."""
        results = parse_results({"results": [
            {"valid": True, "code": "DE"},
            {"valid": False, "code": "AA"},
            {"valid": True, "code": "DE"},
        ]})

        assert [r.code for r in results] == ["DE", "AA", "DE"]

    def test_missing_results(self):
        """Test that an envelope without results yields []."""
        assert parse_results({}) == []
        assert parse_results(None) == []

    def test_results_not_a_list(self):
        """Test that a malformed results field is rejected."""
        with pytest.raises(SerializationError):
            parse_results({"results": {"valid": True}})

    def test_item_not_an_object(self):
        """Test that malformed items are rejected."""
        with pytest.raises(SerializationError):
            parse_results({"results": [True]})
