"""
pytest configuration for validator tests.
"""

from unittest.mock import MagicMock

import pytest
import requests

from countriesdb.test.helpers import make_response


@pytest.fixture
def mock_session():
    """A requests session mock that answers every POST with {"valid": true}."""
    session = MagicMock(spec=requests.Session)
    session.post.return_value = make_response(body={"valid": True})
    return session
