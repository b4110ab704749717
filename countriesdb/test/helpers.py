"""
Shared helpers for validator tests.
"""

import json
from unittest.mock import MagicMock

import requests


def make_response(status_code=200, body=None, raw=None):
    """Build a mocked requests.Response with a JSON (or raw) body."""
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    if raw is not None:
        response.content = raw
    elif body is not None:
        response.content = json.dumps(body).encode("utf-8")
    else:
        response.content = b""
    return response


def sent_payload(session):
    """Decode the JSON body of the last POST sent through a mocked session."""
    return json.loads(session.post.call_args[1]["data"])
