import pytest
import sys
import os
import logging
from unittest.mock import MagicMock

import requests

# Ensure the project root is in the Python path for imports in tests
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)


@pytest.fixture(autouse=True)
def configure_logging(caplog):
    """Ensure logging is configured to capture DEBUG level messages for all tests."""
    caplog.set_level(logging.DEBUG)


@pytest.fixture
def make_response():
    """Factory for MagicMock requests.Response objects."""
    def _make(status_code=200, content=b"", text="", headers=None, reason="OK", url="http://mocked.url"):
        response = MagicMock(spec=requests.Response)
        response.status_code = status_code
        response.ok = status_code < 400
        response.reason = reason
        response.content = content
        response.text = text
        response.headers = headers if headers is not None else {}
        response.encoding = None
        response.url = url
        response.close = MagicMock()
        return response
    return _make
