"""
Shared fixtures: a recording fake transport and a client wired to it.
"""

import json
from typing import Any, Callable, Dict, List, Optional
from unittest.mock import MagicMock

import pytest
import requests

from yousign_client.api import YousignClient

API_KEY = "0123456789abcdef0123456789abcdef"

USER_UUID = "5a6b7c8d-1e2f-4a3b-9c8d-7e6f5a4b3c2d"
PROCEDURE_UUID = "9f8e7d6c-5b4a-4392-8170-6f5e4d3c2b1a"
MEMBER_UUID = "1a2b3c4d-5e6f-4a7b-8c9d-0e1f2a3b4c5d"
FILE_UUID = "aabbccdd-eeff-4011-8233-445566778899"
FILE_OBJECT_UUID = "00112233-4455-4667-8899-aabbccddeeff"


def make_response(
    status_code: int = 200,
    payload: Any = None,
    text: Optional[str] = None,
) -> requests.Response:
    """Build a real requests.Response without touching the network."""
    response = requests.Response()
    response.status_code = status_code
    if text is not None:
        response._content = text.encode("utf-8")
    elif payload is None:
        response._content = b""
    else:
        response._content = json.dumps(payload).encode("utf-8")
    response.encoding = "utf-8"
    response.url = "https://staging-api.yousign.com/"
    return response


class FakeSession:
    """Stands in for requests.Session and records every request."""
    
    def __init__(self, handler: Optional[Callable[[Dict[str, Any]], requests.Response]] = None):
        self.handler = handler
        self.calls: List[Dict[str, Any]] = []
        self.responses: List[requests.Response] = []
        self.closed = False
    
    def queue(self, response: requests.Response) -> None:
        self.responses.append(response)
    
    def request(self, method, url, params=None, data=None, headers=None, **kwargs):
        call = {
            "method": method,
            "url": url,
            "params": params,
            "data": data,
            "headers": headers,
        }
        self.calls.append(call)
        if self.handler is not None:
            return self.handler(call)
        if self.responses:
            return self.responses.pop(0)
        return make_response(200, {})
    
    def close(self):
        self.closed = True
    
    def last_body(self) -> Any:
        """Decode the JSON body of the most recent request."""
        data = self.calls[-1]["data"]
        return json.loads(data.decode("utf-8")) if data else None


@pytest.fixture
def fake_session():
    """Create a recording fake transport."""
    return FakeSession()


@pytest.fixture
def mock_logger():
    """Create an injectable logger spy."""
    return MagicMock()


@pytest.fixture
def client(fake_session, mock_logger):
    """Create a staging client using the fake transport."""
    return YousignClient(
        {"api_key": API_KEY, "is_testing": True},
        logger=mock_logger,
        session=fake_session,
    )
