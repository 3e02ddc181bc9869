"""Pytest fixtures for firefly tests."""
import json
from unittest.mock import MagicMock

import pytest
import requests

from firefly import Firefly

HOST = "https://test.fireflycloud.net"


def mock_http_response(text="", json_data=None, status=200, url=HOST, raise_for_status_exception=None):
    """Build a stand-in for `requests.Response`."""
    if json_data is not None:
        text = json.dumps(json_data)

    response = MagicMock(spec=requests.Response)
    response.status_code = status
    response.text = text
    response.content = text.encode("utf8")
    response.url = url
    if raise_for_status_exception is None and status >= 400:
        raise_for_status_exception = requests.HTTPError(f"{status} Error", response=response)
    if raise_for_status_exception is not None:
        response.raise_for_status.side_effect = raise_for_status_exception
    else:
        response.raise_for_status.return_value = None
    return response


@pytest.fixture
def xml_token():
    """A token as handed out by the login page."""
    return """<token>
    <secret>test-secret-123</secret>
    <user username="testuser" fullname="Test User" email="test@example.com" role="student" guid="user-guid-123">
        <classes>
            <class guid="class-guid-1" name="Math" subject="Mathematics"/>
            <class guid="class-guid-2" name="Science" subject="Biology"/>
        </classes>
    </user>
</token>"""


@pytest.fixture
def credentials_data():
    """An export in the persisted JSON layout."""
    return {
        "deviceId": "test-device-123",
        "secret": "test-secret-123",
        "user": {
            "username": "testuser",
            "fullname": "Test User",
            "email": "test@example.com",
            "role": "student",
            "guid": "user-guid-123",
        },
        "classes": [
            {"guid": "class-guid-1", "name": "Math", "subject": "Mathematics"},
            {"guid": "class-guid-2", "name": "Science", "subject": "Biology"},
        ],
    }


@pytest.fixture
def firefly():
    """A fresh, unauthenticated session."""
    return Firefly(HOST)


@pytest.fixture
def authenticated_firefly(credentials_data):
    """A session restored from an export, device id included."""
    session = Firefly(HOST)
    session.import_credentials(json.dumps(credentials_data))
    return session
