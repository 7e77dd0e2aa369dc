import json

import httpx
import pytest

from ai_assistant.schemas.requests import AssistantUser


class RecordingTransport:
    """Serves canned responses and keeps every request it receives."""

    def __init__(self, response=None):
        self.requests = []
        self.response = response

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> dict:
        return json.loads(self.last_request.content)


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def http_client(transport):
    client = httpx.Client(transport=httpx.MockTransport(transport))
    yield client
    client.close()


@pytest.fixture
def user():
    return AssistantUser(id="user123", email="test@example.com", first_name="Test", last_name="User")
