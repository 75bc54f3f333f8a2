"""Shared fixtures."""

import json

import pytest
import requests

from gssheets.google.cache import CredentialCache, TokenStore


class MemoryTokenStore(TokenStore):
    """Token store that keeps the data in memory."""

    def __init__(self, data: str | None = None):
        self.data = data
        self.writes = 0

    @property
    def location(self) -> str:
        return "memory://token"

    def read(self) -> str | None:
        return self.data

    def write(self, data: str) -> None:
        self.data = data
        self.writes += 1

    def delete(self) -> None:
        self.data = None


@pytest.fixture
def memory_store():
    return MemoryTokenStore()


@pytest.fixture
def memory_cache(memory_store):
    return CredentialCache(memory_store)


@pytest.fixture
def client_credentials(tmp_path):
    """Create a mock OAuth client credentials file."""
    creds = {
        "installed": {
            "client_id": "test-client-id.apps.googleusercontent.com",
            "client_secret": "test-client-secret",
            "auth_uri": "https://accounts.google.com/o/oauth2/auth",
            "token_uri": "https://oauth2.googleapis.com/token",
            "redirect_uris": ["urn:ietf:wg:oauth:2.0:oob", "http://localhost"],
        }
    }
    creds_path = tmp_path / "client-credential.json"
    with open(creds_path, "w") as f:
        json.dump(creds, f)
    return creds_path


@pytest.fixture
def invalid_grant_response():
    """Token endpoint reply for a rejected code or refresh token."""
    resp = requests.Response()
    resp.status_code = 400
    resp.reason = "Bad Request"
    resp.url = "https://oauth2.googleapis.com/token"
    resp.encoding = "utf-8"
    resp.headers["Content-Type"] = "application/json"
    resp._content = b'{"error": "invalid_grant", "error_description": "Bad Request"}'
    return resp
