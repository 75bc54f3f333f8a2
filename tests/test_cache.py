"""Tests for the OAuth token cache."""

import json
import stat

import pytest

from gssheets.google import CorruptTokenError, Credential, CredentialCache, TokenNotFoundError
from gssheets.google.cache import FileTokenStore


@pytest.fixture
def credential():
    return Credential(
        token="test-access-token",
        refresh_token="test-refresh-token",
        expiry=4070908800.0,
        scopes=["https://www.googleapis.com/auth/spreadsheets"],
        client_id="test-client-id",
        client_secret="test-client-secret",
    )


class TestCredential:
    def test_to_dict_uses_google_layout(self, credential):
        data = credential.to_dict()
        assert data["token"] == "test-access-token"
        assert data["type"] == "Bearer"
        assert "token_type" not in data

    def test_from_dict_parses_iso_expiry(self):
        credential = Credential.from_dict({"token": "t", "expiry": "2099-01-01T00:00:00Z"})
        assert credential.expiry == 4070908800.0
        assert credential.expired is False

    def test_expired(self):
        assert Credential(token="t", expiry=1.0).expired is True

    def test_no_expiry_never_expires(self):
        assert Credential(token="t").expired is False


class TestCredentialCacheInMemory:
    """Test cache behaviour against an injected store."""

    def test_save_then_load(self, memory_cache, credential):
        memory_cache.save(credential)
        assert memory_cache.load() == credential

    def test_load_missing(self, memory_cache):
        with pytest.raises(TokenNotFoundError):
            memory_cache.load()

    def test_load_invalid_json(self, memory_store, memory_cache):
        memory_store.data = "{not json"
        with pytest.raises(CorruptTokenError):
            memory_cache.load()

    def test_load_missing_token_field(self, memory_store, memory_cache):
        memory_store.data = json.dumps({"refresh_token": "r"})
        with pytest.raises(CorruptTokenError, match="token"):
            memory_cache.load()

    @pytest.mark.parametrize("token", [None, 5, ""])
    def test_load_unusable_token_value(self, memory_store, memory_cache, token):
        memory_store.data = json.dumps({"token": token, "refresh_token": "r"})
        with pytest.raises(CorruptTokenError, match="non-empty string"):
            memory_cache.load()

    def test_load_non_object(self, memory_store, memory_cache):
        memory_store.data = "[]"
        with pytest.raises(CorruptTokenError):
            memory_cache.load()

    def test_save_replaces(self, memory_cache, credential):
        memory_cache.save(credential)
        memory_cache.save(Credential(token="new-token"))
        assert memory_cache.load() == Credential(token="new-token")

    def test_clear(self, memory_cache, credential):
        memory_cache.save(credential)
        memory_cache.clear()
        assert memory_cache.exists() is False


class TestFileTokenStore:
    """Test the on-disk token file."""

    def test_round_trip(self, tmp_path, credential):
        cache = CredentialCache(FileTokenStore(tmp_path / ".credentials" / "token.json"))
        cache.save(credential)
        assert cache.load() == credential

    def test_load_from_empty_directory(self, tmp_path):
        cache = CredentialCache(FileTokenStore(tmp_path / "token.json"))
        with pytest.raises(TokenNotFoundError):
            cache.load()

    def test_owner_only_permissions(self, tmp_path, credential):
        directory = tmp_path / ".credentials"
        path = directory / "token.json"
        CredentialCache(FileTokenStore(path)).save(credential)

        assert stat.S_IMODE(directory.stat().st_mode) == 0o700
        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_no_temp_files_left(self, tmp_path, credential):
        path = tmp_path / "token.json"
        store = FileTokenStore(path)
        CredentialCache(store).save(credential)
        CredentialCache(store).save(credential)
        assert [p.name for p in tmp_path.iterdir()] == ["token.json"]

    def test_written_file_is_json(self, tmp_path, credential):
        path = tmp_path / "token.json"
        CredentialCache(FileTokenStore(path)).save(credential)
        with open(path) as f:
            data = json.load(f)
        assert data["refresh_token"] == "test-refresh-token"

    def test_delete_missing_is_noop(self, tmp_path):
        FileTokenStore(tmp_path / "token.json").delete()
