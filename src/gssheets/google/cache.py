"""OAuth token cache.

The cached token uses the Google "authorized user" JSON layout so that
google-auth can read it directly:

    {
      "token": "...",
      "refresh_token": "...",
      "token_uri": "https://oauth2.googleapis.com/token",
      "client_id": "...",
      "client_secret": "...",
      "scopes": ["https://www.googleapis.com/auth/spreadsheets"],
      "type": "Bearer",
      "expiry": 1767225600.0
    }

Storage is pluggable through TokenStore; the default keeps one file at
~/.credentials/sheets.googleapis.com-gssheets.json.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from gssheets.config import TOKEN_FILE_MODE, default_token_path, ensure_credentials_dir
from gssheets.google.exceptions import CorruptTokenError, TokenNotFoundError

logger = logging.getLogger(__name__)

GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"


@dataclass(frozen=True)
class Credential:
    """Access token plus what is needed to refresh it."""

    token: str
    refresh_token: str | None = None
    token_type: str = "Bearer"
    expiry: float | None = None
    scopes: list[str] = field(default_factory=list)
    token_uri: str = GOOGLE_TOKEN_URI
    client_id: str | None = None
    client_secret: str | None = None

    @property
    def expired(self) -> bool:
        """True once the expiry time has passed."""
        return bool(self.expiry) and self.expiry < datetime.now().timestamp()

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the Google authorized-user layout."""
        data = asdict(self)
        data["type"] = data.pop("token_type")
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Credential:
        """Build a Credential from the Google authorized-user layout.

        Raises:
            KeyError: If the access token is missing.
            ValueError: If a field has an unusable value.
        """
        expiry = data.get("expiry")
        # google-auth writes ISO timestamps
        if isinstance(expiry, str):
            expiry = datetime.fromisoformat(expiry.replace("Z", "+00:00")).timestamp()

        scopes = data.get("scopes") or []
        if isinstance(scopes, str):
            scopes = scopes.split()

        token = data["token"]
        if not isinstance(token, str) or not token:
            raise ValueError("token must be a non-empty string")

        return cls(
            token=token,
            refresh_token=data.get("refresh_token"),
            token_type=data.get("type", "Bearer"),
            expiry=float(expiry) if expiry is not None else None,
            scopes=list(scopes),
            token_uri=data.get("token_uri", GOOGLE_TOKEN_URI),
            client_id=data.get("client_id"),
            client_secret=data.get("client_secret"),
        )


class TokenStore(ABC):
    """Where the serialized token is kept."""

    @property
    @abstractmethod
    def location(self) -> str:
        """Human-readable location for messages."""
        pass

    @abstractmethod
    def read(self) -> str | None:
        """Return the stored data, or None if nothing is stored."""
        pass

    @abstractmethod
    def write(self, data: str) -> None:
        """Replace the stored data."""
        pass

    @abstractmethod
    def delete(self) -> None:
        """Remove the stored data if present."""
        pass


class FileTokenStore(TokenStore):
    """Token kept in a single owner-only file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    @property
    def location(self) -> str:
        return str(self.path)

    def read(self) -> str | None:
        try:
            with open(self.path, encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            return None

    def write(self, data: str) -> None:
        """Write data next to the target and rename it into place."""
        ensure_credentials_dir(self.path.parent)

        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
        try:
            os.chmod(tmp_name, TOKEN_FILE_MODE)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(data)
            os.replace(tmp_name, self.path)
        except BaseException:
            with contextlib.suppress(FileNotFoundError):
                os.unlink(tmp_name)
            raise

    def delete(self) -> None:
        with contextlib.suppress(FileNotFoundError):
            self.path.unlink()


class CredentialCache:
    """Load and save the cached OAuth token.

    Example:
        >>> cache = CredentialCache(FileTokenStore(tmp_path / "token.json"))
        >>> cache.save(Credential(token="abc"))
        >>> cache.load().token
        'abc'
    """

    def __init__(self, store: TokenStore | None = None):
        """Initialize the cache.

        Args:
            store: Token storage. Defaults to the file under ~/.credentials.
        """
        self.store = store or FileTokenStore(default_token_path())

    @property
    def location(self) -> str:
        return self.store.location

    def exists(self) -> bool:
        """Check whether a token is cached."""
        return self.store.read() is not None

    def load(self) -> Credential:
        """Load the cached token.

        Returns:
            The cached Credential.

        Raises:
            TokenNotFoundError: If nothing is cached.
            CorruptTokenError: If the cached data is not a token.
        """
        raw = self.store.read()
        if raw is None:
            raise TokenNotFoundError(self.location)

        try:
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise ValueError("expected a JSON object")
            credential = Credential.from_dict(data)
        except KeyError as e:
            raise CorruptTokenError(self.location, f"missing field {e}") from e
        except (ValueError, TypeError) as e:
            raise CorruptTokenError(self.location, str(e)) from e

        logger.info(f"Loaded token from {self.location}")
        return credential

    def save(self, credential: Credential) -> None:
        """Save a token, replacing whatever was cached."""
        logger.info(f"Saving credential file to: {self.location}")
        self.store.write(json.dumps(credential.to_dict(), indent=2))

    def clear(self) -> None:
        """Remove the cached token."""
        self.store.delete()
        logger.info(f"Removed cached token at {self.location}")
