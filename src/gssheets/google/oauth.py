"""Google OAuth management using Authlib.

This module provides OAuth 2.0 authentication for the Sheets API with:
- Authorization URLs for the paste-the-code consent flow
- Code exchange and token refresh
- Google API service creation from the cached token

Tokens are read and written only through CredentialCache.
"""

import json
import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

from authlib.integrations.base_client import OAuthError
from authlib.integrations.requests_client import OAuth2Session
from authlib.oauth2 import OAuth2Error
from google.oauth2.credentials import Credentials as GoogleCredentials
from googleapiclient.discovery import build
from requests import RequestException

from gssheets.config import DEFAULT_CLIENT_CREDENTIALS
from gssheets.google.cache import Credential, CredentialCache
from gssheets.google.exceptions import (
    AuthorizationRequired,
    CredentialsNotFoundError,
    GoogleAuthError,
    ScopeMismatchError,
    TokenError,
    TokenNotFoundError,
)

logger = logging.getLogger(__name__)


SCOPES = {
    "sheets": "https://www.googleapis.com/auth/spreadsheets",
}

# Out-of-band redirect: Google shows the code for the user to copy
OOB_REDIRECT_URI = "urn:ietf:wg:oauth:2.0:oob"


class GoogleOAuth:
    """Google OAuth management using Authlib.

    Handles the authorization code exchange, token refresh, and
    Google API service creation.

    Example:
        >>> auth = GoogleOAuth("client-credential.json")
        >>> if not auth.is_authorized():
        ...     print(f"Visit: {auth.get_authorization_url()}")
        ...     auth.cache.save(auth.exchange_code(input("Code: ")))
        >>> sheets_service = auth.build_service("sheets", "v4")
    """

    AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/auth"
    TOKEN_URL = "https://oauth2.googleapis.com/token"
    REVOKE_URL = "https://oauth2.googleapis.com/revoke"

    def __init__(
        self,
        credentials_path: str | Path = DEFAULT_CLIENT_CREDENTIALS,
        scopes: list[str] | None = None,
        cache: CredentialCache | None = None,
    ):
        """Initialize Google OAuth.

        Args:
            credentials_path: Path to the OAuth client credentials file.
            scopes: List of scope names (e.g., ["sheets"]) or full URLs.
                   If None, defaults to ["sheets"].
            cache: Token cache. Defaults to the file under ~/.credentials.
        """
        self.credentials_path = Path(credentials_path)
        self.cache = cache or CredentialCache()

        # Resolve scope names to full URLs
        self.required_scopes = self._resolve_scopes(scopes or ["sheets"])

        self.client_id, self.client_secret, self.redirect_uri = self._load_client_credentials()

        self.session = OAuth2Session(
            client_id=self.client_id,
            client_secret=self.client_secret,
            scope=" ".join(self.required_scopes),
            redirect_uri=self.redirect_uri,
            token_endpoint=self.TOKEN_URL,
            token_endpoint_auth_method="client_secret_post",
        )

        self._state: str | None = None
        self.last_refresh: datetime | None = None

    def _resolve_scopes(self, scopes: list[str]) -> list[str]:
        """Resolve scope names to full URLs."""
        resolved = []
        for scope in scopes:
            if scope.startswith("https://"):
                resolved.append(scope)
            elif scope in SCOPES:
                resolved.append(SCOPES[scope])
            else:
                raise ValueError(
                    f"Unknown scope: {scope}. Use full URL or one of: {list(SCOPES.keys())}"
                )
        return resolved

    def _load_client_credentials(self) -> tuple[str, str, str]:
        """Load OAuth client credentials from file."""
        if not self.credentials_path.exists():
            raise CredentialsNotFoundError(str(self.credentials_path))

        try:
            with open(self.credentials_path) as f:
                creds = json.load(f)
        except json.JSONDecodeError as e:
            raise GoogleAuthError(f"Unable to read client secret file: {e}") from e

        # Handle both web and installed app credential formats
        if "installed" in creds:
            app_creds = creds["installed"]
        elif "web" in creds:
            app_creds = creds["web"]
        else:
            raise GoogleAuthError(
                "Invalid credentials file format. Expected 'installed' or 'web' key."
            )

        try:
            client_id = app_creds["client_id"]
            client_secret = app_creds["client_secret"]
        except KeyError as e:
            raise GoogleAuthError(f"Client secret file is missing {e}") from e

        redirect_uris = app_creds.get("redirect_uris") or [OOB_REDIRECT_URI]
        return client_id, client_secret, redirect_uris[0]

    def _to_credential(self, token: dict[str, Any], previous: Credential | None = None) -> Credential:
        """Convert an Authlib token dict to a Credential."""
        scopes = token.get("scope", "").split() or list(self.required_scopes)
        refresh_token = token.get("refresh_token")
        # Google omits the refresh token on refresh responses
        if not refresh_token and previous:
            refresh_token = previous.refresh_token

        return Credential(
            token=token["access_token"],
            refresh_token=refresh_token,
            token_type=token.get("token_type", "Bearer"),
            expiry=token.get("expires_at"),
            scopes=scopes,
            token_uri=self.TOKEN_URL,
            client_id=self.client_id,
            client_secret=self.client_secret,
        )

    def _check_scopes(self, credential: Credential) -> None:
        missing = set(self.required_scopes) - set(credential.scopes)
        if missing:
            raise ScopeMismatchError(missing)

    def load_credential(self) -> Credential:
        """Load the cached token.

        Raises:
            AuthorizationRequired: If no token is cached.
            CorruptTokenError: If the cached token is unreadable.
        """
        try:
            return self.cache.load()
        except TokenNotFoundError as e:
            raise AuthorizationRequired() from e

    def is_authorized(self) -> bool:
        """Check if a readable token with the required scopes is cached."""
        try:
            credential = self.cache.load()
        except GoogleAuthError:
            return False
        return set(self.required_scopes).issubset(credential.scopes)

    def get_authorization_url(self) -> str:
        """Start OAuth authorization flow.

        Returns:
            Authorization URL for user to visit.
        """
        authorization_url, state = self.session.create_authorization_url(
            self.AUTHORIZE_URL,
            access_type="offline",
            prompt="consent",
        )

        self._state = state
        return authorization_url

    def exchange_code(self, code: str) -> Credential:
        """Exchange an authorization code for a token.

        The token is returned, not cached; saving it is up to the caller.

        Args:
            code: Authorization code shown after consent.

        Returns:
            The new Credential.

        Raises:
            OAuthError: If Google rejects the code.
            RequestException: If the token endpoint cannot be reached.
            ScopeMismatchError: If the granted scopes are insufficient.
        """
        token = self.session.fetch_token(
            self.TOKEN_URL,
            code=code,
            client_secret=self.client_secret,
        )

        credential = self._to_credential(token)
        self._check_scopes(credential)
        logger.info(f"Fetched token with scopes: {credential.scopes}")
        return credential

    def refresh(self, credential: Credential) -> Credential:
        """Refresh a token and cache the result.

        Raises:
            TokenError: If there is no refresh token or the refresh fails.
        """
        if not credential.refresh_token:
            raise TokenError("Token expired and no refresh token is available")

        logger.info("Token expired, refreshing...")
        try:
            token = self.session.refresh_token(
                self.TOKEN_URL,
                refresh_token=credential.refresh_token,
            )
        except (OAuthError, OAuth2Error, RequestException) as e:
            raise TokenError(f"Failed to refresh token: {e}") from e

        refreshed = self._to_credential(token, previous=credential)
        self.cache.save(refreshed)
        self.last_refresh = datetime.now()
        return refreshed

    def get_credentials(self) -> GoogleCredentials:
        """Get Google Credentials object for API client libraries.

        Returns:
            Google Credentials object with current token.

        Raises:
            AuthorizationRequired: If no token is cached.
            ScopeMismatchError: If the cached token lacks required scopes.
            TokenError: If token refresh fails.
        """
        credential = self.load_credential()
        self._check_scopes(credential)

        if credential.expired:
            credential = self.refresh(credential)

        return GoogleCredentials(
            token=credential.token,
            refresh_token=credential.refresh_token,
            token_uri=credential.token_uri,
            client_id=self.client_id,
            client_secret=self.client_secret,
            scopes=self.required_scopes,
        )

    def build_service(self, service_name: str = "sheets", version: str = "v4"):
        """Build a Google API service with current credentials.

        Args:
            service_name: Name of the service (e.g., 'sheets', 'drive').
            version: API version (e.g., 'v4').

        Returns:
            Google API service object.
        """
        creds = self.get_credentials()
        return build(service_name, version, credentials=creds)

    def revoke_token(self):
        """Revoke the current token and clear the cache."""
        try:
            credential = self.cache.load()
        except TokenNotFoundError:
            logger.warning("No token to revoke")
            return

        try:
            self.session.post(
                self.REVOKE_URL,
                params={"token": credential.token},
                withhold_token=True,
            )
        except RequestException as e:
            logger.warning(f"Failed to revoke token remotely: {e}")

        self.cache.clear()
        logger.info("Token revoked successfully")

    def get_token_info(self) -> dict[str, Any]:
        """Get information about the cached token.

        Returns:
            Dictionary with token status, scopes, expiry, etc.
        """
        try:
            credential = self.cache.load()
        except TokenNotFoundError:
            return {"status": "no_token"}

        if credential.expiry:
            expires_in = credential.expiry - datetime.now().timestamp()
            expires_str = str(timedelta(seconds=int(max(0, expires_in))))
        else:
            expires_str = "unknown"

        return {
            "status": "expired" if credential.expired else "valid",
            "scopes": credential.scopes,
            "expires_in": expires_str,
            "has_refresh_token": bool(credential.refresh_token),
            "location": self.cache.location,
        }
