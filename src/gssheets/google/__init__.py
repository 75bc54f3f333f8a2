"""Google OAuth authorization and token caching."""

from gssheets.google.cache import Credential, CredentialCache, FileTokenStore, TokenStore
from gssheets.google.exceptions import (
    AuthorizationRequired,
    CorruptTokenError,
    CredentialsNotFoundError,
    ExchangeFailedError,
    GoogleAuthError,
    ScopeMismatchError,
    TokenError,
    TokenNotFoundError,
)
from gssheets.google.flow import AuthorizationFlow, FlowState, console_prompt
from gssheets.google.oauth import GoogleOAuth

__all__ = [
    "GoogleOAuth",
    "AuthorizationFlow",
    "FlowState",
    "console_prompt",
    "Credential",
    "CredentialCache",
    "TokenStore",
    "FileTokenStore",
    "GoogleAuthError",
    "CredentialsNotFoundError",
    "TokenNotFoundError",
    "CorruptTokenError",
    "ExchangeFailedError",
    "AuthorizationRequired",
    "TokenError",
    "ScopeMismatchError",
]
