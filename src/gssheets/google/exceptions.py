"""Google authentication exceptions."""


class GoogleAuthError(Exception):
    """Base exception for Google authentication errors."""

    pass


class CredentialsNotFoundError(GoogleAuthError):
    """Raised when the OAuth client credentials file is not found."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"Credentials file not found at {path}. "
            "Please download OAuth credentials from Google Cloud Console."
        )


class TokenNotFoundError(GoogleAuthError):
    """Raised when no cached token exists."""

    def __init__(self, location: str):
        self.location = location
        super().__init__(f"No cached token at {location}")


class CorruptTokenError(GoogleAuthError):
    """Raised when the cached token cannot be parsed."""

    def __init__(self, location: str, reason: str):
        self.location = location
        self.reason = reason
        super().__init__(f"Cached token at {location} is unreadable: {reason}")


class ExchangeFailedError(GoogleAuthError):
    """Raised when an authorization code cannot be exchanged for a token."""

    pass


class AuthorizationRequired(GoogleAuthError):
    """Raised when a remote call is attempted without a cached token."""

    def __init__(self, message: str = "Not authorized. Run 'gssheets auth' first."):
        super().__init__(message)


class TokenError(GoogleAuthError):
    """Raised when there's an issue with the OAuth token."""

    pass


class ScopeMismatchError(GoogleAuthError):
    """Raised when token scopes don't match required scopes."""

    def __init__(self, missing_scopes: set[str]):
        self.missing_scopes = missing_scopes
        super().__init__(f"Token missing required scopes: {missing_scopes}")
