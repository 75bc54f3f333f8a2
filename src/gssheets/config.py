"""Credential locations.

The OAuth token cache lives in the user's home directory:
    ~/.credentials/sheets.googleapis.com-gssheets.json

The OAuth client credentials file (downloaded from Google Cloud Console)
is passed on the command line and defaults to ./client-credential.json.

Paths are resolved here and handed to the components that use them;
nothing below the CLI looks them up on its own.
"""

import os
from pathlib import Path

CREDENTIALS_DIR_NAME = ".credentials"
TOKEN_FILENAME = "sheets.googleapis.com-gssheets.json"
DEFAULT_CLIENT_CREDENTIALS = "client-credential.json"

# Owner-only access for the cache directory and token file
CREDENTIALS_DIR_MODE = 0o700
TOKEN_FILE_MODE = 0o600


def default_token_path(home: str | Path | None = None) -> Path:
    """Get the token cache path.

    Args:
        home: Home directory to use. Defaults to the current user's home.

    Returns:
        Path to the cached token file.
    """
    base = Path(home) if home else Path.home()
    return base / CREDENTIALS_DIR_NAME / TOKEN_FILENAME


def ensure_credentials_dir(path: str | Path) -> Path:
    """Create the token cache directory if it doesn't exist.

    Args:
        path: Directory to create.

    Returns:
        Path to the directory.
    """
    directory = Path(path)
    if not directory.exists():
        directory.mkdir(parents=True, mode=CREDENTIALS_DIR_MODE)
        # mkdir applies the umask
        os.chmod(directory, CREDENTIALS_DIR_MODE)
    return directory


def get_credential_status(
    credentials_path: str | Path = DEFAULT_CLIENT_CREDENTIALS,
    token_path: str | Path | None = None,
) -> dict:
    """Get status of the configured credentials.

    Returns:
        Dictionary with credential status.
    """
    token = Path(token_path) if token_path else default_token_path()
    return {
        "client_credentials": {
            "path": str(credentials_path),
            "exists": Path(credentials_path).exists(),
        },
        "token": {
            "path": str(token),
            "exists": token.exists(),
        },
    }
