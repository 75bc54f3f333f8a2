"""Interactive authorization: paste-the-code OAuth consent.

The flow has two states. It starts in NO_TOKEN, shows the operator an
authorization URL, reads back the code Google displays after consent,
exchanges it for a token and caches it, ending in AUTHORIZED. A failed
exchange leaves the flow in NO_TOKEN with nothing cached.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

from authlib.integrations.base_client import OAuthError
from authlib.oauth2 import OAuth2Error
from requests import RequestException

from gssheets.google.cache import Credential, CredentialCache
from gssheets.google.exceptions import ExchangeFailedError, GoogleAuthError
from gssheets.google.oauth import GoogleOAuth

logger = logging.getLogger(__name__)

# Receives the authorization URL, returns the code the operator pasted
CodePrompt = Callable[[str], str]


class FlowState(Enum):
    NO_TOKEN = "no_token"
    AUTHORIZED = "authorized"


def console_prompt(url: str) -> str:
    """Show the URL and block until the operator types the code."""
    print(f"Go to the following link in your browser then type the authorization code:\n{url}\n")
    try:
        return input("authorization code: ")
    except EOFError as e:
        raise ExchangeFailedError("Unable to read authorization code") from e


class AuthorizationFlow:
    """Obtain a token through operator consent and cache it.

    Example:
        >>> flow = AuthorizationFlow(GoogleOAuth("client-credential.json"))
        >>> credential = flow.run()
        >>> flow.state
        <FlowState.AUTHORIZED: 'authorized'>
    """

    def __init__(
        self,
        oauth: GoogleOAuth,
        cache: CredentialCache | None = None,
        prompt: CodePrompt = console_prompt,
    ):
        """Initialize the flow.

        Args:
            oauth: OAuth session that builds the URL and exchanges the code.
            cache: Where the token is saved. Defaults to the session's cache.
            prompt: Reads the authorization code from the operator.
        """
        self.oauth = oauth
        self.cache = cache or oauth.cache
        self.prompt = prompt
        self.state = FlowState.NO_TOKEN
        self.credential: Credential | None = None

    def run(self) -> Credential:
        """Run the consent exchange once.

        Returns:
            The cached Credential.

        Raises:
            ExchangeFailedError: If no code was given or the exchange failed.
            GoogleAuthError: If the flow already completed.
        """
        if self.state is FlowState.AUTHORIZED:
            raise GoogleAuthError("Authorization flow already completed")

        url = self.oauth.get_authorization_url()
        code = self.prompt(url).strip()
        if not code:
            raise ExchangeFailedError("No authorization code provided")

        try:
            credential = self.oauth.exchange_code(code)
        except (OAuthError, OAuth2Error, RequestException) as e:
            raise ExchangeFailedError(f"Unable to retrieve token from web: {e}") from e

        self.cache.save(credential)
        self.credential = credential
        self.state = FlowState.AUTHORIZED
        logger.info("Authorization complete")
        return credential
