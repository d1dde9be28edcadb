#!/usr/bin/env python3
"""
OAuth 1.0a Handshake

Runs the three-legged flow against Splitwise:

1. request a temporary token bound to the local callback URL
2. send the user to the authorize page in their browser
3. receive the verifier on the local callback listener
4. exchange request token + verifier for the access token

ensure_access_token() wraps the handshake with the token cache so that a valid
cached token never opens the browser.
"""

import logging
import webbrowser
from collections.abc import Callable
from enum import Enum

import click
import requests
from requests_oauthlib import OAuth1Session
from requests_oauthlib.oauth1_session import TokenRequestDenied

from ..core.config import SplitwiseConfig
from ..core.errors import AuthenticationError, TransportError
from .callback import CallbackListener
from .models import AccessToken
from .token_store import TokenStore

logger = logging.getLogger(__name__)


class HandshakeState(Enum):
    """Progress of a single handshake run."""

    NOT_STARTED = "not_started"
    REQUESTING_TOKEN = "requesting_token"
    AWAITING_CALLBACK = "awaiting_callback"
    EXCHANGING_TOKEN = "exchanging_token"
    DONE = "done"
    FAILED = "failed"


def _echo_to_stderr(message: str) -> None:
    click.echo(message, err=True)


class OAuthHandshake:
    """
    Interactive OAuth 1.0a login.

    The browser opener, session and listener factories are injectable so the
    flow can be driven without a browser or network.
    """

    def __init__(
        self,
        config: SplitwiseConfig,
        open_browser: Callable[[str], bool] = webbrowser.open,
        session_factory: Callable[..., OAuth1Session] = OAuth1Session,
        listener_factory: Callable[[str, int], CallbackListener] = CallbackListener,
        notify: Callable[[str], None] = _echo_to_stderr,
    ):
        self.config = config
        self._open_browser = open_browser
        self._session_factory = session_factory
        self._listener_factory = listener_factory
        self._notify = notify
        self.state = HandshakeState.NOT_STARTED

    def _transition(self, state: HandshakeState) -> None:
        logger.debug(f"OAuth handshake: {self.state.value} -> {state.value}")
        self.state = state

    def run(self) -> AccessToken:
        """
        Perform the full handshake.

        Returns:
            The access token issued for this consumer

        Raises:
            AuthenticationError: If the provider rejects a step or the user denies access
            TransportError: If a token endpoint cannot be reached
        """
        try:
            token = self._run()
        except Exception:
            self._transition(HandshakeState.FAILED)
            raise
        self._transition(HandshakeState.DONE)
        return token

    def _run(self) -> AccessToken:
        config = self.config

        # Listen before the provider can redirect
        with self._listener_factory(config.callback_host, config.callback_port) as listener:
            self._transition(HandshakeState.REQUESTING_TOKEN)
            session = self._session_factory(
                config.consumer_key,
                client_secret=config.consumer_secret,
                callback_uri=config.callback_url,
            )
            request_token = self._fetch(
                "request token",
                lambda: session.fetch_request_token(config.request_token_url, timeout=config.timeout),
            )

            authorize_url = session.authorization_url(config.authorize_url)
            self._transition(HandshakeState.AWAITING_CALLBACK)
            self._notify(f"Opening the Splitwise authorization page:\n  {authorize_url}")
            if not self._open_browser(authorize_url):
                logger.warning("Could not open a browser; visit the URL above to continue")

            callback = listener.wait(timeout=config.callback_timeout)

        if callback.oauth_token and callback.oauth_token != request_token.get("oauth_token"):
            raise AuthenticationError("Callback was issued for a different request token")

        self._transition(HandshakeState.EXCHANGING_TOKEN)
        response = self._fetch(
            "access token",
            lambda: session.fetch_access_token(
                config.access_token_url, verifier=callback.verifier, timeout=config.timeout
            ),
        )

        try:
            return AccessToken.from_oauth_response(response)
        except ValueError as e:
            raise AuthenticationError(f"Unusable access token response: {e}") from e

    @staticmethod
    def _fetch(what: str, call: Callable[[], dict]) -> dict:
        logger.info(f"Requesting OAuth {what}")
        try:
            return call()
        except TokenRequestDenied as e:
            raise AuthenticationError(f"Error getting {what}: {e}") from e
        except requests.RequestException as e:
            raise TransportError(f"Error getting {what}: {e}") from e
        except ValueError as e:
            # oauthlib TokenMissing and malformed form bodies
            raise AuthenticationError(f"Error getting {what}: {e}") from e


def ensure_access_token(store: TokenStore, handshake: OAuthHandshake, force: bool = False) -> AccessToken:
    """
    Return the cached access token, logging in first if there is none.

    Args:
        store: Token cache
        handshake: Handshake to run on a cache miss
        force: Ignore the cache and always log in

    Returns:
        A usable access token

    Raises:
        AuthenticationError: If the handshake fails
        OSError: If the new token cannot be saved
    """
    if not force:
        result = store.lookup()
        if result.found and result.token is not None:
            return result.token

    token = handshake.run()
    store.save(token)
    return token
