#!/usr/bin/env python3
"""
OAuth Callback Listener

Local HTTP listener that receives the provider's redirect after the user
approves access in the browser. It serves from a background thread and hands
exactly one result to the waiting caller through a single-slot queue; the
caller then shuts the listener down.
"""

import logging
import queue
import threading
from dataclasses import dataclass
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any
from urllib.parse import parse_qs, urlparse

from ..core.errors import AuthenticationError

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Token obtained successfully, you can go back to the terminal"
DENIED_MESSAGE = "Authorization was not granted, you can go back to the terminal"
MISSING_VERIFIER_MESSAGE = "Missing oauth_verifier parameter"

IDLE_CONNECTION_TIMEOUT = 5


@dataclass(frozen=True)
class CallbackResult:
    """Query parameters of the provider redirect."""

    verifier: str
    oauth_token: str | None = None


class _CallbackServer(ThreadingHTTPServer):
    """
    HTTP server carrying the one-slot handoff to the main flow.

    Each connection is served on its own daemon thread, so an idle socket
    such as a browser preconnect blocks neither the redirect nor shutdown().
    """

    allow_reuse_address = True
    daemon_threads = True

    def __init__(self, server_address: tuple[str, int]):
        super().__init__(server_address, _CallbackHandler)
        self.handoff: queue.Queue = queue.Queue(maxsize=1)

    def deliver(self, item: CallbackResult | AuthenticationError) -> None:
        try:
            self.handoff.put_nowait(item)
        except queue.Full:
            logger.debug("Callback already received, ignoring duplicate redirect")


class _CallbackHandler(BaseHTTPRequestHandler):
    server: _CallbackServer  # type: ignore[assignment]
    # Drop connections that send no request
    timeout = IDLE_CONNECTION_TIMEOUT

    def do_GET(self) -> None:  # noqa: N802
        params = parse_qs(urlparse(self.path).query)
        verifier = params.get("oauth_verifier", [None])[0]

        if verifier:
            # Respond first; the main flow may shut the server down right after the handoff
            self._respond(200, SUCCESS_MESSAGE)
            self.server.deliver(CallbackResult(verifier=verifier, oauth_token=params.get("oauth_token", [None])[0]))
        elif "denied" in params or "error" in params:
            self._respond(200, DENIED_MESSAGE)
            reason = params.get("error", ["access denied by user"])[0]
            self.server.deliver(AuthenticationError(f"Authorization was not granted: {reason}"))
        else:
            self._respond(400, MISSING_VERIFIER_MESSAGE)

    def _respond(self, status: int, message: str) -> None:
        body = message.encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "text/plain; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, fmt: str, *args: Any) -> None:
        logger.debug(f"Callback request: {fmt % args}")


class CallbackListener:
    """
    One-shot listener for the OAuth redirect.

    Usage:
        with CallbackListener("localhost", 1234) as listener:
            ...  # send the user to the authorize page
            result = listener.wait(timeout=None)
    """

    def __init__(self, host: str = "localhost", port: int = 1234):
        self.host = host
        self.requested_port = port
        self._server: _CallbackServer | None = None
        self._thread: threading.Thread | None = None

    @property
    def port(self) -> int:
        """Bound port; differs from the requested one only when 0 was requested."""
        if self._server is None:
            return self.requested_port
        return self._server.server_address[1]

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """
        Bind the port and start serving in a daemon thread.

        Raises:
            AuthenticationError: If the port cannot be bound
        """
        try:
            self._server = _CallbackServer((self.host, self.requested_port))
        except OSError as e:
            raise AuthenticationError(
                f"Cannot listen for the OAuth callback on {self.host}:{self.requested_port}: {e}"
            ) from e

        self._thread = threading.Thread(target=self._server.serve_forever, name="oauth-callback", daemon=True)
        self._thread.start()
        logger.debug(f"Listening for OAuth callback on {self.host}:{self.port}")

    def wait(self, timeout: float | None = None) -> CallbackResult:
        """
        Block until the redirect arrives.

        Args:
            timeout: Seconds to wait, or None to wait indefinitely

        Returns:
            CallbackResult carrying the verifier

        Raises:
            AuthenticationError: On timeout or when the user denied access
        """
        if self._server is None:
            raise RuntimeError("Callback listener has not been started")

        try:
            item = self._server.handoff.get(timeout=timeout)
        except queue.Empty:
            raise AuthenticationError(f"Timed out after {timeout}s waiting for the OAuth callback") from None

        if isinstance(item, AuthenticationError):
            raise item
        return item

    def stop(self) -> None:
        """Stop serving and release the port. Safe to call more than once."""
        if self._server is None:
            return
        self._server.shutdown()
        self._server.server_close()
        if self._thread is not None:
            self._thread.join()
        logger.debug("OAuth callback listener stopped")
        self._server = None
        self._thread = None

    def __enter__(self) -> "CallbackListener":
        self.start()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.stop()
