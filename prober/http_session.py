"""
Per-probe HTTP session: cookie persistence, browser identity, bounded timeout.

One ProbeSession (and therefore one cookie jar) belongs to exactly one probe
run. get() and post() return the response body, or None on any transport
error, non-2xx status or overrun of the per-request deadline; failures are
logged here and never raised.

requests applies its timeout to each socket operation, so a server that
trickles bytes can hold a plain request open indefinitely. Bodies are
therefore streamed against a wall-clock deadline, and a watchdog shuts the
connection down if a single read blocks past it.
"""

from __future__ import annotations

import contextlib
import socket
import threading
import time
from typing import Mapping, Optional

import requests
import urllib3
from urllib3.exceptions import InsecureRequestWarning

from shared.config import DEFAULT_HTTP_TIMEOUT_SECONDS, DEFAULT_USER_AGENT, AppConfig
from shared.logging import get_logger

logger = get_logger(__name__)

DEFAULT_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}

BODY_CHUNK_SIZE = 16 * 1024


class DeadlineExceeded(requests.Timeout):
    """The whole request, body included, outlived the session timeout."""


def _shutdown_connection(response: requests.Response) -> None:
    """Wake a read blocked on the response socket by shutting it down."""
    connection = getattr(response.raw, "connection", None)
    sock = getattr(connection, "sock", None)
    if sock is None:
        return
    # Already closed by the reader.
    with contextlib.suppress(OSError):
        sock.shutdown(socket.SHUT_RDWR)


def _decode(body: bytes, encoding: Optional[str]) -> str:
    try:
        return body.decode(encoding or "utf-8", errors="replace")
    except LookupError:
        return body.decode("utf-8", errors="replace")


class ProbeSession:
    """Thin wrapper over requests.Session with the probe's failure semantics."""

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
        user_agent: str = DEFAULT_USER_AGENT,
        verify_tls: bool = False,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.timeout = timeout
        self.verify_tls = verify_tls
        self._session = session or requests.Session()
        self._session.headers.update(DEFAULT_HEADERS)
        self._session.headers["User-Agent"] = user_agent
        self._session.verify = verify_tls
        if not verify_tls:
            urllib3.disable_warnings(InsecureRequestWarning)

    @classmethod
    def from_config(cls, config: AppConfig) -> "ProbeSession":
        return cls(
            timeout=config.http_timeout_seconds,
            user_agent=config.user_agent,
            verify_tls=config.verify_tls,
        )

    @property
    def cookies(self) -> requests.cookies.RequestsCookieJar:
        return self._session.cookies

    def _read_body(self, response: requests.Response, deadline: float) -> bytes:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise DeadlineExceeded(f"deadline of {self.timeout}s exceeded before body")

        aborted = threading.Event()

        def _abort() -> None:
            aborted.set()
            _shutdown_connection(response)

        watchdog = threading.Timer(remaining, _abort)
        watchdog.daemon = True
        watchdog.start()
        chunks: list[bytes] = []
        try:
            for chunk in response.iter_content(chunk_size=BODY_CHUNK_SIZE):
                chunks.append(chunk)
                if time.monotonic() >= deadline:
                    raise DeadlineExceeded(f"deadline of {self.timeout}s exceeded reading body")
        except DeadlineExceeded:
            raise
        except requests.RequestException:
            if aborted.is_set():
                raise DeadlineExceeded(f"deadline of {self.timeout}s exceeded reading body") from None
            raise
        finally:
            watchdog.cancel()

        # The watchdog may cut a body short without the reader raising.
        if aborted.is_set():
            raise DeadlineExceeded(f"deadline of {self.timeout}s exceeded reading body")
        return b"".join(chunks)

    def _send(self, method: str, url: str, data: Optional[Mapping[str, str]] = None) -> Optional[str]:
        deadline = time.monotonic() + self.timeout
        try:
            response = self._session.request(
                method,
                url,
                data=dict(data) if data is not None else None,
                timeout=self.timeout,
                allow_redirects=True,
                stream=True,
            )
            try:
                response.raise_for_status()
                body = self._read_body(response, deadline)
            finally:
                response.close()
        except requests.RequestException as e:
            status = getattr(getattr(e, "response", None), "status_code", None)
            logger.warning(
                "http.request_failed",
                method=method,
                url=url,
                status=status,
                error=str(e),
                error_type=type(e).__name__,
            )
            return None
        logger.debug(
            "http.request_completed",
            method=method,
            url=url,
            status=response.status_code,
            size=len(body),
        )
        return _decode(body, response.encoding)

    def get(self, url: str) -> Optional[str]:
        """GET url; body text, or None on failure."""
        return self._send("GET", url)

    def post(self, url: str, fields: Mapping[str, str]) -> Optional[str]:
        """POST url-encoded form fields; body text, or None on failure."""
        return self._send("POST", url, data=fields)

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "ProbeSession":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
