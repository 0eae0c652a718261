"""HTTP transport for the Daraja API."""

import logging

import requests

from mpesa_daraja.errors import TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30  # seconds


class HttpTransport:
    """Sends raw requests over a pooled ``requests.Session``.

    ``send`` returns ``(status_code, body_bytes)`` and leaves interpreting
    the body to the caller. Network failures surface as TransportError.
    """

    def __init__(self, timeout=DEFAULT_TIMEOUT, session=None):
        self.timeout = timeout
        self.session = session or requests.Session()

    def send(self, method, url, headers=None, body=None):
        logger.debug("%s %s", method, url.split("?")[0])
        try:
            resp = self.session.request(
                method,
                url,
                headers=headers,
                data=body,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise TransportError(f"{method} {url.split('?')[0]} failed: {exc}") from exc
        logger.debug("%s %s -> %s (%d bytes)", method, url.split("?")[0],
                     resp.status_code, len(resp.content))
        return resp.status_code, resp.content

    def close(self):
        self.session.close()
