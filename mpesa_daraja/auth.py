"""OAuth client-credentials token exchange."""

import base64
import logging

from mpesa_daraja.classifier import decode
from mpesa_daraja.models import AccessTokenResponse

logger = logging.getLogger(__name__)

TOKEN_PATH = "/oauth/v1/generate?grant_type=client_credentials"


def basic_auth_header(consumer_key, consumer_secret) -> str:
    raw = f"{consumer_key}:{consumer_secret}".encode("utf-8")
    return "Basic " + base64.b64encode(raw).decode("ascii")


class TokenProvider:
    """Fetches a fresh bearer token for every call. Nothing is cached.

    ``fetch_token`` raises TransportError when the request fails and
    ParseError when the body lacks ``access_token``. A structured gateway
    error body (``errorCode``, e.g. rejected credentials) raises ApiError
    instead, so callers that only catch ParseError should catch DarajaError.
    """

    def __init__(self, transport):
        self.transport = transport

    def fetch_token(self, config) -> str:
        url = f"{config.base_url}{TOKEN_PATH}"
        headers = {"Authorization": basic_auth_header(config.consumer_key, config.consumer_secret)}
        status, body = self.transport.send("GET", url, headers=headers)
        token = decode(body, AccessTokenResponse, status=status)
        logger.debug("Obtained access token (expires_in=%s)", token.expires_in)
        return token.access_token
