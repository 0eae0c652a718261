"""STK push password and timestamp derivation."""

import base64
from datetime import datetime, timezone

TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


def format_timestamp(now=None) -> str:
    """Format ``now`` as YYYYMMDDHHMMSS in UTC.

    Naive datetimes are taken to already be UTC.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now.strftime(TIMESTAMP_FORMAT)


def encode_password(short_code, passkey, timestamp) -> str:
    return base64.b64encode(f"{short_code}{passkey}{timestamp}".encode("utf-8")).decode("ascii")


def build_push_credentials(short_code, passkey, now=None):
    """Return ``(timestamp, password)`` for an STK push request.

    The password is base64 of ``short_code + passkey + timestamp`` with no
    separators; the same timestamp must go into the request body.
    """
    timestamp = format_timestamp(now)
    return timestamp, encode_password(short_code, passkey, timestamp)
