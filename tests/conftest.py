"""Shared fixtures: a scripted transport and throwaway gateway certificates."""

import datetime
import json

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.x509.oid import NameOID

from mpesa_daraja import MpesaClient
from mpesa_daraja.errors import TransportError

TOKEN_BODY = {"access_token": "tok-123", "expires_in": "3599"}


class FakeTransport:
    """Replays queued (status, body) replies and records every request."""

    def __init__(self, replies=None):
        self.replies = list(replies or [])
        self.calls = []
        self.closed = False

    def queue(self, body, status=200):
        if isinstance(body, (dict, list)):
            body = json.dumps(body)
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.replies.append((status, body))

    def fail(self, message="connection refused"):
        self.replies.append(TransportError(message))

    def send(self, method, url, headers=None, body=None):
        self.calls.append({"method": method, "url": url, "headers": headers or {}, "body": body})
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    def json_body(self, index):
        return json.loads(self.calls[index]["body"])

    def close(self):
        self.closed = True


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def client(transport):
    return MpesaClient("key", "secret", "sandbox", transport=transport)


def _self_signed(private_key, common_name="Daraja Test CA"):
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
    now = datetime.datetime.now(datetime.timezone.utc)
    return (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(private_key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - datetime.timedelta(days=1))
        .not_valid_after(now + datetime.timedelta(days=30))
        .sign(private_key, hashes.SHA256())
    )


@pytest.fixture(scope="session")
def rsa_private_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def rsa_cert_path(tmp_path_factory, rsa_private_key):
    path = tmp_path_factory.mktemp("certs") / "sandbox.cer"
    cert = _self_signed(rsa_private_key)
    path.write_bytes(cert.public_bytes(serialization.Encoding.PEM))
    return path


@pytest.fixture(scope="session")
def ec_cert_path(tmp_path_factory):
    key = ec.generate_private_key(ec.SECP256R1())
    path = tmp_path_factory.mktemp("ec") / "ec.cer"
    path.write_bytes(_self_signed(key).public_bytes(serialization.Encoding.PEM))
    return path
