"""Security credential generation: the initiator password encrypted with the
gateway certificate (RSA, PKCS#1 v1.5)."""

import base64
import logging
import os

from cryptography import x509
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from mpesa_daraja.errors import CredentialError

logger = logging.getLogger(__name__)

PRODUCTION_CERT_PATH = os.path.join("certs", "production.cer")
SANDBOX_CERT_PATH = os.path.join("certs", "sandbox.cer")

PKCS1_V15_OVERHEAD = 11  # bytes of padding PKCS#1 v1.5 adds per block


def default_certificate_path(is_production) -> str:
    return PRODUCTION_CERT_PATH if is_production else SANDBOX_CERT_PATH


def load_public_key(cert_path):
    """Read a PEM X.509 certificate and return its RSA public key."""
    try:
        with open(cert_path, "rb") as f:
            pem = f.read()
    except FileNotFoundError as exc:
        raise CredentialError(f"certificate not found: {cert_path}", "not_found") from exc
    except OSError as exc:
        raise CredentialError(f"cannot read certificate {cert_path}: {exc}", "unreadable") from exc

    try:
        cert = x509.load_pem_x509_certificate(pem)
        public_key = cert.public_key()
    except ValueError as exc:
        raise CredentialError(f"malformed certificate {cert_path}: {exc}", "malformed") from exc

    if not isinstance(public_key, rsa.RSAPublicKey):
        raise CredentialError(
            f"certificate {cert_path} does not carry an RSA key "
            f"({type(public_key).__name__})",
            "unsupported_key",
        )
    return public_key


def encrypt_password(password, public_key) -> str:
    """Encrypt ``password`` with PKCS#1 v1.5 and return base64 ciphertext."""
    plaintext = password.encode("utf-8")
    limit = public_key.key_size // 8 - PKCS1_V15_OVERHEAD
    if len(plaintext) > limit:
        raise CredentialError(
            f"initiator password is {len(plaintext)} bytes; "
            f"a {public_key.key_size}-bit key accepts at most {limit}",
            "too_long",
        )
    try:
        ciphertext = public_key.encrypt(plaintext, padding.PKCS1v15())
    except ValueError as exc:
        raise CredentialError(f"encryption failed: {exc}", "encryption_failed") from exc
    return base64.b64encode(ciphertext).decode("ascii")


def generate_security_credential(password, is_production, cert_path=None) -> str:
    """Build the SecurityCredential for B2C, balance and status requests.

    Args:
        password: Initiator password in clear text.
        is_production: Selects ``certs/production.cer`` over
            ``certs/sandbox.cer`` when ``cert_path`` is omitted.
        cert_path: Explicit path to the gateway's PEM certificate.

    Returns:
        Base64 ciphertext, one line, as long as the key modulus.

    Raises:
        CredentialError: the certificate is missing, unreadable, malformed
            or not RSA, or the password does not fit in one RSA block.
    """
    path = cert_path or default_certificate_path(is_production)
    public_key = load_public_key(path)
    credential = encrypt_password(password, public_key)
    logger.debug("Generated security credential from %s (%d-bit key)", path, public_key.key_size)
    return credential
