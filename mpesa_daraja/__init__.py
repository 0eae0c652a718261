"""Client library for the Safaricom M-Pesa Daraja API."""

from mpesa_daraja.client import MpesaClient
from mpesa_daraja.config import ClientConfig, Environment, base_url_for
from mpesa_daraja.errors import (
    ApiError,
    ConfigError,
    CredentialError,
    DarajaError,
    ParseError,
    TransportError,
)
from mpesa_daraja.models import (
    B2CResponse,
    BalanceQueryResponse,
    ErrorResponse,
    StkPushResponse,
    TransactionStatusResponse,
)
from mpesa_daraja.security import generate_security_credential
from mpesa_daraja.signer import build_push_credentials

__all__ = [
    "ApiError",
    "B2CResponse",
    "BalanceQueryResponse",
    "ClientConfig",
    "ConfigError",
    "CredentialError",
    "DarajaError",
    "Environment",
    "ErrorResponse",
    "MpesaClient",
    "ParseError",
    "StkPushResponse",
    "TransactionStatusResponse",
    "TransportError",
    "base_url_for",
    "build_push_credentials",
    "generate_security_credential",
]
