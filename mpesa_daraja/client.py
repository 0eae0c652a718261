"""M-Pesa Daraja API client: STK push, B2C, balance and transaction status."""

import json
import logging

from mpesa_daraja.auth import TokenProvider
from mpesa_daraja.classifier import decode
from mpesa_daraja.config import ClientConfig
from mpesa_daraja.models import (
    B2CRequest,
    B2CResponse,
    BalanceQueryResponse,
    BalanceRequest,
    StkPushRequest,
    StkPushResponse,
    TransactionStatusRequest,
    TransactionStatusResponse,
)
from mpesa_daraja.security import generate_security_credential
from mpesa_daraja.signer import build_push_credentials
from mpesa_daraja.transport import DEFAULT_TIMEOUT, HttpTransport

logger = logging.getLogger(__name__)

STK_PUSH_PATH = "/mpesa/stkpush/v1/processrequest"
B2C_PATH = "/mpesa/b2c/v1/paymentrequest"
BALANCE_PATH = "/mpesa/accountbalance/v1/query"
TRANSACTION_STATUS_PATH = "/mpesa/transactionstatus/v1/query"


def format_amount(amount) -> str:
    """Render a whole-unit amount as the decimal string the gateway expects."""
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValueError(f"amount must be a whole number, got {amount!r}")
    if amount < 0:
        raise ValueError("amount must not be negative")
    return str(amount)


class MpesaClient:
    """Handles Daraja authentication and the four privileged operations.

    Every operation fetches its own access token immediately before the
    request; tokens are never reused between calls.
    """

    def __init__(self, consumer_key, consumer_secret, environment="sandbox",
                 transport=None, timeout=DEFAULT_TIMEOUT):
        self.config = ClientConfig(consumer_key, consumer_secret, environment)
        self.transport = transport or HttpTransport(timeout=timeout)
        self.tokens = TokenProvider(self.transport)

    @classmethod
    def from_config(cls, config, transport=None, timeout=DEFAULT_TIMEOUT):
        return cls(config.consumer_key, config.consumer_secret, config.environment,
                   transport=transport, timeout=timeout)

    @property
    def environment(self):
        return self.config.environment

    def resolve_url(self, path) -> str:
        return f"{self.config.base_url}{path}"

    def get_access_token(self) -> str:
        return self.tokens.fetch_token(self.config)

    generate_security_credential = staticmethod(generate_security_credential)

    def _post(self, path, request, response_model):
        """Send ``request`` with a fresh bearer token and decode the reply."""
        access_token = self.get_access_token()
        url = self.resolve_url(path)
        headers = {
            "Authorization": f"Bearer {access_token}",
            "Content-Type": "application/json",
        }
        body = json.dumps(request.to_wire()).encode("utf-8")
        status, raw = self.transport.send("POST", url, headers=headers, body=body)
        return decode(raw, response_model, status=status)

    def stk_push(self, phone_number, amount, account_reference, transaction_desc,
                 callback_url, short_code, passkey, now=None) -> StkPushResponse:
        """Prompt the customer's phone to authorize a payment.

        Args:
            phone_number: Customer MSISDN, e.g. "2547XXXXXXXX".
            amount: Whole KES amount.
            account_reference: Reference shown to the customer (invoice no.).
            transaction_desc: Short description of the payment.
            callback_url: Where the gateway posts the final result.
            short_code: Business shortcode receiving the funds.
            passkey: Lipa na M-Pesa Online passkey.
            now: Override for the request timestamp (UTC).
        """
        timestamp, password = build_push_credentials(short_code, passkey, now)
        request = StkPushRequest(
            business_short_code=short_code,
            password=password,
            timestamp=timestamp,
            amount=format_amount(amount),
            party_a=phone_number,
            party_b=short_code,
            phone_number=phone_number,
            callback_url=callback_url,
            account_reference=account_reference,
            transaction_desc=transaction_desc,
        )
        response = self._post(STK_PUSH_PATH, request, StkPushResponse)
        logger.info("STK push queued: checkout=%s merchant=%s",
                    response.checkout_request_id, response.merchant_request_id)
        return response

    def business_payment(self, phone_number, amount, remarks, result_url,
                         queue_timeout_url, initiator_name, security_credential,
                         short_code, occasion="") -> B2CResponse:
        """Send funds from the business shortcode to a customer's phone.

        Args:
            phone_number: Recipient MSISDN.
            amount: Whole KES amount.
            remarks: Transaction remarks.
            result_url: Where the gateway posts the result.
            queue_timeout_url: Where the gateway posts a queue timeout.
            initiator_name: API operator username.
            security_credential: Output of generate_security_credential.
            short_code: Paying business shortcode.
            occasion: Optional free text.
        """
        request = B2CRequest(
            initiator_name=initiator_name,
            security_credential=security_credential,
            amount=format_amount(amount),
            party_a=short_code,
            party_b=phone_number,
            remarks=remarks,
            queue_timeout_url=queue_timeout_url,
            result_url=result_url,
            occasion=occasion,
        )
        response = self._post(B2C_PATH, request, B2CResponse)
        logger.info("B2C payment accepted: conversation=%s", response.conversation_id)
        return response

    def check_balance(self, initiator_name, security_credential, short_code,
                      remarks, queue_timeout_url, result_url) -> BalanceQueryResponse:
        """Request the shortcode balance; the figures arrive at ``result_url``."""
        request = BalanceRequest(
            initiator=initiator_name,
            security_credential=security_credential,
            party_a=short_code,
            remarks=remarks,
            queue_timeout_url=queue_timeout_url,
            result_url=result_url,
        )
        response = self._post(BALANCE_PATH, request, BalanceQueryResponse)
        logger.info("Balance query accepted: conversation=%s", response.conversation_id)
        return response

    def check_transaction_status(self, initiator_name, security_credential,
                                 transaction_id, short_code, remarks, result_url,
                                 queue_timeout_url, occasion="") -> TransactionStatusResponse:
        """Query the status of an earlier transaction by its M-Pesa receipt id."""
        request = TransactionStatusRequest(
            initiator=initiator_name,
            security_credential=security_credential,
            transaction_id=transaction_id,
            party_a=short_code,
            result_url=result_url,
            queue_timeout_url=queue_timeout_url,
            remarks=remarks,
            occasion=occasion,
        )
        response = self._post(TRANSACTION_STATUS_PATH, request, TransactionStatusResponse)
        logger.info("Transaction status query accepted: transaction=%s conversation=%s",
                    transaction_id, response.conversation_id)
        return response

    def close(self):
        self.transport.close()
