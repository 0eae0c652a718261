"""Wire models for Daraja requests and responses.

Field aliases carry the gateway's exact, case-sensitive JSON names; Python
attributes use snake_case. Requests serialize with ``to_wire()``, responses
are validated from decoded JSON with ``model_validate``.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class WireModel(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        frozen=True,
        coerce_numbers_to_str=True,
    )

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------

class AccessTokenResponse(WireModel):
    access_token: str
    expires_in: Optional[str] = None


# ---------------------------------------------------------------------------
# STK push
# ---------------------------------------------------------------------------

class StkPushRequest(WireModel):
    business_short_code: str = Field(alias="BusinessShortCode")
    password: str = Field(alias="Password")
    timestamp: str = Field(alias="Timestamp")
    transaction_type: str = Field(default="CustomerPayBillOnline", alias="TransactionType")
    amount: str = Field(alias="Amount")
    party_a: str = Field(alias="PartyA")
    party_b: str = Field(alias="PartyB")
    phone_number: str = Field(alias="PhoneNumber")
    callback_url: str = Field(alias="CallBackURL")
    account_reference: str = Field(alias="AccountReference")
    transaction_desc: str = Field(alias="TransactionDesc")


class StkPushResponse(WireModel):
    """Acknowledgement that the PIN prompt was queued, not that it was paid."""

    merchant_request_id: Optional[str] = Field(default=None, alias="MerchantRequestID")
    checkout_request_id: Optional[str] = Field(default=None, alias="CheckoutRequestID")
    response_code: str = Field(alias="ResponseCode")
    response_description: str = Field(alias="ResponseDescription")
    customer_message: Optional[str] = Field(default=None, alias="CustomerMessage")


# ---------------------------------------------------------------------------
# B2C, balance and transaction status
# ---------------------------------------------------------------------------

class B2CRequest(WireModel):
    initiator_name: str = Field(alias="InitiatorName")
    security_credential: str = Field(alias="SecurityCredential")
    command_id: str = Field(default="BusinessPayment", alias="CommandID")
    amount: str = Field(alias="Amount")
    party_a: str = Field(alias="PartyA")
    party_b: str = Field(alias="PartyB")
    remarks: str = Field(alias="Remarks")
    queue_timeout_url: str = Field(alias="QueueTimeOutURL")
    result_url: str = Field(alias="ResultURL")
    occasion: str = Field(default="", alias="Occasion")


class BalanceRequest(WireModel):
    initiator: str = Field(alias="Initiator")
    security_credential: str = Field(alias="SecurityCredential")
    command_id: str = Field(default="AccountBalance", alias="CommandID")
    party_a: str = Field(alias="PartyA")
    identifier_type: str = Field(default="4", alias="IdentifierType")
    remarks: str = Field(alias="Remarks")
    queue_timeout_url: str = Field(alias="QueueTimeOutURL")
    result_url: str = Field(alias="ResultURL")


class TransactionStatusRequest(WireModel):
    initiator: str = Field(alias="Initiator")
    security_credential: str = Field(alias="SecurityCredential")
    command_id: str = Field(default="TransactionStatusQuery", alias="CommandID")
    transaction_id: str = Field(alias="TransactionID")
    party_a: str = Field(alias="PartyA")
    identifier_type: str = Field(default="4", alias="IdentifierType")
    result_url: str = Field(alias="ResultURL")
    queue_timeout_url: str = Field(alias="QueueTimeOutURL")
    remarks: str = Field(alias="Remarks")
    occasion: str = Field(default="", alias="Occasion")


class ConversationResponse(WireModel):
    """Synchronous acknowledgement; the result arrives later at ResultURL."""

    conversation_id: Optional[str] = Field(default=None, alias="ConversationID")
    originator_conversation_id: Optional[str] = Field(default=None, alias="OriginatorConversationID")
    response_code: str = Field(alias="ResponseCode")
    response_description: str = Field(alias="ResponseDescription")


class B2CResponse(ConversationResponse):
    pass


class BalanceQueryResponse(ConversationResponse):
    pass


class TransactionStatusResponse(ConversationResponse):
    pass


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class ErrorResponse(WireModel):
    request_id: Optional[str] = Field(default=None, alias="requestId")
    error_code: str = Field(alias="errorCode")
    error_message: str = Field(alias="errorMessage")
