import base64

import pytest
from cryptography.hazmat.primitives.asymmetric import padding

import app as portal
from mpesa_daraja import MpesaClient

TOKEN_BODY = {"access_token": "tok-123", "expires_in": "3599"}
ACCEPTED = {"ConversationID": "AG_1", "OriginatorConversationID": "o-1",
            "ResponseCode": "0", "ResponseDescription": "Accept the service request successfully."}


@pytest.fixture
def http(transport, monkeypatch):
    for name, value in {
        "SHORT_CODE": "600000",
        "PASSKEY": "pk",
        "CALLBACK_URL": "https://example.com/cb",
        "RESULT_URL": "https://example.com/result",
        "QUEUE_TIMEOUT_URL": "https://example.com/timeout",
        "INITIATOR_NAME": "testapi",
    }.items():
        monkeypatch.setenv(f"MPESA_{name}", value)
    monkeypatch.setitem(portal.app.config, "MPESA_CLIENT",
                        MpesaClient("key", "secret", "sandbox", transport=transport))
    portal.app.config["TESTING"] = True
    return portal.app.test_client()


def test_status_reports_environment(http):
    resp = http.get("/api/status")
    assert resp.get_json() == {"configured": True, "environment": "sandbox",
                               "base_url": "https://sandbox.safaricom.co.ke"}


def test_stk_push_route(http, transport):
    transport.queue(TOKEN_BODY)
    transport.queue({"ResponseCode": "0", "ResponseDescription": "Success. Request accepted for processing",
                     "CheckoutRequestID": "ws_CO_1", "MerchantRequestID": "m-1",
                     "CustomerMessage": "Success"})

    resp = http.post("/api/stk-push", json={"phone_number": "254708374149", "amount": "5"})

    assert resp.status_code == 200
    assert resp.get_json()["CheckoutRequestID"] == "ws_CO_1"
    body = transport.json_body(1)
    assert body["Amount"] == "5"
    assert body["BusinessShortCode"] == "600000"
    assert body["CallBackURL"] == "https://example.com/cb"


def test_b2c_route_generates_credential(http, transport, monkeypatch, rsa_cert_path, rsa_private_key):
    monkeypatch.setenv("MPESA_INITIATOR_PASSWORD", "Safaricom999!")
    monkeypatch.setenv("MPESA_CERT_PATH", str(rsa_cert_path))
    transport.queue(TOKEN_BODY)
    transport.queue(ACCEPTED)

    resp = http.post("/api/b2c", json={"phone_number": "254708374149", "amount": 100})

    assert resp.status_code == 200
    assert resp.get_json()["ConversationID"] == "AG_1"
    credential = transport.json_body(1)["SecurityCredential"]
    assert rsa_private_key.decrypt(base64.b64decode(credential), padding.PKCS1v15()) == b"Safaricom999!"


def test_balance_route_uses_supplied_credential(http, transport):
    transport.queue(TOKEN_BODY)
    transport.queue(ACCEPTED)

    resp = http.post("/api/balance", json={"security_credential": "CRED"})

    assert resp.status_code == 200
    assert transport.json_body(1)["SecurityCredential"] == "CRED"


def test_gateway_error_maps_to_502(http, transport):
    transport.queue(TOKEN_BODY)
    transport.queue({"requestId": "r1", "errorCode": "401.002.01", "errorMessage": "Invalid Access Token"})

    resp = http.post("/api/transaction-status",
                     json={"security_credential": "CRED", "transaction_id": "OEI2AK4Q16"})

    assert resp.status_code == 502
    assert resp.get_json()["code"] == "401.002.01"


def test_unreachable_gateway_maps_to_504(http, transport):
    transport.fail()
    resp = http.post("/api/balance", json={"security_credential": "CRED"})
    assert resp.status_code == 504


def test_missing_certificate_maps_to_500(http, monkeypatch):
    monkeypatch.setenv("MPESA_INITIATOR_PASSWORD", "pw")
    monkeypatch.setenv("MPESA_CERT_PATH", "nonexistent.cer")

    resp = http.post("/api/balance", json={})

    assert resp.status_code == 500
    assert resp.get_json()["reason"] == "not_found"


def test_missing_phone_number_is_400(http, transport):
    resp = http.post("/api/stk-push", json={"amount": 1})
    assert resp.status_code == 400
    assert transport.calls == []


def test_bad_amount_is_400(http, transport):
    resp = http.post("/api/b2c", json={"phone_number": "2547", "amount": -3,
                                       "security_credential": "CRED"})
    assert resp.status_code == 400
    assert transport.calls == []


@pytest.mark.parametrize("route", ["/api/stk-push", "/api/b2c", "/api/balance", "/api/transaction-status"])
def test_non_object_body_is_400(http, transport, route):
    resp = http.post(route, json=[1])
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "request body must be a JSON object"
    assert transport.calls == []
