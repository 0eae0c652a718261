"""Demo portal: exposes the Daraja client operations over local HTTP."""

import logging
import os

from dotenv import load_dotenv
from flask import Flask, jsonify, request

from mpesa_daraja import (
    ApiError,
    ClientConfig,
    ConfigError,
    CredentialError,
    MpesaClient,
    ParseError,
    TransportError,
    generate_security_credential,
)

load_dotenv()

logger = logging.getLogger(__name__)

app = Flask(__name__)

CLIENT_TIMEOUT = 30  # seconds


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _client() -> MpesaClient:
    """Return the client for this app, built once from the environment."""
    client = app.config.get("MPESA_CLIENT")
    if client is None:
        client = MpesaClient.from_config(ClientConfig.from_env(), timeout=CLIENT_TIMEOUT)
        app.config["MPESA_CLIENT"] = client
    return client


def _payload() -> dict:
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValueError("request body must be a JSON object")
    return payload


def _setting(name, payload, key=None):
    """Value from the JSON payload, falling back to MPESA_<NAME> env var."""
    value = payload.get(key or name.lower()) or os.environ.get(f"MPESA_{name}", "")
    if not value:
        raise KeyError(key or name.lower())
    return value


def _security_credential(payload, client):
    """Use the caller's credential, else encrypt MPESA_INITIATOR_PASSWORD."""
    if payload.get("security_credential"):
        return payload["security_credential"]
    password = _setting("INITIATOR_PASSWORD", payload, "initiator_password")
    return generate_security_credential(
        password,
        client.config.is_production,
        os.environ.get("MPESA_CERT_PATH") or None,
    )


def _amount(payload):
    value = payload.get("amount")
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return value


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------

@app.errorhandler(ApiError)
def handle_api_error(exc):
    return jsonify({"error": "Gateway rejected request", "code": exc.code,
                    "message": exc.message, "request_id": exc.request_id}), 502


@app.errorhandler(TransportError)
def handle_transport_error(exc):
    return jsonify({"error": "Gateway unreachable", "message": str(exc)}), 504


@app.errorhandler(ParseError)
def handle_parse_error(exc):
    return jsonify({"error": "Unexpected gateway response", "message": str(exc)}), 502


@app.errorhandler(CredentialError)
def handle_credential_error(exc):
    return jsonify({"error": "Security credential unavailable", "reason": exc.reason,
                    "message": str(exc)}), 500


@app.errorhandler(ConfigError)
def handle_config_error(exc):
    return jsonify({"error": "Client not configured", "message": str(exc)}), 500


@app.errorhandler(KeyError)
def handle_missing_field(exc):
    return jsonify({"error": f"Missing field: {exc.args[0]}"}), 400


@app.errorhandler(ValueError)
def handle_bad_value(exc):
    return jsonify({"error": str(exc)}), 400


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------

@app.route("/api/stk-push", methods=["POST"])
def stk_push():
    payload = _payload()
    client = _client()
    resp = client.stk_push(
        phone_number=payload["phone_number"],
        amount=_amount(payload),
        account_reference=payload.get("account_reference", "Payment"),
        transaction_desc=payload.get("transaction_desc", "Payment"),
        callback_url=_setting("CALLBACK_URL", payload),
        short_code=_setting("SHORT_CODE", payload),
        passkey=_setting("PASSKEY", payload),
    )
    return jsonify(resp.to_wire())


@app.route("/api/b2c", methods=["POST"])
def b2c():
    payload = _payload()
    client = _client()
    resp = client.business_payment(
        phone_number=payload["phone_number"],
        amount=_amount(payload),
        remarks=payload.get("remarks", "Payout"),
        result_url=_setting("RESULT_URL", payload),
        queue_timeout_url=_setting("QUEUE_TIMEOUT_URL", payload),
        initiator_name=_setting("INITIATOR_NAME", payload),
        security_credential=_security_credential(payload, client),
        short_code=_setting("SHORT_CODE", payload),
        occasion=payload.get("occasion", ""),
    )
    return jsonify(resp.to_wire())


@app.route("/api/balance", methods=["POST"])
def balance():
    payload = _payload()
    client = _client()
    resp = client.check_balance(
        initiator_name=_setting("INITIATOR_NAME", payload),
        security_credential=_security_credential(payload, client),
        short_code=_setting("SHORT_CODE", payload),
        remarks=payload.get("remarks", "Balance Inquiry"),
        queue_timeout_url=_setting("QUEUE_TIMEOUT_URL", payload),
        result_url=_setting("RESULT_URL", payload),
    )
    return jsonify(resp.to_wire())


@app.route("/api/transaction-status", methods=["POST"])
def transaction_status():
    payload = _payload()
    client = _client()
    resp = client.check_transaction_status(
        initiator_name=_setting("INITIATOR_NAME", payload),
        security_credential=_security_credential(payload, client),
        transaction_id=payload["transaction_id"],
        short_code=_setting("SHORT_CODE", payload),
        remarks=payload.get("remarks", "Status Query"),
        result_url=_setting("RESULT_URL", payload),
        queue_timeout_url=_setting("QUEUE_TIMEOUT_URL", payload),
        occasion=payload.get("occasion", ""),
    )
    return jsonify(resp.to_wire())


# ---------------------------------------------------------------------------
# Status
# ---------------------------------------------------------------------------

@app.route("/api/status")
def status():
    try:
        config = _client().config
    except ConfigError as exc:
        return jsonify({"configured": False, "error": str(exc)})
    return jsonify({"configured": True, "environment": config.environment.value,
                    "base_url": config.base_url})


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app.run(host="127.0.0.1", port=8080, debug=True)
