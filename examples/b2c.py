"""Pay out to a customer's phone (B2C).

Reads MPESA_* settings from the environment (or a .env file), including
MPESA_INITIATOR_PASSWORD and optionally MPESA_CERT_PATH.

    python examples/b2c.py 2547XXXXXXXX 1
"""

import logging
import os
import sys

from dotenv import load_dotenv

from mpesa_daraja import ClientConfig, CredentialError, DarajaError, MpesaClient


def main(argv):
    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    if len(argv) < 2:
        print(__doc__)
        return 2
    phone_number, amount = argv[0], int(argv[1])

    config = ClientConfig.from_env()
    client = MpesaClient.from_config(config)
    try:
        security_credential = MpesaClient.generate_security_credential(
            os.environ["MPESA_INITIATOR_PASSWORD"],
            config.is_production,
            os.environ.get("MPESA_CERT_PATH"),
        )
    except CredentialError as e:
        print(f"Error generating security credential: {e}")
        return 1

    try:
        resp = client.business_payment(
            phone_number,
            amount,
            "Test B2C Payment",
            os.environ["MPESA_RESULT_URL"],
            os.environ["MPESA_QUEUE_TIMEOUT_URL"],
            os.environ["MPESA_INITIATOR_NAME"],
            security_credential,
            os.environ["MPESA_SHORT_CODE"],
            "Test Occasion",
        )
    except DarajaError as e:
        print(f"Error making payment: {e}")
        return 1

    print(f"B2C Response: {resp.response_description}")
    print(f"Conversation ID: {resp.conversation_id or 'none returned'}")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
