"""Query the shortcode balance. The figures are posted to MPESA_RESULT_URL."""

import logging
import os
import sys

from dotenv import load_dotenv

from mpesa_daraja import ClientConfig, DarajaError, MpesaClient, generate_security_credential


def main():
    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    config = ClientConfig.from_env()
    client = MpesaClient.from_config(config)
    try:
        security_credential = generate_security_credential(
            os.environ["MPESA_INITIATOR_PASSWORD"],
            config.is_production,
            os.environ.get("MPESA_CERT_PATH"),
        )
        resp = client.check_balance(
            os.environ["MPESA_INITIATOR_NAME"],
            security_credential,
            os.environ["MPESA_SHORT_CODE"],
            "Balance Inquiry",
            os.environ["MPESA_QUEUE_TIMEOUT_URL"],
            os.environ["MPESA_RESULT_URL"],
        )
    except DarajaError as e:
        print(f"Error checking balance: {e}")
        return 1

    print(f"Balance Query Response: {resp.response_description}")
    print(f"Conversation ID: {resp.conversation_id}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
