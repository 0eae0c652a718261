"""Send an STK push prompt to a phone.

Reads MPESA_* settings from the environment (or a .env file).

    python examples/stk_push.py 2547XXXXXXXX 1
"""

import logging
import os
import sys

from dotenv import load_dotenv

from mpesa_daraja import ClientConfig, DarajaError, MpesaClient


def main(argv):
    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    if len(argv) < 2:
        print(__doc__)
        return 2
    phone_number, amount = argv[0], int(argv[1])

    client = MpesaClient.from_config(ClientConfig.from_env())
    try:
        resp = client.stk_push(
            phone_number,
            amount,
            "TestRef",
            "Test STK Push",
            os.environ["MPESA_CALLBACK_URL"],
            os.environ["MPESA_SHORT_CODE"],
            os.environ["MPESA_PASSKEY"],
        )
    except DarajaError as e:
        print(f"Error: {e}")
        return 1

    print(f"STK Push Response: {resp.response_description}")
    if resp.checkout_request_id:
        print(f"Checkout Request ID: {resp.checkout_request_id}")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
