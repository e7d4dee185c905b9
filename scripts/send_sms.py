from __future__ import annotations

import json
import logging
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from alisms.core.config import get_settings
from alisms.core.dysms_client import Client
from alisms.core.errors import AliSmsError


def main() -> None:
    s = get_settings()
    logging.basicConfig(level=s.log_level.upper())
    phone = os.getenv("ALISMS_TEST_PHONE", "")
    sign_name = os.getenv("ALISMS_TEST_SIGN_NAME", "")
    template_code = os.getenv("ALISMS_TEST_TEMPLATE_CODE", "")
    if not (phone and sign_name and template_code):
        print("missing ALISMS_TEST_PHONE / ALISMS_TEST_SIGN_NAME / ALISMS_TEST_TEMPLATE_CODE")
        return
    template_param = json.loads(os.getenv("ALISMS_TEST_TEMPLATE_PARAM", "{}"))

    try:
        client = Client.from_settings(s)
        resp = client.send_sms(
            phone_numbers=[p.strip() for p in phone.split(",") if p.strip()],
            sign_name=sign_name,
            template_code=template_code,
            template_param=template_param,
        )
    except AliSmsError as e:
        print("send_sms =>", type(e).__name__, str(e)[:200])
        sys.exit(1)
    print("send_sms =>", json.dumps(resp, ensure_ascii=False))


if __name__ == "__main__":
    main()
