from __future__ import annotations

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from alisms.core.aliyun_auth import build_signature, canonicalize, percent_encode
from alisms.models.requests import SendSms


def main() -> None:
    assert percent_encode("a b*c~") == "a%20b%2Ac~"
    assert canonicalize({}) == ""

    params = {
        "AccessKeyId": "testid",
        "Action": "SendSms",
        "Timestamp": "2020-01-01T00:00:00Z",
        "Format": "json",
        "SignatureMethod": "HMAC-SHA1",
        "SignatureVersion": "1.0",
        "SignatureNonce": "abc123",
        "Version": "2017-05-25",
        "RegionId": "cn-hangzhou",
        "PhoneNumbers": "13800000000",
        "SignName": "TestSign",
        "TemplateCode": "SMS_001",
    }
    sig, sts = build_signature(params, access_key_secret="testsecret")
    assert sts.startswith("POST&%2F&AccessKeyId%3Dtestid%26Action%3DSendSms")
    assert sig == "3XECrKNIMWa3AjJfZ2wMNXP0JYs=", sig

    req = SendSms().set_phone_numbers(["111", "222"]).set_template_param({})
    assert req.get_params() == {"PhoneNumbers": "111,222", "TemplateParam": "{}"}

    print("sign_smoke: ok")


if __name__ == "__main__":
    main()
