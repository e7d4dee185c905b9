from __future__ import annotations

import pytest

from alisms.core.errors import RemoteApiError
from alisms.core.response import ensure_ok, normalize_key_case


def test_normalize_key_case_recurses() -> None:
    resp = {"Code": "OK", "SmsSendDetailDTOs": {"SmsSendDetailDTO": [{"PhoneNum": "1", "Content": "Hi"}]}}
    assert normalize_key_case(resp) == {
        "code": "OK",
        "smssenddetaildtos": {"smssenddetaildto": [{"phonenum": "1", "content": "Hi"}]},
    }
    assert normalize_key_case({"Code": "OK"}, "upper") == {"CODE": "OK"}


def test_normalize_key_case_leaves_scalars() -> None:
    assert normalize_key_case("Text") == "Text"
    assert normalize_key_case([1, None]) == [1, None]


def test_normalize_key_case_rejects_unknown_case() -> None:
    with pytest.raises(ValueError):
        normalize_key_case({}, "title")


def test_ensure_ok_passes_success() -> None:
    resp = {"Code": "OK", "Message": "OK"}
    assert ensure_ok(resp) is resp
    assert ensure_ok({"RequestId": "r"}) == {"RequestId": "r"}


def test_ensure_ok_raises_with_payload() -> None:
    resp = {"Code": "isv.BUSINESS_LIMIT_CONTROL", "Message": "limited", "RequestId": "req-2"}
    with pytest.raises(RemoteApiError) as exc:
        ensure_ok(resp)
    assert exc.value.code == "isv.BUSINESS_LIMIT_CONTROL"
    assert exc.value.message == "limited"
    assert exc.value.request_id == "req-2"
    assert exc.value.raw is resp


def test_ensure_ok_reads_normalized_keys() -> None:
    with pytest.raises(RemoteApiError):
        ensure_ok({"code": "isv.MOBILE_NUMBER_ILLEGAL"})
