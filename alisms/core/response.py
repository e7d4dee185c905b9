from __future__ import annotations

from typing import Any, Dict, Optional

from alisms.core.errors import RemoteApiError


def normalize_key_case(value: Any, case: str = "lower") -> Any:
    if case not in {"lower", "upper"}:
        raise ValueError(f"case must be lower or upper, got {case!r}")
    if isinstance(value, dict):
        out: Dict[Any, Any] = {}
        for k, v in value.items():
            if isinstance(k, str):
                k = k.lower() if case == "lower" else k.upper()
            out[k] = normalize_key_case(v, case)
        return out
    if isinstance(value, list):
        return [normalize_key_case(v, case) for v in value]
    return value


def _field(payload: Dict[str, Any], name: str) -> str:
    # tolerate payloads that already went through normalize_key_case
    for k in (name, name.lower(), name.upper()):
        if k in payload and payload[k] is not None:
            return str(payload[k])
    return ""


def remote_error_from(payload: Dict[str, Any], *, status: Optional[int] = None) -> RemoteApiError:
    return RemoteApiError(
        code=_field(payload, "Code") or "Unknown",
        message=_field(payload, "Message"),
        request_id=_field(payload, "RequestId"),
        status=status,
        raw=payload,
    )


def ensure_ok(resp: Any) -> Any:
    if not isinstance(resp, dict):
        return resp
    code = _field(resp, "Code")
    if code and code.upper() != "OK":
        raise remote_error_from(resp)
    return resp
