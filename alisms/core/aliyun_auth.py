from __future__ import annotations

import base64
import hashlib
import hmac
import urllib.parse
from typing import Any, Mapping, Tuple

from alisms.core.errors import InvalidParameterType


def percent_encode(s: str) -> str:
    # RFC 3986: only A-Za-z0-9-_.~ stay literal, space is %20 and * is %2A.
    if not isinstance(s, str):
        raise InvalidParameterType(f"expected str, got {type(s).__name__}: {s!r}")
    return urllib.parse.quote(s, safe="~")


def canonicalize(params: Mapping[str, Any]) -> str:
    items = []
    for k, v in params.items():
        if not isinstance(k, str):
            raise InvalidParameterType(f"parameter name must be str, got {type(k).__name__}: {k!r}")
        if not isinstance(v, str):
            raise InvalidParameterType(f"parameter {k} must be str, got {type(v).__name__}")
        items.append((k, percent_encode(k), percent_encode(v)))
    items.sort(key=lambda t: t[0])
    return "&".join([f"{ek}={ev}" for _, ek, ev in items])


def string_to_sign(http_method: str, canonical_query: str) -> str:
    return f"{http_method}&{percent_encode('/')}&{percent_encode(canonical_query)}"


def sign(http_method: str, canonical_query: str, secret: str) -> str:
    msg = string_to_sign(http_method, canonical_query)
    mac = hmac.new(f"{secret}&".encode("utf-8"), msg.encode("utf-8"), hashlib.sha1).digest()
    return base64.b64encode(mac).decode("utf-8")


def build_signature(
    params: Mapping[str, Any],
    *,
    access_key_secret: str,
    http_method: str = "POST",
) -> Tuple[str, str]:
    """Sign a parameter set, ignoring any ``Signature`` already present.

    Returns the base64 signature and the string-to-sign it was computed over.
    """
    unsigned = {k: v for k, v in params.items() if k != "Signature"}
    query = canonicalize(unsigned)
    return sign(http_method, query, access_key_secret), string_to_sign(http_method, query)
