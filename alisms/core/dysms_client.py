from __future__ import annotations

import http.client
import json
import logging
import socket
import ssl
import urllib.error
import urllib.parse
import urllib.request
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from alisms.core.aliyun_auth import build_signature
from alisms.core.config import (
    DEFAULT_API_VERSION,
    DEFAULT_ENDPOINT,
    DEFAULT_REGION_ID,
    Credentials,
    Settings,
)
from alisms.core.errors import DecodeError, RemoteApiError, TransportError
from alisms.core.response import ensure_ok, normalize_key_case, remote_error_from
from alisms.models.requests import ApiRequestLike, SendSms

logger = logging.getLogger("alisms")

FORMAT = "json"
SIGNATURE_METHOD = "HMAC-SHA1"
SIGNATURE_VERSION = "1.0"
HTTP_METHOD = "POST"
CONTENT_TYPE = "application/x-www-form-urlencoded; charset=UTF-8"


def utc_timestamp(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _decode_json(raw: bytes) -> Any:
    try:
        return json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as e:
        raise DecodeError(f"invalid json body: {e}", body=raw.decode("utf-8", errors="replace")) from e


def _read_error_body(e: urllib.error.HTTPError) -> str:
    if not e.fp:
        return ""
    try:
        return e.read().decode("utf-8", errors="replace")
    except (OSError, http.client.HTTPException) as read_err:
        raise TransportError(f"http_error status={e.code} body unreadable: {read_err}", status=e.code) from read_err


def _http_post_form(
    url: str,
    *,
    fields: Dict[str, str],
    timeout_s: float,
    context: Optional[ssl.SSLContext],
) -> Any:
    data = urllib.parse.urlencode(fields).encode("utf-8")
    req = urllib.request.Request(url, data=data, method=HTTP_METHOD)
    req.add_header("Content-Type", CONTENT_TYPE)
    try:
        with urllib.request.urlopen(req, timeout=timeout_s, context=context) as resp:
            raw = resp.read()
    except urllib.error.HTTPError as e:
        body = _read_error_body(e)
        try:
            payload = json.loads(body)
        except ValueError:
            raise TransportError(f"http_error status={e.code} body={body[:200]}", status=e.code) from e
        if isinstance(payload, dict):
            raise remote_error_from(payload, status=e.code) from e
        raise TransportError(f"http_error status={e.code} body={body[:200]}", status=e.code) from e
    except socket.timeout as e:
        raise TransportError("timeout") from e
    except (urllib.error.URLError, OSError, http.client.HTTPException) as e:
        raise TransportError(str(getattr(e, "reason", e)) or type(e).__name__) from e
    return _decode_json(raw)


class Client:
    def __init__(
        self,
        config: Union[Credentials, Mapping[str, Any]],
        *,
        endpoint: str = DEFAULT_ENDPOINT,
        region_id: str = DEFAULT_REGION_ID,
        version: str = DEFAULT_API_VERSION,
        timeout_s: float = 10.0,
        verify_tls: bool = True,
        key_case: Optional[str] = None,
        raise_on_error: bool = False,
    ) -> None:
        creds = config if isinstance(config, Credentials) else Credentials.from_mapping(config)
        self._credentials = creds.validate()
        if key_case not in (None, "lower", "upper"):
            raise ValueError(f"key_case must be None, lower or upper, got {key_case!r}")
        self._endpoint = endpoint
        self._region_id = region_id
        self._version = version
        self._timeout_s = timeout_s
        self._key_case = key_case
        self._raise_on_error = raise_on_error
        self._ssl_context: Optional[ssl.SSLContext] = None
        if endpoint.lower().startswith("https"):
            self._ssl_context = ssl.create_default_context()
            if not verify_tls:
                logger.warning("tls verification disabled for endpoint=%s", endpoint)
                self._ssl_context.check_hostname = False
                self._ssl_context.verify_mode = ssl.CERT_NONE

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "Client":
        opts: Dict[str, Any] = {
            "endpoint": settings.endpoint,
            "region_id": settings.region_id,
            "version": settings.api_version,
            "timeout_s": settings.timeout_s,
            "verify_tls": settings.verify_tls,
            "key_case": settings.key_case,
        }
        opts.update(kwargs)
        return cls(settings.credentials, **opts)

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def _public_params(self) -> Dict[str, str]:
        return {
            "AccessKeyId": self._credentials.access_key_id,
            "Timestamp": utc_timestamp(),
            "Format": FORMAT,
            "SignatureMethod": SIGNATURE_METHOD,
            "SignatureVersion": SIGNATURE_VERSION,
            "SignatureNonce": uuid.uuid4().hex,
            "Version": self._version,
            "RegionId": self._region_id,
        }

    def build_signed_params(self, request: ApiRequestLike) -> Dict[str, str]:
        params: Dict[str, str] = {
            **self._public_params(),
            "Action": request.action,
            **request.get_params(),
        }
        params["Signature"], _ = build_signature(
            params,
            access_key_secret=self._credentials.access_key_secret,
            http_method=HTTP_METHOD,
        )
        return params

    def execute(self, request: ApiRequestLike) -> Any:
        params = self.build_signed_params(request)
        logger.debug(
            "dysms request action=%s nonce=%s endpoint=%s",
            params["Action"],
            params["SignatureNonce"],
            self._endpoint,
        )
        try:
            resp = _http_post_form(
                self._endpoint,
                fields=params,
                timeout_s=self._timeout_s,
                context=self._ssl_context,
            )
        except TransportError as e:
            logger.warning("dysms transport failed action=%s error=%s", params["Action"], e)
            raise
        except RemoteApiError as e:
            logger.info("dysms rejected action=%s code=%s request_id=%s", params["Action"], e.code, e.request_id)
            raise
        if self._key_case:
            resp = normalize_key_case(resp, self._key_case)
        if self._raise_on_error:
            ensure_ok(resp)
        return resp

    def send_sms(
        self,
        *,
        phone_numbers: Union[str, Sequence[str]],
        sign_name: str,
        template_code: str,
        template_param: Optional[Mapping[str, Any]] = None,
        out_id: Optional[str] = None,
    ) -> Any:
        req = SendSms().set_phone_numbers(phone_numbers).set_sign_name(sign_name).set_template_code(template_code)
        if template_param is not None:
            req = req.set_template_param(template_param)
        if out_id:
            req = req.set_out_id(out_id)
        return self.execute(req)
