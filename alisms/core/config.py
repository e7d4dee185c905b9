from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from dotenv import load_dotenv

from alisms.core.errors import ConfigurationError

DEFAULT_ENDPOINT = "http://dysmsapi.aliyuncs.com/"
DEFAULT_REGION_ID = "cn-hangzhou"
DEFAULT_API_VERSION = "2017-05-25"


@dataclass(frozen=True)
class Credentials:
    access_key_id: str
    access_key_secret: str

    def validate(self) -> "Credentials":
        if not self.access_key_id:
            raise ConfigurationError("access_key_id required")
        if not self.access_key_secret:
            raise ConfigurationError("access_key_secret required")
        return self

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> "Credentials":
        # accepts both the camelCase keys of the console and snake_case ones
        key_id = config.get("accessKeyId") or config.get("access_key_id")
        secret = config.get("accessKeySecret") or config.get("access_key_secret")
        return cls(access_key_id=str(key_id or ""), access_key_secret=str(secret or ""))


@dataclass(frozen=True)
class Settings:
    access_key_id: str
    access_key_secret: str
    endpoint: str
    region_id: str
    api_version: str
    timeout_s: float
    verify_tls: bool
    key_case: Optional[str]
    log_level: str

    @property
    def credentials(self) -> Credentials:
        return Credentials(access_key_id=self.access_key_id, access_key_secret=self.access_key_secret)


def _parse_bool(value: str | None, default: bool) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() not in {"0", "false", "no", "off"}


def _parse_key_case(value: str | None) -> Optional[str]:
    v = (value or "").strip().lower()
    if not v:
        return None
    if v not in {"lower", "upper"}:
        raise ConfigurationError(f"ALISMS_KEY_CASE must be lower or upper, got {value!r}")
    return v


def get_settings() -> Settings:
    load_dotenv()
    try:
        timeout_s = float(os.getenv("ALISMS_TIMEOUT_S", "10"))
    except ValueError as e:
        raise ConfigurationError(f"ALISMS_TIMEOUT_S must be a number: {e}") from e
    return Settings(
        access_key_id=os.getenv("ALISMS_ACCESS_KEY_ID", ""),
        access_key_secret=os.getenv("ALISMS_ACCESS_KEY_SECRET", ""),
        endpoint=os.getenv("ALISMS_ENDPOINT", DEFAULT_ENDPOINT),
        region_id=os.getenv("ALISMS_REGION_ID", DEFAULT_REGION_ID),
        api_version=os.getenv("ALISMS_API_VERSION", DEFAULT_API_VERSION),
        timeout_s=timeout_s,
        verify_tls=_parse_bool(os.getenv("ALISMS_VERIFY_TLS"), True),
        key_case=_parse_key_case(os.getenv("ALISMS_KEY_CASE")),
        log_level=os.getenv("ALISMS_LOG_LEVEL", "info"),
    )
