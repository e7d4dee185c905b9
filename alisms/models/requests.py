from __future__ import annotations

import json
from typing import Any, Dict, Mapping, Optional, Protocol, Sequence, Union, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field


@runtime_checkable
class ApiRequestLike(Protocol):
    action: str

    def get_params(self) -> Dict[str, str]:
        ...


class ApiRequest(BaseModel):
    """Any Dysms action given as a name plus flat string parameters."""

    model_config = ConfigDict(frozen=True)

    action: str
    params: Dict[str, str] = Field(default_factory=dict)

    def get_params(self) -> Dict[str, str]:
        return dict(self.params)


def _encode_template_param(value: Union[Mapping[str, Any], Sequence[Any], None]) -> str:
    # always a JSON object; sequences become index-keyed objects
    if value is None:
        obj: Dict[str, Any] = {}
    elif isinstance(value, Mapping):
        obj = {str(k): v for k, v in value.items()}
    elif isinstance(value, (str, bytes)):
        raise TypeError("template param must be a mapping, not a string")
    else:
        obj = {str(i): v for i, v in enumerate(value)}
    return json.dumps(obj, ensure_ascii=False, separators=(",", ":"))


class SendSms(BaseModel):
    model_config = ConfigDict(frozen=True)

    action: str = "SendSms"
    phone_numbers: Optional[str] = None
    sign_name: Optional[str] = None
    template_code: Optional[str] = None
    template_param: Optional[str] = None
    out_id: Optional[str] = None

    def set_phone_numbers(self, value: Union[str, Sequence[str]] = "") -> "SendSms":
        """Several numbers are comma-joined; batch sends may be delayed."""
        numbers = value if isinstance(value, str) else ",".join(str(v) for v in value)
        return self.model_copy(update={"phone_numbers": numbers})

    def set_sign_name(self, value: str) -> "SendSms":
        return self.model_copy(update={"sign_name": value})

    def set_template_code(self, value: str) -> "SendSms":
        return self.model_copy(update={"template_code": value})

    def set_template_param(self, value: Union[Mapping[str, Any], Sequence[Any], None] = None) -> "SendSms":
        return self.model_copy(update={"template_param": _encode_template_param(value)})

    def set_out_id(self, value: str) -> "SendSms":
        return self.model_copy(update={"out_id": value})

    def get_params(self) -> Dict[str, str]:
        fields = {
            "PhoneNumbers": self.phone_numbers,
            "SignName": self.sign_name,
            "TemplateCode": self.template_code,
            "TemplateParam": self.template_param,
            "OutId": self.out_id,
        }
        return {k: v for k, v in fields.items() if v is not None}
