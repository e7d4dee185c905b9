from __future__ import annotations

from typing import Any, Dict, Optional


class AliSmsError(RuntimeError):
    pass


class ConfigurationError(AliSmsError):
    pass


class InvalidParameterType(AliSmsError, TypeError):
    pass


class TransportError(AliSmsError):
    def __init__(self, message: str, *, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class DecodeError(AliSmsError):
    def __init__(self, message: str, *, body: str = "") -> None:
        super().__init__(message)
        self.body = body


class RemoteApiError(AliSmsError):
    """Server-reported failure. The decoded payload is kept on ``raw``."""

    def __init__(
        self,
        *,
        code: str,
        message: str,
        request_id: str = "",
        status: Optional[int] = None,
        raw: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(f"remote_error code={code} message={message} request_id={request_id}")
        self.code = code
        self.message = message
        self.request_id = request_id
        self.status = status
        self.raw = raw if raw is not None else {}
