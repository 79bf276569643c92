"""
cPanel API error types.

Every failure reported by the service, whichever protocol generation served
the call, surfaces as RemoteCallFailure. Transport problems stay separate.
"""

from typing import Any, Optional

UNKNOWN_REASON = "Unknown"


class CPanelAPIError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class RemoteCallFailure(CPanelAPIError):
    """The service reported that the call failed. ``reason`` may span several lines."""

    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        super().__init__("remote_call_failure", reason or UNKNOWN_REASON, details)

    @property
    def reason(self) -> str:
        return str(self)

    @property
    def reasons(self) -> list[str]:
        return self.reason.split("\n")


class TransportError(CPanelAPIError):
    def __init__(self, message: str, code: str = "transport_error", details: Optional[dict[str, Any]] = None):
        super().__init__(code, message, details)


class ResponseTooLargeError(TransportError):
    def __init__(self, limit: int):
        super().__init__(f"Response exceeded {limit} bytes", code="response_too_large", details={"limit": limit})


class ResponseDecodeError(CPanelAPIError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("decode_error", message, details)
