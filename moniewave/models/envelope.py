"""Result envelope returned by every tool invocation.

Callers branch on ``success`` alone; the same shape comes back from every tool
whether it is served over MCP, HTTP, or called in-process.
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel, model_validator


class ToolErrorInfo(BaseModel):
    """Structured error carried by a failed envelope."""

    message: str
    code: Optional[str] = None


class ResultEnvelope(BaseModel):
    """Discriminated result of a tool call.

    Attributes:
        success: True when the provider call succeeded.
        data: The provider's payload, unaltered. Success only.
        meta: Pagination metadata returned beside ``data``. Success only.
        message: The provider's human-readable message. Success only.
        error: Structured failure. Failure only.
    """

    success: bool
    data: Any = None
    meta: Optional[Dict[str, Any]] = None
    message: Optional[str] = None
    error: Optional[ToolErrorInfo] = None

    @model_validator(mode="after")
    def _check_outcome(self) -> "ResultEnvelope":
        if self.success:
            if self.error is not None:
                raise ValueError("a successful envelope cannot carry an error")
        else:
            if self.error is None:
                raise ValueError("a failed envelope must carry an error")
            if self.data is not None or self.meta is not None:
                raise ValueError("a failed envelope cannot carry data")
        return self

    @classmethod
    def ok(cls, data: Any, meta: Optional[Dict[str, Any]] = None, message: Optional[str] = None) -> "ResultEnvelope":
        return cls(success=True, data=data, meta=meta, message=message)

    @classmethod
    def fail(cls, message: str, code: Optional[str] = None) -> "ResultEnvelope":
        return cls(success=False, error=ToolErrorInfo(message=message, code=code))

    def to_payload(self) -> Dict[str, Any]:
        """Plain dict for JSON transports; unset optional fields are dropped.

        ``data`` is always present on success, even when the provider sent null.
        """
        payload = self.model_dump(exclude_none=True)
        if self.success:
            payload["data"] = self.data
        return payload

    def to_http_body(self) -> Dict[str, Any]:
        """Paystack-style ``status``/``message``/``data`` body for the HTTP API."""
        if self.success:
            body: Dict[str, Any] = {
                "status": True,
                "message": self.message or "Request successful",
                "data": self.data,
            }
            if self.meta is not None:
                body["meta"] = self.meta
            return body
        return {
            "status": False,
            "message": self.error.message,
            "error": self.error.model_dump(exclude_none=True),
        }
