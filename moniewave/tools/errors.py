"""
Tool error taxonomy.

Every runtime failure inside a tool invocation is one of these and is turned
into a ResultEnvelope before it leaves the registry. DuplicateToolError is the
exception: it is a startup configuration error and is allowed to propagate.
"""
from typing import Iterable, List, Optional, Tuple


class DuplicateToolError(ValueError):
    """A second descriptor was registered under an existing name."""


class ToolFailure(Exception):
    """Base class for failures that end up in an error envelope."""

    code = "internal_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def public_message(self) -> str:
        """Message that is safe to hand to the caller."""
        return self.message


class ToolValidationError(ToolFailure):
    """Caller-supplied parameters are missing or malformed."""

    code = "validation_error"

    def __init__(self, missing: Iterable[str] = (), invalid: Iterable[Tuple[str, str]] = ()):
        self.missing: List[str] = list(missing)
        self.invalid: List[Tuple[str, str]] = list(invalid)
        parts = []
        if self.missing:
            parts.append(f"Missing required fields: {', '.join(self.missing)}")
        if self.invalid:
            details = ", ".join(f"{name} ({reason})" for name, reason in self.invalid)
            parts.append(f"Invalid fields: {details}")
        super().__init__("; ".join(parts) or "Invalid parameters")


class ProviderError(ToolFailure):
    """Paystack rejected the request."""

    code = "provider_error"

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class TransportError(ProviderError):
    """Paystack could not be reached."""

    code = "transport_error"


class MalformedResponseError(ProviderError):
    """Paystack answered with something other than a usable payload."""

    code = "malformed_response"


class InternalError(ToolFailure):
    """Unexpected fault inside this layer; detail stays in the logs."""

    code = "internal_error"

    @property
    def public_message(self) -> str:
        return "An internal error occurred while running the tool"


class UnknownToolError(ToolFailure):
    """No descriptor is registered under the requested name."""

    code = "unknown_tool"

    def __init__(self, tool_name: str):
        super().__init__(f"Unknown tool: {tool_name}")
        self.tool_name = tool_name
