"""
Tool invocation: extract → call Paystack → normalize.

``run_tool`` is the one generic wrapper every tool goes through. It never
raises for runtime conditions; whatever happens comes back as a
ResultEnvelope. ``asyncio.CancelledError`` is not an ``Exception`` and is left
to propagate, so a cancelled caller simply abandons the in-flight call.
"""
import time
from typing import Any, Dict, Mapping, Optional

from moniewave.models.envelope import ResultEnvelope
from moniewave.services.paystack_client import (
    PaystackAPIError,
    PaystackClient,
    PaystackConnectionError,
    PaystackResponseError,
)
from moniewave.tools.descriptor import ToolDescriptor
from moniewave.tools.errors import (
    InternalError,
    MalformedResponseError,
    ProviderError,
    ToolFailure,
    ToolValidationError,
    TransportError,
)
from moniewave.tools.schema import extract_parameters
from moniewave.utils.structured_logging import ContextLogger, get_logger, redact

logger = get_logger(__name__)


async def invoke_provider(descriptor: ToolDescriptor, client: PaystackClient, values: Dict[str, Any]) -> Dict[str, Any]:
    """
    Make exactly one Paystack call for ``descriptor``.

    Returns the raw Paystack body, or raises a ToolFailure subclass. This is
    the only place provider exceptions are caught.
    """
    try:
        body = await descriptor.invoke(client, descriptor.to_wire(values))
    except ToolFailure:
        raise
    except PaystackAPIError as e:
        raise ProviderError(str(e), status_code=e.status_code) from e
    except PaystackConnectionError as e:
        raise TransportError("Could not reach Paystack") from e
    except PaystackResponseError as e:
        raise MalformedResponseError(f"Paystack returned a malformed response: {e}") from e
    except Exception as e:
        raise InternalError(f"{type(e).__name__}: {e}") from e

    if not isinstance(body, dict):
        raise MalformedResponseError("Paystack returned a malformed response")
    return body


def normalize_success(body: Dict[str, Any]) -> ResultEnvelope:
    """Wrap a Paystack body; ``data`` and ``meta`` pass through unchanged."""
    meta = body.get("meta")
    message = body.get("message")
    return ResultEnvelope.ok(
        data=body.get("data"),
        meta=meta if isinstance(meta, dict) else None,
        message=message if isinstance(message, str) else None,
    )


def normalize_failure(failure: ToolFailure, secrets=()) -> ResultEnvelope:
    return ResultEnvelope.fail(redact(failure.public_message, secrets), code=failure.code)


def _log_failure(log: ContextLogger, failure: ToolFailure, secrets) -> None:
    detail = redact(failure.message, secrets)
    log = log.bind(error_code=failure.code)
    if isinstance(failure, TransportError):
        log.warning(f"Paystack unreachable: {redact(str(failure.__cause__), secrets)}")
    elif isinstance(failure, InternalError):
        log.error(f"Tool crashed: {detail}", exc_info=failure.__cause__ or failure)
    elif isinstance(failure, MalformedResponseError):
        log.warning(detail)
    elif isinstance(failure, ProviderError):
        log.info(f"Paystack rejected request: {detail}", extra={"status_code": failure.status_code})
    else:
        log.info(detail)


async def run_tool(
    descriptor: ToolDescriptor,
    client: PaystackClient,
    raw_parameters: Optional[Mapping[str, Any]],
    request_id: Optional[str] = None,
) -> ResultEnvelope:
    """Validate, call and normalize one tool invocation."""
    log = logger.bind(tool=descriptor.name, request_id=request_id)
    secrets = (client.secret_key,)
    started = time.perf_counter()

    try:
        if raw_parameters is not None and not isinstance(raw_parameters, Mapping):
            raise ToolValidationError(invalid=[("arguments", "expected an object")])
        values = extract_parameters(descriptor.params, raw_parameters)
        body = await invoke_provider(descriptor, client, values)
        envelope = normalize_success(body)
    except ToolFailure as failure:
        _log_failure(log, failure, secrets)
        return normalize_failure(failure, secrets)
    except Exception as e:
        # Normalization itself failed; still never escape the boundary
        failure = InternalError(f"{type(e).__name__}: {e}")
        failure.__cause__ = e
        _log_failure(log, failure, secrets)
        return normalize_failure(failure, secrets)

    duration_ms = round((time.perf_counter() - started) * 1000, 1)
    log.bind(duration_ms=duration_ms).info("Tool call succeeded")
    return envelope
