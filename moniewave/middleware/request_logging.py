"""
Request Logging Middleware: request ids, failed and slow request logging.

Bodies are never logged; tool arguments can carry account numbers and the
outgoing calls carry the Paystack secret.
"""
import json
import logging
import time
import uuid
from typing import Dict

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("moniewave.requests")

REQUEST_ID_HEADER = "X-Request-ID"

# Paystack calls time out at 10s by default; anything slower than this is worth a look
SLOW_REQUEST_THRESHOLD = 15.0  # seconds


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id and log the ones that fail or drag."""

    async def dispatch(self, request: Request, call_next) -> Response:
        start_time = time.time()
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        context = self._build_context(request, request_id)

        try:
            response = await call_next(request)
        except Exception as e:
            duration = time.time() - start_time
            self._log_error_request(context, type(e).__name__, duration)
            raise

        duration = time.time() - start_time
        if duration > SLOW_REQUEST_THRESHOLD:
            self._log_slow_request(context, duration)
        if response.status_code >= 400:
            self._log_failed_request(context, response.status_code, duration)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    def _build_context(self, request: Request, request_id: str) -> Dict:
        return {
            'request_id': request_id,
            'method': request.method,
            'path': request.url.path,
            'client_ip': request.client.host if request.client else 'unknown',
            'user_agent': request.headers.get('user-agent', 'unknown')[:200],
        }

    def _log_slow_request(self, context: Dict, duration: float):
        log_entry = {
            'event_type': 'slow_request',
            'duration_seconds': round(duration, 2),
            **context
        }
        logger.warning(f"SLOW REQUEST ({duration:.2f}s): {json.dumps(log_entry)}")

    def _log_failed_request(self, context: Dict, status_code: int, duration: float):
        log_entry = {
            'event_type': 'failed_request',
            'status_code': status_code,
            'duration_seconds': round(duration, 2),
            **context
        }

        if status_code >= 500:
            logger.error(f"SERVER ERROR ({status_code}): {json.dumps(log_entry)}")
        elif status_code == 429:
            logger.warning(f"RATE LIMITED: {json.dumps(log_entry)}")
        else:
            logger.info(f"CLIENT ERROR ({status_code}): {json.dumps(log_entry)}")

    def _log_error_request(self, context: Dict, error: str, duration: float):
        log_entry = {
            'event_type': 'error_request',
            'error': error[:500],
            'duration_seconds': round(duration, 2),
            **context
        }
        logger.error(f"REQUEST ERROR: {json.dumps(log_entry)}")
