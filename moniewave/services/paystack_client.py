"""
Paystack Client: the single network boundary to the Paystack API.

One ``httpx.AsyncClient`` is shared by every tool invocation. The client never
retries: a repeated transfer or charge could move money twice, so callers get
the first outcome and decide for themselves.
"""
import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.paystack.co"


class PaystackError(Exception):
    """Base class for failures talking to Paystack."""


class PaystackAPIError(PaystackError):
    """Paystack answered and rejected the request."""

    def __init__(self, message: Optional[str], status_code: int):
        self.provider_message = message
        self.status_code = status_code
        super().__init__(message or f"Paystack request failed with status {status_code}")


class PaystackConnectionError(PaystackError):
    """Paystack could not be reached (timeout, DNS, reset connection)."""


class PaystackResponseError(PaystackError):
    """Paystack answered with a body we cannot interpret."""


class PaystackClient:
    """Async Paystack API client with an explicit lifecycle.

    Build it once at startup, share it across requests, and ``aclose()`` it
    at shutdown (or use it as an async context manager).
    """

    def __init__(
        self,
        secret_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not secret_key:
            raise ValueError("A Paystack secret key is required")
        self._secret_key = secret_key
        self.base_url = base_url.rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={
                "Authorization": f"Bearer {secret_key}",
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
        )

    def __repr__(self) -> str:
        return f"PaystackClient(base_url={self.base_url!r})"

    @property
    def secret_key(self) -> str:
        return self._secret_key

    @property
    def is_closed(self) -> bool:
        return self._http.is_closed

    async def __aenter__(self) -> "PaystackClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if not self._http.is_closed:
            await self._http.aclose()
            logger.info("Paystack client closed")

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Perform one Paystack call and return the decoded response body.

        Returns:
            The full Paystack body: ``{"status": True, "message": ..., "data": ..., "meta"?: ...}``

        Raises:
            PaystackConnectionError: the request never got an answer.
            PaystackAPIError: non-2xx status, or ``status: false`` in the body.
            PaystackResponseError: the body is not a Paystack JSON object.
        """
        logger.debug(f"Paystack {method} {path}")
        try:
            response = await self._http.request(method, path, json=json, params=params)
        except httpx.TransportError as e:
            logger.warning(f"Paystack transport failure on {method} {path}: {type(e).__name__}")
            raise PaystackConnectionError(f"{type(e).__name__} while calling {path}") from e

        body = self._decode(response)

        if response.status_code >= 400:
            message = body.get("message") if isinstance(body, dict) else None
            raise PaystackAPIError(message if isinstance(message, str) and message else None, response.status_code)

        if not isinstance(body, dict):
            raise PaystackResponseError(f"Expected a JSON object from {path}, got {type(body).__name__}")
        if "status" not in body:
            raise PaystackResponseError(f"Response from {path} has no 'status' field")
        if body["status"] is not True:
            message = body.get("message")
            raise PaystackAPIError(message if isinstance(message, str) and message else None, response.status_code)

        return body

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            if response.status_code >= 400:
                # Error pages (gateway HTML etc.) still classify as a rejection
                return None
            raise PaystackResponseError(
                f"Paystack returned a non-JSON body (HTTP {response.status_code})"
            )

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return await self.request("POST", path, json=json or {})

    async def put(self, path: str, json: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return await self.request("PUT", path, json=json or {})

    async def check_balance(self) -> Dict[str, Any]:
        """
        Fetch the integration balance.

        ``/balance`` documents ``data`` as a list of per-currency balances, but
        some integrations have been seen to return a single object. Both shapes
        pass through untouched; anything else is a malformed response.
        """
        body = await self.get("/balance")
        data = body.get("data")
        if not isinstance(data, (list, dict)):
            raise PaystackResponseError("Balance response 'data' is neither an object nor a list")
        if isinstance(data, list) and not all(isinstance(item, dict) for item in data):
            raise PaystackResponseError("Balance response 'data' list holds non-object entries")
        return body
