"""
Tools Router: HTTP access to the Paystack tool registry.

POST a JSON object to /api/v1/tools/{tool_name}; the envelope comes back as a
Paystack-style body (status, message, data). The original route layout
(/api/v1/customers/create, ...) is kept as aliases; their path segments and,
for GET routes, query parameters become tool arguments.
"""
import json
import logging
from typing import Any, Dict, NamedTuple, Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from moniewave.models.envelope import ResultEnvelope
from moniewave.tools.descriptor import ToolDescriptor
from moniewave.tools.errors import ToolValidationError
from moniewave.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

router = APIRouter()

STATUS_BY_ERROR_CODE = {
    "validation_error": 400,
    "unknown_tool": 404,
    "provider_error": 502,
    "malformed_response": 502,
    "transport_error": 504,
    "internal_error": 500,
}


class LegacyRoute(NamedTuple):
    """A route of the original HTTP server, mounted under /api/v1."""

    method: str
    path: str
    tool_name: str
    # argument name used by the old route -> tool parameter name
    renames: Dict[str, str] = {}


LEGACY_ROUTES = [
    LegacyRoute("POST", "/balance", "balance_check"),
    LegacyRoute("POST", "/customers/create", "customer_create"),
    LegacyRoute("POST", "/customers/list", "customer_list"),
    LegacyRoute("POST", "/transactions/initialize", "transaction_initialize"),
    LegacyRoute("POST", "/transactions/verify", "transaction_verify"),
    LegacyRoute("POST", "/transactions/list", "transaction_list"),
    LegacyRoute("POST", "/transfers/recipient/create", "transfer_recipient_create"),
    LegacyRoute("POST", "/transfers/initiate", "transfer_initiate"),
    LegacyRoute("POST", "/plans/list", "plan_list"),
    LegacyRoute("POST", "/subscriptions/list", "subscription_list"),
    LegacyRoute("POST", "/banks/list", "bank_list"),
    LegacyRoute("POST", "/banks/resolve", "bank_resolve_account"),
    LegacyRoute("POST", "/subaccounts/list", "subaccount_list"),
    LegacyRoute("POST", "/invoices/create", "payment_request_create"),
    LegacyRoute("POST", "/invoices/list", "payment_request_list"),
    LegacyRoute("POST", "/invoices/get/{id_or_code}", "payment_request_get"),
    LegacyRoute("POST", "/invoices/verify/{code}", "payment_request_verify"),
    LegacyRoute("POST", "/recipients/create", "transfer_recipient_create"),
    LegacyRoute("GET", "/recipients/list", "transfer_recipient_list"),
    LegacyRoute("GET", "/recipients/get", "transfer_recipient_get", {"recipient_code": "id_or_code"}),
]


def http_status(envelope: ResultEnvelope) -> int:
    if envelope.success:
        return 200
    return STATUS_BY_ERROR_CODE.get(envelope.error.code, 500)


def render(envelope: ResultEnvelope) -> JSONResponse:
    return JSONResponse(status_code=http_status(envelope), content=envelope.to_http_body())


def get_registry(request: Request) -> ToolRegistry:
    return request.app.state.registry


async def read_arguments(request: Request) -> Optional[Dict[str, Any]]:
    """Decode the request body; an empty body means no arguments."""
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        payload = json.loads(raw)
    except ValueError:
        raise ToolValidationError(invalid=[("body", "must be valid JSON")])
    if not isinstance(payload, dict):
        raise ToolValidationError(invalid=[("body", "must be a JSON object")])
    return payload


def query_arguments(request: Request, descriptor: Optional[ToolDescriptor], renames: Dict[str, str]) -> Dict[str, Any]:
    """
    Read tool arguments from the query string.

    Query values are untyped, so values for non-string parameters are parsed
    as JSON (``?page=2`` gives 2); anything unparsable is passed on as text
    and fails validation there.
    """
    param_types = {p.name: p.type for p in descriptor.params} if descriptor else {}
    arguments: Dict[str, Any] = {}
    for key, value in request.query_params.items():
        name = renames.get(key, key)
        if param_types.get(name, "string") != "string":
            try:
                value = json.loads(value)
            except ValueError:
                pass
        arguments[name] = value
    return arguments


async def dispatch(request: Request, tool_name: str, arguments: Optional[Dict[str, Any]] = None) -> JSONResponse:
    if arguments is None:
        try:
            arguments = await read_arguments(request)
        except ToolValidationError as e:
            return render(ResultEnvelope.fail(e.public_message, code=e.code))

    request_id = getattr(request.state, "request_id", None)
    envelope = await get_registry(request).invoke(tool_name, arguments, request_id=request_id)
    return render(envelope)


@router.get("/tools")
async def list_tools(request: Request):
    """Every registered tool with its input schema."""
    tools = get_registry(request).list_tools()
    return {"status": True, "message": f"{len(tools)} tools available", "data": tools}


@router.post("/tools/{tool_name}")
async def invoke_tool(tool_name: str, request: Request):
    """Invoke a tool with the JSON body as its arguments."""
    return await dispatch(request, tool_name)


def _legacy_endpoint(route: LegacyRoute):
    async def endpoint(request: Request):
        if route.method == "GET":
            descriptor = get_registry(request).get(route.tool_name)
            arguments = query_arguments(request, descriptor, route.renames)
        else:
            try:
                body = await read_arguments(request)
            except ToolValidationError as e:
                return render(ResultEnvelope.fail(e.public_message, code=e.code))
            arguments = {route.renames.get(k, k): v for k, v in body.items()}
        # Path segments win over body fields of the same name
        arguments.update({route.renames.get(k, k): v for k, v in request.path_params.items()})
        return await dispatch(request, route.tool_name, arguments)

    endpoint.__name__ = f"legacy_{route.tool_name}_{route.method.lower()}"
    endpoint.__doc__ = f"Alias for the {route.tool_name} tool."
    return endpoint


for _route in LEGACY_ROUTES:
    router.add_api_route(_route.path, _legacy_endpoint(_route), methods=[_route.method], include_in_schema=False)
