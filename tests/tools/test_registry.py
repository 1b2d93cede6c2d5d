import asyncio
import json

import httpx
import pytest

from moniewave.services.paystack_client import PaystackAPIError
from moniewave.tools.descriptor import endpoint, tool
from moniewave.tools.errors import DuplicateToolError
from moniewave.tools.registry import ToolRegistry
from moniewave.tools.schema import string

CUSTOMER = {
    "id": 1173,
    "email": "a@b.com",
    "customer_code": "CUS_xnxdt6s1zg1f4nx",
    "first_name": None,
    "integration": 100032,
    "domain": "test",
    "identified": False,
}


@pytest.mark.asyncio
async def test_customer_create_with_only_email(registry, paystack_api):
    route = paystack_api.post("/customer").mock(
        return_value=httpx.Response(200, json={"status": True, "message": "Customer created", "data": CUSTOMER})
    )

    envelope = await registry.invoke("customer_create", {"email": "a@b.com"})

    assert envelope.success is True
    assert envelope.error is None
    assert envelope.data["customer_code"] == "CUS_xnxdt6s1zg1f4nx"
    assert envelope.message == "Customer created"
    # Unset optional fields are not sent
    assert json.loads(route.calls.last.request.content) == {"email": "a@b.com"}


@pytest.mark.asyncio
async def test_customer_create_without_email_makes_no_call(registry, paystack_api):
    route = paystack_api.post("/customer")

    envelope = await registry.invoke("customer_create", {})

    assert envelope.success is False
    assert envelope.data is None
    assert "email" in envelope.error.message
    assert envelope.error.code == "validation_error"
    assert not route.called
    assert len(paystack_api.calls) == 0


@pytest.mark.asyncio
async def test_transfer_initiate_insufficient_balance(registry, paystack_api):
    paystack_api.post("/transfer").mock(
        return_value=httpx.Response(400, json={"status": False, "message": "Insufficient balance"})
    )

    envelope = await registry.invoke("transfer_initiate", {"amount": 500000, "recipient": "RCP_t0ya41mp35flk40"})

    assert envelope.success is False
    assert envelope.error.message == "Insufficient balance"
    assert envelope.error.code == "provider_error"
    assert envelope.data is None
    assert envelope.meta is None


@pytest.mark.asyncio
async def test_transfer_initiate_sends_default_source(registry, paystack_api):
    route = paystack_api.post("/transfer").mock(
        return_value=httpx.Response(200, json={"status": True, "message": "Transfer has been queued", "data": {"transfer_code": "TRF_1"}})
    )

    await registry.invoke("transfer_initiate", {"amount": 500000, "recipient": "RCP_1", "reason": "Rent"})

    sent = json.loads(route.calls.last.request.content)
    assert sent == {"amount": 500000, "recipient": "RCP_1", "source": "balance", "reason": "Rent"}


@pytest.mark.asyncio
async def test_every_tool_reports_all_missing_fields_without_network(registry, paystack_api):
    for definition in registry.list_tools():
        required = definition["input_schema"]["required"]
        if not required:
            continue
        envelope = await registry.invoke(definition["name"], {})
        assert envelope.success is False
        assert envelope.error.code == "validation_error"
        for field in required:
            assert field in envelope.error.message
    assert len(paystack_api.calls) == 0


@pytest.mark.asyncio
async def test_success_keeps_every_field_and_pagination(registry, paystack_api):
    payload = [{"id": 1, "email": "a@b.com", "extra": {"nested": [1, 2]}}]
    meta = {"total": 1, "skipped": 0, "perPage": 50, "page": 1, "pageCount": 1}
    route = paystack_api.get("/customer").mock(
        return_value=httpx.Response(200, json={"status": True, "message": "Customers retrieved", "data": payload, "meta": meta})
    )

    envelope = await registry.invoke("customer_list", {"per_page": 50, "page": 1})

    assert envelope.success is True
    assert envelope.data == payload
    assert envelope.meta == meta
    params = route.calls.last.request.url.params
    assert params["perPage"] == "50"
    assert params["page"] == "1"


@pytest.mark.asyncio
async def test_path_parameters_are_quoted(registry, paystack_api):
    route = paystack_api.get(path__regex=r"^/customer/").mock(
        return_value=httpx.Response(200, json={"status": True, "message": "Customer retrieved", "data": CUSTOMER})
    )

    envelope = await registry.invoke("customer_get", {"email_or_code": "a@b.com"})

    assert envelope.success is True
    assert route.calls.last.request.url.raw_path == b"/customer/a%40b.com"


@pytest.mark.asyncio
async def test_transport_failure_is_classified(registry, paystack_api):
    paystack_api.get("/transaction/verify/ref123").mock(side_effect=httpx.ConnectTimeout("timed out"))

    envelope = await registry.invoke("transaction_verify", {"reference": "ref123"})

    assert envelope.success is False
    assert envelope.error.code == "transport_error"
    assert envelope.error.message == "Could not reach Paystack"


@pytest.mark.asyncio
async def test_malformed_response_is_not_a_missing_resource(registry, paystack_api):
    paystack_api.get("/transaction/verify/ref123").mock(return_value=httpx.Response(200, text="<html>oops</html>"))

    envelope = await registry.invoke("transaction_verify", {"reference": "ref123"})

    assert envelope.success is False
    assert envelope.error.code == "malformed_response"


@pytest.mark.asyncio
async def test_server_error_without_message(registry, paystack_api):
    paystack_api.get("/bank").mock(return_value=httpx.Response(503, text="Service Unavailable"))

    envelope = await registry.invoke("bank_list", {})

    assert envelope.error.code == "provider_error"
    assert envelope.error.message == "Paystack request failed with status 503"


@pytest.mark.asyncio
async def test_balance_accepts_list_and_object(registry, paystack_api):
    balances = [{"currency": "NGN", "balance": 1000000}, {"currency": "USD", "balance": 0}]
    route = paystack_api.get("/balance")

    route.mock(return_value=httpx.Response(200, json={"status": True, "message": "Balances retrieved", "data": balances}))
    envelope = await registry.invoke("balance_check")
    assert envelope.data == balances

    route.mock(return_value=httpx.Response(200, json={"status": True, "message": "Balances retrieved", "data": balances[0]}))
    envelope = await registry.invoke("balance_check")
    assert envelope.data == balances[0]


@pytest.mark.asyncio
async def test_balance_with_unexpected_shape_is_malformed(registry, paystack_api):
    paystack_api.get("/balance").mock(
        return_value=httpx.Response(200, json={"status": True, "message": "Balances retrieved", "data": "1000"})
    )

    envelope = await registry.invoke("balance_check")

    assert envelope.success is False
    assert envelope.error.code == "malformed_response"


@pytest.mark.asyncio
async def test_unknown_tool_is_distinct_from_validation(registry, paystack_api):
    envelope = await registry.invoke("customer_delete", {"email": "a@b.com"})

    assert envelope.success is False
    assert envelope.error.code == "unknown_tool"
    assert envelope.error.message == "Unknown tool: customer_delete"
    assert len(paystack_api.calls) == 0


@pytest.mark.asyncio
async def test_crash_inside_provider_call_is_contained(paystack_client):
    async def explode(client, wire):
        raise KeyError("data")

    registry = ToolRegistry(paystack_client)
    registry.register(tool("explode", "Always fails", invoke=explode))

    envelope = await registry.invoke("explode", {})

    assert envelope.success is False
    assert envelope.error.code == "internal_error"
    # Raw detail stays in the logs
    assert "KeyError" not in envelope.error.message


@pytest.mark.asyncio
async def test_non_mapping_arguments_fail_validation(registry):
    envelope = await registry.invoke("customer_create", ["a@b.com"])

    assert envelope.error.code == "validation_error"
    assert "arguments" in envelope.error.message


@pytest.mark.asyncio
async def test_secret_never_reaches_the_envelope(paystack_client):
    secret = paystack_client.secret_key

    async def leaky(client, wire):
        raise RuntimeError(f"bad header Bearer {secret}")

    async def leaky_provider(client, wire):
        raise PaystackAPIError(f"Invalid key {secret}", 401)

    registry = ToolRegistry(paystack_client)
    registry.register(tool("leaky", "Leaks", invoke=leaky))
    registry.register(tool("leaky_provider", "Leaks", invoke=leaky_provider))

    for name in ("leaky", "leaky_provider"):
        envelope = await registry.invoke(name, {})
        assert secret not in envelope.model_dump_json()


@pytest.mark.asyncio
async def test_concurrent_invocations_are_independent(registry, paystack_api):
    paystack_api.get("/transaction/verify/a").mock(
        return_value=httpx.Response(200, json={"status": True, "message": "ok", "data": {"reference": "a"}})
    )
    paystack_api.get("/transaction/verify/b").mock(
        return_value=httpx.Response(404, json={"status": False, "message": "Transaction reference not found"})
    )

    first, second = await asyncio.gather(
        registry.invoke("transaction_verify", {"reference": "a"}),
        registry.invoke("transaction_verify", {"reference": "b"}),
    )

    assert first.success and first.data == {"reference": "a"}
    assert not second.success and second.error.message == "Transaction reference not found"


def test_list_tools_is_idempotent(registry):
    assert registry.list_tools() == registry.list_tools()
    assert len(registry) == len(registry.names())


def test_duplicate_registration_is_fatal(paystack_client):
    registry = ToolRegistry(paystack_client)
    descriptor = tool("ping", "Ping", string("message"), invoke=endpoint("GET", "/ping"))
    registry.register(descriptor)

    with pytest.raises(DuplicateToolError):
        registry.register(descriptor)


def test_sealed_registry_rejects_registration(registry):
    assert registry.sealed
    with pytest.raises(RuntimeError):
        registry.register(tool("late", "Too late", invoke=endpoint("GET", "/late")))


def test_function_definitions_for_voice_agents(registry):
    definitions = {d["name"]: d for d in registry.function_definitions()}

    create = definitions["customer_create"]
    assert create["type"] == "function"
    assert create["parameters"]["required"] == ["email"]


@pytest.mark.asyncio
async def test_dot_segment_path_values_are_rejected(registry, paystack_api):
    for value in (".", ".."):
        envelope = await registry.invoke("transfer_recipient_get", {"id_or_code": value})

        assert envelope.success is False
        assert envelope.error.code == "validation_error"
        assert "id_or_code" in envelope.error.message
    assert len(paystack_api.calls) == 0


@pytest.mark.asyncio
async def test_dots_inside_a_path_value_are_kept(registry, paystack_api):
    route = paystack_api.get(path__regex=r"^/customer/").mock(
        return_value=httpx.Response(200, json={"status": True, "message": "Customer retrieved", "data": CUSTOMER})
    )

    envelope = await registry.invoke("customer_get", {"email_or_code": "..a@b.com"})

    assert envelope.success is True
    assert route.calls.last.request.url.raw_path == b"/customer/..a%40b.com"
