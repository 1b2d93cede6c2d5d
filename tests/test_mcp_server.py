import json

import httpx
import mcp.types as types
import pytest
from mcp.server.lowlevel import Server

from moniewave.mcp_server import (
    call_tool_result,
    create_mcp_server,
    list_tool_definitions,
    main,
    parse_args,
)
from moniewave.utils.config import DevelopmentConfig


def test_tool_definitions_carry_schemas(registry):
    tools = list_tool_definitions(registry)

    assert len(tools) == len(registry)
    assert all(isinstance(t, types.Tool) for t in tools)
    create = next(t for t in tools if t.name == "customer_create")
    assert create.inputSchema["required"] == ["email"]


@pytest.mark.asyncio
async def test_call_tool_returns_json_envelope(registry, paystack_api):
    paystack_api.get("/country").mock(
        return_value=httpx.Response(200, json={"status": True, "message": "Countries retrieved", "data": [{"name": "Nigeria"}]})
    )

    result = await call_tool_result(registry, "country_list", {})

    assert result.isError is False
    assert len(result.content) == 1
    assert result.content[0].type == "text"
    assert json.loads(result.content[0].text) == {
        "success": True,
        "data": [{"name": "Nigeria"}],
        "message": "Countries retrieved",
    }


@pytest.mark.asyncio
async def test_call_tool_with_no_arguments_reports_missing_fields(registry):
    result = await call_tool_result(registry, "transaction_verify", None)

    assert result.isError is True
    payload = json.loads(result.content[0].text)
    assert payload["success"] is False
    assert payload["error"]["code"] == "validation_error"
    assert "reference" in payload["error"]["message"]


@pytest.mark.asyncio
async def test_provider_rejection_is_flagged_as_error(registry, paystack_api):
    paystack_api.post("/transfer").mock(
        return_value=httpx.Response(400, json={"status": False, "message": "Insufficient balance"})
    )

    result = await call_tool_result(registry, "transfer_initiate", {"amount": 500000, "recipient": "RCP_1"})

    assert result.isError is True
    assert json.loads(result.content[0].text)["error"]["message"] == "Insufficient balance"


@pytest.mark.asyncio
async def test_registered_call_handler_skips_sdk_validation(registry):
    server = create_mcp_server(registry)
    handler = server.request_handlers[types.CallToolRequest]
    request = types.CallToolRequest(
        method="tools/call",
        params=types.CallToolRequestParams(name="customer_create", arguments={}),
    )

    response = await handler(request)

    result = response.root
    assert isinstance(result, types.CallToolResult)
    assert result.isError is True
    payload = json.loads(result.content[0].text)
    assert payload["error"]["code"] == "validation_error"
    assert "email" in payload["error"]["message"]


def test_create_mcp_server(registry):
    server = create_mcp_server(registry)

    assert isinstance(server, Server)
    assert server.name == "moniewave"


def test_parse_args_defaults_from_settings(test_settings):
    args = parse_args([], test_settings)

    assert args.transport == "stdio"
    assert args.port == test_settings.PORT


def test_parse_args_overrides(test_settings):
    args = parse_args(["--transport", "sse", "--port", "8080"], test_settings)

    assert args.transport == "sse"
    assert args.port == 8080


def test_main_exits_without_secret(mocker, monkeypatch):
    monkeypatch.delenv("PAYSTACK_SECRET_KEY", raising=False)
    mocker.patch("moniewave.mcp_server.get_settings", return_value=DevelopmentConfig(_env_file=None))
    mocker.patch("moniewave.mcp_server.configure_logging")

    with pytest.raises(SystemExit) as exc:
        main([])

    assert exc.value.code == 1


def test_main_serves_stdio_by_default(mocker, test_settings):
    mocker.patch("moniewave.mcp_server.get_settings", return_value=test_settings)
    mocker.patch("moniewave.mcp_server.configure_logging")
    serve_stdio = mocker.patch("moniewave.mcp_server.serve_stdio", new=mocker.Mock(return_value="coro"))
    run = mocker.patch("moniewave.mcp_server.asyncio.run")

    main([])

    serve_stdio.assert_called_once()
    run.assert_called_once_with("coro")


def test_main_serves_sse(mocker, test_settings):
    mocker.patch("moniewave.mcp_server.get_settings", return_value=test_settings)
    mocker.patch("moniewave.mcp_server.configure_logging")
    uvicorn_run = mocker.patch("moniewave.mcp_server.uvicorn.run")

    main(["--transport", "sse", "--port", "4100"])

    uvicorn_run.assert_called_once()
    assert uvicorn_run.call_args.kwargs["port"] == 4100
