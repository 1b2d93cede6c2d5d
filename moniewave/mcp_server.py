"""
Moniewave MCP Server: exposes the Paystack tool registry over MCP.

Run over stdio (default) for desktop agents, or SSE for networked clients:

    moniewave-mcp --transport stdio
    moniewave-mcp --transport sse --port 4000
"""
import argparse
import asyncio
import json
import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

import mcp.types as types
import uvicorn
from mcp.server.lowlevel import Server
from mcp.server.sse import SseServerTransport
from mcp.server.stdio import stdio_server
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import Mount, Route

from moniewave.services.paystack_client import PaystackClient
from moniewave.tools.registry import ToolRegistry, build_registry
from moniewave.utils.config import BaseConfig, ConfigurationError, get_settings
from moniewave.utils.structured_logging import configure_logging

logger = logging.getLogger(__name__)

SERVER_NAME = "moniewave"
TRANSPORTS = ("stdio", "sse")


def list_tool_definitions(registry: ToolRegistry) -> List[types.Tool]:
    return [
        types.Tool(name=d["name"], description=d["description"], inputSchema=d["input_schema"])
        for d in registry.list_tools()
    ]


async def call_tool_result(
    registry: ToolRegistry, name: str, arguments: Optional[Dict[str, Any]]
) -> types.CallToolResult:
    """Run a tool and wrap its envelope as an MCP result.

    The envelope travels as JSON text; ``isError`` mirrors ``success`` so
    clients can branch without parsing the text.
    """
    envelope = await registry.invoke(name, arguments)
    payload = envelope.to_payload()
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=json.dumps(payload, default=str))],
        isError=not envelope.success,
    )


def create_mcp_server(registry: ToolRegistry) -> Server:
    server = Server(SERVER_NAME)

    @server.list_tools()
    async def handle_list_tools() -> List[types.Tool]:
        return list_tool_definitions(registry)

    # Our own extractor reports every bad field in the envelope
    @server.call_tool(validate_input=False)
    async def handle_call_tool(name: str, arguments: Optional[Dict[str, Any]]) -> types.CallToolResult:
        return await call_tool_result(registry, name, arguments)

    return server


async def serve_stdio(server: Server, client: PaystackClient):
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await client.aclose()


def create_sse_app(server: Server, client: PaystackClient) -> Starlette:
    """Starlette app serving MCP over SSE: GET /sse, POST /messages/."""
    sse = SseServerTransport("/messages/")

    async def handle_sse(request: Request) -> Response:
        async with sse.connect_sse(request.scope, request.receive, request._send) as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
        return Response()

    @asynccontextmanager
    async def lifespan(app: Starlette):
        logger.info("MCP SSE server ready")
        yield
        await client.aclose()

    return Starlette(
        routes=[
            Route("/sse", endpoint=handle_sse, methods=["GET"]),
            Mount("/messages/", app=sse.handle_post_message),
        ],
        lifespan=lifespan,
    )


def build_client(settings: BaseConfig) -> PaystackClient:
    return PaystackClient(
        settings.paystack_secret(),
        base_url=settings.PAYSTACK_BASE_URL,
        timeout=settings.PAYSTACK_TIMEOUT,
    )


def parse_args(argv=None, settings: Optional[BaseConfig] = None) -> argparse.Namespace:
    settings = settings or get_settings()
    parser = argparse.ArgumentParser(prog="moniewave-mcp", description="Paystack tools over MCP")
    parser.add_argument("--transport", choices=TRANSPORTS, default=settings.MCP_TRANSPORT)
    parser.add_argument("--host", default=settings.HOST)
    parser.add_argument("--port", type=int, default=settings.PORT)
    return parser.parse_args(argv)


def main(argv=None):
    settings = get_settings()
    args = parse_args(argv, settings)
    configure_logging(settings)

    try:
        client = build_client(settings)
    except ConfigurationError as e:
        logger.critical(str(e))
        sys.exit(1)

    registry = build_registry(client)
    server = create_mcp_server(registry)

    if args.transport == "sse":
        logger.info(f"Starting Paystack MCP Server (SSE) on {args.host}:{args.port}")
        uvicorn.run(create_sse_app(server, client), host=args.host, port=args.port, log_config=None)
    else:
        logger.info("Starting Paystack MCP Server (stdio)")
        asyncio.run(serve_stdio(server, client))


if __name__ == "__main__":
    main()
