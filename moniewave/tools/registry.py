"""
Tool Registry: maps stable tool names to descriptors and runs them.

The registry is filled once at startup, then sealed. After that it is
read-only and shared by every concurrent request without locking.
"""
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from moniewave.models.envelope import ResultEnvelope
from moniewave.services.paystack_client import PaystackClient
from moniewave.tools.catalog import all_tools
from moniewave.tools.descriptor import ToolDescriptor
from moniewave.tools.errors import DuplicateToolError, UnknownToolError
from moniewave.tools.invoker import normalize_failure, run_tool

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Name → descriptor table bound to one Paystack client."""

    def __init__(self, client: PaystackClient):
        self.client = client
        self._tools: Dict[str, ToolDescriptor] = {}
        self._sealed = False

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    @property
    def sealed(self) -> bool:
        return self._sealed

    def register(self, descriptor: ToolDescriptor) -> ToolDescriptor:
        if self._sealed:
            raise RuntimeError(f"Registry is sealed; cannot register {descriptor.name!r}")
        if descriptor.name in self._tools:
            raise DuplicateToolError(f"Tool {descriptor.name!r} is already registered")
        self._tools[descriptor.name] = descriptor
        return descriptor

    def register_all(self, descriptors: Iterable[ToolDescriptor]) -> None:
        for descriptor in descriptors:
            self.register(descriptor)

    def seal(self) -> "ToolRegistry":
        self._sealed = True
        logger.info(f"Tool registry sealed with {len(self._tools)} tools")
        return self

    def get(self, name: str) -> Optional[ToolDescriptor]:
        return self._tools.get(name)

    def names(self) -> List[str]:
        return list(self._tools)

    def list_tools(self) -> List[Dict[str, Any]]:
        """Name, description and input schema of every registered tool."""
        return [descriptor.definition() for descriptor in self._tools.values()]

    def function_definitions(self) -> List[Dict[str, Any]]:
        """Tools as OpenAI-style function definitions for voice/chat agents."""
        return [
            {
                "type": "function",
                "name": d.name,
                "description": d.description,
                "parameters": d.input_schema,
            }
            for d in self._tools.values()
        ]

    async def invoke(
        self,
        name: str,
        raw_parameters: Optional[Mapping[str, Any]] = None,
        request_id: Optional[str] = None,
    ) -> ResultEnvelope:
        """Run the named tool. Always returns an envelope."""
        descriptor = self._tools.get(name)
        if descriptor is None:
            logger.warning(f"Unknown tool requested: {name!r}")
            return normalize_failure(UnknownToolError(name), (self.client.secret_key,))
        return await run_tool(descriptor, self.client, raw_parameters, request_id=request_id)


def build_registry(client: PaystackClient) -> ToolRegistry:
    """Register the full Paystack catalog against ``client`` and seal it."""
    registry = ToolRegistry(client)
    registry.register_all(all_tools())
    return registry.seal()
