"""Tool descriptors: name, description, input schema and the Paystack call."""
import string as _string
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple
from urllib.parse import quote

from moniewave.services.paystack_client import PaystackClient
from moniewave.tools.errors import ToolValidationError
from moniewave.tools.schema import ParamSpec, input_schema

ProviderCall = Callable[[PaystackClient, Dict[str, Any]], Awaitable[Dict[str, Any]]]


@dataclass(frozen=True)
class ToolDescriptor:
    """Static description of one tool, built once at startup."""

    name: str
    description: str
    params: Tuple[ParamSpec, ...]
    invoke: ProviderCall
    input_schema: Dict[str, Any] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "params", tuple(self.params))
        names = [p.name for p in self.params]
        if len(names) != len(set(names)):
            raise ValueError(f"Tool {self.name!r} declares a parameter twice")
        object.__setattr__(self, "input_schema", input_schema(self.params))

    def to_wire(self, values: Dict[str, Any]) -> Dict[str, Any]:
        """Rename parameters to Paystack field names and drop unset ones."""
        return {
            spec.key: values[spec.name]
            for spec in self.params
            if values.get(spec.name) is not None
        }

    def definition(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": self.input_schema,
        }


def tool(name: str, description: str, *params: ParamSpec, invoke: ProviderCall) -> ToolDescriptor:
    return ToolDescriptor(name=name, description=description, params=params, invoke=invoke)


def endpoint(method: str, path: str) -> ProviderCall:
    """
    Build a provider call for one Paystack endpoint.

    Placeholders in ``path`` (``/customer/{code}``) are filled from the
    parameters of the same wire name and URL-quoted; the rest go in the query
    string for GET and in the JSON body otherwise. Path values of ``.`` or
    ``..`` are rejected as invalid.
    """
    method = method.upper()
    path_fields = [f for _, f, _, _ in _string.Formatter().parse(path) if f]

    async def call(client: PaystackClient, wire: Dict[str, Any]) -> Dict[str, Any]:
        path_values = {key: str(wire[key]) for key in path_fields}
        dotted = [(key, "must not be a dot segment") for key, value in path_values.items() if value in (".", "..")]
        if dotted:
            raise ToolValidationError(invalid=dotted)
        path_values = {key: quote(value, safe="") for key, value in path_values.items()}
        rest = {k: v for k, v in wire.items() if k not in path_fields}
        url = path.format(**path_values)
        if method == "GET":
            return await client.request(method, url, params=rest or None)
        return await client.request(method, url, json=rest)

    slug = path.strip("/").replace("/", "_").replace("{", "").replace("}", "")
    call.__name__ = f"{method.lower()}_{slug}"
    return call


async def check_balance(client: PaystackClient, wire: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    return await client.check_balance()
