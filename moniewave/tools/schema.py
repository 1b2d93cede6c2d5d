"""
Declarative tool input schemas and the single routine that applies them.

Each tool lists its parameters as ParamSpec entries; ``extract_parameters``
turns an untyped argument mapping into typed values or a ToolValidationError
that names every missing and invalid field at once.
"""
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from moniewave.tools.errors import ToolValidationError

logger = logging.getLogger(__name__)

PARAM_TYPES = ("string", "integer", "number", "boolean", "object", "array")


@dataclass(frozen=True)
class ParamSpec:
    """One input parameter of a tool."""

    name: str
    type: str = "string"
    description: str = ""
    required: bool = False
    default: Any = None
    choices: Optional[Tuple[Any, ...]] = None
    minimum: Optional[float] = None
    wire_name: Optional[str] = None

    def __post_init__(self):
        if self.type not in PARAM_TYPES:
            raise ValueError(f"Unsupported parameter type {self.type!r} for {self.name!r}")

    @property
    def key(self) -> str:
        """Field name sent to Paystack."""
        return self.wire_name or self.name

    def json_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {"type": self.type}
        if self.description:
            schema["description"] = self.description
        if self.choices is not None:
            schema["enum"] = list(self.choices)
        if self.minimum is not None:
            schema["minimum"] = self.minimum
        if self.default is not None:
            schema["default"] = self.default
        return schema


def string(name: str, description: str = "", **kwargs) -> ParamSpec:
    return ParamSpec(name, "string", description, **kwargs)


def integer(name: str, description: str = "", **kwargs) -> ParamSpec:
    return ParamSpec(name, "integer", description, **kwargs)


def number(name: str, description: str = "", **kwargs) -> ParamSpec:
    return ParamSpec(name, "number", description, **kwargs)


def boolean(name: str, description: str = "", **kwargs) -> ParamSpec:
    return ParamSpec(name, "boolean", description, **kwargs)


def obj(name: str, description: str = "", **kwargs) -> ParamSpec:
    return ParamSpec(name, "object", description, **kwargs)


def array(name: str, description: str = "", **kwargs) -> ParamSpec:
    return ParamSpec(name, "array", description, **kwargs)


def pagination(noun: str) -> List[ParamSpec]:
    """Standard Paystack list parameters."""
    return [
        integer("per_page", f"Number of {noun} per page", minimum=1, wire_name="perPage"),
        integer("page", "Page number to retrieve", minimum=1),
    ]


def date_range() -> List[ParamSpec]:
    return [
        string("from", "Start date, e.g. 2024-01-01T00:00:00.000Z"),
        string("to", "End date, e.g. 2024-12-31T23:59:59.000Z"),
    ]


def input_schema(params: Sequence[ParamSpec]) -> Dict[str, Any]:
    """Render parameters as a JSON object schema."""
    return {
        "type": "object",
        "properties": {p.name: p.json_schema() for p in params},
        "required": [p.name for p in params if p.required],
    }


def _coerce(spec: ParamSpec, value: Any) -> Tuple[Any, Optional[str]]:
    """Return (typed value, None) or (None, reason). Never converts across types."""
    kind = spec.type
    if kind == "string":
        if not isinstance(value, str):
            return None, "expected string"
        return value, None
    if kind == "integer":
        if isinstance(value, bool):
            return None, "expected integer"
        if isinstance(value, int):
            return value, None
        if isinstance(value, float) and value.is_integer():
            return int(value), None
        return None, "expected integer"
    if kind == "number":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None, "expected number"
        return value, None
    if kind == "boolean":
        if not isinstance(value, bool):
            return None, "expected boolean"
        return value, None
    if kind == "object":
        if not isinstance(value, Mapping):
            return None, "expected object"
        return dict(value), None
    if not isinstance(value, (list, tuple)):
        return None, "expected array"
    return list(value), None


def _check_constraints(spec: ParamSpec, value: Any) -> Optional[str]:
    if spec.choices is not None and value not in spec.choices:
        allowed = ", ".join(str(c) for c in spec.choices)
        return f"must be one of: {allowed}"
    if spec.minimum is not None and value < spec.minimum:
        return f"must be at least {spec.minimum:g}"
    return None


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def extract_parameters(params: Sequence[ParamSpec], raw: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Apply a tool's schema to caller-supplied arguments.

    Args:
        params: The tool's parameter specs.
        raw: Untyped argument mapping (may be None).

    Returns:
        Mapping of parameter name to typed value; absent optional parameters
        hold their default (None when no default is declared).

    Raises:
        ToolValidationError: listing every missing required field and every
            field with the wrong type or a value outside its constraints.
    """
    raw = raw or {}
    missing: List[str] = []
    invalid: List[Tuple[str, str]] = []
    values: Dict[str, Any] = {}

    for spec in params:
        value = raw.get(spec.name)
        if _is_missing(value):
            if spec.required:
                missing.append(spec.name)
            values[spec.name] = spec.default
            continue

        typed, reason = _coerce(spec, value)
        if reason is None:
            reason = _check_constraints(spec, typed)
        if reason is not None:
            invalid.append((spec.name, reason))
            continue
        values[spec.name] = typed

    if missing or invalid:
        raise ToolValidationError(missing, invalid)

    unknown = set(raw) - {spec.name for spec in params}
    if unknown:
        logger.debug(f"Ignoring unknown parameters: {', '.join(sorted(unknown))}")

    return values
