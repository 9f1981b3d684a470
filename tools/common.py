"""
Shared helpers for the tool modules: response sanitization, the text
response envelope, and failure wrapping.
"""
import json
import logging
from enum import Enum
from typing import Any, AsyncIterable, Callable, Dict, List, NoReturn

from mcp.server.fastmcp.exceptions import ToolError
from mcp.types import CallToolResult, TextContent

logger = logging.getLogger("okta_mcp")


class _Absent:
    """Marker for "nothing safe to show"; distinct from None (JSON null)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT = _Absent()


class OktaToolError(ToolError):
    """A tool's external call sequence failed. Message: 'Failed to <operation>: <reason>'."""

    def __init__(self, operation: str, message: str):
        self.operation = operation
        self.reason = message
        super().__init__(f"Failed to {operation}: {message}")


# ============================================
# Sanitizer
# ============================================

class ValueKind(Enum):
    ABSENT = "absent"
    NULL = "null"
    PRIMITIVE = "primitive"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    OTHER = "other"


PRIMITIVE_TYPES = (str, int, float, bool)


def value_kind(value: Any) -> ValueKind:
    if value is ABSENT:
        return ValueKind.ABSENT
    if value is None:
        return ValueKind.NULL
    if isinstance(value, PRIMITIVE_TYPES):
        return ValueKind.PRIMITIVE
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    if isinstance(value, dict):
        return ValueKind.MAPPING
    return ValueKind.OTHER


SCALAR_KINDS = {ValueKind.NULL, ValueKind.PRIMITIVE}


def _is_scalar(value: Any) -> bool:
    return value_kind(value) in SCALAR_KINDS


def _sanitize_sequence(value: Any) -> List[Any]:
    items = [item if _is_scalar(item) else sanitize(item) for item in value]
    return [item for item in items if item is not ABSENT]


def _sanitize_mapping(value: Dict[str, Any]) -> Any:
    result = {}
    for key, item in value.items():
        kind = value_kind(item)
        if kind in SCALAR_KINDS:
            result[key] = item
        elif kind is ValueKind.SEQUENCE and all(_is_scalar(element) for element in item):
            result[key] = list(item)
        # nested mappings and sequences holding mappings are dropped, not recursed into
    return result if result else ABSENT


_RULES: Dict[ValueKind, Callable[[Any], Any]] = {
    ValueKind.ABSENT: lambda value: value,
    ValueKind.NULL: lambda value: value,
    ValueKind.PRIMITIVE: lambda value: value,
    ValueKind.SEQUENCE: _sanitize_sequence,
    ValueKind.MAPPING: _sanitize_mapping,
    ValueKind.OTHER: lambda value: ABSENT,
}


def sanitize(value: Any) -> Any:
    """
    Reduce a decoded API value to primitives and arrays of primitives.

    - None and primitives are returned unchanged.
    - Sequences keep scalar elements, recurse into the rest, and drop
      elements that sanitize to ABSENT.
    - Mappings keep scalar values and arrays made only of scalars; anything
      else is dropped. A mapping with nothing left becomes ABSENT.
    - Any other object sanitizes to ABSENT.

    Never raises, and sanitize(sanitize(x)) == sanitize(x).
    """
    return _RULES[value_kind(value)](value)


async def collect_sanitized(records: AsyncIterable[Any]) -> List[Any]:
    """Drain a lazily paged listing, keeping each record's sanitized form when there is one."""
    data = []
    async for record in records:
        simplified = sanitize(record)
        if simplified is not ABSENT and simplified is not None:
            data.append(simplified)
    return data


# ============================================
# Response / failure envelope
# ============================================

def to_json(data: Any) -> str:
    return json.dumps(data, indent=2)


def text_response(text: str) -> List[TextContent]:
    """The content block list FastMCP returns as {content: [{type: "text", text}]}."""
    return [TextContent(type="text", text=text)]


def json_response(data: Any) -> List[TextContent]:
    return text_response(to_json(data))


def entity_response(record: Any, sanitize_single: bool = False) -> List[TextContent]:
    """Single-entity results go out in full unless sanitize_single is switched on."""
    if sanitize_single:
        record = sanitize(record)
        if record is ABSENT:
            record = None
    return json_response(record)


def error_result(error: OktaToolError) -> CallToolResult:
    """Failure envelope: {isError: true, content: [{type: "text", text: "Failed to ..."}]}."""
    return CallToolResult(isError=True, content=text_response(str(error)))


def handle_error(error: BaseException, operation: str) -> NoReturn:
    """Re-raise any failure as 'Failed to <operation>: <message>'."""
    message = str(error) or error.__class__.__name__
    logger.error(f"[ERROR] {operation} failed: {message}")
    raise OktaToolError(operation, message) from error
