# =============================================================================
# websim_tools/schema.py  —  Declarative argument constraints
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Every tool declares its arguments as a tuple of Param rows:
#
#       Param("limit", "integer", default=20, minimum=1, maximum=100)
#
#   From that table this module builds one pydantic model per tool
#   (create_model, Field constraints, Literal for enums) and uses it for
#   the two things the rest of the server needs:
#     - validate_arguments(): check + default one call's arguments, raising
#       ValidationError before any upstream request is made
#     - to_json_schema(): the model's JSON Schema, published as the tool's
#       inputSchema
#
# RULES:
#   - a required argument that is missing (or null) is an error
#   - an optional argument that is missing takes its default, or is left out
#   - booleans are never accepted as integers; 20.0 is accepted as 20
#   - arguments that no Param declares are dropped
#   - error labels follow the argument path, e.g. "assets[1].query"
# =============================================================================

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, create_model
from pydantic import ValidationError as PydanticValidationError

from websim.errors import ValidationError

_TYPES = ("string", "integer", "number", "boolean", "array")


@dataclass(frozen=True)
class Param:
    """One row of a tool's constraint table."""

    name: str
    type: str
    description: str = ""
    required: bool = False
    default: Any = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    enum: Optional[tuple] = None
    min_length: Optional[int] = None
    min_items: Optional[int] = None
    max_items: Optional[int] = None
    items: Optional[tuple["Param", ...]] = None

    def __post_init__(self):
        if self.type not in _TYPES:
            raise ValueError(f"Param {self.name!r} has unsupported type {self.type!r}")


# -----------------------------------------------------------------------------
# Shorthands for the rows almost every tool repeats
# -----------------------------------------------------------------------------
def identifier(name: str, description: str) -> Param:
    return Param(name, "string", description, required=True, min_length=1)


def limit(noun: str = "results", default: int = 20, maximum: int = 100) -> Param:
    return Param(
        "limit",
        "integer",
        f"Number of {noun} to return (1-{maximum}, default: {default})",
        default=default,
        minimum=1,
        maximum=maximum,
    )


def offset(noun: str = "results") -> Param:
    return Param(
        "offset",
        "integer",
        f"Number of {noun} to skip for pagination (default: 0)",
        default=0,
        minimum=0,
    )


# -----------------------------------------------------------------------------
# Pydantic model built from the table
# -----------------------------------------------------------------------------
def _annotation(param: Param) -> Any:
    if param.enum is not None:
        return Literal[param.enum]
    if param.type == "string":
        return StrictStr
    if param.type == "integer":
        return int
    if param.type == "number":
        return float
    if param.type == "boolean":
        return StrictBool
    if param.items is not None:
        return list[_build_model(f"{param.name.title()}Item", param.items)]
    return list


def _field(param: Param) -> Any:
    constraints: dict[str, Any] = {}
    if param.type in ("integer", "number"):
        constraints["strict"] = True
    if param.minimum is not None:
        constraints["ge"] = param.minimum
    if param.maximum is not None:
        constraints["le"] = param.maximum
    if param.min_length is not None:
        constraints["min_length"] = param.min_length
        constraints["pattern"] = r"^\s*\S"
    if param.min_items is not None:
        constraints["min_length"] = param.min_items
    if param.max_items is not None:
        constraints["max_length"] = param.max_items
    if param.required:
        default = ...
    else:
        default = param.default
    return Field(default, description=param.description or None, **constraints)


def _build_model(model_name: str, params: tuple[Param, ...]) -> type[BaseModel]:
    fields = {param.name: (_annotation(param), _field(param)) for param in params}
    return create_model(model_name, __config__=ConfigDict(extra="ignore"), **fields)


@lru_cache(maxsize=None)
def arguments_model(params: tuple[Param, ...]) -> type[BaseModel]:
    """The pydantic model for one constraint table (built once per table)."""
    return _build_model("Arguments", params)


# -----------------------------------------------------------------------------
# Validation
# -----------------------------------------------------------------------------
def _label(loc: tuple) -> str:
    label = ""
    for part in loc:
        if isinstance(part, int):
            label += f"[{part}]"
        else:
            label += f".{part}" if label else str(part)
    return label


def _prepare(params: tuple[Param, ...], arguments: Mapping[str, Any]) -> dict:
    """Treat null as missing and read integral floats (20.0) as integers."""
    rows = {param.name: param for param in params}
    prepared = {}
    for name, value in arguments.items():
        if value is None:
            continue
        row = rows.get(name)
        if row is not None and row.type == "integer" and isinstance(value, float) and value.is_integer():
            value = int(value)
        elif row is not None and row.items is not None and isinstance(value, list):
            value = [_prepare(row.items, item) if isinstance(item, Mapping) else item for item in value]
        prepared[name] = value
    return prepared


def _translate(exc: PydanticValidationError) -> ValidationError:
    error = exc.errors()[0]
    label = _label(error["loc"])
    if error["type"] == "missing":
        return ValidationError(f"Missing required argument '{label}'", argument=label)
    return ValidationError(
        f"Invalid argument '{label}': {error['msg']} (got {error['input']!r})", argument=label
    )


def validate_arguments(params: tuple[Param, ...], arguments: Optional[Mapping[str, Any]]) -> dict:
    """Check one call's arguments against a constraint table.

    Args:
        params: The tool's constraint table.
        arguments: The raw argument mapping from the transport (may be None).

    Returns:
        A new dict holding every declared argument that was supplied or has a
        default, keyed by argument name.

    Raises:
        ValidationError: on the first argument that violates its row.
    """
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, Mapping):
        raise ValidationError("Tool arguments must be an object")
    try:
        checked = arguments_model(params).model_validate(_prepare(params, arguments))
    except PydanticValidationError as exc:
        raise _translate(exc) from exc
    return checked.model_dump(exclude_none=True)


# -----------------------------------------------------------------------------
# JSON Schema for the tool listing
# -----------------------------------------------------------------------------
def to_json_schema(params: tuple[Param, ...]) -> dict:
    return arguments_model(params).model_json_schema()
