"""Tests for the constraint tables, the pydantic models built from them and their JSON Schema."""

import pytest
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from websim.errors import ValidationError
from websim_tools.schema import (
    Param,
    arguments_model,
    identifier,
    limit,
    offset,
    to_json_schema,
    validate_arguments,
)

PARAMS = (
    identifier("project_id", "Project id"),
    limit("comments"),
    offset("comments"),
    Param("sort_order", "string", "Sort order", default="desc", enum=("asc", "desc")),
    Param("query", "string", "Optional filter"),
)

BULK = (
    Param(
        "assets",
        "array",
        required=True,
        min_items=1,
        max_items=20,
        items=(identifier("query", "q"), limit("results", default=10)),
    ),
)


def test_defaults_are_filled_and_optional_omitted() -> None:
    assert validate_arguments(PARAMS, {"project_id": "p1"}) == {
        "project_id": "p1",
        "limit": 20,
        "offset": 0,
        "sort_order": "desc",
    }


def test_undeclared_arguments_are_dropped() -> None:
    checked = validate_arguments(PARAMS, {"project_id": "p1", "verbose": True})
    assert "verbose" not in checked


def test_null_counts_as_missing() -> None:
    assert validate_arguments(PARAMS, {"project_id": "p1", "limit": None})["limit"] == 20


@pytest.mark.parametrize(
    "arguments, argument",
    [
        ({}, "project_id"),
        ({"project_id": ""}, "project_id"),
        ({"project_id": "   "}, "project_id"),
        ({"project_id": 7}, "project_id"),
        ({"project_id": "p1", "limit": 0}, "limit"),
        ({"project_id": "p1", "limit": 101}, "limit"),
        ({"project_id": "p1", "limit": "20"}, "limit"),
        ({"project_id": "p1", "limit": True}, "limit"),
        ({"project_id": "p1", "limit": 2.5}, "limit"),
        ({"project_id": "p1", "offset": -1}, "offset"),
        ({"project_id": "p1", "sort_order": "sideways"}, "sort_order"),
    ],
)
def test_violations_name_the_argument(arguments, argument) -> None:
    with pytest.raises(ValidationError) as info:
        validate_arguments(PARAMS, arguments)
    assert info.value.argument == argument
    assert argument in str(info.value)


def test_integral_float_is_an_integer() -> None:
    assert validate_arguments(PARAMS, {"project_id": "p1", "limit": 20.0})["limit"] == 20


def test_non_object_arguments_rejected() -> None:
    with pytest.raises(ValidationError):
        validate_arguments(PARAMS, ["p1"])


def test_none_arguments_mean_empty() -> None:
    assert validate_arguments((limit(),), None) == {"limit": 20}


def test_array_items_are_validated_and_defaulted() -> None:
    checked = validate_arguments(BULK, {"assets": [{"query": "cat"}, {"query": "dog", "limit": 3}]})
    assert checked == {"assets": [{"query": "cat", "limit": 10}, {"query": "dog", "limit": 3}]}


@pytest.mark.parametrize(
    "assets, argument",
    [
        ([], "assets"),
        ([{"query": f"q{i}"} for i in range(21)], "assets"),
        (["cat"], "assets[0]"),
        ([{"query": "cat"}, {"limit": 5}], "assets[1].query"),
        ([{"query": "cat", "limit": 500}], "assets[0].limit"),
    ],
)
def test_array_violations(assets, argument) -> None:
    with pytest.raises(ValidationError) as info:
        validate_arguments(BULK, {"assets": assets})
    assert info.value.argument == argument


def test_unknown_param_type_is_rejected_at_declaration() -> None:
    with pytest.raises(ValueError):
        Param("when", "date")


def test_messages_name_the_constraint() -> None:
    with pytest.raises(ValidationError, match="Missing required argument 'project_id'"):
        validate_arguments(PARAMS, {})
    with pytest.raises(ValidationError, match=r"Invalid argument 'limit': .*less than or equal to 100 \(got 101\)"):
        validate_arguments(PARAMS, {"project_id": "p1", "limit": 101})


def test_pydantic_error_is_chained() -> None:
    with pytest.raises(ValidationError) as info:
        validate_arguments(PARAMS, {"project_id": "p1", "sort_order": "sideways"})
    assert isinstance(info.value.__cause__, PydanticValidationError)


def test_model_is_built_once_per_table() -> None:
    model = arguments_model(PARAMS)
    assert issubclass(model, BaseModel)
    assert arguments_model(PARAMS) is model
    assert list(model.model_fields) == ["project_id", "limit", "offset", "sort_order", "query"]


def test_json_schema() -> None:
    schema = to_json_schema(PARAMS)
    assert schema["type"] == "object"
    assert schema["required"] == ["project_id"]
    assert schema["properties"]["limit"] == {
        "type": "integer",
        "title": "Limit",
        "description": "Number of comments to return (1-100, default: 20)",
        "default": 20,
        "minimum": 1,
        "maximum": 100,
    }
    assert schema["properties"]["project_id"]["minLength"] == 1
    assert schema["properties"]["sort_order"]["enum"] == ["asc", "desc"]
    assert schema["properties"]["query"].get("default") is None
    assert "query" not in schema["required"]


def test_json_schema_nested_items() -> None:
    schema = to_json_schema(BULK)
    assets = schema["properties"]["assets"]
    assert assets["minItems"] == 1
    assert assets["maxItems"] == 20
    item_name = assets["items"]["$ref"].rsplit("/", 1)[-1]
    items = schema["$defs"][item_name]
    assert items["required"] == ["query"]
    assert items["properties"]["limit"]["default"] == 10


def test_json_schema_without_required_omits_the_key() -> None:
    assert "required" not in to_json_schema((limit(), offset()))
