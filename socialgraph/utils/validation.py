"""
Module for JSON Schema validation and the socialgraph error taxonomy.
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema

__all__ = [
    "GraphError",
    "ParseError",
    "ValidationError",
    "GraphInvariantError",
    "NotFoundError",
    "validate_json",
]


class GraphError(Exception):
    """Base class for all graph core errors."""

    pass


class ParseError(GraphError):
    """Input could not be turned into a graph (bad JSON, no valid nodes)."""

    pass


class ValidationError(GraphError):
    """Structured input does not have the required shape."""

    pass


class GraphInvariantError(ValidationError):
    """Graph invariant error (e.g. edge endpoint missing from node set)."""

    pass


class NotFoundError(GraphError):
    """Node id lookup miss. An expected outcome for node-detail lookups."""

    def __init__(self, node_id: Any):
        super().__init__(f"Node not found: {node_id}")
        self.node_id = node_id


# Cache for loaded schemas
_SCHEMA_CACHE: Dict[str, Dict] = {}


def _load_schema(schema_name: str) -> Dict[str, Any]:
    """
    Loads JSON Schema from file.

    Args:
        schema_name: Schema name without extension (e.g., 'NodesLinksGraph')

    Returns:
        Dictionary with JSON Schema

    Raises:
        FileNotFoundError: If schema file is not found
        ValidationError: If schema is invalid
    """
    if schema_name in _SCHEMA_CACHE:
        return _SCHEMA_CACHE[schema_name]

    schema_path = Path(__file__).parent.parent / "schemas" / f"{schema_name}.schema.json"

    if not schema_path.exists():
        raise FileNotFoundError(f"JSON Schema not found: {schema_path}")

    try:
        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        jsonschema.Draft202012Validator.check_schema(schema)

        _SCHEMA_CACHE[schema_name] = schema
        return schema

    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON in schema {schema_name}: {e}")
    except jsonschema.SchemaError as e:
        raise ValidationError(f"Invalid JSON Schema {schema_name}: {e}")


def validate_json(data: Any, schema_name: str) -> None:
    """
    Validates data against JSON Schema.

    Args:
        data: Data to validate
        schema_name: Schema name without extension

    Raises:
        ValidationError: If data does not match the schema
    """
    schema = _load_schema(schema_name)

    try:
        jsonschema.validate(data, schema, cls=jsonschema.Draft202012Validator)
    except jsonschema.ValidationError as e:
        error_path = " -> ".join(str(p) for p in e.absolute_path) if e.absolute_path else "root"
        raise ValidationError(
            f"Schema validation error '{schema_name}' in field '{error_path}': {e.message}"
        )
