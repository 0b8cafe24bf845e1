"""
Tests for schema validation and the error taxonomy.
"""

import json
from pathlib import Path
from unittest.mock import mock_open, patch

import pytest

from socialgraph.utils.validation import (
    GraphError,
    GraphInvariantError,
    NotFoundError,
    ParseError,
    ValidationError,
    _SCHEMA_CACHE,
    _load_schema,
    validate_json,
)


class TestLoadSchema:
    """Schema loading."""

    @pytest.mark.parametrize("name", ["NodesLinksGraph", "VerticesEdgesGraph"])
    def test_load_valid_schema(self, name):
        schema = _load_schema(name)

        assert isinstance(schema, dict)
        assert "$schema" in schema
        assert "properties" in schema

    def test_load_nonexistent_schema(self):
        with pytest.raises(FileNotFoundError, match="JSON Schema not found"):
            _load_schema("NonExistentSchema")

    def test_load_invalid_json(self):
        with patch("builtins.open", mock_open(read_data='{"invalid": json}')):
            with patch.object(Path, "exists", return_value=True):
                with pytest.raises(ValidationError, match="Invalid JSON in schema"):
                    _load_schema("InvalidSchema")

    def test_load_invalid_schema(self):
        invalid_schema = {"type": "invalid_type", "properties": "should_be_object"}

        with patch("builtins.open", mock_open(read_data=json.dumps(invalid_schema))):
            with patch.object(Path, "exists", return_value=True):
                with pytest.raises(ValidationError, match="Invalid JSON Schema"):
                    _load_schema("BadSchema")

        assert "BadSchema" not in _SCHEMA_CACHE


class TestValidateJson:
    def test_valid_nodes_links(self):
        validate_json(
            {"nodes": [{"id": 1}], "links": [{"source": 1, "target": {"id": 1}}]},
            "NodesLinksGraph",
        )

    def test_error_path_in_message(self):
        with pytest.raises(ValidationError, match="nodes -> 0 -> id"):
            validate_json({"nodes": [{"id": "one"}]}, "NodesLinksGraph")

    def test_bool_id_rejected(self):
        with pytest.raises(ValidationError):
            validate_json({"vertices": [{"id": True}]}, "VerticesEdgesGraph")

    def test_missing_root_key(self):
        with pytest.raises(ValidationError, match="root"):
            validate_json({"edges": []}, "VerticesEdgesGraph")


class TestErrorTaxonomy:
    def test_hierarchy(self):
        assert issubclass(ParseError, GraphError)
        assert issubclass(ValidationError, GraphError)
        assert issubclass(GraphInvariantError, ValidationError)
        assert issubclass(NotFoundError, GraphError)

    def test_not_found_carries_id(self):
        error = NotFoundError(17)

        assert error.node_id == 17
        assert "17" in str(error)
