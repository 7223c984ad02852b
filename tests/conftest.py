"""
Pytest configuration and shared fixtures for the rdl-schemagen test suite.
"""

import json
import logging
import shutil
import tempfile
from pathlib import Path

import pytest

from rdl_schemagen.codegen.core.schema import TypeRegistry, schema_from_dict


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo CLI logging setup so caplog sees records from every test."""
    yield
    logger = logging.getLogger("rdl_schemagen")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def temp_output_dir():
    """Create a temporary directory for generated code output."""
    temp_dir = tempfile.mkdtemp(prefix="rdl_schemagen_test_")
    yield Path(temp_dir)
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def example_schema_dict():
    """A small schema exercising types, defaults and one resource."""
    return {
        "name": "Example",
        "version": 1,
        "namespace": "com.example",
        "types": [
            {
                "StringTypeDef": {
                    "name": "Tag",
                    "type": "String",
                    "pattern": "[a-z]+",
                    "maxSize": 32,
                }
            },
            {
                "EnumTypeDef": {
                    "name": "Color",
                    "type": "Enum",
                    "elements": [{"symbol": "RED"}, {"symbol": "GREEN"}],
                }
            },
            {
                "StructTypeDef": {
                    "name": "Item",
                    "type": "Struct",
                    "comment": "An item",
                    "fields": [
                        {"name": "name", "type": "String"},
                        {
                            "name": "color",
                            "type": "Color",
                            "optional": True,
                            "default": "RED",
                        },
                        {"name": "tags", "type": "Array", "items": "Tag"},
                    ],
                }
            },
        ],
        "resources": [
            {
                "type": "Item",
                "method": "GET",
                "path": "/items/{name}",
                "inputs": [{"name": "name", "type": "String", "pathParam": True}],
                "expected": "OK",
                "exceptions": {
                    "NOT_FOUND": {"type": "ResourceError"},
                    "FORBIDDEN": {"type": "ResourceError"},
                },
            }
        ],
    }


@pytest.fixture
def example_schema(example_schema_dict):
    """The example schema as a model."""
    return schema_from_dict(example_schema_dict)


@pytest.fixture
def example_registry(example_schema):
    return TypeRegistry(example_schema)


@pytest.fixture
def example_schema_file(temp_output_dir, example_schema_dict):
    """The example schema written to a JSON file."""
    path = temp_output_dir / "example.json"
    path.write_text(json.dumps(example_schema_dict), encoding="utf-8")
    return path


EXPECTED_EXAMPLE_JAVA = """\
//
// This file generated by rdl-schemagen. Do not modify!
//

package com.example;
import com.yahoo.rdl.*;

public class ExampleSchema {

    private final static Schema INSTANCE = build();
    public static Schema instance() {
        return INSTANCE;
    }

    private static Schema build() {
        SchemaBuilder sb = new SchemaBuilder("Example");
        sb.version(1);
        sb.namespace("com.example");

        sb.stringType("Tag")
            .pattern("[a-z]+")
            .maxSize(32);

        sb.enumType("Color")
            .element("RED")
            .element("GREEN");

        sb.structType("Item")
            .comment("An item")
            .field("name", "String", false, "")
            .field("color", "Color", true, "", Color.RED)
            .arrayField("tags", "Tag", false, "");

        sb.resource("Item", "GET", "/items/{name}")
            .pathParam("name", "String", "")
            .expected("OK")
            .exception("FORBIDDEN", "ResourceError", "")
            .exception("NOT_FOUND", "ResourceError", "");

        return sb.build();
    }

}
"""


@pytest.fixture
def expected_example_java():
    """Exact Java source generated for the example schema."""
    return EXPECTED_EXAMPLE_JAVA
