"""
Java schema generator module.

Generates Java classes that rebuild RDL schemas through the RDL
runtime's SchemaBuilder API.
"""

from .generator import (
    JavaSchemaGenerator,
    create_java_generator,
    generate_schema,
)
from .literals import java_literal, number_value_string
from .naming import (
    generation_package,
    is_java_identifier,
    is_java_package,
    java_class_name,
)
from .resources import render_resource, resource_type_name
from .types import render_type

__all__ = [
    "JavaSchemaGenerator",
    "create_java_generator",
    "generate_schema",
    "generation_package",
    "is_java_identifier",
    "is_java_package",
    "java_class_name",
    "java_literal",
    "number_value_string",
    "render_resource",
    "render_type",
    "resource_type_name",
]
