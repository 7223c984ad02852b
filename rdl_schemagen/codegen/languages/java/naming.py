"""
Java-specific naming utilities.

Derives the generated class name and Java package from a schema, and
checks names against Java identifier rules.
"""

import re

from ...core.naming import NameSanitizer, NamingCase
from ...core.schema import Schema


JAVA_RESERVED_WORDS = {
    "abstract",
    "assert",
    "boolean",
    "break",
    "byte",
    "case",
    "catch",
    "char",
    "class",
    "const",
    "continue",
    "default",
    "do",
    "double",
    "else",
    "enum",
    "extends",
    "final",
    "finally",
    "float",
    "for",
    "goto",
    "if",
    "implements",
    "import",
    "instanceof",
    "int",
    "interface",
    "long",
    "native",
    "new",
    "package",
    "private",
    "protected",
    "public",
    "return",
    "short",
    "static",
    "strictfp",
    "super",
    "switch",
    "synchronized",
    "this",
    "throw",
    "throws",
    "transient",
    "try",
    "void",
    "volatile",
    "while",
    "true",
    "false",
    "null",
}

# RDL runtime classes a generated schema class must not shadow
JAVA_BUILTIN_TYPES = {
    "Schema",
    "SchemaBuilder",
    "Object",
    "String",
}

_JAVA_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def is_java_identifier(name: str) -> bool:
    """Check that a name is usable as a Java class or package segment."""
    return bool(_JAVA_IDENTIFIER.match(name)) and name not in JAVA_RESERVED_WORDS


def is_java_package(name: str) -> bool:
    """Check that a name is a dotted sequence of Java identifiers."""
    return all(is_java_identifier(part) for part in name.split("."))


def create_java_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for Java."""
    return NameSanitizer(JAVA_RESERVED_WORDS, JAVA_BUILTIN_TYPES)


def java_class_name(schema_name: str) -> str:
    """
    Default class name for a schema: the capitalized name plus ``Schema``.

    Names that are already identifiers keep their casing (``ZMS`` becomes
    ``ZMSSchema``); anything else is converted to PascalCase first.
    """
    if schema_name.isidentifier() and schema_name.isascii():
        base = schema_name[0].upper() + schema_name[1:]
    else:
        base = create_java_sanitizer().sanitize_name(
            schema_name, NamingCase.PASCAL_CASE
        )
    return f"{base}Schema"


def generation_package(schema: Schema, namespace: str = "") -> str:
    """Java package for generated code: explicit namespace, else the schema's."""
    if namespace:
        return namespace
    return schema.namespace
