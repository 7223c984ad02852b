"""
Java literal formatting for schema values.

Turns a typed schema value (field or input default, numeric bound) into
the Java source text that reproduces it. Formatting never fails: shapes
without a Java literal form come out as ``null``.
"""

from typing import Any, Optional

from ...core.schema import BaseType, Number, NumberVariant, Type, TypeVariant
from ...core.templates import quote_string

NULL_LITERAL = "null"

_QUOTED_BASE_TYPES = {
    BaseType.STRING,
    BaseType.TIMESTAMP,
    BaseType.UUID,
    BaseType.SYMBOL,
}

_NUMERIC_BASE_TYPES = {
    BaseType.INT8,
    BaseType.INT16,
    BaseType.INT32,
    BaseType.INT64,
    BaseType.FLOAT32,
    BaseType.FLOAT64,
}


def java_boolean(value: Any) -> str:
    """Render a flag as ``true``/``false``."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def decimal_text(value: Any) -> str:
    """
    Natural decimal form of a number.

    Integral floats drop their fractional part, so a default of ``5.0``
    for an Int32 field renders as ``5``.
    """
    if isinstance(value, bool):
        return java_boolean(value)
    if isinstance(value, float):
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    return str(value)


def number_value_string(number: Number) -> str:
    """Text of a numeric bound according to its own width."""
    if number.variant in (NumberVariant.INT32, NumberVariant.INT64):
        return str(int(number.value))
    if number.variant == NumberVariant.FLOAT64:
        return decimal_text(float(number.value))
    return "0"


def java_literal(otype: Optional[Type], value: Any) -> str:
    """
    Java literal for ``value`` interpreted as type ``otype``.

    Args:
        otype: Resolved type of the value, or None if it could not be resolved
        value: The value (typically a default from the schema)

    Returns:
        Java source text; ``null`` when the type has no literal form
    """
    if otype is None:
        return NULL_LITERAL

    if otype.variant == TypeVariant.STRING_TYPE_DEF:
        return quote_string(value)

    if otype.variant == TypeVariant.NUMBER_TYPE_DEF:
        return decimal_text(value)

    if otype.variant == TypeVariant.ENUM_TYPE_DEF:
        return f"{otype.enum_type_def.name}.{value}"

    if otype.variant == TypeVariant.BASE_TYPE:
        base = otype.base_type
        if base in _QUOTED_BASE_TYPES:
            return quote_string(value)
        if base == BaseType.BOOL:
            return java_boolean(value)
        if base in _NUMERIC_BASE_TYPES:
            return decimal_text(value)

    # TODO: resolve AliasTypeDef to its target type before formatting
    return NULL_LITERAL
