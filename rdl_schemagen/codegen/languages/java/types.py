"""
Type constructors for the RDL Java SchemaBuilder.

Each schema type becomes one ``sb.<kind>Type(...)`` statement with its
attributes chained on the following lines.
"""

from typing import Callable, Dict, List

from ....logging_config import get_logger
from ...core.schema import Field, ROOT_STRUCT, Type, TypeRegistry, TypeVariant
from ...core.templates import quote_string as q
from .literals import NULL_LITERAL, java_boolean, java_literal, number_value_string

logger = get_logger(__name__)

STATEMENT_INDENT = "    "
CHAIN_INDENT = "\n            "


def chain(head: str, calls: List[str]) -> str:
    """Join a builder call and its chained modifiers into one statement."""
    return STATEMENT_INDENT + head + "".join(CHAIN_INDENT + c for c in calls) + ";"


def render_type(registry: TypeRegistry, t: Type) -> str:
    """
    Render the builder statement that declares ``t``.

    Aliases render as an empty string; unsupported definitions render as a
    comment so the generated class still compiles.
    """
    renderer = TYPE_RENDERERS.get(t.variant)
    if renderer is None:
        variant = getattr(t.variant, "value", t.variant)
        logger.warning("No constructor for type variant %s", variant)
        return f"{STATEMENT_INDENT}//s.type({variant});"
    logger.debug("Rendering %s %s", t.variant.value, t.name)
    return renderer(registry, t)


def _render_base_type(registry: TypeRegistry, t: Type) -> str:
    return f"{STATEMENT_INDENT}//s.type(BaseType) NYI - {t.base_type.value}"


def _render_unsupported(registry: TypeRegistry, t: Type) -> str:
    logger.warning("%s %s is not supported; emitting comment", t.variant.value, t.name)
    return f"{STATEMENT_INDENT}//s.type({t.variant.value}) NYI - {t.name}"


def _render_alias(registry: TypeRegistry, t: Type) -> str:
    # Java has no aliases; references were rewritten to the target type upstream
    return ""


def _render_string(registry: TypeRegistry, t: Type) -> str:
    td = t.string_type_def
    calls = []
    if td.comment:
        calls.append(f".comment({q(td.comment)})")
    if td.pattern:
        calls.append(f".pattern({q(td.pattern)})")
    if td.min_size is not None:
        calls.append(f".minSize({td.min_size})")
    if td.max_size is not None:
        calls.append(f".maxSize({td.max_size})")
    return chain(f"sb.stringType({q(td.name)})", calls)


def _render_number(registry: TypeRegistry, t: Type) -> str:
    td = t.number_type_def
    calls = []
    if td.comment:
        calls.append(f".comment({q(td.comment)})")
    if td.min is not None:
        calls.append(f".min({number_value_string(td.min)})")
    if td.max is not None:
        calls.append(f".max({number_value_string(td.max)})")
    return chain(f"sb.numberType({q(td.name)}, {q(td.type)})", calls)


def _render_enum(registry: TypeRegistry, t: Type) -> str:
    td = t.enum_type_def
    calls = []
    if td.comment:
        calls.append(f".comment({q(td.comment)})")
    calls.extend(f".element({q(e.symbol)})" for e in td.elements)
    return chain(f"sb.enumType({q(td.name)})", calls)


def _render_union(registry: TypeRegistry, t: Type) -> str:
    td = t.union_type_def
    calls = []
    if td.comment:
        calls.append(f".comment({q(td.comment)})")
    calls.extend(f".variant({q(v)})" for v in td.variants)
    return chain(f"sb.unionType({q(td.name)})", calls)


def _render_struct(registry: TypeRegistry, t: Type) -> str:
    td = t.struct_type_def
    if td.type != ROOT_STRUCT:
        head = f"sb.structType({q(td.name)}, {q(td.type)})"
    else:
        head = f"sb.structType({q(td.name)})"

    calls = []
    if td.comment:
        calls.append(f".comment({q(td.comment)})")
    calls.extend(_field_call(registry, td.name, f) for f in td.fields)
    return chain(head, calls)


def _field_call(registry: TypeRegistry, owner: str, f: Field) -> str:
    optional = java_boolean(f.optional)
    if f.is_map:
        return (
            f".mapField({q(f.name)}, {q(f.keys)}, {q(f.items)}, "
            f"{optional}, {q(f.comment)})"
        )
    if f.is_array:
        return f".arrayField({q(f.name)}, {q(f.items)}, {optional}, {q(f.comment)})"
    if f.default is None:
        return f".field({q(f.name)}, {q(f.type)}, {optional}, {q(f.comment)})"

    field_type = registry.find_type(f.type)
    if field_type is None:
        logger.warning(
            "Cannot resolve type %s of %s.%s; default rendered as null",
            f.type,
            owner,
            f.name,
        )
        default = NULL_LITERAL
    else:
        default = java_literal(field_type, f.default)
    return (
        f".field({q(f.name)}, {q(f.type)}, {optional}, {q(f.comment)}, {default})"
    )


TYPE_RENDERERS: Dict[TypeVariant, Callable[[TypeRegistry, Type], str]] = {
    TypeVariant.BASE_TYPE: _render_base_type,
    TypeVariant.STRUCT_TYPE_DEF: _render_struct,
    TypeVariant.MAP_TYPE_DEF: _render_unsupported,
    TypeVariant.ARRAY_TYPE_DEF: _render_unsupported,
    TypeVariant.ENUM_TYPE_DEF: _render_enum,
    TypeVariant.UNION_TYPE_DEF: _render_union,
    TypeVariant.STRING_TYPE_DEF: _render_string,
    TypeVariant.BYTES_TYPE_DEF: _render_unsupported,
    TypeVariant.NUMBER_TYPE_DEF: _render_number,
    TypeVariant.ALIAS_TYPE_DEF: _render_alias,
}
