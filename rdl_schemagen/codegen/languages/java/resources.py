"""
Resource constructors for the RDL Java SchemaBuilder.

Each resource becomes one ``sb.resource(...)`` statement chaining its
parameters, outputs, authorization, expected status and exceptions.
"""

from ....logging_config import get_logger
from ...core.schema import Input, InputRole, Resource, TypeRegistry
from ...core.templates import quote_string as q
from .literals import NULL_LITERAL, java_boolean, java_literal
from .types import chain

logger = get_logger(__name__)

_BODY_METHODS = {"PUT", "POST"}


def resource_type_name(rez: Resource) -> str:
    """
    Type the resource is declared with.

    PUT and POST declare the type of their request body (the first input
    that is not a path, query or header param) when there is one.
    """
    if rez.method in _BODY_METHODS:
        for ri in rez.inputs:
            if ri.role == InputRole.BODY:
                return ri.type
    return rez.type


def render_resource(registry: TypeRegistry, rez: Resource) -> str:
    """Render the builder statement that declares ``rez``."""
    logger.debug("Rendering resource %s %s", rez.method, rez.path)

    head = f"sb.resource({q(resource_type_name(rez))}, {q(rez.method)}, {q(rez.path)})"
    calls = []
    if rez.comment:
        calls.append(f".comment({q(rez.comment)})")
    if rez.name:
        calls.append(f".name({q(rez.name)})")

    calls.extend(_input_call(registry, ri) for ri in rez.inputs)

    for ro in rez.outputs:
        calls.append(
            f".output({q(ro.header)}, {q(ro.name)}, {q(ro.type)}, {q(ro.comment)})"
        )

    if rez.auth is not None:
        auth = rez.auth
        if auth.domain:
            calls.append(
                f".auth({q(auth.action)}, {q(auth.resource)}, "
                f"{java_boolean(auth.authenticate)}, {q(auth.domain)})"
            )
        elif auth.authenticate:
            calls.append(f".auth({q(auth.action)}, {q(auth.resource)}, true)")
        else:
            calls.append(f".auth({q(auth.action)}, {q(auth.resource)})")

    calls.append(f".expected({q(rez.expected)})")

    # Mapping order is not part of the schema; sort for reproducible output
    for symbol in sorted(rez.exceptions):
        exc = rez.exceptions[symbol]
        calls.append(f".exception({q(symbol)}, {q(exc.type)}, {q(exc.comment)})")

    if rez.asynchronous:
        calls.append(".async()")

    return chain(head, calls)


def _input_call(registry: TypeRegistry, ri: Input) -> str:
    role = ri.role
    if role == InputRole.PATH:
        return f".pathParam({q(ri.name)}, {q(ri.type)}, {q(ri.comment)})"
    if role == InputRole.BODY:
        return f".input({q(ri.name)}, {q(ri.type)}, {q(ri.comment)})"

    default = _default_literal(registry, ri)
    key = ri.query_param if role == InputRole.QUERY else ri.header
    call = "queryParam" if role == InputRole.QUERY else "headerParam"
    return (
        f".{call}({q(key)}, {q(ri.name)}, {q(ri.type)}, {default}, {q(ri.comment)})"
    )


def _default_literal(registry: TypeRegistry, ri: Input) -> str:
    if ri.default is None:
        return NULL_LITERAL
    input_type = registry.find_type(ri.type)
    if input_type is None:
        logger.warning(
            "Cannot resolve type %s of input %s; default rendered as null",
            ri.type,
            ri.name,
        )
        return NULL_LITERAL
    return java_literal(input_type, ri.default)
