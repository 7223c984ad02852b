"""
Core RDL schema representation for code generation.

Mirrors the already-parsed RDL schema model (types, resources, metadata)
and converts the JSON form emitted by the RDL parser into it. Everything
here is read-only once built; generators never mutate the model.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union, Any
from enum import Enum


# Supertype name of a struct that extends nothing
ROOT_STRUCT = "Struct"


class SchemaError(Exception):
    """Exception raised for malformed schema structures."""

    pass


class BaseType(Enum):
    """RDL base types."""

    BOOL = "Bool"
    INT8 = "Int8"
    INT16 = "Int16"
    INT32 = "Int32"
    INT64 = "Int64"
    FLOAT32 = "Float32"
    FLOAT64 = "Float64"
    BYTES = "Bytes"
    STRING = "String"
    TIMESTAMP = "Timestamp"
    SYMBOL = "Symbol"
    UUID = "UUID"
    ARRAY = "Array"
    MAP = "Map"
    STRUCT = "Struct"
    ENUM = "Enum"
    UNION = "Union"
    ANY = "Any"


class TypeVariant(Enum):
    """Tag identifying which definition a Type carries."""

    BASE_TYPE = "BaseType"
    STRUCT_TYPE_DEF = "StructTypeDef"
    MAP_TYPE_DEF = "MapTypeDef"
    ARRAY_TYPE_DEF = "ArrayTypeDef"
    ENUM_TYPE_DEF = "EnumTypeDef"
    UNION_TYPE_DEF = "UnionTypeDef"
    STRING_TYPE_DEF = "StringTypeDef"
    BYTES_TYPE_DEF = "BytesTypeDef"
    NUMBER_TYPE_DEF = "NumberTypeDef"
    ALIAS_TYPE_DEF = "AliasTypeDef"


class NumberVariant(Enum):
    """Tag identifying the width of a Number."""

    INT32 = "Int32"
    INT64 = "Int64"
    FLOAT64 = "Float64"


class InputRole(Enum):
    """Where a resource input is carried in the request."""

    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    BODY = "body"


@dataclass(frozen=True)
class Number:
    """A numeric bound, tagged with its width."""

    variant: NumberVariant
    value: Union[int, float]


@dataclass(frozen=True)
class Field:
    """A single struct field."""

    name: str
    type: str
    optional: bool = False
    comment: str = ""
    default: Any = None
    keys: Optional[str] = None
    items: Optional[str] = None

    @property
    def is_map(self) -> bool:
        return bool(self.keys)

    @property
    def is_array(self) -> bool:
        return not self.keys and bool(self.items)


@dataclass(frozen=True)
class EnumElement:
    symbol: str
    comment: str = ""


@dataclass(frozen=True)
class StructTypeDef:
    name: str
    type: str = ROOT_STRUCT
    comment: str = ""
    fields: List[Field] = field(default_factory=list)


@dataclass(frozen=True)
class MapTypeDef:
    name: str
    type: str = "Map"
    comment: str = ""
    keys: str = "Any"
    items: str = "Any"


@dataclass(frozen=True)
class ArrayTypeDef:
    name: str
    type: str = "Array"
    comment: str = ""
    items: str = "Any"


@dataclass(frozen=True)
class EnumTypeDef:
    name: str
    type: str = "Enum"
    comment: str = ""
    elements: List[EnumElement] = field(default_factory=list)


@dataclass(frozen=True)
class UnionTypeDef:
    name: str
    type: str = "Union"
    comment: str = ""
    variants: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class StringTypeDef:
    name: str
    type: str = "String"
    comment: str = ""
    pattern: str = ""
    min_size: Optional[int] = None
    max_size: Optional[int] = None


@dataclass(frozen=True)
class BytesTypeDef:
    name: str
    type: str = "Bytes"
    comment: str = ""


@dataclass(frozen=True)
class NumberTypeDef:
    name: str
    type: str = "Int32"
    comment: str = ""
    min: Optional[Number] = None
    max: Optional[Number] = None


@dataclass(frozen=True)
class AliasTypeDef:
    name: str
    type: str
    comment: str = ""


_PAYLOAD_ATTRS = {
    TypeVariant.BASE_TYPE: "base_type",
    TypeVariant.STRUCT_TYPE_DEF: "struct_type_def",
    TypeVariant.MAP_TYPE_DEF: "map_type_def",
    TypeVariant.ARRAY_TYPE_DEF: "array_type_def",
    TypeVariant.ENUM_TYPE_DEF: "enum_type_def",
    TypeVariant.UNION_TYPE_DEF: "union_type_def",
    TypeVariant.STRING_TYPE_DEF: "string_type_def",
    TypeVariant.BYTES_TYPE_DEF: "bytes_type_def",
    TypeVariant.NUMBER_TYPE_DEF: "number_type_def",
    TypeVariant.ALIAS_TYPE_DEF: "alias_type_def",
}

_PAYLOAD_CLASSES = {
    BaseType: TypeVariant.BASE_TYPE,
    StructTypeDef: TypeVariant.STRUCT_TYPE_DEF,
    MapTypeDef: TypeVariant.MAP_TYPE_DEF,
    ArrayTypeDef: TypeVariant.ARRAY_TYPE_DEF,
    EnumTypeDef: TypeVariant.ENUM_TYPE_DEF,
    UnionTypeDef: TypeVariant.UNION_TYPE_DEF,
    StringTypeDef: TypeVariant.STRING_TYPE_DEF,
    BytesTypeDef: TypeVariant.BYTES_TYPE_DEF,
    NumberTypeDef: TypeVariant.NUMBER_TYPE_DEF,
    AliasTypeDef: TypeVariant.ALIAS_TYPE_DEF,
}


@dataclass(frozen=True)
class Type:
    """
    Tagged union over the RDL type definitions.

    Exactly one payload attribute is populated and it is the one named by
    ``variant``. Use ``Type.of(payload)`` to build one without spelling the
    tag out.
    """

    variant: TypeVariant
    base_type: Optional[BaseType] = None
    struct_type_def: Optional[StructTypeDef] = None
    map_type_def: Optional[MapTypeDef] = None
    array_type_def: Optional[ArrayTypeDef] = None
    enum_type_def: Optional[EnumTypeDef] = None
    union_type_def: Optional[UnionTypeDef] = None
    string_type_def: Optional[StringTypeDef] = None
    bytes_type_def: Optional[BytesTypeDef] = None
    number_type_def: Optional[NumberTypeDef] = None
    alias_type_def: Optional[AliasTypeDef] = None

    def __post_init__(self):
        populated = [
            variant
            for variant, attr in _PAYLOAD_ATTRS.items()
            if getattr(self, attr) is not None
        ]
        if populated != [self.variant]:
            found = ", ".join(v.value for v in populated) or "none"
            raise SchemaError(
                f"Type variant {self.variant.value} does not match "
                f"populated payload ({found})"
            )

    @classmethod
    def of(cls, payload) -> "Type":
        """Wrap a definition (or BaseType) in a Type with the matching tag."""
        variant = _PAYLOAD_CLASSES.get(type(payload))
        if variant is None:
            raise SchemaError(f"Not a type definition: {payload!r}")
        return cls(variant=variant, **{_PAYLOAD_ATTRS[variant]: payload})

    @property
    def payload(self):
        return getattr(self, _PAYLOAD_ATTRS[self.variant])

    @property
    def name(self) -> str:
        """Declared name of the type; base types are named by their value."""
        if self.variant == TypeVariant.BASE_TYPE:
            return self.base_type.value
        return self.payload.name


@dataclass(frozen=True)
class Input:
    """
    A resource input. At most one of ``path_param``, ``query_param`` and
    ``header`` may be set; with none set the input is the request body.
    """

    name: str
    type: str
    comment: str = ""
    default: Any = None
    path_param: bool = False
    query_param: str = ""
    header: str = ""

    def __post_init__(self):
        roles = [bool(self.path_param), bool(self.query_param), bool(self.header)]
        if sum(roles) > 1:
            raise SchemaError(
                f"Input '{self.name}' may be only one of path, query or header param"
            )

    @property
    def role(self) -> InputRole:
        if self.path_param:
            return InputRole.PATH
        if self.query_param:
            return InputRole.QUERY
        if self.header:
            return InputRole.HEADER
        return InputRole.BODY


@dataclass(frozen=True)
class Output:
    name: str
    type: str
    header: str = ""
    comment: str = ""


@dataclass(frozen=True)
class Auth:
    action: str = ""
    resource: str = ""
    authenticate: bool = False
    domain: str = ""


@dataclass(frozen=True)
class ExceptionDef:
    type: str
    comment: str = ""


@dataclass(frozen=True)
class Resource:
    """One HTTP-style operation of the schema."""

    type: str
    method: str
    path: str
    name: str = ""
    comment: str = ""
    inputs: List[Input] = field(default_factory=list)
    outputs: List[Output] = field(default_factory=list)
    auth: Optional[Auth] = None
    expected: str = "OK"
    exceptions: Dict[str, ExceptionDef] = field(default_factory=dict)
    asynchronous: Optional[bool] = None


@dataclass(frozen=True)
class Schema:
    """A complete, already-validated RDL schema."""

    name: str
    version: Optional[int] = None
    namespace: str = ""
    comment: str = ""
    types: List[Type] = field(default_factory=list)
    resources: List[Resource] = field(default_factory=list)


class TypeRegistry:
    """Name lookup over a schema's types, falling back to RDL base types."""

    def __init__(self, schema: Schema):
        self._types: Dict[str, Type] = {t.name: t for t in schema.types}

    def find_type(self, name: Optional[str]) -> Optional[Type]:
        """Return the Type called ``name``, or None if it is unknown."""
        if not name:
            return None
        found = self._types.get(name)
        if found is not None:
            return found
        try:
            return Type.of(BaseType(name))
        except ValueError:
            return None


def schema_from_dict(data: Dict[str, Any]) -> Schema:
    """
    Convert the RDL JSON schema form into a Schema.

    Args:
        data: Decoded JSON object as produced by the RDL parser

    Returns:
        Schema: read-only schema model

    Raises:
        SchemaError: If a required key is missing or a variant is unknown
    """
    if not isinstance(data, dict):
        raise SchemaError("Schema must be a JSON object")

    version = data.get("version")
    if version is not None and not isinstance(version, int):
        raise SchemaError(f"Schema version must be an integer, got {version!r}")

    return Schema(
        name=_require(data, "name", "schema"),
        version=version,
        namespace=data.get("namespace", "") or "",
        comment=data.get("comment", "") or "",
        types=[type_from_dict(t) for t in data.get("types") or []],
        resources=[resource_from_dict(r) for r in data.get("resources") or []],
    )


_VARIANT_TAGS = {v.value for v in TypeVariant}

# Variant of an untagged definition, keyed by the supertype it names
_SUPERTYPE_VARIANTS = {
    "Struct": TypeVariant.STRUCT_TYPE_DEF,
    "Enum": TypeVariant.ENUM_TYPE_DEF,
    "Union": TypeVariant.UNION_TYPE_DEF,
    "Map": TypeVariant.MAP_TYPE_DEF,
    "Array": TypeVariant.ARRAY_TYPE_DEF,
    "String": TypeVariant.STRING_TYPE_DEF,
    "Bytes": TypeVariant.BYTES_TYPE_DEF,
    "Int8": TypeVariant.NUMBER_TYPE_DEF,
    "Int16": TypeVariant.NUMBER_TYPE_DEF,
    "Int32": TypeVariant.NUMBER_TYPE_DEF,
    "Int64": TypeVariant.NUMBER_TYPE_DEF,
    "Float32": TypeVariant.NUMBER_TYPE_DEF,
    "Float64": TypeVariant.NUMBER_TYPE_DEF,
}


def type_from_dict(data: Any) -> Type:
    """
    Convert one type entry into a Type.

    Accepts the tagged form (``{"StructTypeDef": {...}}``, ``{"BaseType":
    "String"}``) and the untagged form written by the RDL tools, where the
    definition appears bare and a base type is a plain string.
    """
    if isinstance(data, str):
        variant, body = TypeVariant.BASE_TYPE, data
    elif not isinstance(data, dict):
        raise SchemaError(f"Type must be an object or a base type name, got {data!r}")
    else:
        tag = _type_tag(data)
        if tag is None:
            variant, body = _infer_variant(data), data
        elif tag not in _VARIANT_TAGS:
            raise SchemaError(f"Unknown type variant: {tag}")
        else:
            variant, body = TypeVariant(tag), data[tag]

    if variant == TypeVariant.BASE_TYPE:
        try:
            return Type.of(BaseType(body))
        except ValueError:
            raise SchemaError(f"Unknown base type: {body}") from None

    if not isinstance(body, dict):
        raise SchemaError(f"{variant.value} must be an object")

    name = _require(body, "name", variant.value)
    comment = body.get("comment", "") or ""

    if variant == TypeVariant.STRUCT_TYPE_DEF:
        payload = StructTypeDef(
            name=name,
            type=body.get("type") or ROOT_STRUCT,
            comment=comment,
            fields=[_field_from_dict(f, name) for f in body.get("fields") or []],
        )
    elif variant == TypeVariant.ENUM_TYPE_DEF:
        payload = EnumTypeDef(
            name=name,
            comment=comment,
            elements=[_element_from_dict(e, name) for e in body.get("elements") or []],
        )
    elif variant == TypeVariant.STRING_TYPE_DEF:
        payload = StringTypeDef(
            name=name,
            type=body.get("type") or "String",
            comment=comment,
            pattern=body.get("pattern", "") or "",
            min_size=body.get("minSize"),
            max_size=body.get("maxSize"),
        )
    elif variant == TypeVariant.NUMBER_TYPE_DEF:
        payload = NumberTypeDef(
            name=name,
            type=_require(body, "type", name),
            comment=comment,
            min=number_from_json(body.get("min")),
            max=number_from_json(body.get("max")),
        )
    elif variant == TypeVariant.UNION_TYPE_DEF:
        payload = UnionTypeDef(
            name=name, comment=comment, variants=list(body.get("variants") or [])
        )
    elif variant == TypeVariant.MAP_TYPE_DEF:
        payload = MapTypeDef(
            name=name,
            type=body.get("type") or "Map",
            comment=comment,
            keys=body.get("keys") or "Any",
            items=body.get("items") or "Any",
        )
    elif variant == TypeVariant.ARRAY_TYPE_DEF:
        payload = ArrayTypeDef(
            name=name,
            type=body.get("type") or "Array",
            comment=comment,
            items=body.get("items") or "Any",
        )
    elif variant == TypeVariant.BYTES_TYPE_DEF:
        payload = BytesTypeDef(
            name=name, type=body.get("type") or "Bytes", comment=comment
        )
    else:
        payload = AliasTypeDef(
            name=name, type=_require(body, "type", name), comment=comment
        )

    return Type.of(payload)


def _type_tag(data: Dict[str, Any]) -> Optional[str]:
    """Variant tag of a tagged type entry, or None for an untagged definition."""
    if len(data) != 1:
        return None
    (key, value), = data.items()
    if key in _VARIANT_TAGS or (key.endswith("TypeDef") and isinstance(value, dict)):
        return key
    return None


def _infer_variant(body: Dict[str, Any]) -> TypeVariant:
    """Variant of an untagged definition, from the keys it carries."""
    if "fields" in body:
        return TypeVariant.STRUCT_TYPE_DEF
    if "elements" in body:
        return TypeVariant.ENUM_TYPE_DEF
    if "variants" in body:
        return TypeVariant.UNION_TYPE_DEF
    if body.get("keys"):
        return TypeVariant.MAP_TYPE_DEF
    if body.get("items"):
        return TypeVariant.ARRAY_TYPE_DEF

    supertype = body.get("type")
    if not supertype:
        raise SchemaError(f"Cannot determine the variant of type {body!r}")
    # A definition deriving from another named type is an alias of it
    return _SUPERTYPE_VARIANTS.get(supertype, TypeVariant.ALIAS_TYPE_DEF)


def number_from_json(value: Any) -> Optional[Number]:
    """
    Convert a JSON number bound into a Number.

    Accepts the tagged form (``{"Int32": 5}``) or a bare JSON number, whose
    width is inferred from its Python type.
    """
    if value is None:
        return None
    if isinstance(value, dict):
        if len(value) != 1:
            raise SchemaError(f"Number must be a single-key object, got {value!r}")
        (tag, raw), = value.items()
        try:
            variant = NumberVariant(tag)
        except ValueError:
            raise SchemaError(f"Unknown number variant: {tag}") from None
        return Number(variant=variant, value=raw)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SchemaError(f"Not a number: {value!r}")
    if isinstance(value, float):
        return Number(variant=NumberVariant.FLOAT64, value=value)
    if -(2**31) <= value < 2**31:
        return Number(variant=NumberVariant.INT32, value=value)
    return Number(variant=NumberVariant.INT64, value=value)


def resource_from_dict(data: Dict[str, Any]) -> Resource:
    """Convert one resource object into a Resource."""
    if not isinstance(data, dict):
        raise SchemaError(f"Resource must be an object, got {data!r}")

    method = _require(data, "method", "resource")
    path = _require(data, "path", "resource")
    context = f"{method} {path}"

    auth_data = data.get("auth")
    if auth_data is not None and not isinstance(auth_data, dict):
        raise SchemaError(f"Auth of {context} must be an object, got {auth_data!r}")
    auth = None
    if auth_data:
        auth = Auth(
            action=auth_data.get("action", "") or "",
            resource=auth_data.get("resource", "") or "",
            authenticate=bool(auth_data.get("authenticate", False)),
            domain=auth_data.get("domain", "") or "",
        )

    exceptions_data = data.get("exceptions") or {}
    if not isinstance(exceptions_data, dict):
        raise SchemaError(f"Exceptions of {context} must be an object")
    exceptions = {}
    for symbol, exc in exceptions_data.items():
        exceptions[symbol] = ExceptionDef(
            type=_require(exc, "type", f"{context} exception {symbol}"),
            comment=exc.get("comment", "") or "",
        )

    return Resource(
        type=_require(data, "type", context),
        method=method,
        path=path,
        name=data.get("name", "") or "",
        comment=data.get("comment", "") or "",
        inputs=[_input_from_dict(i, context) for i in data.get("inputs") or []],
        outputs=[_output_from_dict(o, context) for o in data.get("outputs") or []],
        auth=auth,
        expected=data.get("expected") or "OK",
        exceptions=exceptions,
        asynchronous=data.get("async"),
    )


def _field_from_dict(data: Dict[str, Any], owner: str) -> Field:
    return Field(
        name=_require(data, "name", owner),
        type=_require(data, "type", owner),
        optional=bool(data.get("optional", False)),
        comment=data.get("comment", "") or "",
        default=data.get("default"),
        keys=data.get("keys") or None,
        items=data.get("items") or None,
    )


def _element_from_dict(data: Any, owner: str) -> EnumElement:
    # Older schemas list enum symbols as bare strings
    if isinstance(data, str):
        return EnumElement(symbol=data)
    return EnumElement(
        symbol=_require(data, "symbol", owner),
        comment=data.get("comment", "") or "",
    )


def _input_from_dict(data: Dict[str, Any], context: str) -> Input:
    return Input(
        name=_require(data, "name", context),
        type=_require(data, "type", context),
        comment=data.get("comment", "") or "",
        default=data.get("default"),
        path_param=bool(data.get("pathParam", False)),
        query_param=data.get("queryParam", "") or "",
        header=data.get("header", "") or "",
    )


def _output_from_dict(data: Dict[str, Any], context: str) -> Output:
    return Output(
        name=_require(data, "name", context),
        type=_require(data, "type", context),
        header=data.get("header", "") or "",
        comment=data.get("comment", "") or "",
    )


def _require(data: Dict[str, Any], key: str, context: str) -> Any:
    if not isinstance(data, dict) or data.get(key) in (None, ""):
        raise SchemaError(f"Missing '{key}' in {context}")
    return data[key]
