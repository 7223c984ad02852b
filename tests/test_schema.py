"""Tests for the schema model and its JSON loader."""

import pytest

from rdl_schemagen.codegen.core.schema import (
    BaseType,
    EnumTypeDef,
    Input,
    InputRole,
    Number,
    NumberVariant,
    Schema,
    SchemaError,
    StringTypeDef,
    Type,
    TypeRegistry,
    TypeVariant,
    number_from_json,
    resource_from_dict,
    schema_from_dict,
    type_from_dict,
)


class TestSchemaFromDict:
    def test_loads_metadata(self, example_schema):
        assert example_schema.name == "Example"
        assert example_schema.version == 1
        assert example_schema.namespace == "com.example"
        assert example_schema.comment == ""

    def test_preserves_type_order(self, example_schema):
        assert [t.name for t in example_schema.types] == ["Tag", "Color", "Item"]
        assert [t.variant for t in example_schema.types] == [
            TypeVariant.STRING_TYPE_DEF,
            TypeVariant.ENUM_TYPE_DEF,
            TypeVariant.STRUCT_TYPE_DEF,
        ]

    def test_struct_fields(self, example_schema):
        item = example_schema.types[2].struct_type_def
        color = item.fields[1]
        assert color.optional is True
        assert color.default == "RED"
        tags = item.fields[2]
        assert tags.is_array
        assert not tags.is_map

    def test_missing_name_rejected(self):
        with pytest.raises(SchemaError, match="name"):
            schema_from_dict({"types": []})

    def test_non_object_rejected(self):
        with pytest.raises(SchemaError):
            schema_from_dict(["not", "a", "schema"])

    def test_minimal_schema(self):
        schema = schema_from_dict({"name": "empty"})
        assert schema.version is None
        assert schema.types == []
        assert schema.resources == []

    def test_non_integer_version_rejected(self):
        with pytest.raises(SchemaError, match="version"):
            schema_from_dict({"name": "x", "version": "2"})


class TestTypeFromDict:
    def test_base_type(self):
        t = type_from_dict({"BaseType": "String"})
        assert t.variant == TypeVariant.BASE_TYPE
        assert t.base_type == BaseType.STRING
        assert t.name == "String"

    def test_unknown_variant(self):
        with pytest.raises(SchemaError, match="Unknown type variant"):
            type_from_dict({"WidgetTypeDef": {"name": "W"}})

    def test_multiple_keys_rejected(self):
        with pytest.raises(SchemaError):
            type_from_dict(
                {"StringTypeDef": {"name": "A"}, "EnumTypeDef": {"name": "B"}}
            )

    def test_bare_string_enum_elements(self):
        t = type_from_dict({"EnumTypeDef": {"name": "E", "elements": ["A", "B"]}})
        assert [e.symbol for e in t.enum_type_def.elements] == ["A", "B"]

    def test_number_type_bounds(self):
        t = type_from_dict(
            {
                "NumberTypeDef": {
                    "name": "Port",
                    "type": "Int32",
                    "min": {"Int32": 1},
                    "max": 65535,
                }
            }
        )
        td = t.number_type_def
        assert td.min == Number(NumberVariant.INT32, 1)
        assert td.max == Number(NumberVariant.INT32, 65535)

    def test_struct_without_supertype_extends_struct(self):
        t = type_from_dict({"StructTypeDef": {"name": "S"}})
        assert t.struct_type_def.type == "Struct"

    def test_untagged_definitions(self):
        schema = schema_from_dict(
            {
                "name": "s",
                "types": [
                    "String",
                    {"type": "Struct", "name": "Item", "fields": []},
                    {"type": "String", "name": "Tag", "pattern": "[a-z]+"},
                    {"type": "Enum", "name": "Color", "elements": [{"symbol": "RED"}]},
                    {"type": "Int32", "name": "Port", "min": 1},
                    {"type": "Array", "name": "Tags", "items": "Tag"},
                    {"type": "Map", "name": "Index", "keys": "String", "items": "Item"},
                    {"type": "Union", "name": "Either", "variants": ["Item", "Tag"]},
                    {"type": "Tag", "name": "Label"},
                ],
            }
        )
        assert [t.variant for t in schema.types] == [
            TypeVariant.BASE_TYPE,
            TypeVariant.STRUCT_TYPE_DEF,
            TypeVariant.STRING_TYPE_DEF,
            TypeVariant.ENUM_TYPE_DEF,
            TypeVariant.NUMBER_TYPE_DEF,
            TypeVariant.ARRAY_TYPE_DEF,
            TypeVariant.MAP_TYPE_DEF,
            TypeVariant.UNION_TYPE_DEF,
            TypeVariant.ALIAS_TYPE_DEF,
        ]
        assert schema.types[2].string_type_def.pattern == "[a-z]+"
        assert schema.types[4].number_type_def.min == Number(NumberVariant.INT32, 1)
        assert schema.types[8].alias_type_def.type == "Tag"

    def test_untagged_struct_subtype(self):
        t = type_from_dict({"type": "Item", "name": "Special", "fields": []})
        assert t.variant == TypeVariant.STRUCT_TYPE_DEF
        assert t.struct_type_def.type == "Item"

    def test_untagged_without_supertype_rejected(self):
        with pytest.raises(SchemaError, match="variant"):
            type_from_dict({"name": "Orphan"})

    def test_non_object_entry_rejected(self):
        with pytest.raises(SchemaError):
            type_from_dict(42)


class TestNumberFromJson:
    def test_large_int_is_int64(self):
        assert number_from_json(2**40).variant == NumberVariant.INT64

    def test_float(self):
        assert number_from_json(1.5) == Number(NumberVariant.FLOAT64, 1.5)

    def test_none(self):
        assert number_from_json(None) is None

    @pytest.mark.parametrize("bad", [True, "3", {"Int8": 1}])
    def test_rejects_non_numbers(self, bad):
        with pytest.raises(SchemaError):
            number_from_json(bad)


class TestTypeInvariant:
    def test_of_sets_matching_variant(self):
        t = Type.of(StringTypeDef(name="Tag"))
        assert t.variant == TypeVariant.STRING_TYPE_DEF
        assert t.payload.name == "Tag"

    def test_mismatched_payload_rejected(self):
        with pytest.raises(SchemaError, match="does not match"):
            Type(
                variant=TypeVariant.ENUM_TYPE_DEF,
                string_type_def=StringTypeDef(name="Tag"),
            )

    def test_two_payloads_rejected(self):
        with pytest.raises(SchemaError):
            Type(
                variant=TypeVariant.STRING_TYPE_DEF,
                string_type_def=StringTypeDef(name="Tag"),
                enum_type_def=EnumTypeDef(name="E"),
            )

    def test_empty_type_rejected(self):
        with pytest.raises(SchemaError):
            Type(variant=TypeVariant.BASE_TYPE)

    def test_of_rejects_non_definition(self):
        with pytest.raises(SchemaError):
            Type.of("String")


class TestInput:
    def test_roles(self):
        assert Input("a", "String", path_param=True).role == InputRole.PATH
        assert Input("a", "String", query_param="a").role == InputRole.QUERY
        assert Input("a", "String", header="X-A").role == InputRole.HEADER
        assert Input("a", "String").role == InputRole.BODY

    def test_more_than_one_role_rejected(self):
        with pytest.raises(SchemaError, match="only one"):
            Input("a", "String", path_param=True, query_param="a")


class TestResourceFromDict:
    def test_defaults(self):
        rez = resource_from_dict({"type": "Item", "method": "GET", "path": "/items"})
        assert rez.expected == "OK"
        assert rez.exceptions == {}
        assert rez.auth is None
        assert rez.asynchronous is None

    def test_full_resource(self):
        rez = resource_from_dict(
            {
                "type": "Item",
                "method": "PUT",
                "path": "/items/{id}",
                "name": "putItem",
                "inputs": [
                    {"name": "id", "type": "String", "pathParam": True},
                    {"name": "limit", "type": "Int32", "queryParam": "limit", "default": 10},
                    {"name": "item", "type": "Item"},
                ],
                "outputs": [{"name": "tag", "type": "String", "header": "ETag"}],
                "auth": {"action": "update", "resource": "item", "authenticate": True},
                "async": True,
                "exceptions": {"NOT_FOUND": {"type": "ResourceError", "comment": "gone"}},
            }
        )
        assert [ri.role for ri in rez.inputs] == [
            InputRole.PATH,
            InputRole.QUERY,
            InputRole.BODY,
        ]
        assert rez.inputs[1].default == 10
        assert rez.outputs[0].header == "ETag"
        assert rez.auth.authenticate is True
        assert rez.asynchronous is True
        assert rez.exceptions["NOT_FOUND"].comment == "gone"

    def test_missing_method_rejected(self):
        with pytest.raises(SchemaError, match="method"):
            resource_from_dict({"type": "Item", "path": "/items"})

    @pytest.mark.parametrize("auth", ["admin", ["update", "item"], True])
    def test_non_object_auth_rejected(self, auth):
        with pytest.raises(SchemaError, match="Auth"):
            resource_from_dict(
                {"type": "Item", "method": "GET", "path": "/items", "auth": auth}
            )

    def test_non_object_exceptions_rejected(self):
        with pytest.raises(SchemaError, match="Exceptions"):
            resource_from_dict(
                {
                    "type": "Item",
                    "method": "GET",
                    "path": "/items",
                    "exceptions": ["NOT_FOUND"],
                }
            )


class TestTypeRegistry:
    def test_finds_schema_types(self, example_registry):
        assert example_registry.find_type("Color").variant == TypeVariant.ENUM_TYPE_DEF

    def test_falls_back_to_base_types(self, example_registry):
        t = example_registry.find_type("Int64")
        assert t.variant == TypeVariant.BASE_TYPE
        assert t.base_type == BaseType.INT64

    def test_unknown_name(self, example_registry):
        assert example_registry.find_type("Nope") is None
        assert example_registry.find_type("") is None

    def test_schema_type_shadows_base_type(self):
        schema = Schema(name="s", types=[Type.of(StringTypeDef(name="UUID"))])
        registry = TypeRegistry(schema)
        assert registry.find_type("UUID").variant == TypeVariant.STRING_TYPE_DEF
