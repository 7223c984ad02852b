"""Tests for type constructor rendering."""

import logging

from rdl_schemagen.codegen.core.schema import (
    AliasTypeDef,
    ArrayTypeDef,
    BaseType,
    BytesTypeDef,
    EnumElement,
    EnumTypeDef,
    Field,
    MapTypeDef,
    Number,
    NumberTypeDef,
    NumberVariant,
    Schema,
    StringTypeDef,
    StructTypeDef,
    Type,
    TypeRegistry,
    TypeVariant,
    UnionTypeDef,
)
from rdl_schemagen.codegen.languages.java.types import TYPE_RENDERERS, render_type

INDENT = "    "
CHAIN = "\n            "


def render(t, *others):
    registry = TypeRegistry(Schema(name="s", types=[t, *others]))
    return render_type(registry, t)


def test_every_variant_has_a_renderer():
    assert set(TYPE_RENDERERS) == set(TypeVariant)


class TestStringType:
    def test_bare(self):
        assert render(Type.of(StringTypeDef(name="Tag"))) == '    sb.stringType("Tag");'

    def test_all_attributes(self):
        t = Type.of(
            StringTypeDef(
                name="Name",
                comment="A name",
                pattern="[a-z]\\w*",
                min_size=1,
                max_size=64,
            )
        )
        assert render(t) == (
            INDENT
            + 'sb.stringType("Name")'
            + CHAIN
            + '.comment("A name")'
            + CHAIN
            + '.pattern("[a-z]\\\\w*")'
            + CHAIN
            + ".minSize(1)"
            + CHAIN
            + ".maxSize(64);"
        )

    def test_zero_sizes_are_emitted(self):
        t = Type.of(StringTypeDef(name="Empty", min_size=0, max_size=0))
        assert ".minSize(0)" in render(t)
        assert ".maxSize(0)" in render(t)


class TestNumberType:
    def test_bounds_use_their_own_width(self):
        t = Type.of(
            NumberTypeDef(
                name="Ratio",
                type="Float64",
                min=Number(NumberVariant.FLOAT64, 0.0),
                max=Number(NumberVariant.FLOAT64, 0.5),
            )
        )
        assert render(t) == (
            INDENT
            + 'sb.numberType("Ratio", "Float64")'
            + CHAIN
            + ".min(0)"
            + CHAIN
            + ".max(0.5);"
        )

    def test_no_bounds(self):
        t = Type.of(NumberTypeDef(name="Count", type="Int64", comment="items"))
        assert render(t) == (
            INDENT + 'sb.numberType("Count", "Int64")' + CHAIN + '.comment("items");'
        )


class TestEnumAndUnion:
    def test_enum_elements_in_order(self):
        t = Type.of(
            EnumTypeDef(
                name="Color",
                elements=[EnumElement("RED"), EnumElement("GREEN"), EnumElement("BLUE")],
            )
        )
        rendered = render(t)
        assert rendered.startswith('    sb.enumType("Color")')
        assert rendered.index('"RED"') < rendered.index('"GREEN"') < rendered.index('"BLUE"')
        assert rendered.endswith('.element("BLUE");')

    def test_union_variants(self):
        t = Type.of(UnionTypeDef(name="Value", variants=["Int32", "String"]))
        assert render(t) == (
            INDENT
            + 'sb.unionType("Value")'
            + CHAIN
            + '.variant("Int32")'
            + CHAIN
            + '.variant("String");'
        )


class TestStructType:
    def test_root_struct_has_no_supertype(self):
        assert render(Type.of(StructTypeDef(name="S"))) == '    sb.structType("S");'

    def test_derived_struct_names_supertype(self):
        t = Type.of(StructTypeDef(name="Derived", type="Base"))
        base = Type.of(StructTypeDef(name="Base"))
        assert render(t, base) == '    sb.structType("Derived", "Base");'

    def test_field_shapes(self):
        t = Type.of(
            StructTypeDef(
                name="Item",
                fields=[
                    Field("labels", "Map", keys="String", items="String", comment="kv"),
                    Field("tags", "Array", items="String", optional=True),
                    Field("id", "UUID"),
                ],
            )
        )
        assert render(t) == (
            INDENT
            + 'sb.structType("Item")'
            + CHAIN
            + '.mapField("labels", "String", "String", false, "kv")'
            + CHAIN
            + '.arrayField("tags", "String", true, "")'
            + CHAIN
            + '.field("id", "UUID", false, "");'
        )

    def test_field_defaults(self):
        color = Type.of(EnumTypeDef(name="Color", elements=[EnumElement("RED")]))
        t = Type.of(
            StructTypeDef(
                name="Item",
                fields=[
                    Field("color", "Color", optional=True, default="RED"),
                    Field("count", "Int32", default=5.0),
                    Field("name", "String", default="none"),
                    Field("flag", "Bool", default=False),
                ],
            )
        )
        rendered = render(t, color)
        assert '.field("color", "Color", true, "", Color.RED)' in rendered
        assert '.field("count", "Int32", false, "", 5)' in rendered
        assert '.field("name", "String", false, "", "none")' in rendered
        assert '.field("flag", "Bool", false, "", false)' in rendered

    def test_unresolvable_default_is_null(self, caplog):
        t = Type.of(
            StructTypeDef(name="Item", fields=[Field("x", "Mystery", default="v")])
        )
        with caplog.at_level(logging.WARNING, logger="rdl_schemagen"):
            rendered = render(t)
        assert '.field("x", "Mystery", false, "", null);' in rendered
        assert "Mystery" in caplog.text


class TestUnsupported:
    def test_base_type_is_commented(self):
        assert render(Type.of(BaseType.STRING)) == "    //s.type(BaseType) NYI - String"

    def test_map_array_bytes_are_commented(self):
        assert (
            render(Type.of(MapTypeDef(name="Labels")))
            == "    //s.type(MapTypeDef) NYI - Labels"
        )
        assert (
            render(Type.of(ArrayTypeDef(name="Tags")))
            == "    //s.type(ArrayTypeDef) NYI - Tags"
        )
        assert (
            render(Type.of(BytesTypeDef(name="Blob")))
            == "    //s.type(BytesTypeDef) NYI - Blob"
        )

    def test_alias_renders_nothing(self):
        assert render(Type.of(AliasTypeDef(name="Id", type="String"))) == ""


def test_rendering_is_deterministic(example_schema, example_registry):
    first = [render_type(example_registry, t) for t in example_schema.types]
    second = [render_type(example_registry, t) for t in example_schema.types]
    assert first == second
