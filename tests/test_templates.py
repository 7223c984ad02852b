"""Tests for the template engine wrapper."""

import io

import pytest

from rdl_schemagen.codegen.core.templates import (
    TemplateError,
    create_template_engine,
    quote_string,
)
from rdl_schemagen.codegen.languages.java.generator import SCHEMA_TEMPLATE, TEMPLATE_DIR


@pytest.fixture
def engine():
    engine = create_template_engine()
    engine.add_template("greeting.j2", "Hello {{ name | quote }}!\n")
    return engine


def test_quote_string_escapes():
    assert quote_string('a\\b"c') == '"a\\\\b\\"c"'
    assert quote_string(42) == '"42"'


def test_stream_template(engine):
    buffer = io.StringIO()
    engine.stream_template("greeting.j2", {"name": "x"}, buffer)
    assert buffer.getvalue() == 'Hello "x"!\n'


def test_undefined_variable_is_an_error(engine):
    with pytest.raises(TemplateError, match="greeting.j2"):
        engine.stream_template("greeting.j2", {}, io.StringIO())


def test_missing_template(engine):
    with pytest.raises(TemplateError, match="nope.j2"):
        engine.stream_template("nope.j2", {}, io.StringIO())


def test_java_template_is_found():
    engine = create_template_engine(TEMPLATE_DIR)
    # Loads, then fails on the first missing context variable
    with pytest.raises(TemplateError, match="undefined"):
        engine.stream_template(SCHEMA_TEMPLATE, {}, io.StringIO())
