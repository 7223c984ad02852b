"""
Java schema generator implementation.

Generates a Java class that rebuilds an RDL schema at runtime through the
RDL ``SchemaBuilder`` API.
"""

import io
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO

from ....logging_config import get_logger
from ...core.config import DEFAULT_BANNER, RDL_RUNTIME_NAMESPACE, GeneratorConfig
from ...core.generator import CodeGenerator, GeneratorError
from ...core.schema import Schema, TypeRegistry
from ...core.templates import TemplateEngine, create_template_engine, quote_string
from .naming import generation_package, is_java_identifier, java_class_name
from .resources import render_resource
from .types import render_type

logger = get_logger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
SCHEMA_TEMPLATE = "schema.java.j2"

_default_engine: Optional[TemplateEngine] = None


def get_default_template_engine() -> TemplateEngine:
    """Template engine loading the Java templates, created once."""
    global _default_engine
    if _default_engine is None:
        _default_engine = create_template_engine(TEMPLATE_DIR)
    return _default_engine


def schema_setup_calls(schema: Schema) -> List[str]:
    """Builder calls setting schema-level metadata, in declaration order."""
    calls = []
    if schema.version is not None:
        calls.append(f"sb.version({schema.version});")
    if schema.namespace:
        calls.append(f"sb.namespace({quote_string(schema.namespace)});")
    if schema.comment:
        calls.append(f"sb.comment({quote_string(schema.comment)});")
    return calls


def build_template_context(
    schema: Schema,
    cname: str,
    namespace: str = "",
    banner: str = DEFAULT_BANNER,
    runtime_namespace: str = RDL_RUNTIME_NAMESPACE,
) -> Dict[str, Any]:
    """
    Template variables for one schema class.

    Type and resource constructors are produced lazily, in schema order,
    while the template is rendered.
    """
    registry = TypeRegistry(schema)
    return {
        "banner": banner,
        "package": namespace,
        "import_runtime": namespace != runtime_namespace,
        "runtime_namespace": runtime_namespace,
        "cname": cname,
        "name": schema.name,
        "setup_calls": schema_setup_calls(schema),
        "type_defs": (render_type(registry, t) for t in schema.types),
        "resource_defs": (render_resource(registry, r) for r in schema.resources),
    }


def generate_schema(
    schema: Schema,
    cname: str,
    writer: TextIO,
    namespace: str = "",
    banner: str = DEFAULT_BANNER,
    runtime_namespace: str = RDL_RUNTIME_NAMESPACE,
    engine: Optional[TemplateEngine] = None,
) -> None:
    """
    Write the Java class that rebuilds ``schema`` to ``writer``.

    Args:
        schema: Already-validated schema
        cname: Name of the generated class
        writer: Text sink receiving the generated source
        namespace: Java package of the generated class; empty for none
        banner: Generator identification placed in the header comment
        runtime_namespace: Package of the RDL runtime; not imported when it
            equals ``namespace``
        engine: Template engine to use instead of the default one

    Raises:
        TemplateError: If the template cannot be loaded or rendered
    """
    engine = engine or get_default_template_engine()
    context = build_template_context(
        schema, cname, namespace, banner, runtime_namespace
    )
    logger.info(
        "Generating %s for schema %s (%d types, %d resources)",
        cname,
        schema.name,
        len(schema.types),
        len(schema.resources),
    )
    engine.stream_template(SCHEMA_TEMPLATE, context, writer)


class JavaSchemaGenerator(CodeGenerator):
    """Code generator for RDL SchemaBuilder classes in Java."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize Java generator with configuration."""
        super().__init__(config)

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "java"

    @property
    def file_extension(self) -> str:
        """Return Java file extension."""
        return ".java"

    def get_template_directory(self) -> Optional[Path]:
        """Return the Java templates directory."""
        return TEMPLATE_DIR if TEMPLATE_DIR.exists() else None

    def default_class_name(self, schema: Schema) -> str:
        return java_class_name(schema.name)

    def package_for(self, schema: Schema) -> str:
        """Java package the schema class is generated into."""
        return generation_package(schema, self.config.package_name)

    def write(
        self, schema: Schema, writer: TextIO, class_name: Optional[str] = None
    ) -> None:
        """Generate the schema class straight into a text sink."""
        cname = class_name or self.config.class_name or self.default_class_name(schema)
        if not is_java_identifier(cname):
            raise GeneratorError(f"Invalid Java class name: {cname!r}")
        generate_schema(
            schema,
            cname,
            writer,
            namespace=self.package_for(schema),
            banner=self.config.banner,
            runtime_namespace=self.config.runtime_namespace,
            engine=self.template_engine,
        )

    def generate(self, schema: Schema, class_name: Optional[str] = None) -> str:
        """Generate the complete Java source for a schema."""
        buffer = io.StringIO()
        self.write(schema, buffer, class_name)
        return buffer.getvalue()


def create_java_generator(config: Optional[Dict[str, Any]] = None) -> JavaSchemaGenerator:
    """Create a Java generator from a plain dict of configuration values."""
    return JavaSchemaGenerator(GeneratorConfig(**(config or {})))
