"""
RDL Schema Code Generation Module

Generates runtime schema-builder code in various languages from RDL schemas.
"""

from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_language_info,
    list_all_language_info,
    list_supported_languages,
)
from .core.generator import CodeGenerator, GeneratorError, GenerationResult, generate_code
from .core.schema import (
    Schema,
    Type,
    TypeVariant,
    TypeRegistry,
    SchemaError,
    schema_from_dict,
)
from .core.config import GeneratorConfig, ConfigError, ConfigManager, load_config
from .core.templates import TemplateError


def generate_from_schema(schema, language="java", config=None, class_name=None):
    """
    Generate code for an already-built schema.

    Args:
        schema: Schema model instance
        language: Target language name
        config: Generator configuration (GeneratorConfig, dict or path)
        class_name: Name of the generated class; derived from the schema if None

    Returns:
        GenerationResult with generated code
    """
    generator = get_generator(language, config)
    return generate_code(generator, schema, class_name)


def generate_from_file(source, language="java", config=None, class_name=None):
    """
    Load a JSON schema (file, URL or "-") and generate code for it.

    Returns:
        GenerationResult with generated code
    """
    from ..utils import load_schema

    _, schema = load_schema(source)
    return generate_from_schema(schema, language, config, class_name)


def quick_generate(schema_data, language="java", **options):
    """
    Quick code generation from RDL JSON schema data.

    Args:
        schema_data: Decoded schema dict, or its JSON text
        language: Target language
        **options: Generator configuration values

    Returns:
        Generated code string
    """
    if isinstance(schema_data, str):
        import json

        schema_data = json.loads(schema_data)

    schema = schema_from_dict(schema_data)
    result = generate_from_schema(schema, language, options)

    if result.success:
        return result.code
    raise GeneratorError(result.error_message) from result.exception


__all__ = [
    "GeneratorRegistry",
    "RegistryError",
    "CodeGenerator",
    "GeneratorError",
    "GenerationResult",
    "generate_code",
    "Schema",
    "Type",
    "TypeVariant",
    "TypeRegistry",
    "SchemaError",
    "schema_from_dict",
    "GeneratorConfig",
    "ConfigError",
    "ConfigManager",
    "load_config",
    "TemplateError",
    "generate_from_schema",
    "generate_from_file",
    "quick_generate",
    "get_generator",
    "get_language_info",
    "list_all_language_info",
    "list_supported_languages",
]
