"""
rdl-schemagen: generate RDL runtime schema classes from parsed RDL schemas.
"""

from .codegen import (
    GenerationResult,
    Schema,
    generate_from_file,
    generate_from_schema,
    quick_generate,
    schema_from_dict,
)
from .codegen.languages.java import generate_schema
from .utils import SchemaLoaderError, load_schema

__version__ = "0.1.0"

__all__ = [
    "GenerationResult",
    "Schema",
    "SchemaLoaderError",
    "generate_from_file",
    "generate_from_schema",
    "generate_schema",
    "load_schema",
    "quick_generate",
    "schema_from_dict",
]
