"""
Base generator interface for all code generation targets.

Defines the contract that all language generators must implement.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Any, Optional, TextIO
from pathlib import Path

from ...logging_config import get_logger
from .config import GeneratorConfig
from .schema import Schema, TypeRegistry, TypeVariant
from .templates import TemplateEngine, create_template_engine

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'java')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.java')."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Return None to use in-memory templates only.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @abstractmethod
    def generate(self, schema: Schema, class_name: Optional[str] = None) -> str:
        """
        Generate code for a schema.

        Args:
            schema: Schema to generate code for
            class_name: Name of the generated container type

        Returns:
            Generated code as a string
        """
        pass

    @abstractmethod
    def write(
        self, schema: Schema, writer: TextIO, class_name: Optional[str] = None
    ) -> None:
        """Generate code for a schema straight into a text sink."""
        pass

    def default_class_name(self, schema: Schema) -> str:
        """Name of the generated container type when none is configured."""
        return schema.name

    def validate_schema(self, schema: Schema) -> List[str]:
        """
        Report constructs the generator will not reproduce faithfully.

        The schema itself is assumed valid; these are generation gaps a
        human reviewer should know about.

        Args:
            schema: Schema to inspect

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []
        registry = TypeRegistry(schema)

        for t in schema.types:
            if t.variant == TypeVariant.ALIAS_TYPE_DEF:
                warnings.append(
                    f"Alias type '{t.name}' is not declared; references to it "
                    f"must already be rewritten to '{t.alias_type_def.type}'"
                )
            elif t.variant in (
                TypeVariant.MAP_TYPE_DEF,
                TypeVariant.ARRAY_TYPE_DEF,
                TypeVariant.BYTES_TYPE_DEF,
                TypeVariant.BASE_TYPE,
            ):
                warnings.append(
                    f"{t.variant.value} '{t.name}' is not supported and is "
                    f"emitted as a comment"
                )
            elif t.variant == TypeVariant.STRUCT_TYPE_DEF:
                for f in t.struct_type_def.fields:
                    if f.default is not None and not f.is_map and not f.is_array:
                        if registry.find_type(f.type) is None:
                            warnings.append(
                                f"Default of {t.name}.{f.name} has unknown type "
                                f"'{f.type}'; emitted as null"
                            )

        for r in schema.resources:
            for ri in r.inputs:
                if ri.default is not None and registry.find_type(ri.type) is None:
                    warnings.append(
                        f"Default of input '{ri.name}' on {r.method} {r.path} has "
                        f"unknown type '{ri.type}'; emitted as null"
                    )

        return warnings


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self, code: str, warnings: List[str] = None, metadata: Dict[str, Any] = None
    ):
        """
        Initialize generation result.

        Args:
            code: Generated code
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message = None
        self.exception = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(
    generator: CodeGenerator, schema: Schema, class_name: Optional[str] = None
) -> GenerationResult:
    """
    Generate code using the specified generator with error handling.

    Args:
        generator: Code generator instance
        schema: Schema to generate code for
        class_name: Name of the generated container type

    Returns:
        GenerationResult with code, warnings, and metadata
    """
    try:
        warnings = generator.validate_schema(schema)
        for warning in warnings:
            logger.warning(warning)

        resolved_name = (
            class_name
            or generator.config.class_name
            or generator.default_class_name(schema)
        )
        code = generator.generate(schema, resolved_name)

        metadata = {
            "language": generator.language_name,
            "file_extension": generator.file_extension,
            "schema": schema.name,
            "class_name": resolved_name,
            "type_count": len(schema.types),
            "resource_count": len(schema.resources),
            "has_aliases": any(
                t.variant == TypeVariant.ALIAS_TYPE_DEF for t in schema.types
            ),
        }

        return GenerationResult(code, warnings, metadata)

    except Exception as e:
        logger.error("Code generation failed for %s: %s", schema.name, e)
        return GenerationResult.error(f"Code generation failed: {str(e)}", exception=e)
