"""
Language-specific code generators.

This module contains generators for different target languages.
"""

from .java import JavaSchemaGenerator, create_java_generator

__all__ = ["JavaSchemaGenerator", "create_java_generator"]
