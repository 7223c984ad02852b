"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing defaults and validation for generator settings.
"""

import json
from pathlib import Path
from typing import Dict, Any, Optional, Union
from dataclasses import dataclass, field, fields

from ...logging_config import get_logger

logger = get_logger(__name__)

# Package of the RDL Java runtime that generated schemas build against
RDL_RUNTIME_NAMESPACE = "com.yahoo.rdl"

DEFAULT_BANNER = "rdl-schemagen"


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class GeneratorConfig:
    """Base configuration for code generators."""

    # Output settings
    output_file: Optional[str] = None
    package_name: str = ""
    class_name: str = ""

    # Header banner: "This file generated by <banner>. Do not modify!"
    banner: str = DEFAULT_BANNER

    # Runtime support library; its import is skipped when generating into it
    runtime_namespace: str = RDL_RUNTIME_NAMESPACE

    # Custom settings (language-specific)
    custom: Dict[str, Any] = field(default_factory=dict)


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported languages."""
        self._configs["java"] = {
            "package_name": "",
            "class_name": "",
            "banner": DEFAULT_BANNER,
            "runtime_namespace": RDL_RUNTIME_NAMESPACE,
        }

    def get_config(
        self,
        language: str = "java",
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration for a language.

        Args:
            language: Target language name
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration for the language
        """
        # Start with defaults
        base_config = dict(self._configs.get(language.lower(), {}))

        # Load from file if provided
        if config_file:
            file_config = self._load_config_file(config_file)
            base_config.update(file_config)

        # Apply custom overrides, skipping unset values
        if custom_config:
            base_config.update(
                {k: v for k, v in custom_config.items() if v is not None}
            )

        config = self._dict_to_config(base_config)

        problems = self.validate_config(config)
        if problems:
            raise ConfigError("; ".join(problems))

        logger.debug("Resolved %s configuration: %s", language, config)
        return config

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(
                f"Invalid JSON in configuration file {path}: {str(e)}"
            ) from e
        except OSError as e:
            raise ConfigError(
                f"Failed to load configuration file {path}: {str(e)}"
            ) from e

        if not isinstance(config, dict):
            raise ConfigError(
                f"Configuration file must contain a JSON object: {path}"
            )

        logger.info("Loaded configuration file %s", path)
        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        # Unknown keys are kept for language-specific use
        if custom_args:
            existing_custom = dict(config_args.get("custom", {}))
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        return GeneratorConfig(**config_args)

    def validate_config(self, config: GeneratorConfig) -> list[str]:
        """
        Validate configuration values.

        Returns:
            List of validation errors
        """
        # Deferred: the Java generator imports this module
        from ..languages.java.naming import is_java_identifier, is_java_package

        problems = []

        if config.package_name and not is_java_package(config.package_name):
            problems.append(f"Invalid Java package name: {config.package_name}")

        if config.class_name and not is_java_identifier(config.class_name):
            problems.append(f"Invalid Java class name: {config.class_name}")

        if not config.runtime_namespace or not is_java_package(
            config.runtime_namespace
        ):
            problems.append(
                f"Invalid runtime namespace: {config.runtime_namespace!r}"
            )

        if "\n" in config.banner:
            problems.append("Banner must be a single line")

        return problems


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    language: str = "java",
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        language: Target language name
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration for the language
    """
    manager = get_config_manager()
    return manager.get_config(language, custom_config, config_file)
