"""Utility functions for loading RDL schemas.

This module loads the JSON form of an already-parsed RDL schema from files,
URLs and standard input, and converts it into the schema model.
"""

import json
import sys
from pathlib import Path
from typing import Any, TextIO
from urllib.parse import urlparse

import requests

from .codegen.core.schema import Schema, SchemaError, schema_from_dict
from .logging_config import get_logger

logger = get_logger(__name__)


class SchemaLoaderError(Exception):
    """Raised when a schema cannot be read or decoded."""

    pass


def load_json_from_file(file_path: str | Path) -> tuple[str, Any]:
    """Load JSON data from a local file.

    Args:
        file_path: Path to the JSON file.

    Returns:
        Tuple of (source description, parsed JSON data).

    Raises:
        FileNotFoundError: If file doesn't exist.
        SchemaLoaderError: If file cannot be read or JSON is invalid.
    """
    file_path = Path(file_path)
    logger.debug("Attempting to load JSON from file: %s", file_path)

    if not file_path.exists():
        logger.error("File not found: %s", file_path)
        raise FileNotFoundError(f"File not found: {file_path}")

    if file_path.suffix.lower() != ".json":
        # Might still be valid JSON
        logger.warning("File does not have .json extension: %s", file_path)

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        logger.info("Loaded JSON from %s", file_path)
        return str(file_path), data
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in file %s: %s", file_path, e)
        raise SchemaLoaderError(f"Invalid JSON in file {file_path}: {e}") from e
    except OSError as e:
        logger.error("Error reading file %s: %s", file_path, e)
        raise SchemaLoaderError(f"Error reading file {file_path}: {e}") from e


def load_json_from_url(url: str, timeout: int = 30) -> tuple[str, Any]:
    """Load JSON data from a URL.

    Args:
        url: URL to fetch JSON from.
        timeout: Request timeout in seconds.

    Returns:
        Tuple of (source description, parsed JSON data).

    Raises:
        SchemaLoaderError: If URL is invalid, request fails, or response isn't valid JSON.
    """
    logger.debug("Attempting to load JSON from URL: %s", url)

    parsed_url = urlparse(url)
    if not all([parsed_url.scheme, parsed_url.netloc]):
        logger.error("Invalid URL format: %s", url)
        raise SchemaLoaderError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()

        content_type = response.headers.get("content-type", "").lower()
        if "application/json" not in content_type and not url.endswith(".json"):
            logger.warning("URL %s does not have JSON content type: %s", url, content_type)

        data = response.json()
        logger.info("Loaded JSON from %s", url)
        return url, data

    except requests.exceptions.Timeout as e:
        logger.error("Request timeout for URL: %s", url)
        raise SchemaLoaderError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        logger.error("Connection error for URL %s: %s", url, e)
        raise SchemaLoaderError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        logger.error("HTTP error %s for URL: %s", e.response.status_code, url)
        raise SchemaLoaderError(
            f"HTTP error {e.response.status_code} for URL: {url}"
        ) from e
    except requests.exceptions.JSONDecodeError as e:
        logger.error("Invalid JSON response from URL %s: %s", url, e)
        raise SchemaLoaderError(f"Invalid JSON response from URL {url}: {e}") from e
    except requests.exceptions.RequestException as e:
        logger.error("Request error for URL %s: %s", url, e)
        raise SchemaLoaderError(f"Request error for URL {url}: {e}") from e


def load_json_from_stream(stream: TextIO, name: str = "<stdin>") -> tuple[str, Any]:
    """Load JSON data from an open text stream."""
    try:
        data = json.load(stream)
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in %s: %s", name, e)
        raise SchemaLoaderError(f"Invalid JSON in {name}: {e}") from e
    logger.info("Loaded JSON from %s", name)
    return name, data


def load_schema(source: str | Path, timeout: int = 30) -> tuple[str, Schema]:
    """Load an RDL schema from a file path, an http(s) URL, or ``-`` for stdin.

    Args:
        source: Where to read the JSON schema from.
        timeout: Request timeout in seconds (only used for URLs).

    Returns:
        Tuple of (source description, Schema).

    Raises:
        FileNotFoundError: If a file source doesn't exist.
        SchemaLoaderError: If the source cannot be read or is not a valid schema.
    """
    source_text = str(source)
    if source_text == "-":
        description, data = load_json_from_stream(sys.stdin)
    elif urlparse(source_text).scheme in ("http", "https"):
        description, data = load_json_from_url(source_text, timeout)
    else:
        description, data = load_json_from_file(source)

    return description, schema_from_json(data, description)


def schema_from_json(data: Any, description: str = "schema") -> Schema:
    """Convert decoded JSON into a Schema, reporting structure errors as loader errors."""
    try:
        schema = schema_from_dict(data)
    except SchemaError as e:
        logger.error("Malformed schema in %s: %s", description, e)
        raise SchemaLoaderError(f"Malformed schema in {description}: {e}") from e

    logger.debug(
        "Schema %s: %d types, %d resources",
        schema.name,
        len(schema.types),
        len(schema.resources),
    )
    return schema
