"""
Document and schema loading from fsspec URIs.

Reads from any fsspec-compatible location:
- Local paths (relative or absolute) and file:// URIs
- Object stores (s3://, gs://, az://) when the backend is installed
- http(s):// and memory://

Files ending in ``.yaml``/``.yml`` are parsed with ``yaml.safe_load``;
everything else is parsed as JSON.

Example:
    >>> from docschema.loader import load_documents
    >>> document, schema = load_documents("article.json", "s3://bucket/article.schema.yaml")
"""

import json
import logging
from typing import Any, Tuple

import fsspec
import yaml

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


def parse_content(content: str, name: str) -> Any:
    """
    Parse text as YAML or JSON depending on the file name.

    Raises:
        ValueError: If the content is not valid YAML/JSON
    """
    if name.lower().endswith(YAML_SUFFIXES):
        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {name}: {e}") from e
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {name}: {e}") from e


def load_document(uri: str) -> Any:
    """
    Load and parse one YAML/JSON file.

    Args:
        uri: Local path or fsspec URI

    Returns:
        Parsed content (usually a dict)

    Raises:
        FileNotFoundError: If nothing exists at ``uri``
        ValueError: If the content cannot be parsed
    """
    fs, path = fsspec.core.url_to_fs(uri)
    logger.debug("Loading %s via %s", uri, type(fs).__name__)
    try:
        with fs.open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except FileNotFoundError:
        raise FileNotFoundError(f"Document not found: {uri}")
    return parse_content(content, path)


def load_documents(document_uri: str, schema_uri: str) -> Tuple[Any, Any]:
    """Load a document and its schema. Returns (document, schema)."""
    return load_document(document_uri), load_document(schema_uri)
