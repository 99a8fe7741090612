"""Load specification documents from JSON or YAML files.

JSON is a subset of YAML, so both formats go through ``yaml.safe_load``.
"""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from .base import DocumentParseError, SpecDocument

logger = logging.getLogger(__name__)


def load_raw(file_path: Path) -> dict:
    """Read a document file into a plain mapping without validating its shape."""
    logger.debug("Loading document from %s", file_path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentParseError(f"cannot read {file_path}: {e}") from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DocumentParseError(f"invalid JSON/YAML syntax: {e}") from e

    if not isinstance(data, dict):
        raise DocumentParseError(
            f"expected a mapping at the document root, got {type(data).__name__}"
        )
    return data


def parse_document(data: dict) -> SpecDocument:
    """Validate a raw mapping into a SpecDocument."""
    try:
        return SpecDocument.model_validate(data)
    except ValidationError as e:
        raise DocumentParseError(f"unexpected document shape: {e}") from e


def load_document(file_path: Path) -> SpecDocument:
    """Load and validate a specification document file."""
    document = parse_document(load_raw(file_path))
    logger.debug(
        "Loaded %s with %d path(s)", file_path, len(document.paths or {})
    )
    return document
