"""Swagger 2.0 document loading and serialization.

Converts between the OpenAPI 2.0 JSON/YAML shape and the Document model.
"""

import json
from pathlib import Path

import yaml
from pydantic import ValidationError

from apidoc_filter.errors import DocumentFormatError
from apidoc_filter.model.base import Document


def load_document(file_path: Path) -> Document:
    """Parse a Swagger 2.0 file (JSON or YAML) into a Document."""
    text = file_path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DocumentFormatError(f"{file_path} is not valid JSON or YAML: {e}") from e
    return parse_document(data)


def parse_document(data: object) -> Document:
    """Build a Document from an already decoded Swagger 2.0 mapping."""
    if not isinstance(data, dict):
        raise DocumentFormatError("Descriptor document must be a mapping")
    if "openapi" in data:
        raise DocumentFormatError(f"OpenAPI {data['openapi']} documents are not supported, expected Swagger 2.0")
    version = str(data.get("swagger", "2.0"))
    if version != "2.0":
        raise DocumentFormatError(f"Unsupported swagger version: {version}")

    try:
        return Document.model_validate({**data, "swagger": version})
    except ValidationError as e:
        raise DocumentFormatError(f"Malformed descriptor document: {e}") from e


def dump_document(document: Document) -> dict:
    """Convert a Document back to the OpenAPI 2.0 dict shape."""
    # Only fields present in the source, or set while filtering, are written
    data = document.model_dump(by_alias=True, exclude_unset=True, exclude_none=True, mode="json")
    data.setdefault("swagger", document.swagger)
    data.setdefault("paths", {})
    # An emptied tag list is written as absent, not as []
    if not data.get("tags"):
        data.pop("tags", None)
    return data


def render_document(document: Document, fmt: str = "json") -> str:
    """Serialize a Document as JSON or YAML text."""
    data = dump_document(document)
    if fmt == "yaml":
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"
