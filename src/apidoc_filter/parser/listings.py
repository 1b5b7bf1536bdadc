"""Listings index loading and derivation.

A listings index associates groups of API paths with the models they use.
It is normally produced together with the descriptor document; when it is
missing, one can be derived from the document's own ``$ref`` graph.
"""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from apidoc_filter.errors import DocumentFormatError
from apidoc_filter.model.base import (
    DEFINITIONS_PREFIX,
    ApiDescription,
    ApiListing,
    Document,
    ListingsIndex,
    Operation,
    simple_ref,
)

logger = logging.getLogger(__name__)

DEFAULT_GROUP = "default"


def load_listings(file_path: Path) -> ListingsIndex:
    """Parse a listings file: a mapping of group name to a list of listings.

    Example::

        default:
          - resource_path: pets
            apis: [{path: /pets}, {path: "/pets/{id}"}]
            models: [Pet, Error]
    """
    try:
        data = yaml.safe_load(file_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise DocumentFormatError(f"{file_path} is not valid JSON or YAML: {e}") from e

    if data is None:
        return ListingsIndex()
    if not isinstance(data, dict):
        raise DocumentFormatError("Listings file must map group names to listings")
    try:
        return ListingsIndex.model_validate({"listings": data})
    except ValidationError as e:
        raise DocumentFormatError(f"Malformed listings file: {e}") from e


def build_listings(document: Document, group: str = DEFAULT_GROUP) -> ListingsIndex:
    """Derive a listings index from a document.

    Operations are grouped by their first tag (untagged ones go to
    'default'), one listing per tag. A listing's models are the definitions
    reachable through ``$ref`` from any of its operations.
    """
    operations_by_tag: dict[str, list[Operation]] = {}
    paths_by_tag: dict[str, list[str]] = {}
    for path, item in document.paths.items():
        for operation in item.operations():
            tag = operation.tags[0] if operation.tags else "default"
            operations_by_tag.setdefault(tag, []).append(operation)
            tag_paths = paths_by_tag.setdefault(tag, [])
            if path not in tag_paths:
                tag_paths.append(path)

    definitions = {
        name: model.model_dump(by_alias=True, exclude_none=True)
        for name, model in document.definitions.items()
    }

    listings = []
    for tag, operations in operations_by_tag.items():
        models: set[str] = set()
        for operation in operations:
            _collect_refs(operation.model_dump(by_alias=True, exclude_none=True), definitions, models)
        listings.append(
            ApiListing(
                resource_path=tag,
                apis=[ApiDescription(path=p) for p in paths_by_tag[tag]],
                models=sorted(models),
            )
        )
        logger.debug("Derived listing %s: %d paths, %d models", tag, len(paths_by_tag[tag]), len(models))

    return ListingsIndex(listings={group: listings})


def _collect_refs(obj: object, definitions: dict[str, dict], found: set[str]) -> None:
    if isinstance(obj, dict):
        for key, value in obj.items():
            if key == "$ref" and isinstance(value, str) and value.startswith(DEFINITIONS_PREFIX):
                name = simple_ref(value)
                if name in found:
                    continue
                found.add(name)
                if name in definitions:
                    _collect_refs(definitions[name], definitions, found)
            else:
                _collect_refs(value, definitions, found)
    elif isinstance(obj, list):
        for item in obj:
            _collect_refs(item, definitions, found)
