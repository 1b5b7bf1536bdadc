"""Recompute definitions and tags from the surviving paths."""

import logging

from apidoc_filter.model.base import ListingsIndex, ModelDefinition, PathItem, Tag

logger = logging.getLogger(__name__)


def referenced_models(paths: dict[str, PathItem], listings: ListingsIndex) -> set[str]:
    """Model names of every listing describing at least one of *paths*.

    Scanning a listing stops at its first surviving path: the models belong
    to the listing as a whole.
    """
    names: set[str] = set()
    for listing in listings.all_listings():
        for api in listing.apis:
            if api.path in paths:
                names.update(listing.models)
                break
    return names


def prune_definitions(
    paths: dict[str, PathItem],
    definitions: dict[str, ModelDefinition],
    listings: ListingsIndex,
) -> dict[str, ModelDefinition]:
    """Keep only the definitions used by the surviving paths, sorted by name.

    An empty path mapping leaves the definitions as they are.
    """
    if not paths:
        return dict(definitions)

    names = referenced_models(paths, listings)
    result = {name: definitions[name] for name in sorted(names) if name in definitions}
    logger.debug("Kept %d of %d definitions", len(result), len(definitions))
    return result


def prune_tags(paths: dict[str, PathItem], declared: list[Tag]) -> tuple[list[Tag], bool]:
    """Keep the declared tags referenced by a surviving operation.

    Returns the tags (in declaration order) and whether the document still
    has any content. With no paths left the tag list is empty.
    """
    if not paths:
        return [], False

    used: set[str] = set()
    for item in paths.values():
        for operation in item.operations():
            used.update(operation.tags)
    tags = []
    seen: set[str] = set()
    for tag in declared:
        if tag.name in used and tag.name not in seen:
            seen.add(tag.name)
            tags.append(tag)
    return tags, True
