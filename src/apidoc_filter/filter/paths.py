"""Path selection and tag-based path narrowing."""

import logging

from apidoc_filter.filter.tags import filter_operations_by_tags
from apidoc_filter.model.base import PathItem

logger = logging.getLogger(__name__)


def select_paths(paths: dict[str, PathItem], request_path: str | None) -> dict[str, PathItem]:
    """Narrow *paths* to an exact match of *request_path*, else to a prefix match.

    With no request path the mapping is returned as a new, unchanged dict.
    Relative order of the surviving entries is preserved.
    """
    if not request_path:
        return dict(paths)
    if request_path in paths:
        return {request_path: paths[request_path]}
    return {key: item for key, item in paths.items() if key.startswith(request_path)}


def filter_paths_by_tags(paths: dict[str, PathItem], tags: list[str]) -> dict[str, PathItem]:
    """Keep only operations tagged with one of *tags*; drop paths left empty."""
    if not tags:
        return dict(paths)

    result = {}
    for key, item in paths.items():
        filtered = filter_operations_by_tags(item, tags)
        if filtered.is_empty():
            logger.info("Removed path %s: no operation tagged %s", key, ",".join(tags))
            continue
        result[key] = filtered
    return result
