"""Tag matching for operations."""

import logging
from collections.abc import Iterable

from apidoc_filter.model.base import HTTP_METHODS, Operation, PathItem

logger = logging.getLogger(__name__)


def parse_tags(raw: str | None) -> list[str]:
    """Split a comma-delimited tag request. Empty entries are ignored."""
    if not raw:
        return []
    return [tag for tag in raw.split(",") if tag]


def contains_tag(operation: Operation | None, tags: Iterable[str]) -> bool:
    """True if the operation carries at least one of *tags* (exact, case-sensitive)."""
    if operation is None or not operation.tags:
        return False
    return any(tag in operation.tags for tag in tags)


def filter_operations_by_tags(item: PathItem, tags: list[str]) -> PathItem:
    """Return a copy of *item* with every operation not matching *tags* removed."""
    dropped = {
        method: None
        for method in HTTP_METHODS
        if getattr(item, method) is not None and not contains_tag(getattr(item, method), tags)
    }
    if not dropped:
        return item
    logger.debug("Dropping operations %s: no tag in %s", ", ".join(m.upper() for m in dropped), tags)
    return item.model_copy(update=dropped)
