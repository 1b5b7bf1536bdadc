"""Request-time narrowing of a descriptor document.

Stages run in a fixed order, each working on the survivors of the one
before it:

    path select -> operation tag filter -> definition prune -> tag prune -> access filter

The input document is never modified. Each pass works on a shallow copy
with its own ``paths``, ``definitions`` and ``tags`` containers.
"""

import logging

from apidoc_filter.config import FilterConfig
from apidoc_filter.filter.access import AccessFilter
from apidoc_filter.filter.paths import filter_paths_by_tags, select_paths
from apidoc_filter.filter.prune import prune_definitions, prune_tags
from apidoc_filter.filter.tags import parse_tags
from apidoc_filter.model.base import Document, ListingsIndex

logger = logging.getLogger(__name__)


class DocumentFilter:
    """Derives the part of a document relevant to one request."""

    def __init__(self, config: FilterConfig | None = None):
        self.config = config or FilterConfig()
        self.access_filter = AccessFilter(self.config)

    def filter(
        self,
        request_path: str | None,
        request_tags: str | None,
        document: Document,
        listings: ListingsIndex,
    ) -> Document:
        """Return the document narrowed to *request_path* and *request_tags*.

        *request_tags* is a comma-delimited list of tag names. Either may be
        empty, in which case that narrowing is skipped; the access filter
        always runs.
        """
        result = document.model_copy(
            update={
                "paths": dict(document.paths),
                "definitions": dict(document.definitions),
                "tags": list(document.tags),
            }
        )
        tags = parse_tags(request_tags)

        if request_path:
            result.paths = select_paths(result.paths, request_path)
            if len(result.paths) > 1:
                result.paths = filter_paths_by_tags(result.paths, tags)
        elif tags:
            result.paths = filter_paths_by_tags(result.paths, tags)

        if request_path:
            result.definitions = prune_definitions(result.paths, result.definitions, listings)
            result.tags, has_content = prune_tags(result.paths, document.tags)
            logger.debug(
                "Narrowed to %d paths, %d definitions, %d tags (path=%r, tags=%r)",
                len(result.paths), len(result.definitions), len(result.tags), request_path, request_tags,
            )
            if not has_content:
                return result

        self.access_filter.apply(result)
        return result


def filter_document(
    request_path: str | None,
    request_tags: str | None,
    document: Document,
    listings: ListingsIndex,
    config: FilterConfig | None = None,
) -> Document:
    """Shortcut for ``DocumentFilter(config).filter(...)``."""
    return DocumentFilter(config).filter(request_path, request_tags, document, listings)
