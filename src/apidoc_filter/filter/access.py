"""Parameter access filtering and write-model synthesis.

Operations marked as updates lose their read-only parameters, and body
parameters of such operations are pointed at a reduced "write" variant of
their model when that model has enough read-only properties to make a
separate variant worthwhile.
"""

import logging

from apidoc_filter.config import FilterConfig
from apidoc_filter.errors import InvalidReference
from apidoc_filter.model.base import (
    Document,
    Operation,
    Parameter,
    Schema,
    definition_ref,
    simple_ref,
)

logger = logging.getLogger(__name__)


class AccessFilter:
    """Removes hidden parameters and rewrites update bodies in a document."""

    def __init__(self, config: FilterConfig | None = None):
        self.config = config or FilterConfig()

    def apply(self, document: Document) -> None:
        """Filter every operation of *document*.

        The document's ``paths`` and ``definitions`` containers are replaced
        in place; path items, operations and parameters that change are copied
        first, so entities shared with other documents are left alone.
        """
        if not document.paths:
            return

        for key, item in list(document.paths.items()):
            updates = {}
            for method, operation in item.method_operations():
                filtered = self.filter_operation(document, operation)
                if filtered is not operation:
                    updates[method] = filtered
            if updates:
                document.paths[key] = item.model_copy(update=updates)

    def is_update(self, operation: Operation) -> bool:
        return operation.has_extension(self.config.update_marker)

    def filter_operation(self, document: Document, operation: Operation) -> Operation:
        """Return *operation*, or a filtered copy of it if anything changed."""
        update = self.is_update(operation)
        parameters = [p for p in operation.parameters if self._keep(p, update)]

        if update:
            parameters = [self._rewrite_body(document, p) if p.is_body else p for p in parameters]

        if len(parameters) == len(operation.parameters) and all(
            a is b for a, b in zip(parameters, operation.parameters)
        ):
            return operation
        return operation.model_copy(update={"parameters": parameters})

    def _keep(self, parameter: Parameter, update: bool) -> bool:
        if update and parameter.read_only:
            logger.info(
                "Removed read-only parameter name=%s, readOnly=%s, access=%s",
                parameter.name, parameter.read_only, parameter.access,
            )
            return False
        if parameter.access and self.config.request_hidden_marker in parameter.access:
            logger.info(
                "Removed request-hidden parameter name=%s, readOnly=%s, access=%s",
                parameter.name, parameter.read_only, parameter.access,
            )
            return False
        return True

    def _rewrite_body(self, document: Document, parameter: Parameter) -> Parameter:
        schema = parameter.body_schema
        if schema is None:
            return parameter

        if schema.is_ref:
            simple_name = simple_ref(schema.ref)
            name_update = simple_name + self.config.update_suffix
            if not self.model_update(document, simple_name, name_update):
                return parameter
            new_schema = Schema(
                ref=definition_ref(name_update),
                description=schema.description,
                example=schema.example,
            )
            return parameter.model_copy(update={"body_schema": new_schema})

        if schema.is_array_of_ref:
            simple_name = simple_ref(schema.items.ref)
            name_update = simple_name + self.config.update_suffix
            if not self.model_update(document, simple_name, name_update):
                return parameter
            items = schema.items.model_copy(update={"ref": definition_ref(name_update)})
            return parameter.model_copy(update={"body_schema": schema.model_copy(update={"items": items})})

        return parameter

    def model_update(self, document: Document, simple_name: str, name_update: str) -> bool:
        """Make sure a write variant of *simple_name* exists if it should.

        Returns True when the model has at least ``read_only_threshold``
        read-only properties. In that case ``name_update`` is registered in
        the document's definitions (created on first use, reused afterwards)
        as a copy of the model without its read-only properties.
        """
        model = document.definitions.get(simple_name)
        if model is None:
            raise InvalidReference(simple_name)
        existing = document.definitions.get(name_update)
        threshold = self.config.read_only_threshold

        read_only = []
        for name, prop in model.properties.items():
            if prop.read_only:
                read_only.append(name)
                if existing is not None and len(read_only) >= threshold:
                    break

        if len(read_only) < threshold:
            return False

        if existing is None:
            variant = model.model_copy(deep=True)
            variant.name = name_update
            variant.title = name_update
            for name in read_only:
                variant.properties.pop(name, None)
            document.definitions[name_update] = variant
            logger.info("Created write model %s from %s without %s", name_update, simple_name, read_only)
        return True
