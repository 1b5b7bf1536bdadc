"""Data models for Swagger 2.0 descriptor documents and their listings.

Only the fields the filter looks at are declared; everything else in the
source document is kept as extra data and written back unchanged.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

DEFINITIONS_PREFIX = "#/definitions/"

HTTP_METHODS = ("get", "put", "post", "delete", "patch", "head", "options")


def simple_ref(ref: str) -> str:
    """Return the definition name a ``$ref`` points at."""
    if ref.startswith(DEFINITIONS_PREFIX):
        return ref[len(DEFINITIONS_PREFIX):]
    return ref


def definition_ref(name: str) -> str:
    return DEFINITIONS_PREFIX + name


class SwaggerModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class Tag(SwaggerModel):
    """A tag declaration from the document's top-level ``tags`` list."""

    name: str
    description: str | None = None


class Property(SwaggerModel):
    """A model property, or the item type of an array property."""

    type: str | None = None
    ref: str | None = Field(default=None, alias="$ref")
    read_only: bool | None = Field(default=None, alias="readOnly")
    items: "Property | None" = None
    description: str | None = None


class Schema(SwaggerModel):
    """The schema of a body parameter."""

    type: str | None = None
    ref: str | None = Field(default=None, alias="$ref")
    items: Property | None = None
    description: str | None = None
    example: Any = None

    @property
    def is_ref(self) -> bool:
        return self.ref is not None

    @property
    def is_array_of_ref(self) -> bool:
        return self.type == "array" and self.items is not None and self.items.ref is not None


class Parameter(SwaggerModel):
    name: str | None = None
    ref: str | None = Field(default=None, alias="$ref")  # reference to a shared #/parameters entry
    location: str = Field(default="query", alias="in")  # query / path / header / body / formData
    required: bool | None = None
    access: str | None = None  # free-form, may carry hidden markers
    read_only: bool | None = Field(default=None, alias="readOnly")
    body_schema: Schema | None = Field(default=None, alias="schema")

    @property
    def is_body(self) -> bool:
        return self.location == "body"


class Operation(SwaggerModel):
    tags: list[str] = []
    summary: str | None = None
    operation_id: str | None = Field(default=None, alias="operationId")
    parameters: list[Parameter] = []

    @property
    def extensions(self) -> dict:
        """Vendor extension properties (``x-*`` keys) attached to the operation."""
        return {k: v for k, v in (self.model_extra or {}).items() if k.startswith("x-")}

    def has_extension(self, key: str) -> bool:
        """True if *key* is set on the operation, bare or with the ``x-`` prefix."""
        extra = self.model_extra or {}
        return key in extra or f"x-{key}" in extra


class PathItem(SwaggerModel):
    """All operations registered under one path, one slot per HTTP method."""

    get: Operation | None = None
    put: Operation | None = None
    post: Operation | None = None
    delete: Operation | None = None
    patch: Operation | None = None
    head: Operation | None = None
    options: Operation | None = None

    def operations(self) -> list[Operation]:
        return [op for _, op in self.method_operations()]

    def method_operations(self) -> list[tuple[str, Operation]]:
        return [(m, getattr(self, m)) for m in HTTP_METHODS if getattr(self, m) is not None]

    def is_empty(self) -> bool:
        return not self.method_operations()


class ModelDefinition(SwaggerModel):
    """An entry of the document's ``definitions`` mapping."""

    name: str | None = Field(default=None, exclude=True)
    type: str | None = None
    title: str | None = None
    properties: dict[str, Property] = {}


class Document(SwaggerModel):
    """A Swagger 2.0 descriptor document."""

    swagger: str = "2.0"
    paths: dict[str, PathItem] = {}
    definitions: dict[str, ModelDefinition] = {}
    tags: list[Tag] = []

    def get_tag(self, name: str) -> Tag | None:
        for tag in self.tags:
            if tag.name == name:
                return tag
        return None


class ApiDescription(BaseModel):
    """One path described by a listing."""

    path: str
    description: str = ""


class ApiListing(BaseModel):
    """A group of API paths plus the names of the models they use."""

    resource_path: str = ""
    apis: list[ApiDescription] = []
    models: list[str] = []


class ListingsIndex(BaseModel):
    """Listings by group name; each group may hold several listings."""

    listings: dict[str, list[ApiListing]] = {}

    def all_listings(self) -> list[ApiListing]:
        return [listing for group in self.listings.values() for listing in group]

    def find_listings_containing(self, path: str) -> set[str]:
        """Model names of every listing that describes *path*."""
        names: set[str] = set()
        for listing in self.all_listings():
            if any(api.path == path for api in listing.apis):
                names.update(listing.models)
        return names


class SwaggerResource(SwaggerModel):
    """An entry of the UI's resource list (one per documentation group)."""

    name: str
    location: str
    swagger_version: str = Field(default="2.0", alias="swaggerVersion")
