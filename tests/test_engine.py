from pathlib import Path

from apidoc_filter.config import FilterConfig
from apidoc_filter.filter.engine import DocumentFilter, filter_document
from apidoc_filter.model.base import (
    ApiDescription,
    ApiListing,
    Document,
    ListingsIndex,
    ModelDefinition,
    Operation,
    PathItem,
    Tag,
)
from apidoc_filter.parser.listings import load_listings
from apidoc_filter.parser.swagger import dump_document, load_document

FIXTURES = Path(__file__).parent / "fixtures"


def _petstore():
    return load_document(FIXTURES / "petstore.yaml"), load_listings(FIXTURES / "listings.yaml")


class TestEndToEndExample:
    def test_prefix_with_tag_drops_unmatched_path(self):
        doc = Document(
            paths={
                "/a/1": PathItem(get=Operation(tags=["x"])),
                "/a/2": PathItem(get=Operation(tags=["y"])),
            },
            definitions={name: ModelDefinition(title=name) for name in ("One", "Two", "Shared")},
            tags=[Tag(name="x"), Tag(name="y")],
        )
        listings = ListingsIndex(listings={"default": [
            ApiListing(apis=[ApiDescription(path="/a/1")], models=["Shared", "One"]),
            ApiListing(apis=[ApiDescription(path="/a/2")], models=["Two"]),
        ]})

        result = DocumentFilter().filter("/a", "x", doc, listings)

        assert list(result.paths) == ["/a/1"]
        assert list(result.definitions) == ["One", "Shared"]
        assert [t.name for t in result.tags] == ["x"]


class TestPathRequests:
    def test_exact_path(self):
        doc, listings = _petstore()
        result = filter_document("/pets", None, doc, listings)
        assert list(result.paths) == ["/pets"]
        assert result.paths["/pets"] is doc.paths["/pets"]
        assert list(result.definitions) == ["Category", "Error", "Pet"]
        assert [t.name for t in result.tags] == ["pets"]

    def test_exact_path_ignores_tags(self):
        doc, listings = _petstore()
        result = filter_document("/pets", "admin", doc, listings)
        assert list(result.paths) == ["/pets"]
        assert result.paths["/pets"].get is not None
        assert result.paths["/pets"].post is not None

    def test_prefix_path(self):
        doc, listings = _petstore()
        result = filter_document("/users", None, doc, listings)
        assert list(result.paths) == ["/users"]
        result = filter_document("/users/", None, doc, listings)
        assert list(result.paths) == ["/users/{id}"]
        assert list(result.definitions) == ["User"]

    def test_ambiguous_prefix_narrowed_by_tags(self):
        doc, listings = _petstore()
        result = filter_document("/pets/", "admin", doc, listings)
        assert list(result.paths) == ["/pets/{petId}"]
        item = result.paths["/pets/{petId}"]
        assert [m for m, _ in item.method_operations()] == ["delete"]
        assert [t.name for t in result.tags] == ["pets", "admin"]

    def test_unknown_path_empties_document(self):
        doc, listings = _petstore()
        result = filter_document("/orders", None, doc, listings)
        assert result.paths == {}
        assert result.tags == []
        assert set(result.definitions) == set(doc.definitions)
        assert "tags" not in dump_document(result)


class TestTagRequests:
    def test_tags_without_path_keep_definitions_and_tags(self):
        doc, listings = _petstore()
        result = filter_document(None, "users", doc, listings)
        assert list(result.paths) == ["/users", "/users/{id}"]
        assert list(result.definitions) == ["Pet", "Category", "User", "Error"]
        assert [t.name for t in result.tags] == ["pets", "users", "admin"]

    def test_several_tags(self):
        doc, listings = _petstore()
        result = filter_document(None, "admin,users", doc, listings)
        assert list(result.paths) == ["/pets/{petId}", "/users", "/users/{id}"]
        assert [m for m, _ in result.paths["/pets/{petId}"].method_operations()] == ["delete"]
        assert list(result.definitions) == ["Pet", "Category", "User", "Error"]

    def test_unmatched_tags_keep_declared_tags(self):
        doc, listings = _petstore()
        result = filter_document(None, "orders", doc, listings)
        assert result.paths == {}
        assert [t.name for t in result.tags] == ["pets", "users", "admin"]
        assert set(result.definitions) == set(doc.definitions)

    def test_update_body_model_outside_listings(self):
        doc = Document.model_validate({
            "paths": {"/pets": {"put": {
                "tags": ["pet"],
                "x-update": "1",
                "parameters": [{"name": "body", "in": "body", "schema": {"$ref": "#/definitions/Pet"}}],
            }}},
            "definitions": {"Pet": {"type": "object", "properties": {
                "id": {"type": "integer", "readOnly": True},
                "created": {"type": "string", "readOnly": True},
                "updated": {"type": "string", "readOnly": True},
                "name": {"type": "string"},
            }}},
        })
        listings = ListingsIndex(listings={"default": [
            ApiListing(apis=[ApiDescription(path="/other")], models=["Other"]),
        ]})

        result = DocumentFilter().filter(None, "pet", doc, listings)

        assert list(result.definitions) == ["Pet", "PetUpdate"]
        body = result.paths["/pets"].put.parameters[0]
        assert body.body_schema.ref == "#/definitions/PetUpdate"


class TestAccessStage:
    def test_parameter_refs_pass_through(self):
        doc = Document.model_validate({
            "paths": {"/pets": {"put": {
                "tags": ["pets"],
                "x-update": "1",
                "parameters": [{"$ref": "#/parameters/Limit"}, {"name": "id", "in": "query", "readOnly": True}],
            }}},
            "parameters": {"Limit": {"name": "limit", "in": "query", "type": "integer"}},
        })
        result = DocumentFilter().filter(None, None, doc, ListingsIndex())
        params = result.paths["/pets"].put.parameters
        assert [p.ref for p in params] == ["#/parameters/Limit"]
        assert dump_document(result)["paths"]["/pets"]["put"]["parameters"] == [{"$ref": "#/parameters/Limit"}]

    def test_request_hidden_parameter_removed(self):
        doc, listings = _petstore()
        result = filter_document("/users", None, doc, listings)
        assert [p.name for p in result.paths["/users"].get.parameters] == ["page"]

    def test_update_operation_rewritten(self):
        doc, listings = _petstore()
        result = filter_document("/pets/{petId}", None, doc, listings)
        put = result.paths["/pets/{petId}"].put
        assert [p.name for p in put.parameters] == ["petId", "body"]
        assert put.parameters[1].body_schema.ref == "#/definitions/PetUpdate"
        assert put.parameters[1].body_schema.description == "The new pet state"
        assert list(result.definitions) == ["Category", "Error", "Pet", "PetUpdate"]
        assert list(result.definitions["PetUpdate"].properties) == ["name", "category", "tag"]

    def test_access_filter_runs_without_request(self):
        doc, listings = _petstore()
        result = filter_document(None, None, doc, listings)
        assert list(result.paths) == list(doc.paths)
        assert [t.name for t in result.tags] == ["pets", "users", "admin"]
        batch = result.paths["/pets/batch"].put.parameters[0].body_schema
        assert batch.items.ref == "#/definitions/PetUpdate"
        assert list(result.definitions) == ["Pet", "Category", "User", "Error", "PetUpdate"]

    def test_custom_update_suffix(self):
        doc, listings = _petstore()
        result = DocumentFilter(FilterConfig(update_suffix="Write")).filter("/pets/batch", None, doc, listings)
        assert "PetWrite" in result.definitions
        assert result.paths["/pets/batch"].put.parameters[0].body_schema.items.ref == "#/definitions/PetWrite"


class TestSourceDocumentUnchanged:
    def test_repeated_passes_see_original(self):
        doc, listings = _petstore()
        before = dump_document(doc)
        engine = DocumentFilter()
        engine.filter("/pets/", "admin", doc, listings)
        engine.filter(None, None, doc, listings)
        engine.filter("/users", None, doc, listings)
        assert dump_document(doc) == before
        assert "PetUpdate" not in doc.definitions
