"""Tests for ramlkit.nodes.root -- metadata, catalogs and base URI rules."""

from __future__ import annotations

from typing import Any

import pytest

from ramlkit.exceptions import (
    InvalidProperty,
    RamlSyntaxError,
    RequiredPropertyMissing,
    UnknownProperty,
    UnknownReference,
)
from ramlkit.nodes import Documentation, ResourceType, Root, Trait

BASE = {"title": "x", "baseUri": "http://foo.com"}


def _root(**extra: Any) -> Root:
    return Root({**BASE, **extra})


class TestRequiredProperties:
    def test_minimal_document(self) -> None:
        root = _root()
        assert root.title == "x"
        assert root.base_uri == "http://foo.com"
        assert root.resources == []

    def test_missing_title(self) -> None:
        with pytest.raises(RequiredPropertyMissing, match="title"):
            Root({"baseUri": "http://foo.com"})

    def test_non_string_title(self) -> None:
        with pytest.raises(InvalidProperty, match="title"):
            _root(title=1)

    def test_missing_base_uri(self) -> None:
        with pytest.raises(RequiredPropertyMissing, match="baseUri"):
            Root({"title": "x"})

    @pytest.mark.parametrize("data", [None, [], "title: x"])
    def test_document_must_be_a_map(self, data: Any) -> None:
        with pytest.raises(RamlSyntaxError):
            Root(data)

    def test_unknown_property(self) -> None:
        with pytest.raises(UnknownProperty, match="basePath"):
            _root(basePath="/v1")


class TestBaseUri:
    @pytest.mark.parametrize(
        "uri",
        [
            "http://foo.com",
            "https://api.example.com/v1/",
            "https://{apiDomain}.example.com/",
            "http://localhost:8080/api",
        ],
    )
    def test_valid_base_uris(self, uri: str) -> None:
        assert _root(baseUri=uri).base_uri == uri

    @pytest.mark.parametrize("uri", ["foo", "ftp://foo.com", "http://", "http://foo.com/{a"])
    def test_invalid_base_uris(self, uri: str) -> None:
        with pytest.raises(InvalidProperty, match="baseUri"):
            _root(baseUri=uri)

    def test_non_string_base_uri(self) -> None:
        with pytest.raises(InvalidProperty, match="baseUri"):
            _root(baseUri=1)

    def test_version_template_requires_version(self) -> None:
        with pytest.raises(RequiredPropertyMissing, match="version"):
            _root(baseUri="https://api.example.com/{version}")

    def test_version_template_with_version(self) -> None:
        root = _root(baseUri="https://api.example.com/{version}", version="v1")
        assert root.version == "v1"

    def test_numeric_version(self) -> None:
        assert _root(version=1.0).version == 1.0


class TestRootProperties:
    @pytest.mark.parametrize("value", [["HTTP"], ["https", "http"]])
    def test_protocols(self, value: list[str]) -> None:
        assert _root(protocols=value).protocols == [p.upper() for p in value]

    def test_invalid_protocols(self) -> None:
        with pytest.raises(InvalidProperty, match="protocols"):
            _root(protocols=["gopher"])

    def test_media_type(self) -> None:
        assert _root(mediaType="application/json").media_type == "application/json"

    def test_invalid_media_type(self) -> None:
        with pytest.raises(InvalidProperty, match="mediaType"):
            _root(mediaType="json")

    def test_base_uri_parameters(self) -> None:
        root = _root(
            baseUri="https://{apiDomain}.example.com",
            baseUriParameters={"apiDomain": {"enum": ["api"]}},
        )
        assert [p.name for p in root.base_uri_parameters] == ["apiDomain"]
        assert root.parameters == root.base_uri_parameters

    def test_base_uri_parameters_reject_version(self) -> None:
        with pytest.raises(InvalidProperty, match="baseUriParameters"):
            _root(baseUriParameters={"version": {}})


class TestDocumentation:
    def test_documentation_entries(self) -> None:
        root = _root(documentation=[{"title": "Home", "content": "Welcome"}])
        assert all(isinstance(d, Documentation) for d in root.documents)
        assert root.documents[0].title == "Home"
        assert root.documentation == root.documents

    @pytest.mark.parametrize("value", [1, [], [1]])
    def test_malformed_documentation(self, value: Any) -> None:
        with pytest.raises(InvalidProperty, match="documentation"):
            _root(documentation=value)

    @pytest.mark.parametrize("entry", [{"title": "Home"}, {"content": "Welcome"}])
    def test_documentation_requires_title_and_content(self, entry: dict[str, str]) -> None:
        with pytest.raises(RequiredPropertyMissing):
            _root(documentation=[entry])


class TestCatalogs:
    def test_schemas_merge_across_maps(self) -> None:
        root = _root(schemas=[{"a": "{}"}, {"b": "<xs:schema/>"}])
        assert root.schemas == {"a": "{}", "b": "<xs:schema/>"}

    def test_duplicate_schema_names(self) -> None:
        with pytest.raises(InvalidProperty, match="duplicate"):
            _root(schemas=[{"a": "{}"}, {"a": "{}"}])

    @pytest.mark.parametrize("value", [{"a": "{}"}, ["a"], [{"a": 1}]])
    def test_malformed_schemas(self, value: Any) -> None:
        with pytest.raises(InvalidProperty, match="schemas"):
            _root(schemas=value)

    def test_traits(self) -> None:
        root = _root(traits=[{"secured": {"headers": {"Authorization": {}}}}, {"paged": None}])
        assert set(root.traits) == {"secured", "paged"}
        assert all(isinstance(t, Trait) for t in root.traits.values())
        assert "Authorization" in root.traits["secured"].headers

    def test_resource_types(self) -> None:
        root = _root(resourceTypes=[{"collection": {"get": {}, "post?": {}}}])
        collection = root.resource_types["collection"]
        assert isinstance(collection, ResourceType)
        assert collection.method("post").optional is True

    def test_catalog_order_does_not_matter(self) -> None:
        root = Root({
            "title": "x",
            "baseUri": "http://foo.com",
            "/users": {"get": {"is": ["paged"]}},
            "traits": [{"paged": {}}],
        })
        assert root.resource("users").method("get").traits[0].name == "paged"

    def test_undeclared_resource_type(self) -> None:
        with pytest.raises(UnknownReference, match="collection"):
            _root(**{"/users": {"type": "collection"}})

    def test_placeholder_values_in_definitions_are_deferred(self) -> None:
        root = _root(traits=[{"paged": {
            "queryParameters": {"limit": {"type": "integer", "maximum": "<<maxLimit>>"}},
        }}])
        assert root.traits["paged"].query_parameters["limit"].maximum == "<<maxLimit>>"


class TestResources:
    def test_lookup(self) -> None:
        root = _root(**{"/users": {"/{userId}": {"get": {}}}})
        assert root.resource("users") is root.resource("/users")
        assert root.resource("users").resource("{userId}").method("get") is not None

    @pytest.mark.parametrize("value", ["hello", [1, 2]])
    def test_resource_must_be_a_map(self, value: Any) -> None:
        with pytest.raises(InvalidProperty, match="/users resource definition must be a map"):
            _root(**{"/users": value})

    def test_document_order(self) -> None:
        root = _root(
            version="v2",
            documentation=[{"title": "Home", "content": "Welcome"}],
            **{"/users": {"displayName": "Users"}},
        )
        text = root.document()
        assert text.startswith("# x\n")
        assert text.index("Version: v2") < text.index("## Home") < text.index("### Users")
