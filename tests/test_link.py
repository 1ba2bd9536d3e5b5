"""Tests for the link model."""

import dataclasses
from types import MappingProxyType

import pytest

from hal_resource.exceptions import InvalidArgumentError
from hal_resource.link import Link


def test_link_creation() -> None:
    """Test link creation with defaults."""
    link = Link("self")
    assert link.relation == "self"
    assert link.target is None
    assert link.attributes == {}


def test_link_with_target_and_attributes() -> None:
    """Test link creation with a target and attributes."""
    link = Link("search", "/api/foo{?q}", {"templated": True})
    assert link.target == "/api/foo{?q}"
    assert link.attributes == {"templated": True}


@pytest.mark.parametrize("relation", ["", None])
def test_empty_relation_is_rejected(relation: str) -> None:
    """Test that a link needs a relation."""
    with pytest.raises(InvalidArgumentError, match="cannot be empty"):
        Link(relation)


def test_href_attribute_is_rejected() -> None:
    """Test that href cannot be passed as an attribute."""
    with pytest.raises(InvalidArgumentError, match="href"):
        Link("self", "/api/foo", {"href": "/api/bar"})


def test_link_is_immutable() -> None:
    """Test that link fields cannot be reassigned."""
    link = Link("self", "/api/foo")
    with pytest.raises(dataclasses.FrozenInstanceError):
        link.target = "/api/bar"  # type: ignore[misc]


def test_link_does_not_share_attributes_with_caller() -> None:
    """Test that later changes to the attributes mapping do not leak into the link."""
    attributes = {"title": "Foo"}
    link = Link("self", "/api/foo", attributes)
    attributes["title"] = "Bar"
    assert link.attributes == {"title": "Foo"}


def test_links_compare_by_value() -> None:
    """Test link equality."""
    assert Link("self", "/api/foo") == Link("self", "/api/foo")
    assert Link("self", "/api/foo") != Link("self", "/api/bar")
    assert Link("self", "/api/foo", {"title": "Foo"}) != Link("self", "/api/foo")


def test_link_to_dict() -> None:
    """Test the HAL link object of a link."""
    assert Link("self", "/api/foo").to_dict() == {"href": "/api/foo"}
    assert Link("search", "/api/foo{?q}", {"templated": True, "title": "Search"}).to_dict() == {
        "href": "/api/foo{?q}",
        "templated": True,
        "title": "Search",
    }


def test_link_nested_attributes_are_copied() -> None:
    """Test that nested attribute values are not shared with the caller or the projection."""
    hints = {"allow": ["GET"]}
    link = Link("self", "/api/foo", {"hints": hints})
    hints["allow"].append("POST")
    link.to_dict()["hints"]["allow"].append("DELETE")
    assert link.to_dict() == {"href": "/api/foo", "hints": {"allow": ["GET"]}}


def test_link_attributes_are_read_only() -> None:
    """Test that the attributes mapping cannot be changed in place."""
    link = Link("self", "/api/foo", {"title": "Foo"})
    with pytest.raises(TypeError):
        link.attributes["title"] = "Bar"  # type: ignore[index]


def test_link_accepts_any_mapping_of_attributes() -> None:
    """Test that read-only mappings work as attributes."""
    link = Link("self", "/api/foo", MappingProxyType({"title": "Foo"}))
    assert link.to_dict() == {"href": "/api/foo", "title": "Foo"}
