"""HAL resource model.

A Resource is an immutable value holding plain data elements, links and
embedded resources. Every mutator returns a new Resource (or the receiver
itself when the call changes nothing) so instances can be shared freely.
"""

import copy
import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

import structlog

from hal_resource.exceptions import InvalidArgumentError, ResourceStateError
from hal_resource.link import Link

logger = structlog.get_logger()

RESERVED_NAMES = ("_links", "_embedded")


def validate_element_name(name: str) -> None:
    """Reject names that cannot be used for a data element or embed.

    Raises:
        InvalidArgumentError: If the name is not a string, is empty, or is reserved by HAL
    """
    if not isinstance(name, str):
        raise InvalidArgumentError(f"Element name must be a string, got {type(name).__name__}")
    if not name:
        raise InvalidArgumentError("Element name cannot be empty")
    if name in RESERVED_NAMES:
        raise InvalidArgumentError(f"Cannot use reserved element name '{name}'")


def is_resource_collection(value: Any) -> bool:
    """Return True if value is a non-empty sequence made only of Resource instances."""
    if not isinstance(value, Sequence) or isinstance(value, (str, bytes, bytearray)):
        return False
    return len(value) > 0 and all(isinstance(item, Resource) for item in value)


def is_embeddable(value: Any) -> bool:
    """Return True if value is a Resource or a resource collection."""
    return isinstance(value, Resource) or is_resource_collection(value)


def structurally_equivalent(first: "Resource", second: "Resource") -> bool:
    """Compare two resources by the set of their element names.

    Values, links and the contents of embedded resources are ignored.
    """
    return set(first._elements) == set(second._elements)


@dataclass(frozen=True)
class Embed:
    """An embedded slot holding either one resource or an ordered collection."""

    resources: tuple["Resource", ...]
    is_collection: bool = False

    @classmethod
    def from_value(cls, name: str, value: Any) -> "Embed":
        """Build an embed slot from a Resource or a sequence of Resource.

        Raises:
            InvalidArgumentError: If value is neither, or if collection members differ in structure
        """
        if isinstance(value, Resource):
            return cls((value,))
        if not is_resource_collection(value):
            raise InvalidArgumentError(
                f"Invalid embedded resource '{name}': expected a Resource or a non-empty sequence of Resource"
            )
        resources = tuple(value)
        first = resources[0]
        for resource in resources[1:]:
            if not structurally_equivalent(first, resource):
                raise InvalidArgumentError(f"Collection '{name}' contains structurally inequivalent resources")
        return cls(resources, is_collection=True)

    @property
    def value(self) -> "Resource | list[Resource]":
        if self.is_collection:
            return list(self.resources)
        return self.resources[0]

    def append(self, name: str, other: "Embed") -> "Embed":
        """Return a collection of this slot's resources followed by other's.

        Both slots are already internally consistent, so comparing their first
        members is enough.
        """
        if not structurally_equivalent(self.resources[0], other.resources[0]):
            raise InvalidArgumentError(
                f"Cannot embed into '{name}': resource is structurally inequivalent to the existing resources"
            )
        return Embed(self.resources + other.resources, is_collection=True)

    def to_dict(self) -> dict[str, Any] | list[dict[str, Any]]:
        if self.is_collection:
            return [resource.to_dict() for resource in self.resources]
        return self.resources[0].to_dict()


def _merge_embed(elements: dict[str, Any], name: str, embed: Embed) -> None:
    """Merge an embed slot into a working copy of the elements mapping."""
    if name in elements and not isinstance(elements[name], Embed):
        raise ResourceStateError(f"Cannot embed resource matching element '{name}'; remove the element first")

    existing = elements.get(name)
    if existing is None:
        elements[name] = embed
        return

    elements[name] = existing.append(name, embed)
    logger.debug("Appended embedded resources", name=name, count=len(elements[name].resources))


class Resource:
    """Represents a HAL resource with data elements, links and embedded resources.

    Instances are immutable. Element values that are a Resource or a sequence
    of Resource are treated as embedded resources; anything else is plain data.
    """

    __slots__ = ("_elements", "_links")

    def __init__(
        self,
        elements: Mapping[str, Any] | None = None,
        links: Sequence[Link] | None = None,
        embedded: Mapping[str, Any] | None = None,
    ) -> None:
        """Initialize a resource.

        Args:
            elements: Data elements; Resource values are embedded
            links: Links of the resource, in order
            embedded: Embedded resources or collections keyed by name

        Raises:
            InvalidArgumentError: If a name is invalid, a link is not a Link, or an embed value is malformed
            ResourceStateError: If a name appears both as plain data and as an embed
        """
        state: dict[str, Any] = {}

        for name, value in (elements or {}).items():
            validate_element_name(name)
            if is_embeddable(value):
                _merge_embed(state, name, Embed.from_value(name, value))
            else:
                state[name] = copy.deepcopy(value)

        link_items = tuple(links or ())
        for link in link_items:
            if not isinstance(link, Link):
                raise InvalidArgumentError(f"Invalid item in links: expected Link, got {type(link).__name__}")

        for name, value in (embedded or {}).items():
            validate_element_name(name)
            _merge_embed(state, name, Embed.from_value(name, value))

        self._elements = state
        self._links = link_items

    @classmethod
    def _from_state(cls, elements: dict[str, Any], links: tuple[Link, ...]) -> "Resource":
        # State is already validated; unchanged containers are shared
        resource = cls.__new__(cls)
        resource._elements = elements
        resource._links = links
        return resource

    @property
    def elements(self) -> dict[str, Any]:
        """Data elements and embedded resources, in insertion order.

        A single embed is returned as a Resource, a collection as a list of Resource.
        """
        return {
            name: value.value if isinstance(value, Embed) else copy.deepcopy(value)
            for name, value in self._elements.items()
        }

    @property
    def data(self) -> dict[str, Any]:
        """Plain data elements only."""
        return {
            name: copy.deepcopy(value) for name, value in self._elements.items() if not isinstance(value, Embed)
        }

    @property
    def embedded(self) -> dict[str, "Resource | list[Resource]"]:
        """Embedded resources and collections only."""
        return {name: value.value for name, value in self._elements.items() if isinstance(value, Embed)}

    @property
    def links(self) -> list[Link]:
        return list(self._links)

    def get_links(self) -> list[Link]:
        """Return all links, in insertion order."""
        return list(self._links)

    def get_links_by_rel(self, relation: str) -> list[Link]:
        """Return all links with the given relation, in insertion order."""
        return [link for link in self._links if link.relation == relation]

    def with_link(self, link: Link) -> "Resource":
        """Return a resource with link appended.

        Returns self if this exact link instance is already present.
        """
        if not isinstance(link, Link):
            raise InvalidArgumentError(f"Invalid link: expected Link, got {type(link).__name__}")
        if any(existing is link for existing in self._links):
            return self
        return self._from_state(self._elements, self._links + (link,))

    def without_link(self, link: Link) -> "Resource":
        """Return a resource without link.

        The identical instance is removed when present, otherwise the first
        equal link. Returns self if no link matches.
        """
        index = next((i for i, existing in enumerate(self._links) if existing is link), None)
        if index is None:
            index = next((i for i, existing in enumerate(self._links) if existing == link), None)
        if index is None:
            return self
        return self._from_state(self._elements, self._links[:index] + self._links[index + 1 :])

    def with_element(self, name: str, value: Any) -> "Resource":
        """Return a resource with the element set to value.

        Resource and Resource-sequence values are embedded instead.

        Raises:
            InvalidArgumentError: If name is invalid
            ResourceStateError: If name already holds an embedded resource
        """
        validate_element_name(name)
        if is_embeddable(value):
            return self.embed(name, value)

        if isinstance(self._elements.get(name), Embed):
            raise ResourceStateError(f"Cannot replace element matching resource '{name}'; remove the resource first")

        elements = dict(self._elements)
        elements[name] = copy.deepcopy(value)
        return self._from_state(elements, self._links)

    def with_elements(self, elements: Mapping[str, Any]) -> "Resource":
        """Apply with_element for every entry, in iteration order."""
        resource = self
        for name, value in elements.items():
            resource = resource.with_element(name, value)
        return resource

    def without_element(self, name: str) -> "Resource":
        """Return a resource without the named element or embed.

        Returns self if the name is not present.
        """
        validate_element_name(name)
        if name not in self._elements:
            return self
        elements = {key: value for key, value in self._elements.items() if key != name}
        return self._from_state(elements, self._links)

    def embed(self, name: str, resource: "Resource | Sequence[Resource]") -> "Resource":
        """Return a resource with resource embedded under name.

        Embedding into a name that already holds a resource or collection
        appends to it, turning a single embed into a collection.

        Raises:
            InvalidArgumentError: If name is invalid, the value is not embeddable,
                or the resources are structurally inequivalent
            ResourceStateError: If name already holds plain data
        """
        validate_element_name(name)
        embed = Embed.from_value(name, resource)
        elements = dict(self._elements)
        _merge_embed(elements, name, embed)
        return self._from_state(elements, self._links)

    def to_dict(self) -> dict[str, Any]:
        """Project the resource to a HAL mapping."""
        data: dict[str, Any] = {}
        embedded: dict[str, Any] = {}
        for name, value in self._elements.items():
            if isinstance(value, Embed):
                embedded[name] = value.to_dict()
            else:
                data[name] = copy.deepcopy(value)

        if self._links:
            data["_links"] = self._links_to_dict()
        if embedded:
            data["_embedded"] = embedded
        return data

    def _links_to_dict(self) -> dict[str, Any]:
        grouped: dict[str, list[dict[str, Any]]] = {}
        for link in self._links:
            grouped.setdefault(link.relation, []).append(link.to_dict())
        return {relation: items[0] if len(items) == 1 else items for relation, items in grouped.items()}

    def json_serialize(self) -> dict[str, Any]:
        """Return the mapping to encode as JSON, identical to to_dict()."""
        return self.to_dict()

    def to_json(self, **kwargs: Any) -> str:
        """Encode the HAL mapping as JSON; kwargs are passed to json.dumps."""
        return json.dumps(self.to_dict(), **kwargs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Resource):
            return NotImplemented
        return self._elements == other._elements and self._links == other._links

    __hash__ = None  # type: ignore[assignment]

    def __deepcopy__(self, memo: dict[int, Any]) -> "Resource":
        return self

    def __repr__(self) -> str:
        return f"Resource(elements={self.elements!r}, links={list(self._links)!r})"
