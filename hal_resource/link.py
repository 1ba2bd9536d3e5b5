"""Link model for HAL resources."""

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from hal_resource.exceptions import InvalidArgumentError


@dataclass(frozen=True)
class Link:
    """Represents a hypermedia link from a resource to a target."""

    relation: str
    target: str | None = None
    attributes: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        if not isinstance(self.relation, str) or not self.relation:
            raise InvalidArgumentError("Link relation cannot be empty")
        if "href" in self.attributes:
            raise InvalidArgumentError("Link attributes cannot contain 'href'; use the target instead")
        # Detach from the caller's mapping
        object.__setattr__(self, "attributes", MappingProxyType(copy.deepcopy(dict(self.attributes))))

    def to_dict(self) -> dict[str, Any]:
        """Return the HAL link object for this link."""
        data: dict[str, Any] = {"href": self.target}
        data.update(copy.deepcopy(dict(self.attributes)))
        return data
