"""Immutable HAL resources and links."""

from hal_resource.exceptions import HalError, InvalidArgumentError, ResourceStateError
from hal_resource.link import Link
from hal_resource.loader import load_document, resource_from_dict
from hal_resource.resource import Resource

__all__ = [
    "HalError",
    "InvalidArgumentError",
    "Link",
    "Resource",
    "ResourceStateError",
    "load_document",
    "resource_from_dict",
]
