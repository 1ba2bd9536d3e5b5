"""Build Resource instances from HAL documents."""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import structlog
import yaml

from hal_resource.exceptions import InvalidArgumentError
from hal_resource.link import Link
from hal_resource.resource import Resource

logger = structlog.get_logger()

SUPPORTED_SUFFIXES = (".json", ".yaml", ".yml")

JSON_SCALARS = (str, int, float, bool, type(None))


def _link_from_dict(relation: str, data: Any) -> Link:
    if not isinstance(data, Mapping):
        raise InvalidArgumentError(f"Invalid link object for relation '{relation}': expected a mapping")
    attributes = {key: value for key, value in data.items() if key != "href"}
    return Link(relation, data.get("href"), attributes)


def _links_from_dict(data: Any) -> list[Link]:
    if not isinstance(data, Mapping):
        raise InvalidArgumentError("Invalid _links: expected a mapping of relation to link objects")

    links = []
    for relation, value in data.items():
        if isinstance(value, list):
            links.extend(_link_from_dict(relation, item) for item in value)
        else:
            links.append(_link_from_dict(relation, value))
    return links


def _embedded_from_dict(data: Any) -> dict[str, Resource | list[Resource]]:
    if not isinstance(data, Mapping):
        raise InvalidArgumentError("Invalid _embedded: expected a mapping of name to resources")

    embedded: dict[str, Resource | list[Resource]] = {}
    for name, value in data.items():
        if isinstance(value, list):
            embedded[name] = [resource_from_dict(item) for item in value]
        else:
            embedded[name] = resource_from_dict(value)
    return embedded


def _check_json_native(value: Any, location: str) -> None:
    """Reject values that json.dumps cannot encode, such as YAML dates."""
    if isinstance(value, JSON_SCALARS):
        return
    if isinstance(value, list):
        for index, item in enumerate(value):
            _check_json_native(item, f"{location}[{index}]")
        return
    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise InvalidArgumentError(f"Invalid key {key!r} at {location}: keys must be strings")
            _check_json_native(item, f"{location}.{key}")
        return
    raise InvalidArgumentError(
        f"Unsupported value of type {type(value).__name__} at {location}; quote it to keep it as a string"
    )


def resource_from_dict(document: Mapping[str, Any]) -> Resource:
    """Build a Resource from a HAL mapping, the inverse of Resource.to_dict().

    Args:
        document: HAL mapping with optional _links and _embedded entries

    Returns:
        Resource holding the document's data, links and embedded resources

    Raises:
        InvalidArgumentError: If the document or one of its parts is malformed
    """
    if not isinstance(document, Mapping):
        raise InvalidArgumentError(f"Invalid HAL document: expected a mapping, got {type(document).__name__}")

    elements = {name: value for name, value in document.items() if name not in ("_links", "_embedded")}
    links = _links_from_dict(document.get("_links", {}))
    embedded = _embedded_from_dict(document.get("_embedded", {}))
    return Resource(elements, links, embedded)


def load_document(path: str | Path) -> Resource:
    """Load a HAL document from a JSON or YAML file.

    Args:
        path: Path to a .json, .yaml or .yml file

    Returns:
        Resource built from the file contents
    """
    path = Path(path)
    if path.suffix.lower() not in SUPPORTED_SUFFIXES:
        raise InvalidArgumentError(f"Unsupported document type '{path.suffix}' for {path}")

    logger.debug("Loading HAL document", path=str(path))
    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                document = json.load(f)
            else:
                document = yaml.safe_load(f) or {}
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        logger.error("Failed to load HAL document", path=str(path), error=str(e))
        raise InvalidArgumentError(f"Failed to load HAL document from {path}: {e}") from e

    _check_json_native(document, "$")
    return resource_from_dict(document)
