"""Exceptions raised by HAL resources."""


class HalError(Exception):
    """Base class for all hal-resource errors."""


class InvalidArgumentError(HalError, ValueError):
    """Raised when an element name, link, or embedded value is malformed."""


class ResourceStateError(HalError, RuntimeError):
    """Raised when an operation would mix plain data and an embedded resource under one name."""
