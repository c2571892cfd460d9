from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

    from litestar_inertia.types import InertiaHeaderType


class InertiaHeaders(str, Enum):
    """Enum for Inertia Headers.

    See: https://inertiajs.com/the-protocol
    """

    ENABLED = "X-Inertia"
    VERSION = "X-Inertia-Version"
    LOCATION = "X-Inertia-Location"

    PARTIAL_DATA = "X-Inertia-Partial-Data"
    PARTIAL_COMPONENT = "X-Inertia-Partial-Component"
    PARTIAL_EXCEPT = "X-Inertia-Partial-Except"

    ERROR_BAG = "X-Inertia-Error-Bag"


def get_enabled_header(enabled: bool = True) -> "dict[str, Any]":
    """True if inertia is enabled.

    Args:
        enabled: Whether inertia is enabled.

    Returns:
        The headers for inertia.
    """

    return {InertiaHeaders.ENABLED.value: "true" if enabled else "false"}


def get_location_header(location: str) -> "dict[str, Any]":
    """Return headers for a client-side hard navigation.

    Args:
        location: The URL the browser window should load.

    Returns:
        The headers for inertia.
    """
    return {InertiaHeaders.LOCATION.value: location}


def get_error_bag_header(error_bag: str) -> "dict[str, Any]":
    """Return the echoed error bag header.

    Args:
        error_bag: The error bag name sent by the client.

    Returns:
        The headers for inertia.
    """
    return {InertiaHeaders.ERROR_BAG.value: error_bag}


def get_partial_data_header(partial: str) -> "dict[str, Any]":
    """Return headers for a partial data response.

    Args:
        partial: The partial data.

    Returns:
        The headers for inertia.
    """
    return {InertiaHeaders.PARTIAL_DATA.value: partial}


def get_partial_component_header(partial: str) -> "dict[str, Any]":
    """Return headers for a partial data response.

    Args:
        partial: The partial data.

    Returns:
        The headers for inertia.
    """
    return {InertiaHeaders.PARTIAL_COMPONENT.value: partial}


def get_partial_except_header(partial: str) -> "dict[str, Any]":
    """Return headers for a partial except response.

    Args:
        partial: The comma-separated keys excluded by the client.

    Returns:
        The headers for inertia.
    """
    return {InertiaHeaders.PARTIAL_EXCEPT.value: partial}


def get_headers(inertia_headers: "InertiaHeaderType") -> "dict[str, Any]":
    """Return headers for Inertia responses.

    Entries set to ``None`` are skipped.

    Args:
        inertia_headers: The inertia headers.

    Raises:
        ValueError: If the inertia headers are None.

    Returns:
        The headers for inertia.
    """
    if not inertia_headers:
        msg = "Value for inertia_headers cannot be None."
        raise ValueError(msg)
    inertia_headers_dict: "dict[str, Callable[..., dict[str, Any]]]" = {
        "enabled": get_enabled_header,
        "location": get_location_header,
        "error_bag": get_error_bag_header,
        "partial_data": get_partial_data_header,
        "partial_component": get_partial_component_header,
        "partial_except": get_partial_except_header,
    }

    header: "dict[str, Any]" = {}
    response: "dict[str, Any]"
    key: "str"
    value: "Any"

    for key, value in inertia_headers.items():
        if value is not None:
            response = inertia_headers_dict[key](value)
            header.update(response)
    return header
