"""Inertia protocol types.

This module defines the Python-side data structures for the Inertia.js protocol: the page
descriptor built by application code and the page object sent to the client.
"""

from dataclasses import dataclass, field
from typing import Any, TypedDict

__all__ = (
    "InertiaHeaderType",
    "InertiaPage",
    "PageProps",
)


def _empty_props_factory() -> "dict[str, Any]":
    return {}


@dataclass(frozen=True)
class InertiaPage:
    """A page to render, produced once per request.

    Attributes:
        component: JavaScript component name to render. Never validated server side.
        props: Page data passed to the component, in insertion order.
        url: Page URL. When ``None`` it is taken from the request path and query string.
    """

    component: str
    props: "dict[str, Any]" = field(default_factory=_empty_props_factory)
    url: "str | None" = None


@dataclass
class PageProps:
    """Inertia Page Props Type.

    This represents the page object sent to the Inertia client.
    See: https://inertiajs.com/the-protocol

    Attributes:
        component: JavaScript component name to render.
        props: Page data/props passed to the component, already filtered.
        url: Current page URL.
        version: Asset version identifier, ``None`` when no version is known.
    """

    component: str
    props: "dict[str, Any]"
    url: str
    version: "str | None" = None

    def to_dict(self) -> "dict[str, Any]":
        """Convert to the Inertia.js protocol format.

        Returns:
            The Inertia protocol dictionary.
        """
        return {
            "component": self.component,
            "props": self.props,
            "url": self.url,
            "version": self.version,
        }

    @classmethod
    def from_dict(cls, data: "dict[str, Any]") -> "PageProps":
        """Build a page object from a decoded protocol payload.

        Args:
            data: A decoded page object.

        Returns:
            The page props.
        """
        return cls(
            component=data["component"],
            props=data.get("props") or {},
            url=data["url"],
            version=data.get("version"),
        )


class InertiaHeaderType(TypedDict, total=False):
    """Type for inertia_headers parameter in get_headers()."""

    enabled: "bool | None"
    location: "str | None"
    partial_data: "str | None"
    partial_component: "str | None"
    partial_except: "str | None"
    error_bag: "str | None"
