"""Process-wide shared props and asset version.

A single :class:`InertiaStore` is created by :class:`InertiaPlugin <litestar_inertia.plugin.InertiaPlugin>`
and handed to every request, either through the ``inertia`` dependency or the helpers in
:mod:`litestar_inertia.helpers`.
"""

import copy
import logging
import threading
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, cast

from litestar.serialization import decode_json, encode_json

from litestar_inertia.exceptions import VersionResolverError
from litestar_inertia.helpers import deep_merge
from litestar_inertia.types import InertiaPage

if TYPE_CHECKING:
    from litestar import Request

    from litestar_inertia.response import InertiaExternalRedirect

__all__ = ("InertiaStore", "VersionResolver")

logger = logging.getLogger("litestar_inertia")

VersionResolver = Callable[[], str]


def _to_props(props: "Any") -> "dict[str, Any]":
    """Coerce handler content into a props mapping.

    Returns:
        The props dictionary.
    """
    if props is None:
        return {}
    if isinstance(props, Mapping):
        return dict(cast("Mapping[str, Any]", props))
    builtins = decode_json(encode_json(props))
    if isinstance(builtins, dict):
        return cast("dict[str, Any]", builtins)
    return {"content": builtins}


class InertiaStore:
    """Shared props and version resolver, safe to use from concurrent requests.

    Every access to the mapping or the resolver goes through one lock. The resolver itself
    is called outside of it.

    Example::

        store = InertiaStore()
        store.share("app_name", "Acme")
        store.set_version(lambda: "2024.1")

        page = store.render("Dashboard", {"stats": stats})
    """

    __slots__ = ("_lock", "_shared_props", "_version_resolver")

    def __init__(
        self,
        shared_props: "Mapping[str, Any] | None" = None,
        version_resolver: "VersionResolver | None" = None,
    ) -> None:
        """Initialize the store.

        Args:
            shared_props: Props shared from the start.
            version_resolver: Callable returning the current asset version.
        """
        self._lock = threading.Lock()
        self._shared_props: "dict[str, Any]" = dict(shared_props or {})
        self._version_resolver = version_resolver

    def share(self, key: str, value: "Any") -> None:
        """Insert or replace one shared prop.

        Args:
            key: The prop key.
            value: The prop value.
        """
        with self._lock:
            self._shared_props[key] = value

    def get_shared(self, key: "str | None" = None) -> "Any":
        """Read shared props.

        Args:
            key: Optional key to read.

        Returns:
            The value under ``key`` (``None`` when missing), or a deep copy of all shared props.
        """
        with self._lock:
            if key is not None:
                return self._shared_props.get(key)
            return copy.deepcopy(self._shared_props)

    def flush_shared(self) -> None:
        """Remove all shared props."""
        with self._lock:
            self._shared_props = {}
        logger.debug("Flushed Inertia shared props")

    def set_version(self, resolver: "VersionResolver | None") -> None:
        """Install the asset version resolver, replacing any previous one.

        Args:
            resolver: Zero-argument callable returning the version, or ``None`` to unset.
        """
        with self._lock:
            self._version_resolver = resolver
        logger.debug("Inertia version resolver set to %r", resolver)

    def get_version(self) -> str:
        """Return the current asset version.

        Raises:
            VersionResolverError: If the resolver fails or does not return a string.

        Returns:
            The resolver's result, or an empty string when no resolver is set.
        """
        with self._lock:
            resolver = self._version_resolver
        if resolver is None:
            return ""
        try:
            version = resolver()
        except Exception as exc:
            msg = f"Inertia version resolver {resolver!r} failed: {exc}"
            raise VersionResolverError(msg) from exc
        if not isinstance(version, str):
            msg = f"Inertia version resolver {resolver!r} returned {type(version).__name__}, expected str."
            raise VersionResolverError(msg)
        return version

    def render(self, component: str, props: "Any" = None, url: "str | None" = None) -> InertiaPage:
        """Build a page with shared props merged underneath ``props``.

        Args:
            component: The component name.
            props: The page props. Mappings are used as-is, other values are serialized to
                builtins first and wrapped under ``content`` unless they become a mapping.
            url: Optional page URL.

        Returns:
            The page descriptor.
        """
        page_props = _to_props(props)
        return InertiaPage(component=component, props=deep_merge(self.get_shared(), page_props), url=url)

    def location(self, request: "Request[Any, Any, Any]", url: str) -> "InertiaExternalRedirect":
        """Return a response forcing a full browser navigation to ``url``.

        Args:
            request: The current request.
            url: The URL to load.

        Returns:
            The external redirect response.
        """
        from litestar_inertia.response import InertiaExternalRedirect

        return InertiaExternalRedirect(request, redirect_to=url)
