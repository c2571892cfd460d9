from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, cast

from litestar.exceptions import ImproperlyConfiguredException

if TYPE_CHECKING:
    from litestar.connection import ASGIConnection

    from litestar_inertia.plugin import InertiaPlugin
    from litestar_inertia.response import InertiaExternalRedirect
    from litestar_inertia.store import InertiaStore
    from litestar_inertia.types import InertiaPage

__all__ = (
    "deep_merge",
    "filter_props",
    "flush_shared",
    "get_shared_props",
    "get_store",
    "location",
    "parse_keys",
    "render",
    "share",
    "should_filter",
)


def parse_keys(value: "str | None") -> "list[str]":
    """Split a comma-separated header value into prop keys.

    Whitespace around each key is dropped, and so are empty entries.

    Args:
        value: The raw header value.

    Returns:
        The keys in header order.
    """
    if value is None:
        return []
    return [key for key in (part.strip() for part in value.split(",")) if key]


def should_filter(
    component: str,
    partial_component: "str | None",
    partial_data: "str | None",
    partial_except: "str | None",
) -> bool:
    """Return True when a partial reload applies to ``component``.

    A named partial component must match the page exactly. Without one, the presence of
    either key list is enough.

    Args:
        component: The component of the page being rendered.
        partial_component: Value of ``X-Inertia-Partial-Component``.
        partial_data: Value of ``X-Inertia-Partial-Data``.
        partial_except: Value of ``X-Inertia-Partial-Except``.

    Returns:
        True if props should be filtered.
    """
    if partial_component is not None:
        return partial_component == component
    return partial_data is not None or partial_except is not None


def filter_props(
    props: "Mapping[str, Any]",
    only: "list[str] | set[str] | None" = None,
    except_: "list[str] | set[str] | None" = None,
) -> "dict[str, Any]":
    """Filter props for a partial reload.

    ``only`` keeps matching keys in the order they appear in ``props``. ``except_`` is
    applied afterwards and always removes, including keys that ``only`` kept.
    Empty lists leave props untouched.

    Args:
        props: The page props.
        only: Keys to keep.
        except_: Keys to drop.

    Returns:
        A new, filtered props dictionary.

    Example::

        filter_props({"a": 1, "b": 2, "c": 3}, only=["c", "a"])
        # {"a": 1, "c": 3}

        filter_props({"a": 1, "b": 2, "c": 3}, only=["a", "b", "c"], except_=["b"])
        # {"a": 1, "c": 3}
    """
    filtered = dict(props)
    if only:
        keep = set(only)
        filtered = {key: value for key, value in filtered.items() if key in keep}
    if except_:
        for key in except_:
            filtered.pop(key, None)
    return filtered


def deep_merge(base: "Mapping[str, Any]", override: "Mapping[str, Any]") -> "dict[str, Any]":
    """Merge ``override`` on top of ``base``.

    Nested mappings present on both sides are merged recursively; any other collision is won
    by ``override``. Keys of ``base`` keep their position, new keys are appended.

    Args:
        base: The lower precedence mapping.
        override: The higher precedence mapping.

    Returns:
        A new merged dictionary.
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(cast("Mapping[str, Any]", current), cast("Mapping[str, Any]", value))
        else:
            merged[key] = value
    return merged


def get_store(connection: "ASGIConnection[Any, Any, Any, Any]") -> "InertiaStore":
    """Return the shared store of the application's Inertia plugin.

    Args:
        connection: The ASGI connection.

    Raises:
        ImproperlyConfiguredException: If the Inertia plugin is not registered.

    Returns:
        The application's :class:`InertiaStore <litestar_inertia.store.InertiaStore>`.
    """
    try:
        inertia_plugin = cast("InertiaPlugin", connection.app.plugins.get("InertiaPlugin"))
    except KeyError as exc:
        msg = "The Inertia plugin is not registered on this application."
        raise ImproperlyConfiguredException(msg) from exc
    return inertia_plugin.store


def share(
    connection: "ASGIConnection[Any, Any, Any, Any]",
    key: "str",
    value: "Any",
) -> "None":
    """Share a value with every page rendered by the application.

    Args:
        connection: The ASGI connection.
        key: The key to store the value under.
        value: The value to store.
    """
    try:
        store = get_store(connection)
    except ImproperlyConfiguredException:
        msg = "Unable to set `share` state.  The Inertia plugin was not found for this request."
        connection.logger.warning(msg)
        return
    store.share(key, value)


def get_shared_props(connection: "ASGIConnection[Any, Any, Any, Any]", key: "str | None" = None) -> "Any":
    """Return shared props for a request.

    Args:
        connection: The ASGI connection.
        key: Optional single key to read.

    Returns:
        A copy of all shared props, or the value stored under ``key`` (``None`` when missing).
    """
    return get_store(connection).get_shared(key)


def flush_shared(connection: "ASGIConnection[Any, Any, Any, Any]") -> None:
    """Remove every shared prop.

    Args:
        connection: The ASGI connection.
    """
    get_store(connection).flush_shared()


def render(
    connection: "ASGIConnection[Any, Any, Any, Any]",
    component: str,
    props: "Any" = None,
    url: "str | None" = None,
) -> "InertiaPage":
    """Build a page for ``component`` with shared props merged in.

    Args:
        connection: The ASGI connection.
        component: The component name.
        props: The page props.
        url: Optional page URL, defaults to the request URL at response time.

    Returns:
        The page, ready to be returned from a route handler.
    """
    return get_store(connection).render(component, props, url)


def location(connection: "ASGIConnection[Any, Any, Any, Any]", url: str) -> "InertiaExternalRedirect":
    """Force the client to load ``url`` with a full browser navigation.

    Args:
        connection: The ASGI connection.
        url: The URL to load.

    Returns:
        A 409 response carrying ``X-Inertia-Location``.
    """
    from litestar_inertia.response import InertiaExternalRedirect

    return InertiaExternalRedirect(connection, redirect_to=url)  # type: ignore[arg-type]
