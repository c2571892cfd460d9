from typing import TYPE_CHECKING, Any

from litestar import Request, get

from litestar_inertia.response import InertiaRedirect

if TYPE_CHECKING:
    from litestar.handlers import HTTPRouteHandler

__all__ = ("create_version_conflict_handler",)


def create_version_conflict_handler(path: str) -> "HTTPRouteHandler":
    """Create the landing route for asset version conflicts.

    After a 409 from :class:`InertiaMiddleware <litestar_inertia.middleware.InertiaMiddleware>` the
    browser loads ``{path}?location=/original/page``; this handler sends it on to that page, which
    is then served as a full HTML document with the fresh assets.

    Args:
        path: The conflict path, ``InertiaConfig.conflict_path``.

    Returns:
        The route handler.
    """

    @get(path, name="inertia:version-conflict", include_in_schema=False, sync_to_thread=False)
    def version_conflict(request: "Request[Any, Any, Any]", location: str = "/") -> InertiaRedirect:
        return InertiaRedirect(request, redirect_to=location or "/")

    return version_conflict
