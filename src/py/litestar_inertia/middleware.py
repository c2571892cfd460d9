import logging
from typing import TYPE_CHECKING, Any

from litestar.enums import ScopeType
from litestar.middleware import AbstractMiddleware

from litestar_inertia.config import DEFAULT_CONFLICT_PATH
from litestar_inertia.request import InertiaRequest
from litestar_inertia.response import InertiaExternalRedirect

if TYPE_CHECKING:
    from litestar.types import ASGIApp, Receive, Scope, Send

__all__ = ("InertiaMiddleware", "redirect_on_version_mismatch")

logger = logging.getLogger("litestar_inertia")


def redirect_on_version_mismatch(
    request: "InertiaRequest[Any, Any, Any]",
    version: str,
    conflict_path: str = DEFAULT_CONFLICT_PATH,
) -> "InertiaExternalRedirect | None":
    """Return a conflict response when the client's asset version is stale.

    Only Inertia GET requests are checked. A missing ``X-Inertia-Version`` header counts as a
    mismatch.

    Args:
        request: The incoming request.
        version: The asset version the server expects.
        conflict_path: Path the client is sent to on a mismatch.

    Returns:
        An InertiaExternalRedirect to ``conflict_path`` when versions differ, otherwise None.
    """
    if request.method != "GET" or not request.is_inertia:
        return None

    client_version = request.inertia_version or ""
    if client_version == version:
        return None

    logger.debug(
        "Inertia asset version conflict on %s: client=%r server=%r", request.url.path, client_version, version
    )
    return InertiaExternalRedirect(request, redirect_to=f"{conflict_path}?location={request.url.path}")


class InertiaMiddleware(AbstractMiddleware):
    """Middleware enforcing the Inertia asset version.

    This middleware:
    1. Lets non-GET and non-Inertia requests through untouched
    2. Returns 409 Conflict with X-Inertia-Location header when the client version differs
    3. Never calls the route handler on a conflict

    Litestar runs application middleware for routed requests only, so unknown paths still get a 404.

    Example::

        Litestar(
            route_handlers=[...],
            middleware=[DefineMiddleware(InertiaMiddleware, version="1")],
        )
    """

    scopes = {ScopeType.HTTP}

    def __init__(self, app: "ASGIApp", version: str, conflict_path: str = DEFAULT_CONFLICT_PATH) -> None:
        """Initialize the middleware.

        Args:
            app: The next ASGI application in the stack.
            version: The asset version clients must send.
            conflict_path: Path the client is sent to on a mismatch.
        """
        super().__init__(app)
        self.app = app
        self.version = version
        self.conflict_path = conflict_path

    async def __call__(self, scope: "Scope", receive: "Receive", send: "Send") -> None:
        request: InertiaRequest[Any, Any, Any] = InertiaRequest(scope=scope)
        redirect = redirect_on_version_mismatch(request, self.version, self.conflict_path)
        if redirect is not None:
            response = redirect.to_asgi_response(app=None, request=request)  # pyright: ignore[reportUnknownMemberType]
            await response(scope, receive, send)
        else:
            await self.app(scope, receive, send)
