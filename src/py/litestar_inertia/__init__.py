"""Litestar-Inertia: the server side of the Inertia.js protocol for Litestar.

Basic usage:
    from typing import Annotated

    from litestar import Litestar, get
    from litestar.params import Dependency
    from litestar_inertia import InertiaConfig, InertiaPage, InertiaPlugin, InertiaStore

    @get("/")
    async def home(inertia: Annotated[InertiaStore, Dependency(skip_validation=True)]) -> InertiaPage:
        return inertia.render("Home", {"greeting": "hello"})

    app = Litestar(
        route_handlers=[home],
        plugins=[InertiaPlugin(InertiaConfig(root_template="web/index.html", version="1"))],
    )
"""

from litestar_inertia import helpers
from litestar_inertia._utils import InertiaHeaders
from litestar_inertia.config import InertiaConfig
from litestar_inertia.exceptions import LitestarInertiaError, RootTemplateError, VersionResolverError
from litestar_inertia.helpers import filter_props, flush_shared, get_shared_props, location, render, share
from litestar_inertia.middleware import InertiaMiddleware, redirect_on_version_mismatch
from litestar_inertia.plugin import InertiaPlugin
from litestar_inertia.request import InertiaDetails, InertiaRequest
from litestar_inertia.response import InertiaExternalRedirect, InertiaRedirect, InertiaResponse, render_html
from litestar_inertia.store import InertiaStore
from litestar_inertia.types import InertiaPage, PageProps

__all__ = (
    "InertiaConfig",
    "InertiaDetails",
    "InertiaExternalRedirect",
    "InertiaHeaders",
    "InertiaMiddleware",
    "InertiaPage",
    "InertiaPlugin",
    "InertiaRedirect",
    "InertiaRequest",
    "InertiaResponse",
    "InertiaStore",
    "LitestarInertiaError",
    "PageProps",
    "RootTemplateError",
    "VersionResolverError",
    "filter_props",
    "flush_shared",
    "get_shared_props",
    "helpers",
    "location",
    "redirect_on_version_mismatch",
    "render",
    "render_html",
    "share",
)
