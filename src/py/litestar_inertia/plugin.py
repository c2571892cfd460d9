import logging
import threading
from typing import TYPE_CHECKING

from litestar.plugins import InitPluginProtocol

from litestar_inertia.config import InertiaConfig
from litestar_inertia.store import InertiaStore

if TYPE_CHECKING:
    from litestar.config.app import AppConfig

    from litestar_inertia.store import VersionResolver

logger = logging.getLogger("litestar_inertia")


def _constant_version(version: str) -> "VersionResolver":
    def resolve_version() -> str:
        return version

    return resolve_version


class InertiaPlugin(InitPluginProtocol):
    """Inertia plugin.

    This plugin configures Litestar for Inertia.js support, including:
    - InertiaRequest and InertiaResponse as default classes
    - One :class:`InertiaStore <litestar_inertia.store.InertiaStore>` for the whole process,
      injected into handlers as the ``inertia`` dependency
    - The asset version guard middleware and its conflict landing route, when
      ``InertiaConfig.version`` is set

    Example::

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

    __slots__ = ("_template", "_template_lock", "config", "store")

    def __init__(self, config: "InertiaConfig | None" = None) -> "None":
        """Initialize the plugin with Inertia configuration."""
        self.config = config or InertiaConfig()
        resolver = self.config.version_resolver
        if resolver is None and self.config.version is not None:
            resolver = _constant_version(self.config.version)
        self.store = InertiaStore(shared_props=self.config.shared_props, version_resolver=resolver)
        self._template: "str | None" = None
        self._template_lock = threading.Lock()

    def get_root_template(self) -> str:
        """Return the root HTML template source.

        The file is read on every call unless ``InertiaConfig.cache_template`` is enabled.

        Returns:
            The template source.
        """
        from litestar_inertia.response import load_template

        if not self.config.cache_template:
            return load_template(self.config.template_path)
        with self._template_lock:
            if self._template is None:
                self._template = load_template(self.config.template_path)
            return self._template

    def on_app_init(self, app_config: "AppConfig") -> "AppConfig":
        """Configure application for use with Inertia.

        Args:
            app_config: The :class:`AppConfig <litestar.config.app.AppConfig>` instance.

        Returns:
            The :class:`AppConfig <litestar.config.app.AppConfig>` instance.
        """

        from litestar.di import Provide
        from litestar.middleware import DefineMiddleware

        from litestar_inertia.middleware import InertiaMiddleware
        from litestar_inertia.request import InertiaRequest
        from litestar_inertia.response import InertiaResponse
        from litestar_inertia.routes import create_version_conflict_handler
        from litestar_inertia.types import InertiaPage

        store = self.store

        def provide_inertia_store() -> InertiaStore:
            return store

        app_config.request_class = InertiaRequest
        app_config.response_class = InertiaResponse
        app_config.dependencies = {
            "inertia": Provide(provide_inertia_store, sync_to_thread=False),
            **(app_config.dependencies or {}),
        }
        app_config.signature_types.extend([InertiaRequest, InertiaResponse, InertiaStore, InertiaPage])

        if self.config.version is not None:
            app_config.middleware.append(
                DefineMiddleware(InertiaMiddleware, version=self.config.version, conflict_path=self.config.conflict_path)
            )
            if self.config.register_conflict_route:
                app_config.route_handlers.append(create_version_conflict_handler(self.config.conflict_path))
            logger.debug("Inertia version guard enabled for version %r", self.config.version)
        return app_config
