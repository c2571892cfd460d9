"""Litestar-Inertia Configuration.

Example usage::

    # Minimal - template read from ./index.html, no version guard
    InertiaPlugin(config=InertiaConfig())

    # Version guard with a fixed asset version
    InertiaPlugin(config=InertiaConfig(root_template="web/index.html", version="1"))

    # Version resolved from the build manifest
    InertiaPlugin(config=InertiaConfig(version="1", version_resolver=lambda: manifest_hash()))
"""

import os
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

__all__ = (
    "DEFAULT_CONFLICT_PATH",
    "DEFAULT_PLACEHOLDER",
    "TRUE_VALUES",
    "InertiaConfig",
    "empty_dict_factory",
)

TRUE_VALUES = {"True", "true", "1", "yes", "Y", "T"}

DEFAULT_PLACEHOLDER = "{{DATA_PAGE}}"
DEFAULT_CONFLICT_PATH = "/inertia-rs/version-conflict"


def empty_dict_factory() -> dict[str, Any]:
    """Return an empty ``dict[str, Any]``.

    Returns:
        An empty dictionary.
    """
    return {}


def _version_from_env() -> "str | None":
    return os.getenv("INERTIA_VERSION") or None


@dataclass
class InertiaConfig:
    """Configuration for InertiaJS support.

    Attributes:
        root_template: Path of the HTML document served on first loads.
        placeholder: Token in the root template replaced by the page payload.
        version: Expected asset version enforced by the version guard middleware.
        version_resolver: Callable returning the current asset version for page payloads.
        conflict_path: Path the client is sent to when asset versions differ.
        register_conflict_route: Register a handler at ``conflict_path``.
        cache_template: Keep the root template in memory after the first read.
        component_opt_keys: Identifiers for getting inertia component from route opts.
        shared_props: Props shared with every page from process start.
    """

    root_template: "Path | str" = field(default_factory=lambda: os.getenv("INERTIA_ROOT_TEMPLATE", "index.html"))
    """Path of the root HTML template.

    The template must contain ``placeholder`` inside the ``data-page`` attribute of the
    root element, e.g. ``<div id="app" data-page="{{DATA_PAGE}}"></div>``.
    """
    placeholder: str = DEFAULT_PLACEHOLDER
    """Literal token replaced with the escaped page payload."""
    version: "str | None" = field(default_factory=_version_from_env)
    """Expected client asset version.

    When set, :class:`InertiaMiddleware <litestar_inertia.middleware.InertiaMiddleware>` is installed
    and rejects Inertia GET requests sent with any other ``X-Inertia-Version``.
    It also becomes the page version when ``version_resolver`` is not supplied.
    """
    version_resolver: "Callable[[], str] | None" = None
    """Zero-argument callable producing the current asset version.

    Called once per rendered page; it must be fast and free of side effects.
    """
    conflict_path: str = DEFAULT_CONFLICT_PATH
    """Location sent in ``X-Inertia-Location`` on a version conflict."""
    register_conflict_route: bool = True
    """Register a GET handler at ``conflict_path`` that redirects to the original page."""
    cache_template: bool = field(default_factory=lambda: os.getenv("INERTIA_CACHE_TEMPLATE", "False") in TRUE_VALUES)
    """Read the root template once instead of on every full page response."""
    component_opt_keys: "tuple[str, ...]" = ("component", "page")
    """Identifiers to use on routes to get the inertia component to render.

    The first key found in the route handler opts will be used.

    Example:
        # All equivalent:
        @get("/", component="Home")
        @get("/", page="Home")
    """
    shared_props: "dict[str, Any]" = field(default_factory=empty_dict_factory)
    """Props merged into every page response from process start."""

    def __post_init__(self) -> None:
        """Normalize the template path."""
        self.root_template = Path(self.root_template)
        if not self.conflict_path.startswith("/"):
            self.conflict_path = f"/{self.conflict_path}"

    @property
    def template_path(self) -> Path:
        """Return the root template as a :class:`~pathlib.Path`.

        Returns:
            The template path.
        """
        return Path(self.root_template)
