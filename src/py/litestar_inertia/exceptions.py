"""Litestar-Inertia exception classes."""

from litestar.exceptions import ImproperlyConfiguredException

__all__ = (
    "LitestarInertiaError",
    "RootTemplateError",
    "VersionResolverError",
)


class LitestarInertiaError(Exception):
    """Base exception for Litestar-Inertia related errors."""


class RootTemplateError(LitestarInertiaError, ImproperlyConfiguredException):
    """Raised when the root HTML template cannot be read."""

    def __init__(self, template_path: str) -> None:
        """Initialize the exception.

        Args:
            template_path: The path of the template that failed to load.
        """
        self.template_path = template_path
        super().__init__(
            f"Inertia root template could not be read from {template_path!r}. "
            "Check InertiaConfig.root_template or the INERTIA_ROOT_TEMPLATE environment variable."
        )


class VersionResolverError(LitestarInertiaError, ImproperlyConfiguredException):
    """Raised when the configured asset version resolver fails."""
