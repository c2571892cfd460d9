import itertools
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar, cast
from urllib.parse import quote, urlparse

from litestar import MediaType, Request, Response
from litestar.datastructures.cookie import Cookie
from litestar.exceptions import ImproperlyConfiguredException
from litestar.response import Redirect
from litestar.response.base import ASGIResponse
from litestar.serialization import get_serializer
from litestar.status_codes import HTTP_200_OK, HTTP_303_SEE_OTHER, HTTP_307_TEMPORARY_REDIRECT, HTTP_409_CONFLICT
from litestar.utils.helpers import get_enum_string_value

from litestar_inertia._utils import InertiaHeaders, get_headers
from litestar_inertia.exceptions import RootTemplateError
from litestar_inertia.helpers import filter_props
from litestar_inertia.request import InertiaDetails, InertiaRequest
from litestar_inertia.types import InertiaHeaderType, InertiaPage, PageProps

if TYPE_CHECKING:
    from litestar import Litestar
    from litestar.background_tasks import BackgroundTask, BackgroundTasks
    from litestar.connection.base import AuthT, StateT, UserT
    from litestar.types import ResponseCookies, ResponseHeaders, TypeEncodersMap

    from litestar_inertia.plugin import InertiaPlugin

__all__ = (
    "InertiaExternalRedirect",
    "InertiaRedirect",
    "InertiaResponse",
    "escape_page_attribute",
    "load_template",
    "render_html",
)

T = TypeVar("T")


def load_template(path: "Path | str") -> str:
    """Read the root HTML template.

    Args:
        path: The template path.

    Raises:
        RootTemplateError: If the file cannot be read.

    Returns:
        The template source.
    """
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise RootTemplateError(str(path)) from exc


def escape_page_attribute(page_json: str) -> str:
    """Escape serialized page JSON for a double-quoted HTML attribute.

    Returns:
        The JSON with every ``"`` replaced by ``&quot;``.
    """
    return page_json.replace('"', "&quot;")


def render_html(template: str, page_json: str, placeholder: str) -> str:
    """Substitute the page payload into the root template.

    Args:
        template: The root template source.
        page_json: The serialized page object.
        placeholder: The token to replace.

    Returns:
        The HTML document.
    """
    return template.replace(placeholder, escape_page_attribute(page_json))


def _get_redirect_url(request: "Request[Any, Any, Any]", url: str | None) -> str:
    """Return a safe redirect URL, falling back to base_url when invalid.

    Args:
        request: The request object.
        url: Candidate redirect URL.

    Returns:
        A safe redirect URL (same-origin absolute, or relative), otherwise the request base URL.
    """
    base_url = str(request.base_url)

    if not url:
        return base_url

    parsed = urlparse(url)
    base = urlparse(base_url)

    if not parsed.scheme and not parsed.netloc:
        return url

    if parsed.scheme not in {"http", "https"}:
        return base_url

    if parsed.netloc != base.netloc:
        return base_url

    return url


def _get_relative_url(request: "Request[Any, Any, Any]") -> str:
    """Return the relative URL including query string for Inertia page props.

    Args:
        request: The request object.

    Returns:
        The path with query string if present, e.g., ``/reports?page=1&status=active``.
    """
    path = request.url.path
    query = request.url.query
    return f"{path}?{query}" if query else path


def _get_inertia_plugin(request: "Request[Any, Any, Any]") -> "InertiaPlugin":
    try:
        return cast("InertiaPlugin", request.app.plugins.get("InertiaPlugin"))
    except KeyError as exc:
        msg = "InertiaResponse requires the InertiaPlugin to be registered on the application."
        raise ImproperlyConfiguredException(msg) from exc


class InertiaResponse(Response[T]):
    """Inertia Response.

    Content is an :class:`InertiaPage <litestar_inertia.types.InertiaPage>`, or any serializable value
    returned from a route handler that declares its component in the handler opts::

        @get("/", component="Home")
        async def home() -> dict[str, Any]:
            return {"greeting": "hello"}

    Anything else is sent as a regular response.
    """

    def __init__(
        self,
        content: T,
        *,
        template_path: "Path | str | None" = None,
        template_str: "str | None" = None,
        background: "BackgroundTask | BackgroundTasks | None" = None,
        cookies: "ResponseCookies | None" = None,
        encoding: "str" = "utf-8",
        headers: "ResponseHeaders | None" = None,
        media_type: "MediaType | str | None" = None,
        status_code: "int" = HTTP_200_OK,
        type_encoders: "TypeEncodersMap | None" = None,
    ) -> None:
        """Create an Inertia response.

        Args:
            content: The page to render, or a value for the response body.
            template_path: Root template to use instead of ``InertiaConfig.root_template``.
            template_str: Root template source, e.g. ``'<div id="app" data-page="{{DATA_PAGE}}"></div>'``.
            background: A :class:`BackgroundTask <.background_tasks.BackgroundTask>` instance or
                :class:`BackgroundTasks <.background_tasks.BackgroundTasks>` to execute after the response is finished.
                Defaults to ``None``.
            cookies: A list of :class:`Cookie <.datastructures.Cookie>` instances to be set under the response
                ``Set-Cookie`` header.
            encoding: Content encoding
            headers: A string keyed dictionary of response headers. Header keys are insensitive.
            media_type: A string or member of the :class:`MediaType <.enums.MediaType>` enum.
            status_code: A value for the response HTTP status code.
            type_encoders: A mapping of types to callables that transform them into types supported for serialization.

        Raises:
            ValueError: If both template_path and template_str are provided.
        """
        if template_path and template_str:
            msg = "Either template_path or template_str must be provided, not both."
            raise ValueError(msg)
        self.content = content
        self.background = background
        self.cookies: list[Cookie] = (
            [Cookie(key=key, value=value) for key, value in cookies.items()]
            if isinstance(cookies, Mapping)
            else list(cookies or [])
        )
        self.encoding = encoding
        self.headers: dict[str, Any] = (
            dict(headers) if isinstance(headers, Mapping) else {h.name: h.value for h in headers or {}}
        )
        self.media_type = media_type
        self.status_code = status_code
        self.response_type_encoders = {**(self.type_encoders or {}), **(type_encoders or {})}
        self.template_path = template_path
        self.template_str = template_str

    def _resolve_page(self, details: "InertiaDetails", inertia_plugin: "InertiaPlugin") -> "InertiaPage | None":
        """Return the page described by the response content.

        Returns:
            The page, or None when the content is not an Inertia page.
        """
        if isinstance(self.content, InertiaPage):
            return self.content
        component = details.route_component
        if component is None:
            return None
        return inertia_plugin.store.render(component, self.content)

    def _build_page_props(
        self,
        request: "Request[UserT, AuthT, StateT]",
        page: "InertiaPage",
        details: "InertiaDetails",
        version: str,
        is_inertia: bool,
    ) -> "PageProps":
        """Build the page object sent to the client.

        Partial reload filtering only applies to Inertia requests.

        Returns:
            The PageProps object.
        """
        props = page.props
        if is_inertia and details.is_partial_render(page.component):
            props = filter_props(props, only=details.partial_keys, except_=details.partial_except_keys)
        return PageProps(
            component=page.component,
            props=props,
            url=page.url if page.url is not None else _get_relative_url(request),
            version=version or None,
        )

    def _get_template(self, inertia_plugin: "InertiaPlugin") -> str:
        if self.template_str is not None:
            return self.template_str
        if self.template_path is not None:
            return load_template(self.template_path)
        return inertia_plugin.get_root_template()

    def to_asgi_response(
        self,
        app: "Litestar | None",
        request: "Request[UserT, AuthT, StateT]",
        *,
        background: "BackgroundTask | BackgroundTasks | None" = None,
        cookies: "Iterable[Cookie] | None" = None,
        encoded_headers: "Iterable[tuple[bytes, bytes]] | None" = None,
        headers: "dict[str, str] | None" = None,
        is_head_response: "bool" = False,
        media_type: "MediaType | str | None" = None,
        status_code: "int | None" = None,
        type_encoders: "TypeEncodersMap | None" = None,
    ) -> "ASGIResponse":
        headers = {**headers, **self.headers} if headers is not None else self.headers
        cookies = self.cookies if cookies is None else itertools.chain(self.cookies, cookies)
        type_encoders = (
            {**type_encoders, **(self.response_type_encoders or {})} if type_encoders else self.response_type_encoders
        )
        details = request.inertia if isinstance(request, InertiaRequest) else InertiaDetails(request)

        page: "InertiaPage | None" = None
        inertia_plugin: "InertiaPlugin | None" = None
        if isinstance(self.content, InertiaPage) or details.route_component is not None:
            inertia_plugin = _get_inertia_plugin(cast("Request[Any, Any, Any]", request))
            page = self._resolve_page(details, inertia_plugin)

        if page is None or inertia_plugin is None:
            resolved_media_type = get_enum_string_value(self.media_type or media_type or MediaType.JSON)
            return ASGIResponse(
                background=self.background or background,
                body=self.render(self.content, resolved_media_type, get_serializer(type_encoders)),
                cookies=cookies,
                encoded_headers=encoded_headers,
                encoding=self.encoding,
                headers=headers,
                is_head_response=is_head_response,
                media_type=resolved_media_type,
                status_code=self.status_code or status_code,
            )

        is_inertia = bool(details)
        page_props = self._build_page_props(
            request, page, details, inertia_plugin.store.get_version(), is_inertia=is_inertia
        )
        headers["Vary"] = "X-Inertia"

        if is_inertia:
            headers.update(
                get_headers(
                    InertiaHeaderType(
                        enabled=True,
                        error_bag=details.get_raw_header(InertiaHeaders.ERROR_BAG),
                        partial_component=details.get_raw_header(InertiaHeaders.PARTIAL_COMPONENT),
                        partial_data=details.get_raw_header(InertiaHeaders.PARTIAL_DATA),
                        partial_except=details.get_raw_header(InertiaHeaders.PARTIAL_EXCEPT),
                    )
                )
            )
            body = self.render(page_props.to_dict(), MediaType.JSON, get_serializer(type_encoders))
            return ASGIResponse(  # pyright: ignore[reportUnknownMemberType]
                background=self.background or background,
                body=body,
                cookies=cookies,
                encoded_headers=encoded_headers,
                encoding=self.encoding,
                headers=headers,
                is_head_response=is_head_response,
                media_type=MediaType.JSON,
                status_code=self.status_code or status_code,
            )

        page_json = self.render(page_props.to_dict(), MediaType.JSON, get_serializer(type_encoders)).decode()
        html = render_html(self._get_template(inertia_plugin), page_json, inertia_plugin.config.placeholder)
        return ASGIResponse(  # pyright: ignore[reportUnknownMemberType]
            background=self.background or background,
            body=html.encode(self.encoding),
            cookies=cookies,
            encoded_headers=encoded_headers,
            encoding=self.encoding,
            headers=headers,
            is_head_response=is_head_response,
            media_type=MediaType.HTML,
            status_code=self.status_code or status_code,
        )


class InertiaExternalRedirect(Response[Any]):
    """External redirect via Inertia protocol (409 + X-Inertia-Location).

    This response type triggers a client-side hard redirect in Inertia.js. It is also what
    the version guard sends on an asset version conflict; clients cannot tell the two apart.

    Note:
        Request cookies are intentionally NOT passed to the response to prevent
        cookie leakage in redirect responses.
    """

    def __init__(self, request: "Request[Any, Any, Any]", redirect_to: "str", **kwargs: "Any") -> None:
        """Initialize external redirect with 409 status and X-Inertia-Location header.

        Args:
            request: The request object.
            redirect_to: The URL to redirect to (can be external).
            **kwargs: Additional keyword arguments passed to the Response constructor.
        """
        super().__init__(
            content=b"",
            status_code=HTTP_409_CONFLICT,
            headers=get_headers(InertiaHeaderType(location=quote(redirect_to, safe="/#%[]=:;$&()+,!?*@'~"))),
            **kwargs,
        )


class InertiaRedirect(Redirect):
    """Redirect to a specified URL with same-origin validation.

    This class validates the redirect URL to prevent open redirect attacks.
    If the URL is not same-origin, it falls back to the application's base URL.
    """

    def __init__(self, request: "Request[Any, Any, Any]", redirect_to: "str", **kwargs: "Any") -> None:
        """Initialize redirect with safe URL validation.

        Args:
            request: The request object.
            redirect_to: The URL to redirect to. Must be same-origin or relative.
            **kwargs: Additional keyword arguments passed to the Redirect constructor.
        """
        safe_url = _get_redirect_url(request, redirect_to)
        super().__init__(  # pyright: ignore[reportUnknownMemberType]
            path=safe_url,
            status_code=HTTP_307_TEMPORARY_REDIRECT if request.method == "GET" else HTTP_303_SEE_OTHER,
            **kwargs,
        )
