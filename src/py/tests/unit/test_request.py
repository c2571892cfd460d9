from typing import Any

from litestar import get
from litestar.testing import create_test_client  # pyright: ignore[reportUnknownVariableType]

from litestar_inertia import InertiaHeaders, InertiaPlugin, InertiaRequest


@get("/details")
async def details(request: InertiaRequest) -> "dict[str, Any]":
    return {
        "is_inertia": request.is_inertia,
        "inertia_enabled": request.inertia_enabled,
        "partial_component": request.inertia.partial_component,
        "partial_keys": request.partial_keys,
        "partial_except_keys": request.partial_except_keys,
        "error_bag": request.error_bag,
        "version": request.inertia_version,
    }


def test_plain_request_has_no_inertia_details(inertia_plugin: InertiaPlugin) -> None:
    with create_test_client(route_handlers=[details], plugins=[inertia_plugin]) as client:
        assert client.get("/details").json() == {
            "is_inertia": False,
            "inertia_enabled": False,
            "partial_component": None,
            "partial_keys": [],
            "partial_except_keys": [],
            "error_bag": None,
            "version": None,
        }


def test_inertia_headers_are_parsed(inertia_plugin: InertiaPlugin) -> None:
    with create_test_client(route_handlers=[details], plugins=[inertia_plugin]) as client:
        response = client.get(
            "/details",
            headers={
                InertiaHeaders.ENABLED.value: "True",
                InertiaHeaders.VERSION.value: "abc123",
                InertiaHeaders.PARTIAL_COMPONENT.value: "Users/Index",
                InertiaHeaders.PARTIAL_DATA.value: " users , ,filters",
                InertiaHeaders.PARTIAL_EXCEPT.value: "stats",
                InertiaHeaders.ERROR_BAG.value: "createUser",
            },
        )

        assert response.json() == {
            "is_inertia": True,
            "inertia_enabled": False,
            "partial_component": "Users/Index",
            "partial_keys": ["users", "filters"],
            "partial_except_keys": ["stats"],
            "error_bag": "createUser",
            "version": "abc123",
        }


def test_non_true_marker_is_not_inertia(inertia_plugin: InertiaPlugin) -> None:
    with create_test_client(route_handlers=[details], plugins=[inertia_plugin]) as client:
        assert client.get("/details", headers={InertiaHeaders.ENABLED.value: "false"}).json()["is_inertia"] is False
        assert client.get("/details", headers={InertiaHeaders.ENABLED.value: ""}).json()["is_inertia"] is False


def test_uri_encoded_header_is_unquoted(inertia_plugin: InertiaPlugin) -> None:
    with create_test_client(route_handlers=[details], plugins=[inertia_plugin]) as client:
        response = client.get(
            "/details",
            headers={
                InertiaHeaders.PARTIAL_DATA.value: "first%2Csecond",
                f"{InertiaHeaders.PARTIAL_DATA.value}-Uri-Autoencoded": "true",
            },
        )

        assert response.json()["partial_keys"] == ["first", "second"]


def test_is_partial_render(inertia_plugin: InertiaPlugin) -> None:
    @get("/partial")
    async def partial(request: InertiaRequest) -> "dict[str, bool]":
        return {
            "users": request.inertia.is_partial_render("Users/Index"),
            "posts": request.inertia.is_partial_render("Posts/Index"),
        }

    with create_test_client(route_handlers=[partial], plugins=[inertia_plugin]) as client:
        response = client.get(
            "/partial",
            headers={
                InertiaHeaders.ENABLED.value: "true",
                InertiaHeaders.PARTIAL_COMPONENT.value: "Users/Index",
                InertiaHeaders.PARTIAL_DATA.value: "users",
            },
        )
        assert response.json() == {"users": True, "posts": False}

        response = client.get("/partial", headers={InertiaHeaders.ENABLED.value: "true"})
        assert response.json() == {"users": False, "posts": False}
