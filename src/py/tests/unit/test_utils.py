import pytest

from litestar_inertia._utils import InertiaHeaders, get_headers
from litestar_inertia.types import InertiaHeaderType


def test_get_headers() -> None:
    headers = get_headers(
        InertiaHeaderType(
            enabled=True,
            error_bag="login",
            partial_component="Users/Index",
            partial_data="users",
            partial_except=None,
        )
    )

    assert headers == {
        InertiaHeaders.ENABLED.value: "true",
        InertiaHeaders.ERROR_BAG.value: "login",
        InertiaHeaders.PARTIAL_COMPONENT.value: "Users/Index",
        InertiaHeaders.PARTIAL_DATA.value: "users",
    }


def test_get_location_header() -> None:
    assert get_headers(InertiaHeaderType(location="/login")) == {"X-Inertia-Location": "/login"}


def test_get_headers_requires_values() -> None:
    with pytest.raises(ValueError, match="cannot be None"):
        get_headers(InertiaHeaderType())


def test_protocol_header_names() -> None:
    assert {header.value for header in InertiaHeaders} == {
        "X-Inertia",
        "X-Inertia-Version",
        "X-Inertia-Location",
        "X-Inertia-Partial-Data",
        "X-Inertia-Partial-Component",
        "X-Inertia-Partial-Except",
        "X-Inertia-Error-Bag",
    }
