from collections.abc import Generator
from pathlib import Path

import pytest

from litestar_inertia.config import InertiaConfig
from litestar_inertia.plugin import InertiaPlugin

ROOT_TEMPLATE = """<!DOCTYPE html>
<html>
  <head><title>Inertia</title></head>
  <body>
    <div id="app" data-page="{{DATA_PAGE}}"></div>
  </body>
</html>
"""

# Environment variables that may affect test behavior - clear before each test
_INERTIA_ENV_VARS = [
    "INERTIA_ROOT_TEMPLATE",
    "INERTIA_VERSION",
    "INERTIA_CACHE_TEMPLATE",
]


@pytest.fixture(autouse=True)
def clean_inertia_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Clear Inertia-related environment variables before each test for isolation."""
    for var in _INERTIA_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    yield


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def root_template(tmp_path: Path) -> Generator[Path, None, None]:
    template = tmp_path / "index.html"
    template.write_text(ROOT_TEMPLATE, encoding="utf-8")
    yield template


@pytest.fixture
def inertia_config(root_template: Path) -> Generator[InertiaConfig, None, None]:
    yield InertiaConfig(root_template=root_template)


@pytest.fixture
def inertia_plugin(inertia_config: InertiaConfig) -> Generator[InertiaPlugin, None, None]:
    yield InertiaPlugin(config=inertia_config)


@pytest.fixture
def versioned_plugin(root_template: Path) -> Generator[InertiaPlugin, None, None]:
    yield InertiaPlugin(config=InertiaConfig(root_template=root_template, version="example-version"))
