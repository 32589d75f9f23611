"""Fixtures for the example apps.

Every example directory holds an ``app.py`` that builds a module-level
``router``. Tests get a freshly executed copy per test, so state kept
in the app (the auth example's note store) never leaks between tests.
"""

import importlib.util
from pathlib import Path
from types import ModuleType

import pytest


def _load_app(directory: Path) -> ModuleType:
    location = directory / "app.py"
    loader_spec = importlib.util.spec_from_file_location(f"waymark_example_{directory.name}", location)
    if loader_spec is None or loader_spec.loader is None:
        msg = f"Cannot load example app from {location}"
        raise ImportError(msg)
    module = importlib.util.module_from_spec(loader_spec)
    loader_spec.loader.exec_module(module)
    return module


@pytest.fixture
def example_module(request: pytest.FixtureRequest) -> ModuleType:
    """The ``app.py`` next to the requesting test, executed from scratch."""
    return _load_app(Path(request.path).parent)


@pytest.fixture
def example_router(example_module: ModuleType):
    return example_module.router
