"""Pytest fixtures for the treeroute examples.

``example_app`` executes the ``app.py`` beside the requesting test with
:func:`treeroute.routing.load_module`, the same loader route files go
through. Every test gets a new module, so a new App and a fresh mount.
"""

from pathlib import Path

import pytest

from treeroute import App
from treeroute.routing import load_module


@pytest.fixture
def example_app(request: pytest.FixtureRequest) -> App:
    """The ``app`` object defined by the example's ``app.py``."""
    module = load_module(Path(request.path).parent / "app.py")
    app = getattr(module, "app", None)
    assert isinstance(app, App), f"{module.__file__} does not define an App named 'app'"
    return app
