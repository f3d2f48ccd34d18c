"""Shared fixtures for treeroute tests.

``make_tree`` writes a routes directory from a ``{relative path: source}``
mapping; ``route_source`` renders a handler module that answers only for
its own mount path and passes everything below it to ``next()``.
"""

import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest


def route_source(body: str) -> str:
    """Source of a route module whose handler answers *body* at its own path."""
    return textwrap.dedent(
        f"""
        async def handler(request, response, next):
            if request.relative_path != "/":
                return await next()
            return response.with_body({body!r})
        """
    )


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Return a factory that builds ``tmp_path / "routes"`` from a mapping."""

    def build(files: dict[str, str], root_name: str = "routes") -> Path:
        root = tmp_path / root_name
        root.mkdir(exist_ok=True)
        for relative, source in files.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(source, encoding="utf-8")
        return root

    return build
