"""Shared type aliases used across treeroute modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Error handler: receives (request, error?) and returns a response value
ErrorHandler: TypeAlias = Callable[..., Any]
