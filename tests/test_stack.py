"""Tests for treeroute.middleware.stack: mount-path layers."""

import pytest

from treeroute.errors import InvalidPathError
from treeroute.middleware.stack import Layer, MiddlewareStack, normalize_mount_path


def _noop(request, response, next):
    return response


class TestNormalizeMountPath:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("", "/"),
            ("/", "/"),
            ("users", "/users"),
            ("/users/", "/users"),
            ("//a//b", "/a/b"),
        ],
    )
    def test_normalization(self, raw: str, expected: str) -> None:
        assert normalize_mount_path(raw) == expected

    def test_rejects_non_str(self) -> None:
        with pytest.raises(InvalidPathError, match="Mount path must be a string"):
            normalize_mount_path(None)  # type: ignore[arg-type]


class TestLayerMatching:
    def test_root_matches_everything(self) -> None:
        layer = Layer("/", _noop)
        assert layer.matches("/")
        assert layer.matches("/anything/at/all")

    def test_exact_and_nested(self) -> None:
        layer = Layer("/users", _noop)
        assert layer.matches("/users")
        assert layer.matches("/users/")
        assert layer.matches("/users/42/posts")

    def test_segment_boundary(self) -> None:
        layer = Layer("/users", _noop)
        assert not layer.matches("/usersettings")
        assert not layer.matches("/")
        assert not layer.matches("/admin/users")


class TestMiddlewareStack:
    def test_use_appends_in_order(self) -> None:
        stack = MiddlewareStack()
        first = stack.use("/", _noop)
        second = stack.use("users", _noop)
        assert stack.layers == (first, second)
        assert second.path == "/users"
        assert len(stack) == 2

    def test_matching_keeps_registration_order(self) -> None:
        stack = MiddlewareStack()
        stack.use("/users/profile", _noop)
        stack.use("/", _noop)
        stack.use("/users", _noop)
        stack.use("/admin", _noop)
        paths = [layer.path for layer in stack.matching("/users/profile")]
        assert paths == ["/users/profile", "/", "/users"]

    def test_same_path_twice(self) -> None:
        stack = MiddlewareStack()
        stack.use("/docs", _noop)
        stack.use("/docs", _noop)
        assert len(stack.matching("/docs")) == 2

    def test_layers_snapshot_is_immutable(self) -> None:
        stack = MiddlewareStack()
        snapshot = stack.layers
        stack.use("/", _noop)
        assert snapshot == ()
