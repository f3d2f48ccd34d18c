"""Tests for the treeroute CLI: argument parsing, route listing, run."""

from pathlib import Path

import pytest

from tests.conftest import route_source
from treeroute.app import App
from treeroute.cli import main


class TestMain:
    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "treeroute" in capsys.readouterr().out

    def test_missing_directory_argument(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes"])
        assert exc_info.value.code == 2

    def test_unknown_log_level(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["run", str(tmp_path), "--log-level", "loud"])
        assert exc_info.value.code == 2


class TestRoutesCommand:
    def test_lists_routes_in_mount_order(
        self, make_tree, capsys: pytest.CaptureFixture[str]
    ) -> None:
        root = make_tree(
            {
                "index.py": route_source("home"),
                "users/index.py": route_source("users"),
                "users/profile.py": route_source("profile"),
                "_helpers.py": "",
            }
        )
        main(["routes", str(root)])
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].split() == ["ROUTE", "SOURCE"]
        rows = [line.split() for line in lines[2:]]
        assert rows == [
            ["/", "index.py"],
            ["/users", "users/index.py"],
            ["/users/profile", "users/profile.py"],
        ]

    def test_empty_directory(self, make_tree, capsys: pytest.CaptureFixture[str]) -> None:
        root = make_tree({"README.md": "docs"})
        main(["routes", str(root)])
        assert capsys.readouterr().out.strip() == "No routes found."

    def test_missing_directory(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", str(tmp_path / "absent")])
        assert exc_info.value.code == 1
        assert "routes directory not found" in capsys.readouterr().err

    def test_custom_index_name(self, make_tree, capsys: pytest.CaptureFixture[str]) -> None:
        root = make_tree({"main.py": "", "docs/main.py": ""})
        main(["routes", str(root), "--index-name", "main"])
        out = capsys.readouterr().out
        assert "/docs" in out
        assert "/docs/main" not in out

    def test_invalid_handler_name(self, make_tree, capsys: pytest.CaptureFixture[str]) -> None:
        root = make_tree({"index.py": ""})
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", str(root), "--handler", "not-valid"])
        assert exc_info.value.code == 1
        assert "handler_name" in capsys.readouterr().err

    def test_load_reports_status(self, make_tree, capsys: pytest.CaptureFixture[str]) -> None:
        root = make_tree({"index.py": route_source("home"), "util.py": "X = 1\n"})
        main(["routes", str(root), "--load"])
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].split() == ["ROUTE", "SOURCE", "STATUS"]
        statuses = {line.split()[0]: line.split()[2] for line in lines[2:]}
        assert statuses == {"/": "ok", "/util": "skipped"}

    def test_load_failure_exits_1(self, make_tree, capsys: pytest.CaptureFixture[str]) -> None:
        root = make_tree({"index.py": route_source("home"), "bad.py": "def handler(:\n"})
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", str(root), "--load"])
        assert exc_info.value.code == 1
        assert "error: SyntaxError" in capsys.readouterr().out


class TestRunCommand:
    @pytest.fixture
    def served(self, monkeypatch: pytest.MonkeyPatch) -> list[App]:
        apps: list[App] = []
        monkeypatch.setattr(App, "run", lambda self, host=None, port=None: apps.append(self))
        return apps

    def test_eager_by_default(self, make_tree, served: list[App]) -> None:
        root = make_tree({"index.py": route_source("home")})
        main(["run", str(root), "--port", "9000"])
        (app,) = served
        assert app.config.port == 9000
        assert [m.mode.value for m in app.routes] == ["eager"]

    def test_watch_mounts_deferred(self, make_tree, served: list[App]) -> None:
        root = make_tree({"index.py": route_source("home"), "bad.py": "def handler(:\n"})
        main(["run", str(root), "--watch", "--debug"])
        (app,) = served
        assert app.config.debug is True
        assert [m.mode.value for m in app.routes] == ["deferred", "deferred"]

    def test_broken_module_exits_1(
        self, make_tree, served: list[App], capsys: pytest.CaptureFixture[str]
    ) -> None:
        root = make_tree({"bad.py": "def handler(:\n"})
        with pytest.raises(SystemExit) as exc_info:
            main(["run", str(root)])
        assert exc_info.value.code == 1
        assert "Failed to load route module" in capsys.readouterr().err
        assert served == []

    def test_missing_directory_still_serves(self, tmp_path: Path, served: list[App]) -> None:
        main(["run", str(tmp_path / "absent")])
        (app,) = served
        assert app.routes == ()
