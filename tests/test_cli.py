"""Tests for force10.cli — argument parsing, source resolution, commands."""

from collections.abc import Callable
from pathlib import Path

import pytest

from force10.cli import main
from force10.cli._resolve import resolve_source
from force10.errors import AppResolutionError
from force10.routing import Router

APP_MODULE = '''
from force10.routing import Router

router = Router()
router.get("/", lambda: Inertia.render("Welcome"))
router.page("/users/{user}", "Users/Show", middleware=("web", "auth"))
router.page("/admin", "Admin/Index")
router.post("/users")


class App:
    def __init__(self):
        self.router = router


app = App()


def create_router():
    return router


def broken_factory():
    raise RuntimeError("boom")


not_a_router = "just a string"
'''


@pytest.fixture
def project(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    write_module: Callable[[str, str], Path],
) -> Path:
    write_module("demo_routes", APP_MODULE)
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("FORCE10_ENABLED", raising=False)
    return tmp_path


class TestCLIHelp:
    def test_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0

    def test_generate_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["generate", "--help"])
        assert exc_info.value.code == 0

    def test_routes_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "--help"])
        assert exc_info.value.code == 0


class TestCLIMissingArgs:
    def test_generate_missing_app(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["generate"])
        assert exc_info.value.code == 2

    def test_routes_missing_app(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes"])
        assert exc_info.value.code == 2


class TestCLINoCommand:
    def test_no_command_exits_zero(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "force10" in capsys.readouterr().out


@pytest.mark.usefixtures("project")
class TestResolveSource:
    def test_router_attribute(self) -> None:
        assert isinstance(resolve_source("demo_routes:router"), Router)

    def test_default_attribute(self) -> None:
        """Omitting :attr defaults to 'router'."""
        assert isinstance(resolve_source("demo_routes"), Router)

    def test_app_with_router(self) -> None:
        assert isinstance(resolve_source("demo_routes:app"), Router)

    def test_factory(self) -> None:
        assert isinstance(resolve_source("demo_routes:create_router"), Router)

    def test_missing_module(self) -> None:
        with pytest.raises(AppResolutionError, match="Could not import"):
            resolve_source("nonexistent_module_xyz:router")

    def test_missing_attribute(self) -> None:
        with pytest.raises(AppResolutionError, match="Could not import"):
            resolve_source("demo_routes:does_not_exist")

    def test_wrong_type(self) -> None:
        with pytest.raises(AppResolutionError, match="not a route source"):
            resolve_source("demo_routes:not_a_router")

    def test_failing_factory(self) -> None:
        with pytest.raises(AppResolutionError, match="raised an error"):
            resolve_source("demo_routes:broken_factory")


class TestGenerateCommand:
    def test_writes_default_path(
        self, project: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main(["generate", "demo_routes:router"])
        manifest = project / "resources" / "js" / "force10-manifest.ts"
        text = manifest.read_text()
        assert "component: 'Users/Show'" in text
        assert "Wrote 3 routes" in capsys.readouterr().out

    def test_path_option(self, project: Path) -> None:
        main(["generate", "demo_routes:app", "--path", "out/routes.ts"])
        assert (project / "out" / "routes.ts").is_file()

    def test_config_filter_and_verbose(
        self, project: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        (project / "pyproject.toml").write_text(
            '[tool.force10.routes]\nexclude = ["admin*"]\n'
        )
        main(["generate", "demo_routes:router", "-v"])
        out = capsys.readouterr().out
        assert "+ users/{user} -> Users/Show" in out
        assert "- admin (Excluded by config filter)" in out
        assert "Wrote 2 routes" in out

    def test_disabled(
        self,
        project: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setenv("FORCE10_ENABLED", "false")
        main(["generate", "demo_routes:router"])
        assert "disabled" in capsys.readouterr().out
        assert not (project / "resources").exists()

    @pytest.mark.usefixtures("project")
    def test_unresolvable_app_exits_one(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["generate", "nonexistent_module_xyz:router"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err


@pytest.mark.usefixtures("project")
class TestRoutesCommand:
    def test_table(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "demo_routes:router"])
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].split() == ["METHOD", "PATTERN", "COMPONENT"]
        assert any("/users/:user" in line and "Users/Show" in line for line in lines)
        assert not any("POST" in line for line in lines)

    def test_unresolvable_app_exits_one(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "nonexistent_module_xyz"])
        assert exc_info.value.code == 1
