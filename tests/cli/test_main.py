"""Tests for the classdiff command."""

from __future__ import annotations

import io
import json
import logging
import os
import zipfile
from collections.abc import Callable, Generator
from pathlib import Path

import httpx
import pygit2
import pytest
from click.testing import CliRunner

from classdiff.cli import main
from classdiff.cli.main import cli
from classdiff.git import RepoAccess

runner = CliRunner()

METADATA = b"""<metadata><versioning><versions>
<version>1.1</version><version>1.0</version><version>1.2</version>
</versions></versioning></metadata>"""


def _jar(entries: dict[str, bytes]) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for name, data in entries.items():
            zf.writestr(name, data)
    return buf.getvalue()


JARS = {
    "lib-1.0.jar": _jar({"org/example/A.class": b"a1"}),
    "lib-1.1.jar": _jar({"org/example/A.class": b"a1", "META-INF/MANIFEST.MF": b"x"}),
    "lib-1.2.jar": _jar({"org/example/A.class": b"a2", "org/example/B.class": b"b"}),
}


def _maven_handler(jars: dict[str, bytes]) -> Callable[[httpx.Request], httpx.Response]:
    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path.endswith("maven-metadata.xml"):
            return httpx.Response(200, content=METADATA)
        if path.endswith("/org/example/"):
            return httpx.Response(
                200,
                text='<a href="lib-core/">lib-core/</a>\n<a href="lib-api/">lib-api/</a>\n',
            )
        name = path.rsplit("/", 1)[-1]
        if name in jars:
            return httpx.Response(200, content=jars[name])
        return httpx.Response(404)

    return handler


@pytest.fixture(autouse=True)
def _isolated_logging(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    for key in list(os.environ):
        if key.upper().startswith("CLASSDIFF__"):
            monkeypatch.delenv(key)
    yield
    logging.getLogger().handlers.clear()


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(
        f"maven:\n  local_repository: {tmp_path / 'm2'}\n"
        f"git:\n  cache_dir: {tmp_path / 'mirrors'}\n"
    )
    return path


def _use_transport(
    monkeypatch: pytest.MonkeyPatch,
    handler: Callable[[httpx.Request], httpx.Response],
) -> None:
    original = main.MavenRepository

    def factory(*args: object, **kwargs: object) -> main.MavenRepository:
        kwargs["client"] = httpx.Client(transport=httpx.MockTransport(handler))
        return original(*args, **kwargs)  # type: ignore[arg-type]

    monkeypatch.setattr(main, "MavenRepository", factory)


class TestMavenMode:
    def test_reports_compacted_transition(
        self, monkeypatch: pytest.MonkeyPatch, config_file: Path
    ) -> None:
        _use_transport(monkeypatch, _maven_handler(JARS))

        result = runner.invoke(cli, ["org.example:lib", "--config", str(config_file)])

        assert result.exit_code == 0, result.output
        lines = result.stdout.splitlines()
        assert "Comparing 3 versions" in lines
        assert "===== 1.0  ->  1.2 =====" in lines
        assert "===== 1.0  ->  1.1 =====" not in lines
        assert "[ADDED] 1" in lines
        assert "  + org.example.B" in lines
        assert "[MODIFIED] 1" in lines
        assert "  * org.example.A" not in lines

    def test_full_lists_modified(self, monkeypatch: pytest.MonkeyPatch, config_file: Path) -> None:
        _use_transport(monkeypatch, _maven_handler(JARS))

        result = runner.invoke(cli, ["org.example:lib", "-f", "--config", str(config_file)])

        assert result.exit_code == 0, result.output
        assert "  * org.example.A" in result.stdout.splitlines()

    def test_json_output(self, monkeypatch: pytest.MonkeyPatch, config_file: Path) -> None:
        _use_transport(monkeypatch, _maven_handler(JARS))

        result = runner.invoke(cli, ["org.example:lib", "--json", "--config", str(config_file)])

        assert result.exit_code == 0, result.output
        objects = [json.loads(line) for line in result.stdout.splitlines() if line]
        assert objects == [
            {
                "from": "1.0",
                "to": "1.2",
                "added": ["org.example.B"],
                "removed": [],
                "modified": ["org.example.A"],
            }
        ]
        assert "Comparing 3 versions" in result.stderr

    def test_range_too_narrow(self, monkeypatch: pytest.MonkeyPatch, config_file: Path) -> None:
        _use_transport(monkeypatch, _maven_handler(JARS))

        result = runner.invoke(
            cli, ["org.example:lib", "1.2", "--config", str(config_file)]
        )

        assert result.exit_code == 0, result.output
        assert "Need at least 2 versions" in result.stdout
        assert "Available versions: 1.0 to 1.2" in result.stdout

    def test_range_bounds(self, monkeypatch: pytest.MonkeyPatch, config_file: Path) -> None:
        _use_transport(monkeypatch, _maven_handler(JARS))

        result = runner.invoke(
            cli, ["org.example:lib", "1.0", "1.1", "--config", str(config_file)]
        )

        assert result.exit_code == 0, result.output
        assert "Comparing 2 versions" in result.stdout
        assert "=====" not in result.stdout

    def test_unknown_artifact(self, monkeypatch: pytest.MonkeyPatch, config_file: Path) -> None:
        _use_transport(monkeypatch, lambda _: httpx.Response(404))

        result = runner.invoke(cli, ["org.example:nothing", "--config", str(config_file)])

        assert result.exit_code == 1
        assert "FETCH_NOT_FOUND" in result.output

    def test_no_archives_suggests_submodules(
        self, monkeypatch: pytest.MonkeyPatch, config_file: Path
    ) -> None:
        _use_transport(monkeypatch, _maven_handler({}))

        result = runner.invoke(cli, ["org.example:lib", "--config", str(config_file)])

        assert result.exit_code == 0, result.output
        assert "No JAR files found. Checking for sub-modules..." in result.stdout
        assert "Found 2 sub-modules:" in result.stdout
        assert "  1. lib-api" in result.stdout
        assert "  classdiff org.example/lib-api" in result.stdout

    def test_missing_second_archive_is_skipped(
        self, monkeypatch: pytest.MonkeyPatch, config_file: Path
    ) -> None:
        jars = {name: data for name, data in JARS.items() if name != "lib-1.1.jar"}
        _use_transport(monkeypatch, _maven_handler(jars))

        result = runner.invoke(cli, ["org.example:lib", "--config", str(config_file)])

        assert result.exit_code == 0, result.output
        assert "===== 1.0  ->  1.2 =====" in result.stdout.splitlines()
        assert "sub-modules" not in result.stdout

    def test_archives_are_cached(
        self, monkeypatch: pytest.MonkeyPatch, config_file: Path, tmp_path: Path
    ) -> None:
        _use_transport(monkeypatch, _maven_handler(JARS))

        runner.invoke(cli, ["org.example:lib", "--config", str(config_file)])

        cached = tmp_path / "m2" / "org" / "example" / "lib" / "1.2" / "lib-1.2.jar"
        assert cached.read_bytes() == JARS["lib-1.2.jar"]


class TestTagMode:
    def test_reports_grouped_transition(
        self, tagged_repo: pygit2.Repository, config_file: Path, tmp_path: Path
    ) -> None:
        mirror_dir = tmp_path / "mirrors" / "acme-lib" / "repo"
        mirror_dir.parent.mkdir(parents=True)
        RepoAccess.clone_bare(tagged_repo.workdir, mirror_dir)

        result = runner.invoke(cli, ["acme/lib", "--config", str(config_file)])

        assert result.exit_code == 0, result.output
        lines = result.stdout.splitlines()
        assert "Comparing 3 tags" in lines
        assert "===== v1.0  ->  v2.0 =====" in lines
        assert "  + org.example.B" in lines


class TestConfigErrors:
    def test_invalid_config_file(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.yaml"
        bad.write_text("report:\n  flat_limit: -1\n")

        result = runner.invoke(cli, ["org.example:lib", "--config", str(bad)])

        assert result.exit_code == 1
        assert "CONFIG_INVALID_VALUE" in result.output

    def test_unusable_cache(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("x")
        config = tmp_path / "config.yaml"
        config.write_text(f"maven:\n  local_repository: {blocker}\n")

        result = runner.invoke(cli, ["org.example:lib", "--config", str(config)])

        assert result.exit_code == 1
        assert "CONFIG_CACHE_UNUSABLE" in result.output

    def test_missing_config_file(self, tmp_path: Path) -> None:
        result = runner.invoke(
            cli, ["org.example:lib", "--config", str(tmp_path / "typo.yaml")]
        )

        assert result.exit_code == 2
        assert "does not exist" in result.output

    def test_failure_points_at_log_file(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        log_file = tmp_path / "logs" / "classdiff.log"
        config = tmp_path / "config.yaml"
        config.write_text(
            f"maven:\n  local_repository: {tmp_path / 'm2'}\n"
            "logging:\n  outputs:\n"
            f"    - format: json\n      destination: {log_file}\n"
        )
        _use_transport(monkeypatch, lambda _: httpx.Response(404))

        result = runner.invoke(cli, ["org.example:nothing", "--config", str(config)])

        assert result.exit_code == 1
        assert f"See {log_file} for details." in result.output
        assert "run_failed" in log_file.read_text()
