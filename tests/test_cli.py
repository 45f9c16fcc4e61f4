"""
Tests for CLI commands — inject, wire, files, and global options.
"""

import json
import textwrap
from pathlib import Path

from click.testing import CliRunner

from scaffoldkit.main import cli

from go_sources import MAIN_GO


class TestCLIGlobal:
    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "inject" in result.output
        assert "wire" in result.output
        assert "files" in result.output

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_invalid_config(self, go_project: Path):
        (go_project / "scaffold.yml").write_text("- not\n- a mapping\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["--root", str(go_project), "inject", "markers", "cmd/web/main.go"])
        assert result.exit_code == 1


class TestInjectCommands:
    def test_markers_json(self, go_project: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["--root", str(go_project), "inject", "markers", "cmd/web/main.go", "--json"]
        )
        assert result.exit_code == 0
        names = [m["name"] for m in json.loads(result.output)]
        assert names[:2] == ["MCP:IMPORTS:START", "MCP:IMPORTS:END"]
        assert "MCP:ROUTES:ADMIN:END" in names

    def test_between_saves(self, go_project: Path):
        runner = CliRunner()
        args = [
            "--root", str(go_project), "inject", "between", "cmd/web/main.go",
            "MCP:REPOS:START", "MCP:REPOS:END", "-f", "fooRepo := foorepo.NewRepository(db)",
        ]
        result = runner.invoke(cli, args)
        assert result.exit_code == 0
        main = (go_project / "cmd/web/main.go").read_text()
        assert "\tfooRepo := foorepo.NewRepository(db)\n\t// MCP:REPOS:END" in main

        again = runner.invoke(cli, [*args, "--json"])
        assert again.exit_code == 0
        assert json.loads(again.output)["changed"] is False

    def test_between_reads_stdin(self, go_project: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["--root", str(go_project), "inject", "between", "cmd/web/main.go",
             "MCP:SERVICES:START", "MCP:SERVICES:END"],
            input="a := 1\nb := 2\n",
        )
        assert result.exit_code == 0
        assert "\ta := 1\n\tb := 2\n\t// MCP:SERVICES:END" in (go_project / "cmd/web/main.go").read_text()

    def test_dry_run_does_not_save(self, go_project: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["--root", str(go_project), "inject", "after", "cmd/web/main.go",
             "MCP:REPOS:START", "-f", "x := 1", "--dry-run", "--json"],
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["changed"] is True
        assert data["dry_run"] is True
        assert (go_project / "cmd/web/main.go").read_text() == MAIN_GO

    def test_reversed_markers_fail(self, go_project: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["--root", str(go_project), "inject", "between", "cmd/web/main.go",
             "MCP:REPOS:END", "MCP:REPOS:START", "-f", "x", "--json"],
        )
        assert result.exit_code == 1
        assert "must come before" in json.loads(result.output)["error"]
        assert (go_project / "cmd/web/main.go").read_text() == MAIN_GO

    def test_missing_marker_fails(self, go_project: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["--root", str(go_project), "inject", "before", "cmd/web/main.go", "NOPE", "-f", "x"],
        )
        assert result.exit_code == 1
        assert "marker not found: NOPE" in result.output

    def test_replace(self, go_project: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["--root", str(go_project), "inject", "replace", "cmd/web/main.go",
             "MCP:CONTROLLERS:START", "MCP:CONTROLLERS:END", "-f", "c := 1"],
        )
        assert result.exit_code == 0
        assert "\t// MCP:CONTROLLERS:START\n\tc := 1\n\t// MCP:CONTROLLERS:END" in (
            go_project / "cmd/web/main.go"
        ).read_text()

    def test_import(self, go_project: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["--root", str(go_project), "inject", "import", "cmd/web/main.go", "os"],
        )
        assert result.exit_code == 0
        assert '\t"os"\n\t// MCP:IMPORTS:END' in (go_project / "cmd/web/main.go").read_text()

    def test_missing_file(self, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["--root", str(tmp_path), "inject", "markers", "nope.go", "--json"]
        )
        assert result.exit_code == 1
        assert json.loads(result.output)["ok"] is False


class TestWireCommands:
    def test_wire_domain(self, go_project: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["--root", str(go_project), "wire", "domain", "product", "--group", "admin", "--json"],
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["success"] is True
        assert "cmd/web/main.go" in data["files_updated"]
        assert (go_project / ".scaffold" / "audit.ndjson").is_file()

    def test_wire_domain_with_relationship(self, go_project: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["--root", str(go_project), "wire", "domain", "order",
             "--belongs-to", "user", "--with-crud-views"],
        )
        assert result.exit_code == 0, result.output
        assert "Wired domain 'order'" in result.output
        assert "Orders []Order" in (go_project / "internal/models/user.go").read_text()

    def test_wire_domain_failure_exit_code(self, go_project: Path):
        (go_project / "cmd/web/main.go").write_text("package main\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["--root", str(go_project), "wire", "domain", "product"])
        assert result.exit_code == 1

    def test_wire_di_dry_run(self, go_project: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["--root", str(go_project), "wire", "di", "product", "order", "--dry-run", "--json"],
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["dry_run"] is True
        assert "2 domain(s)" in data["message"]

    def test_config_marker_prefix(self, go_project: Path):
        main = go_project / "cmd/web/main.go"
        main.write_text(MAIN_GO.replace("MCP:", "APP:"))
        (go_project / "scaffold.yml").write_text(textwrap.dedent("""\
            marker_prefix: APP
        """))
        runner = CliRunner()
        result = runner.invoke(cli, ["--root", str(go_project), "wire", "di", "product"])
        assert result.exit_code == 0, result.output
        assert "productRepo := productrepo.NewRepository(db)\n\t// APP:REPOS:END" in main.read_text()


class TestFilesCommands:
    def _manifest(self, tmp_path: Path) -> Path:
        (tmp_path / "build").mkdir()
        (tmp_path / "build" / "service.go").write_text("package product\n")
        manifest = tmp_path / "build" / "manifest.yml"
        manifest.write_text(textwrap.dedent("""\
            files:
              - path: internal/models/product.go
                content: |
                  package models
              - path: internal/services/product/service.go
                source: service.go
                description: Product service
        """))
        return manifest

    def test_write(self, tmp_path: Path):
        manifest = self._manifest(tmp_path)
        runner = CliRunner()
        result = runner.invoke(cli, ["--root", str(tmp_path), "files", "write", str(manifest)])
        assert result.exit_code == 0, result.output
        assert (tmp_path / "internal/models/product.go").read_text() == "package models\n"
        assert (tmp_path / "internal/services/product/service.go").read_text() == "package product\n"

    def test_conflict_prints_report(self, tmp_path: Path):
        manifest = self._manifest(tmp_path)
        target = tmp_path / "internal/services/product/service.go"
        target.parent.mkdir(parents=True)
        target.write_text("// mine\n")

        runner = CliRunner()
        result = runner.invoke(cli, ["--root", str(tmp_path), "files", "write", str(manifest)])

        assert result.exit_code == 1
        assert "<file_conflicts" in result.output
        assert "<description>Product service</description>" in result.output
        assert target.read_text() == "// mine\n"
        assert not (tmp_path / "internal/models/product.go").exists()

    def test_force_json(self, tmp_path: Path):
        manifest = self._manifest(tmp_path)
        target = tmp_path / "internal/models/product.go"
        target.parent.mkdir(parents=True)
        target.write_text("old\n")

        runner = CliRunner()
        result = runner.invoke(
            cli, ["--root", str(tmp_path), "files", "write", str(manifest), "--force", "--json"]
        )
        assert result.exit_code == 0
        assert json.loads(result.output)["files_updated"] == ["internal/models/product.go"]

    def test_bad_manifest(self, tmp_path: Path):
        manifest = tmp_path / "manifest.yml"
        manifest.write_text("- path: a.go\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["--root", str(tmp_path), "files", "write", str(manifest)])
        assert result.exit_code == 1
        assert "Manifest entry 0" in result.output
