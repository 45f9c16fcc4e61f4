"""
Tests for configuration loading — scaffold.yml parsing, defaults, go.mod.
"""

import textwrap
from pathlib import Path

import pytest

from scaffoldkit.core.config.loader import (
    ConfigError,
    find_config_file,
    load_config,
    read_go_module_path,
)
from scaffoldkit.core.models.wiring import RouteGroup


@pytest.fixture
def scaffold_yml(tmp_path: Path) -> Path:
    content = textwrap.dedent("""\
        version: 1
        module_path: example.com/blog
        marker_prefix: GEN
        main_file: cmd/server/main.go
        default_route_group: authenticated
        nav_icon: book
    """)
    path = tmp_path / "scaffold.yml"
    path.write_text(content)
    return path


class TestLoadConfig:
    def test_explicit_file(self, scaffold_yml: Path):
        config = load_config(scaffold_yml)
        assert config.module_path == "example.com/blog"
        assert config.marker_prefix == "GEN"
        assert config.main_file == "cmd/server/main.go"
        assert config.default_route_group is RouteGroup.AUTHENTICATED
        assert config.nav_icon == "book"
        assert config.comment_token == "//"

    def test_discovered_from_subdirectory(self, scaffold_yml: Path):
        sub = scaffold_yml.parent / "internal" / "models"
        sub.mkdir(parents=True)
        assert find_config_file(sub) == scaffold_yml.resolve()

    def test_defaults_without_file(self, tmp_path: Path):
        config = load_config(project_root=tmp_path)
        assert config.marker_prefix == "MCP"
        assert config.main_file == "cmd/web/main.go"
        assert config.default_route_group is RouteGroup.PUBLIC

    def test_nested_under_scaffold_key(self, tmp_path: Path):
        path = tmp_path / "scaffold.yml"
        path.write_text("scaffold:\n  marker_prefix: APP\n")
        assert load_config(path).marker_prefix == "APP"

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "scaffold.yml"
        path.write_text("")
        assert load_config(path).marker_prefix == "MCP"

    def test_module_path_from_go_mod(self, tmp_path: Path):
        (tmp_path / "go.mod").write_text("module example.com/shop\n\ngo 1.22\n")
        (tmp_path / "scaffold.yml").write_text("nav_icon: box\n")
        config = load_config(tmp_path / "scaffold.yml")
        assert config.module_path == "example.com/shop"

    def test_explicit_module_path_wins(self, scaffold_yml: Path):
        (scaffold_yml.parent / "go.mod").write_text("module example.com/other\n")
        assert load_config(scaffold_yml).module_path == "example.com/blog"


class TestConfigErrors:
    def test_missing_explicit_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nope.yml")

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "scaffold.yml"
        path.write_text("marker_prefix: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / "scaffold.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(path)

    def test_blank_marker_prefix(self, tmp_path: Path):
        path = tmp_path / "scaffold.yml"
        path.write_text("marker_prefix: '  '\n")
        with pytest.raises(ConfigError, match="Invalid scaffold configuration"):
            load_config(path)

    def test_wrong_field_type(self, tmp_path: Path):
        path = tmp_path / "scaffold.yml"
        path.write_text("main_file: [cmd, web]\n")
        with pytest.raises(ConfigError, match="main_file"):
            load_config(path)

    def test_unknown_route_group(self, tmp_path: Path):
        path = tmp_path / "scaffold.yml"
        path.write_text("default_route_group: superuser\n")
        with pytest.raises(ConfigError):
            load_config(path)


class TestGoModule:
    def test_reads_module_line(self, tmp_path: Path):
        (tmp_path / "go.mod").write_text("// comment\nmodule github.com/acme/app\n\ngo 1.22\n")
        assert read_go_module_path(tmp_path) == "github.com/acme/app"

    def test_missing_go_mod(self, tmp_path: Path):
        assert read_go_module_path(tmp_path) == ""
