# tests/test_config_utils.py
"""
Tests for config_utils.py - Configuration loading with YAML support
"""

import pytest
import yaml

from inkwell.config_utils import (
    ConfigLoader,
    EscapePolicy,
    PathsConfig,
    create_config_template,
    get_config,
)
from inkwell.errors import ConfigurationError


ENV_VARS = [
    "INKWELL_WRITING_ROOT",
    "INKWELL_COURSES_ROOT",
    "INKWELL_STATIC_ROOT",
    "INKWELL_CONTENT_INDEX",
    "INKWELL_ESCAPE_POLICY",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)


class TestPathsConfig:
    """Tests for PathsConfig dataclass"""

    def test_default_layout(self, tmp_path):
        config = PathsConfig(repo_root=tmp_path)
        root = tmp_path.resolve()

        assert config.writing_root == root / "content" / "writing"
        assert config.courses_root == root / "courses"
        assert config.static_root == root / "static"
        assert config.content_index_path == root / "content-index.json"
        assert config.writing_manifest_path == root / "content" / "writing" / "manifest.json"
        assert config.escape_policy is EscapePolicy.COMPARATORS

    def test_absolute_paths_kept(self, tmp_path):
        other = tmp_path / "elsewhere"
        config = PathsConfig(repo_root=tmp_path / "repo", static_root=other)
        assert config.static_root == other.resolve()

    def test_course_dirs_sorted(self, tmp_path):
        for name in ("b", "a"):
            (tmp_path / "courses" / name).mkdir(parents=True)
        (tmp_path / "courses" / "notes.txt").write_text("x")

        config = PathsConfig(repo_root=tmp_path)

        assert [d.name for d in config.course_dirs()] == ["a", "b"]

    def test_course_dirs_without_root(self, tmp_path):
        assert PathsConfig(repo_root=tmp_path).course_dirs() == []

    def test_to_repo_path(self, tmp_path):
        config = PathsConfig(repo_root=tmp_path)
        assert config.to_repo_path(config.writing_root / "a.md") == "content/writing/a.md"


class TestConfigLoader:
    """Tests for ConfigLoader"""

    def test_defaults_without_file(self, tmp_path):
        config = get_config(tmp_path)
        assert config.writing_root == tmp_path.resolve() / "content" / "writing"
        assert config._sources == {}

    def test_yaml_file(self, tmp_path):
        (tmp_path / "inkwell.yaml").write_text(yaml.safe_dump({
            "writing_root": "posts",
            "escape_policy": "all",
            "site_name": "Example",
        }))

        config = ConfigLoader(tmp_path).load()

        assert config.writing_root == tmp_path.resolve() / "posts"
        assert config.escape_policy is EscapePolicy.ALL
        assert config.extra == {"site_name": "Example"}
        assert config._sources["writing_root"] == "inkwell.yaml"

    def test_env_overrides_yaml(self, tmp_path, monkeypatch):
        (tmp_path / "inkwell.yaml").write_text("static_root: public\n")
        monkeypatch.setenv("INKWELL_STATIC_ROOT", "assets")

        config = get_config(tmp_path)

        assert config.static_root == tmp_path.resolve() / "assets"
        assert config._sources["static_root"] == "env:INKWELL_STATIC_ROOT"

    def test_env_escape_policy(self, tmp_path, monkeypatch):
        monkeypatch.setenv("INKWELL_ESCAPE_POLICY", "ALL")
        assert get_config(tmp_path).escape_policy is EscapePolicy.ALL

    def test_invalid_escape_policy(self, tmp_path):
        (tmp_path / "inkwell.yaml").write_text("escape_policy: sometimes\n")

        with pytest.raises(ConfigurationError) as exc_info:
            get_config(tmp_path)

        assert "comparators" in str(exc_info.value)

    def test_invalid_yaml(self, tmp_path):
        (tmp_path / "inkwell.yaml").write_text("writing_root: [broken\n")

        with pytest.raises(ConfigurationError) as exc_info:
            get_config(tmp_path)

        assert exc_info.value.cause is not None

    def test_non_mapping_yaml(self, tmp_path):
        (tmp_path / "inkwell.yaml").write_text("- just\n- a list\n")

        with pytest.raises(ConfigurationError):
            get_config(tmp_path)

    def test_empty_yaml(self, tmp_path):
        (tmp_path / "inkwell.yaml").write_text("")
        assert get_config(tmp_path).courses_root == tmp_path.resolve() / "courses"


class TestConfigTemplate:
    def test_template_loads_as_defaults(self, tmp_path):
        (tmp_path / "inkwell.yaml").write_text(create_config_template())

        loaded = get_config(tmp_path)
        default = PathsConfig(repo_root=tmp_path)

        assert loaded.writing_root == default.writing_root
        assert loaded.content_index_path == default.content_index_path
        assert loaded.escape_policy is default.escape_policy
        assert loaded.extra == {}
