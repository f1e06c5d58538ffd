# config_utils.py - YAML Configuration System for Inkwell
"""
Inkwell configuration utilities with YAML file support.

Configuration Resolution Order (highest to lowest priority):
1. Environment variables (INKWELL_WRITING_ROOT, INKWELL_STATIC_ROOT, etc.)
2. inkwell.yaml in the repository root
3. Built-in defaults (content/writing, courses, static, content-index.json)

Every component receives a PathsConfig explicitly, so the pipeline can run
against any directory tree (tests build one under tmp_path).

Usage:
    from inkwell.config_utils import get_config

    config = get_config(Path("."))
    print(config.writing_root)
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Dict, Any

import yaml

from inkwell.errors import ConfigurationError


logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "inkwell.yaml"


class EscapePolicy(Enum):
    COMPARATORS = "comparators"  # only '<' before whitespace or a digit
    ALL = "all"                  # every '<' in text nodes


@dataclass
class PathsConfig:
    """Complete Inkwell configuration"""
    repo_root: Path = field(default_factory=Path.cwd)

    # Content and output locations (relative values resolve against repo_root)
    writing_root: Optional[Path] = None
    courses_root: Optional[Path] = None
    static_root: Optional[Path] = None
    content_index_path: Optional[Path] = None

    escape_policy: EscapePolicy = EscapePolicy.COMPARATORS

    # Extra settings from config file
    extra: Dict[str, Any] = field(default_factory=dict)

    # Track where values came from (for debugging)
    _sources: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        self.repo_root = Path(self.repo_root).resolve()
        self.writing_root = self._resolve(self.writing_root, "content/writing")
        self.courses_root = self._resolve(self.courses_root, "courses")
        self.static_root = self._resolve(self.static_root, "static")
        self.content_index_path = self._resolve(self.content_index_path, "content-index.json")

    def _resolve(self, value: Optional[Path], default: str) -> Path:
        path = Path(value) if value is not None else Path(default)
        path = path.expanduser()
        if not path.is_absolute():
            path = self.repo_root / path
        return path.resolve()

    @property
    def writing_manifest_path(self) -> Path:
        return self.writing_root / "manifest.json"

    def course_dirs(self) -> list[Path]:
        """Every direct subdirectory of the courses root, sorted by name."""
        if not self.courses_root.is_dir():
            return []
        return sorted(p for p in self.courses_root.iterdir() if p.is_dir())

    def to_repo_path(self, path: Path) -> str:
        """POSIX path relative to the repository root (unchanged if outside it)."""
        path = Path(path)
        try:
            return path.relative_to(self.repo_root).as_posix()
        except ValueError:
            return os.path.relpath(path, self.repo_root).replace(os.sep, "/")


def parse_escape_policy(value: Any) -> EscapePolicy:
    try:
        return EscapePolicy(str(value).strip().lower())
    except ValueError:
        raise ConfigurationError(
            message=f"Invalid escape policy: {value!r}",
            suggestion="Use one of: " + ", ".join(p.value for p in EscapePolicy),
            context={"setting": "escape_policy"},
        ) from None


class ConfigLoader:
    """Load configuration from multiple sources"""

    PATH_KEYS = {
        "writing_root": "INKWELL_WRITING_ROOT",
        "courses_root": "INKWELL_COURSES_ROOT",
        "static_root": "INKWELL_STATIC_ROOT",
        "content_index_path": "INKWELL_CONTENT_INDEX",
    }

    def __init__(self, repo_root: Optional[Path] = None):
        self.repo_root = Path(repo_root) if repo_root else Path.cwd()
        self.values: Dict[str, Any] = {}
        self.extra: Dict[str, Any] = {}
        self.sources: Dict[str, str] = {}

    def load(self) -> PathsConfig:
        """Load configuration from all sources in priority order"""
        # Lowest first, higher overwrites
        self._load_yaml_config()
        self._load_env_vars()

        escape_policy = EscapePolicy.COMPARATORS
        if "escape_policy" in self.values:
            escape_policy = parse_escape_policy(self.values.pop("escape_policy"))

        config = PathsConfig(
            repo_root=self.repo_root,
            escape_policy=escape_policy,
            extra=self.extra,
            **self.values,
        )
        config._sources.update(self.sources)
        return config

    def _load_yaml_config(self):
        """Load inkwell.yaml from the repository root"""
        yaml_path = self.repo_root / CONFIG_FILE_NAME
        if not yaml_path.exists():
            return

        try:
            data = yaml.safe_load(yaml_path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                message=f"Failed to parse {CONFIG_FILE_NAME}",
                suggestion="Check YAML syntax (indentation, quotes, colons)",
                context={"file": str(yaml_path)},
                cause=e,
            )

        if not isinstance(data, dict):
            raise ConfigurationError(
                message=f"{CONFIG_FILE_NAME} must contain a mapping",
                context={"file": str(yaml_path)},
            )

        for key in self.PATH_KEYS:
            if data.get(key):
                self.values[key] = Path(str(data[key]))
                self.sources[key] = CONFIG_FILE_NAME

        if "escape_policy" in data:
            self.values["escape_policy"] = data["escape_policy"]
            self.sources["escape_policy"] = CONFIG_FILE_NAME

        known_keys = set(self.PATH_KEYS) | {"escape_policy"}
        for key, value in data.items():
            if key not in known_keys:
                self.extra[key] = value

        logger.debug("Loaded configuration from %s", yaml_path)

    def _load_env_vars(self):
        """Load from environment variables (highest priority)"""
        for key, env_var in self.PATH_KEYS.items():
            if os.environ.get(env_var):
                self.values[key] = Path(os.environ[env_var])
                self.sources[key] = f"env:{env_var}"

        if os.environ.get("INKWELL_ESCAPE_POLICY"):
            self.values["escape_policy"] = os.environ["INKWELL_ESCAPE_POLICY"]
            self.sources["escape_policy"] = "env:INKWELL_ESCAPE_POLICY"


# ============================================================================
# Public API
# ============================================================================

def get_config(repo_root: Optional[Path] = None) -> PathsConfig:
    """
    Get complete Inkwell configuration.

    Args:
        repo_root: Repository root (defaults to cwd)

    Returns:
        PathsConfig with all paths resolved
    """
    return ConfigLoader(repo_root).load()


def create_config_template() -> str:
    """Generate an inkwell.yaml template with the default layout."""
    return '''# Inkwell Configuration File
# Relative paths resolve against the repository root.

writing_root: content/writing
courses_root: courses
static_root: static
content_index_path: content-index.json

# How '<' in markdown text is escaped: comparators | all
escape_policy: comparators
'''
