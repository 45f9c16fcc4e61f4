"""
Configuration loader — reads scaffold.yml into a ScaffoldConfig.

It reads YAML, validates against the Pydantic schema, and falls back
to defaults when the project has no config file at all.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from scaffoldkit.core.models.config import ScaffoldConfig

logger = logging.getLogger(__name__)

# Default config filename
SCAFFOLD_CONFIG_FILE = "scaffold.yml"

_GO_MODULE_RE = re.compile(r"^module\s+(\S+)\s*$", re.MULTILINE)


class ConfigError(Exception):
    """Raised when scaffold configuration is invalid or unreadable."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for scaffold.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to scaffold.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / SCAFFOLD_CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path | None = None, project_root: Path | None = None) -> ScaffoldConfig:
    """Load and validate scaffold configuration.

    Args:
        path: Explicit path to scaffold.yml. If None, searches upward
            from ``project_root`` (or the cwd).
        project_root: Root used to resolve ``module_path`` from go.mod.

    Returns:
        Validated ScaffoldConfig. Defaults when no file exists.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        path = find_config_file(project_root)
        if path is None:
            logger.debug("No %s found, using defaults", SCAFFOLD_CONFIG_FILE)
            config = ScaffoldConfig()
            return _with_module_path(config, project_root or Path.cwd())
    elif not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading scaffold config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # Settings may sit under a "scaffold" key or be flat
    scaffold_data = data.get("scaffold", data)

    try:
        config = ScaffoldConfig.model_validate(scaffold_data)
    except ValidationError as e:
        raise ConfigError(f"Invalid scaffold configuration: {e}") from e

    return _with_module_path(config, project_root or path.parent.resolve())


def read_go_module_path(project_root: Path) -> str:
    """Return the module path declared in ``go.mod``, or "" if unavailable."""
    go_mod = project_root / "go.mod"
    if not go_mod.is_file():
        return ""
    try:
        match = _GO_MODULE_RE.search(go_mod.read_text(encoding="utf-8"))
    except OSError as e:
        logger.warning("Cannot read %s: %s", go_mod, e)
        return ""
    return match.group(1) if match else ""


def _with_module_path(config: ScaffoldConfig, project_root: Path) -> ScaffoldConfig:
    if config.module_path:
        return config
    module_path = read_go_module_path(project_root)
    if module_path:
        logger.debug("Module path from go.mod: %s", module_path)
        return config.model_copy(update={"module_path": module_path})
    return config
