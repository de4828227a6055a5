"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import cast

from pydantic import ValidationError

from hintgraph._arith import ArithmeticSettings


class ConfigError(Exception):
    """Error in hintgraph configuration."""


@dataclass(slots=True, frozen=True)
class ScriptSource:
    """Script path with optional variable name."""

    script: Path
    name: str | None = None


@dataclass(slots=True, frozen=True)
class ModuleSource:
    """Module path with variable name (e.g., 'examples.sqrt_hint:builder')."""

    module_path: str


GraphSource = ScriptSource | ModuleSource


@dataclass(slots=True, frozen=True)
class HintgraphConfig:
    """Configuration loaded from the [tool.hintgraph] table of pyproject.toml.

    All relative paths are resolved from the project root (directory containing pyproject.toml).
    """

    graph: GraphSource | None = None
    arithmetic: ArithmeticSettings = field(default_factory=ArithmeticSettings)
    project_root: Path | None = None


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by walking up from start_dir.

    Args:
        start_dir: Starting directory. Defaults to current working directory.

    Returns:
        Path to pyproject.toml if found, None otherwise.

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        candidate = current / "pyproject.toml"
        if candidate.is_file():
            return candidate
        if current.parent == current:
            return None
        current = current.parent


def parse_graph_source(value: object, project_root: Path | None = None) -> GraphSource:
    """Parse a graph location.

    Accepts a module path string (``"pkg.module:variable"``), a script path
    string (``"path/to/script.py"``), or a table ``{ script = "...", name = "..." }``.

    Raises:
        ConfigError: If the value format is invalid

    """
    if isinstance(value, str):
        if value.endswith(".py"):
            return ScriptSource(script=_resolve(Path(value), project_root))
        if ":" not in value:
            msg = f"Invalid module path '{value}'. Expected format: 'module.path:variable_name'"
            raise ConfigError(msg)
        return ModuleSource(module_path=value)

    if isinstance(value, dict):
        value_dict = cast("dict[str, object]", value)
        script_value = value_dict.get("script")
        if not isinstance(script_value, str):
            msg = "Invalid [tool.hintgraph].graph.script: expected string path"
            raise ConfigError(msg)

        name = value_dict.get("name")
        if name is not None and not isinstance(name, str):
            msg = "Invalid [tool.hintgraph].graph.name: expected string"
            raise ConfigError(msg)

        return ScriptSource(script=_resolve(Path(script_value), project_root), name=name)

    msg = "Invalid [tool.hintgraph].graph configuration. Expected string or table with 'script' key."
    raise ConfigError(msg)


def _resolve(path: Path, project_root: Path | None) -> Path:
    if project_root is None or path.is_absolute():
        return path
    return project_root / path


def load_config(pyproject_path: Path) -> HintgraphConfig:
    """Load and validate [tool.hintgraph] config from pyproject.toml.

    Raises:
        ConfigError: If the configuration is invalid

    """
    project_root = pyproject_path.parent

    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    section = dict(data.get("tool", {}).get("hintgraph", {}))
    if not section:
        return HintgraphConfig(project_root=project_root)

    graph_source: GraphSource | None = None
    if "graph" in section:
        graph_source = parse_graph_source(section.pop("graph"), project_root)

    try:
        arithmetic = ArithmeticSettings.model_validate(section)
    except ValidationError as e:
        msg = f"Invalid [tool.hintgraph] settings in {pyproject_path}: {e}"
        raise ConfigError(msg) from e

    return HintgraphConfig(graph=graph_source, arithmetic=arithmetic, project_root=project_root)


def get_config() -> HintgraphConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        HintgraphConfig (may be empty if no pyproject.toml or no [tool.hintgraph] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return HintgraphConfig()
    return load_config(pyproject_path)
