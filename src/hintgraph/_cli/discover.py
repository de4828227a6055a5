"""Locate the Builder a graph script or module defines."""

from __future__ import annotations

import importlib
import logging
import sys
from typing import TYPE_CHECKING

from hintgraph._builder import Builder

from .config import ModuleSource, ScriptSource

if TYPE_CHECKING:
    from pathlib import Path

    from .config import GraphSource

logger = logging.getLogger(__name__)


def _dotted_name(script: Path) -> tuple[str, Path]:
    """Dotted module name of a script and the directory to import it from.

    Enclosing directories with an ``__init__.py`` become parent packages, so
    relative imports inside a graph package keep working.
    """
    script = script.resolve()
    parts = [script.parent.name if script.stem == "__init__" else script.stem]
    package_dir = script.parent.parent if script.stem == "__init__" else script.parent
    while (package_dir / "__init__.py").is_file():
        parts.insert(0, package_dir.name)
        package_dir = package_dir.parent
    return ".".join(parts), package_dir


def load_builder(source: GraphSource) -> Builder:
    """Import a graph source and return its Builder.

    Module sources name the variable explicitly (``pkg.graphs:builder``).
    Script sources use ``name`` when given, otherwise the first Builder
    attribute of the module in ``dir()`` order.

    Raises:
        ImportError: If the module cannot be imported.
        ValueError: If the named variable is missing or the module has no Builder.
        TypeError: If the named variable is not a Builder.

    """
    match source:
        case ModuleSource(module_path=module_path):
            module_name, sep, var_name = module_path.partition(":")
            if not sep:
                msg = "Module path must be in format 'module.path:variable_name'"
                raise ValueError(msg)
        case ScriptSource(script=script, name=var_name):
            module_name, import_root = _dotted_name(script)
            sys.path.insert(0, str(import_root))

    module = importlib.import_module(module_name)

    if var_name:
        if not hasattr(module, var_name):
            msg = f"'{module_name}' has no variable '{var_name}'"
            raise ValueError(msg)
        candidate = getattr(module, var_name)
        if not isinstance(candidate, Builder):
            msg = f"'{module_name}:{var_name}' is a {type(candidate).__name__}, not a Builder"
            raise TypeError(msg)
        return candidate

    for name in dir(module):
        candidate = getattr(module, name)
        if isinstance(candidate, Builder):
            logger.debug("Using builder '%s' from %s", name, module_name)
            return candidate

    msg = f"No Builder found in '{module_name}', name one with --builder"
    raise ValueError(msg)
