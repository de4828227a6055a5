"""Tests for locating builders in scripts and modules."""

from pathlib import Path
from uuid import uuid4

import pytest

from hintgraph import Builder
from hintgraph._cli.config import ModuleSource, ScriptSource
from hintgraph._cli.discover import load_builder

GRAPHS = """
from hintgraph import Builder

count = 3

small = Builder()
small.init()

large = Builder()
a = large.init()
large.add(a, a)
"""


@pytest.fixture
def module_name() -> str:
    # Unique names keep imports from different tests apart
    return f"graphs_{uuid4().hex}"


class TestScriptSource:
    def test_first_builder_in_dir_order(self, tmp_path: Path, module_name: str) -> None:
        script = tmp_path / f"{module_name}.py"
        script.write_text(GRAPHS)

        builder = load_builder(ScriptSource(script=script))

        assert isinstance(builder, Builder)
        # dir() is sorted, so "large" comes before "small"
        assert len(builder) == 2

    def test_named_builder(self, tmp_path: Path, module_name: str) -> None:
        script = tmp_path / f"{module_name}.py"
        script.write_text(GRAPHS)

        assert len(load_builder(ScriptSource(script=script, name="small"))) == 1

    def test_missing_name(self, tmp_path: Path, module_name: str) -> None:
        script = tmp_path / f"{module_name}.py"
        script.write_text(GRAPHS)

        with pytest.raises(ValueError, match="has no variable 'medium'"):
            load_builder(ScriptSource(script=script, name="medium"))

    def test_name_of_non_builder(self, tmp_path: Path, module_name: str) -> None:
        script = tmp_path / f"{module_name}.py"
        script.write_text(GRAPHS)

        with pytest.raises(TypeError, match="is a int, not a Builder"):
            load_builder(ScriptSource(script=script, name="count"))

    def test_no_builder(self, tmp_path: Path, module_name: str) -> None:
        script = tmp_path / f"{module_name}.py"
        script.write_text("count = 3\n")

        with pytest.raises(ValueError, match="No Builder found"):
            load_builder(ScriptSource(script=script))

    def test_script_inside_package(self, tmp_path: Path, module_name: str) -> None:
        package = tmp_path / module_name
        package.mkdir()
        (package / "__init__.py").write_text("")
        (package / "shared.py").write_text("WIDTH = 2\n")
        script = package / "graph.py"
        script.write_text(
            "from hintgraph import Builder\n"
            "from .shared import WIDTH\n"
            "builder = Builder()\n"
            "for _ in range(WIDTH):\n"
            "    builder.init()\n",
        )

        assert len(load_builder(ScriptSource(script=script))) == 2


class TestModuleSource:
    def test_module_path(self, tmp_path: Path, module_name: str, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / f"{module_name}.py").write_text(GRAPHS)
        monkeypatch.syspath_prepend(str(tmp_path))

        assert len(load_builder(ModuleSource(module_path=f"{module_name}:large"))) == 2

    def test_requires_variable(self) -> None:
        with pytest.raises(ValueError, match="module.path:variable_name"):
            load_builder(ModuleSource(module_path="graphs"))

    def test_unknown_module(self, module_name: str) -> None:
        with pytest.raises(ModuleNotFoundError):
            load_builder(ModuleSource(module_path=f"{module_name}:builder"))
