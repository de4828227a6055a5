import logging
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel

from hintgraph._arith import ArithmeticSettings, OverflowPolicy
from hintgraph._builder import Builder
from hintgraph._errors import ConstraintViolationError, HintgraphError, HintMismatchError

from .config import ConfigError, ScriptSource, get_config, parse_graph_source
from .discover import load_builder
from .render import render_graph, render_report

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Hintgraph CLI."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _arithmetic_settings(width: int | None, overflow: OverflowPolicy | None) -> ArithmeticSettings:
    """Merge command-line overrides into the configured arithmetic settings."""
    try:
        settings = get_config().arithmetic
    except ConfigError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=2) from e

    overrides = {
        key: value for key, value in (("width", width), ("overflow", overflow)) if value is not None
    }
    if not overrides:
        return settings
    try:
        return ArithmeticSettings.model_validate(settings.model_dump() | overrides)
    except ValidationError as e:
        msg = f"Unsupported arithmetic settings: {overrides}"
        raise typer.BadParameter(msg) from e


def _load_builder(path: str | None, builder_var: str | None) -> Builder:
    """Load a builder from PATH, falling back to [tool.hintgraph].graph."""
    try:
        if path is not None:
            source = parse_graph_source(path)
        else:
            source = get_config().graph
            if source is None:
                err_console.print("[red]✗ No graph given and no \\[tool.hintgraph].graph configured[/red]")
                raise typer.Exit(code=2)
    except ConfigError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=2) from e

    if builder_var is not None:
        if not isinstance(source, ScriptSource):
            msg = "--builder can only be used with script paths"
            raise typer.BadParameter(msg)
        source = ScriptSource(script=source.script, name=builder_var)

    err_console.print(f"[cyan]Loading graph from:[/cyan] {escape(str(path or source))}")
    try:
        builder = load_builder(source)
    except (ImportError, ValueError, TypeError) as e:
        err_console.print(f"[red]✗ {type(e).__name__}: {escape(str(e))}[/red]")
        raise typer.Exit(code=2) from e
    err_console.print(f"[cyan]Graph:[/cyan] [bold]{len(builder)}[/bold] nodes")
    err_console.print()
    return builder


def _parse_assertion(spec: str) -> tuple[int, int]:
    hint_str, sep, target_str = spec.partition(":")
    try:
        if not sep:
            raise ValueError(spec)
        return int(hint_str), int(target_str)
    except ValueError as e:
        msg = f"Invalid assertion '{spec}'. Expected format: 'HINT:TARGET' node indices"
        raise typer.BadParameter(msg) from e


@app.command()
def demo(
    *,
    value: Annotated[int, typer.Option("--value", help="Value of the input x")] = 9,
    hint: Annotated[int, typer.Option("--hint", help="Claimed square root of x + 7")] = 4,
    width: Annotated[int | None, typer.Option("--width", help="Integer width in bits")] = None,
    overflow: Annotated[OverflowPolicy | None, typer.Option("--overflow", help="Overflow policy")] = None,
) -> None:
    """Walk through a square-root hint: prove that hint * hint == x + 7."""
    settings = _arithmetic_settings(width, overflow)
    err_console.print()

    try:
        builder = Builder(settings)
        x = builder.init()
        seven = builder.constant(7)
        x_plus_seven = builder.add(x, seven)
        sqrt_x_plus_seven = builder.hint(hint, x_plus_seven)
        computed_sq = builder.multiply(sqrt_x_plus_seven, sqrt_x_plus_seven)

        # Only constants and hints have outputs before filling
        render_graph(builder, out_console, title="Before filling")
        builder.fill_nodes(x, value)
        render_graph(builder, out_console, title="After filling")

        out_console.print(f"Node {x_plus_seven}: {builder.get_node(x_plus_seven)!r}")
        out_console.print()

        report = builder.constraint_report()
        render_report(report, err_console)
        report.raise_for_violations()

        builder.assert_equal(sqrt_x_plus_seven, computed_sq)
    except HintMismatchError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    except HintgraphError as e:
        err_console.print(f"[red]✗ {type(e).__name__}: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    err_console.print(f"[green]✓ Hint holds: {hint} * {hint} == {value} + 7[/green]")
    err_console.print()


@app.command()
def show(
    path: Annotated[
        str | None,
        typer.Argument(help="Path to Python script or module path (e.g., examples.sqrt_hint:builder)"),
    ] = None,
    *,
    builder_var: Annotated[
        str | None,
        typer.Option("--builder", help="Name of the builder variable (for script paths only)"),
    ] = None,
) -> None:
    """Render the nodes of a graph without evaluating it."""
    err_console.print()
    builder = _load_builder(path, builder_var)
    render_graph(builder, out_console)


@app.command()
def check(  # noqa: C901
    path: Annotated[
        str | None,
        typer.Argument(help="Path to Python script or module path (e.g., examples.sqrt_hint:builder)"),
    ] = None,
    *,
    value: Annotated[int, typer.Option("--value", help="Value to fill the input node with")],
    input_index: Annotated[
        int | None,
        typer.Option("--input", help="Index of the input node (defaults to the first input node)"),
    ] = None,
    assertions: Annotated[
        list[str] | None,
        typer.Option("--assert", help="Hint assertion as 'HINT:TARGET' node indices (repeatable)"),
    ] = None,
    builder_var: Annotated[
        str | None,
        typer.Option("--builder", help="Name of the builder variable (for script paths only)"),
    ] = None,
) -> None:
    """Fill a graph, check its constraints and hint assertions."""
    err_console.print()
    pairs = [_parse_assertion(spec) for spec in assertions or []]
    # Evaluate a copy so the loaded module keeps its own graph untouched
    builder = _load_builder(path, builder_var).copy()

    if input_index is None:
        inputs = builder.input_nodes()
        if not inputs:
            err_console.print("[red]✗ Graph has no input node[/red]")
            raise typer.Exit(code=1)
        input_index = inputs[0]

    err_console.print(f"[cyan]Filling node {input_index} with[/cyan] {value}")
    try:
        builder.fill_nodes(input_index, value)
        report = builder.constraint_report()
    except HintgraphError as e:
        err_console.print(f"[red]✗ {type(e).__name__}: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    render_graph(builder, out_console)
    err_console.print()
    render_report(report, err_console)

    failed = not report.success
    if pairs:
        err_console.print()
        for hint_index, target_index in pairs:
            label = f"hint {hint_index} ~ node {target_index}"
            try:
                builder.assert_equal(hint_index, target_index)
            except ConstraintViolationError as e:
                failed = True
                err_console.print(f"[red]✗ FAIL[/red] {label}: {escape(str(e))}")
            except HintgraphError as e:
                failed = True
                err_console.print(f"[red]✗ ERROR[/red] {label}: {type(e).__name__}: {escape(str(e))}")
            else:
                err_console.print(f"[green]✓ PASS[/green] {label}")

    err_console.print()
    if failed:
        err_console.print(Panel("[red]Graph is inconsistent[/red]", border_style="red"))
        raise typer.Exit(code=1)

    err_console.print(Panel("[green]Graph is consistent[/green]", border_style="green"))
    logger.debug("Checked %d nodes", len(builder))


if __name__ == "__main__":
    app()
