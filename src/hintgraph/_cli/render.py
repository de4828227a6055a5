"""Rich rendering utilities for graphs and check results."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.table import Table

from hintgraph._node import NodeKind

if TYPE_CHECKING:
    from rich.console import Console

    from hintgraph._builder import Builder
    from hintgraph._eval import ConstraintReport
    from hintgraph._node import Node


def describe_node(node: Node) -> str:
    """Short formula describing how a node gets its value."""
    match node.kind:
        case NodeKind.INPUT:
            return "input"
        case NodeKind.CONSTANT:
            return f"const {node.output}"
        case NodeKind.COMPUTED:
            left, right = node.inputs
            return f"#{left} {node.operation.symbol} #{right}"
        case NodeKind.HINT:
            return f"hint -> #{node.hint_link}"


def render_graph(builder: Builder, console: Console, *, title: str | None = None) -> None:
    """Render every node of a graph as a Rich table.

    Args:
        builder: The graph to render.
        console: Rich Console to output to.
        title: Optional table title.

    """
    if len(builder) == 0:
        console.print("[dim]Graph has no nodes[/dim]")
        return

    table = Table(show_header=True, header_style="bold cyan", title=title)
    table.add_column("Id", justify="right")
    table.add_column("Kind")
    table.add_column("Definition", style="dim")
    table.add_column("Output", justify="right")

    for node in builder.nodes:
        kind_style = _get_kind_style(node.kind)
        output = "[dim]-[/dim]" if node.output is None else str(node.output)
        table.add_row(
            str(node.id),
            f"[{kind_style}]{node.kind.upper()}[/{kind_style}]",
            describe_node(node),
            output,
        )

    console.print(table)


def render_report(report: ConstraintReport, console: Console) -> None:
    """Render the outcome of a constraint check."""
    if report.success:
        console.print(f"[green]✓ {report.checked} constraint(s) hold[/green]")
        return

    console.print(f"[red]✗ {len(report.violations)} of {report.checked} constraint(s) violated:[/red]")
    for violation in report.violations:
        console.print(f"  [red]•[/red] {violation}")


def _get_kind_style(kind: NodeKind) -> str:
    """Get Rich style string for a node kind."""
    match kind:
        case NodeKind.INPUT:
            return "blue"
        case NodeKind.CONSTANT:
            return "magenta"
        case NodeKind.COMPUTED:
            return "green"
        case NodeKind.HINT:
            return "yellow"
