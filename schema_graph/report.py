"""Output formatting and reporting."""

from collections import Counter
from dataclasses import asdict, dataclass

from rich.console import Console
from rich.table import Table

from . import utils
from .graph import TypeGraph

console = Console()


@dataclass
class GraphSummary:
    """Summary of an extracted type graph."""

    root: str
    node_count: int
    edge_count: int
    nodes_by_kind: dict[str, int]
    edges_by_kind: dict[str, int]
    relay_count: int
    built_in_count: int
    dangling_edge_count: int


def summarize(graph: TypeGraph) -> GraphSummary:
    """
    Count nodes and edges of a type graph.

    Args:
        graph: Extracted type graph

    Returns:
        GraphSummary
    """
    nodes = list(graph.nodes.values())
    return GraphSummary(
        root=graph.root.name,
        node_count=len(nodes),
        edge_count=len(graph.edges),
        nodes_by_kind=dict(Counter(n.kind for n in nodes)),
        edges_by_kind=dict(Counter(e.kind.value for e in graph.edges)),
        relay_count=sum(1 for n in nodes if n.is_relay),
        built_in_count=sum(1 for n in nodes if n.is_built_in),
        dangling_edge_count=len(graph.dangling_edges()),
    )


def emit(summary: GraphSummary, fmt: str) -> None:
    """
    Output graph summary.

    Args:
        summary: Graph summary
        fmt: Output format ("json" or "console")
    """
    if fmt == "json":
        print(utils.to_json(asdict(summary)))
        return

    console.print("\n[bold cyan]Schema Graph Summary[/bold cyan]\n")

    table = Table(show_header=False, box=None)
    table.add_column("Metric", style="cyan")
    table.add_column("Value")

    table.add_row("Root", summary.root)
    table.add_row("Types", str(summary.node_count))
    table.add_row("Relationships", str(summary.edge_count))
    table.add_row("Relay types", f"[dim]{summary.relay_count}[/dim]")
    table.add_row("Built-in types", f"[dim]{summary.built_in_count}[/dim]")

    # Edges pointing at types absent from the introspection data
    if summary.dangling_edge_count:
        table.add_row("Unresolved targets", f"[yellow]⚠[/yellow] {summary.dangling_edge_count}")

    console.print(table)

    kinds = Table(title="By kind", box=None)
    kinds.add_column("Kind", style="cyan")
    kinds.add_column("Count", justify="right")
    for kind, count in sorted(summary.nodes_by_kind.items()):
        kinds.add_row(kind, str(count))
    for kind, count in sorted(summary.edges_by_kind.items()):
        kinds.add_row(f"{kind} edges", str(count))

    console.print()
    console.print(kinds)
    console.print()


def print_kv(title: str, data: dict) -> None:
    """
    Print key-value pairs (for schema pull, export).

    Args:
        title: Section title
        data: Key-value data
    """
    console.print(f"\n[bold cyan]{title}[/bold cyan]\n")

    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="yellow")

    for k, v in data.items():
        table.add_row(k, str(v))

    console.print(table)
    console.print()
