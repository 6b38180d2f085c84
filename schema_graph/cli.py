"""CLI for gql-graph."""

import logging
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from . import config, schema_loader, utils, visualization
from .errors import SchemaGraphError
from .graph import TypeGraph, extract_graph
from .report import emit, print_kv, summarize

app = typer.Typer(help="GraphQL Schema Graph")
schema_app = typer.Typer(help="Schema operations")
app.add_typer(schema_app, name="schema")

console = Console()


@app.callback()
def main_callback(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")):
    """Build relationship graphs from GraphQL introspection data."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@schema_app.command("pull")
def schema_pull(
    url: Optional[str] = typer.Option(None, help="Server base URL"),
    token: Optional[str] = typer.Option(None, help="API token"),
    out: Optional[str] = typer.Option(None, help="Output file path"),
):
    """Fetch and cache the introspection document."""
    try:
        cfg = config.load()
        base_url = url or cfg.default_url

        if not base_url:
            console.print("[red]Error: No URL provided. Use --url or set default_url in config.[/red]")
            raise typer.Exit(1)

        full_url = utils.ensure_graphql_url(base_url, cfg.graphql_path)
        console.print(f"[cyan]Fetching schema from {full_url}...[/cyan]")
        profile = schema_loader.load_schema(url=full_url, cfg=cfg, allow_cache=True, refresh=True, token=token)

        # If custom output path specified, write just the introspection document
        if out:
            utils.write_json(out, profile.document)
            path = out
        else:
            path = schema_loader.cache_path_for(profile.url, cfg)

        print_kv("Schema pulled", {"url": profile.url, "hash": profile.hash, "path": path})
    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.command("summary")
def summary_cmd(
    url: Optional[str] = typer.Option(None, help="Server base URL"),
    schema: Optional[str] = typer.Option(None, help="Introspection JSON or SDL file"),
    token: Optional[str] = typer.Option(None, help="API token"),
    output: str = typer.Option("console", help="Output format (console|json)"),
):
    """Summarize the types reachable from the query root."""
    graph = _run(lambda: load_graph(url, schema, token))
    emit(summarize(graph), output)


@app.command("export")
def export_cmd(
    url: Optional[str] = typer.Option(None, help="Server base URL"),
    schema: Optional[str] = typer.Option(None, help="Introspection JSON or SDL file"),
    token: Optional[str] = typer.Option(None, help="API token"),
    layout: Optional[str] = typer.Option(None, help="Layout (grid|hierarchical)"),
    hide_builtins: Optional[bool] = typer.Option(None, "--hide-builtins/--show-builtins", help="Hide built-in scalars"),
    hide_relay: Optional[bool] = typer.Option(None, "--hide-relay/--show-relay", help="Hide Connection/Edge/PageInfo types"),
    fields: bool = typer.Option(True, "--fields/--no-fields", help="Include field edges"),
    implements: bool = typer.Option(True, "--implements/--no-implements", help="Include interface edges"),
    unions: bool = typer.Option(True, "--unions/--no-unions", help="Include union member edges"),
    out: Optional[str] = typer.Option(None, help="Output file path (default: stdout)"),
):
    """Export the positioned diagram as JSON."""
    cfg = _run(config.load)
    graph = _run(lambda: load_graph(url, schema, token, cfg))

    filters = visualization.DiagramFilter(
        hide_builtins=cfg.hide_builtins if hide_builtins is None else hide_builtins,
        hide_relay=cfg.hide_relay if hide_relay is None else hide_relay,
        show_fields=fields,
        show_implements=implements,
        show_unions=unions,
    )
    diagram = _run(lambda: visualization.to_diagram(graph, layout or cfg.layout))
    data = visualization.diagram_to_dict(visualization.filter_diagram(diagram, filters))

    if out:
        utils.write_json(out, data)
        print_kv("Diagram exported", {"nodes": len(data["nodes"]), "edges": len(data["edges"]), "path": out})
    else:
        print(utils.to_json(data))


@app.command("search")
def search_cmd(
    query: str = typer.Argument(..., help="Substring to match against type names"),
    url: Optional[str] = typer.Option(None, help="Server base URL"),
    schema: Optional[str] = typer.Option(None, help="Introspection JSON or SDL file"),
    token: Optional[str] = typer.Option(None, help="API token"),
):
    """Find reachable types by name."""
    graph = _run(lambda: load_graph(url, schema, token))
    diagram = visualization.to_diagram(graph)
    matches = visualization.search_nodes(diagram, query)

    if not matches:
        console.print(f"[yellow]No types match '{query}'[/yellow]")
        return

    for name in matches:
        node = graph.nodes[name]
        console.print(f"  [cyan]{name}[/cyan] [dim]{node.kind}[/dim]")
    console.print(f"\n[dim]{len(matches)} match(es)[/dim]")


def load_graph(
    url: Optional[str],
    schema_file: Optional[str],
    token: Optional[str] = None,
    cfg: Optional[config.Config] = None,
) -> TypeGraph:
    """
    Load an introspection document (file, cache or live) and extract its graph.

    Args:
        url: Server base URL
        schema_file: Introspection JSON or SDL file
        token: Optional API token
        cfg: Configuration (loaded from disk if None)

    Returns:
        TypeGraph
    """
    cfg = cfg or config.load()

    full_url = None
    if not schema_file and (url or cfg.default_url):
        full_url = utils.ensure_graphql_url(url or cfg.default_url, cfg.graphql_path)

    profile = schema_loader.load_schema(url=full_url, schema_file=schema_file, cfg=cfg, token=token)
    return extract_graph(profile.document)


def _run(fn):
    """Call fn, mapping failures to exit codes (2 for graph errors, 1 otherwise)."""
    try:
        return fn()
    except SchemaGraphError as e:
        console.print(f"[red]Schema error: {e}[/red]")
        raise typer.Exit(2)
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        logging.getLogger(__name__).debug("Command failed", exc_info=True)
        raise typer.Exit(1)


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
