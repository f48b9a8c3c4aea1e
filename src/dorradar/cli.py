"""CLI entry point for dor-radar."""

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from . import __version__
from .core.config import Config, get_config, set_config
from .core.exceptions import RadarError
from .prometheus.query import DEFAULT_WINDOW, MAX_WINDOW, MIN_WINDOW
from .service import RadarService
from .topology.builder import RadarGraph

console = Console()


def print_error(message: str) -> None:
    """Print error message in red."""
    console.print(f"[red]Error:[/red] {message}")


def print_success(message: str) -> None:
    """Print success message in green."""
    console.print(f"[green]✓[/green] {message}")


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _strength_style(strength: float) -> str:
    if strength >= 0.99:
        return "green"
    if strength >= 0.9:
        return "yellow"
    return "red"


def _fetch_graph(config: Config, window: int, method: str, snapshot: bool) -> RadarGraph:
    service = RadarService(config.collector, snapshot=snapshot or None)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Querying Prometheus...", total=None)
        try:
            graph = service.build_graph(window, method == "min")
            progress.update(task, completed=True)
        except RadarError as e:
            print_error(str(e))
            sys.exit(1)

    return graph


window_option = click.option(
    "--window",
    "-w",
    type=click.IntRange(MIN_WINDOW, MAX_WINDOW),
    default=DEFAULT_WINDOW,
    help=f"Aggregation window in minutes (default: {DEFAULT_WINDOW})",
)
method_option = click.option(
    "--method",
    type=click.Choice(["avg", "min"]),
    default="avg",
    help="Aggregation over the window (default: avg)",
)


@click.group()
@click.version_option(version=__version__, prog_name="dor-radar")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    help="Config file (TOML or JSON, default: $DORRADAR_CONFIG or ./config.toml)",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, config_file: str | None) -> None:
    """dor-radar - network probe reliability as a radar graph."""
    ctx.ensure_object(dict)
    try:
        if config_file:
            set_config(Config.from_file(Path(config_file)))
        config = get_config()
    except RadarError as e:
        print_error(str(e))
        sys.exit(1)

    config.verbose = config.verbose or verbose
    setup_logging(config.verbose)
    ctx.obj["config"] = config


@main.command()
@window_option
@method_option
@click.option("--snapshot", is_flag=True, help="Order-independent weakest-link propagation")
@click.option("--json", "as_json", is_flag=True, help="Print the graph as JSON")
@click.option("--output", "-o", type=click.Path(), help="Output file (.json or .csv)")
@click.pass_context
def status(
    ctx: click.Context,
    window: int,
    method: str,
    snapshot: bool,
    as_json: bool,
    output: str | None,
) -> None:
    """Show the current probe graph."""
    from .output import export_graph

    config: Config = ctx.obj["config"]
    graph = _fetch_graph(config, window, method, snapshot)
    data = graph.to_dict()

    if as_json:
        click.echo(json.dumps(data, indent=2))
    else:
        names = {node.id: node.name for node in graph.nodes}

        nodes_table = Table(title=f"Nodes ({len(graph.nodes)})")
        nodes_table.add_column("ID", style="cyan", justify="right")
        nodes_table.add_column("Name", style="green")
        nodes_table.add_column("Attrs", style="yellow")
        nodes_table.add_column("Size", justify="right")
        for node in graph.nodes:
            nodes_table.add_row(str(node.id), node.name, ", ".join(node.attrs) or "-", str(node.size))
        console.print(nodes_table)

        conn_table = Table(title=f"Connections ({len(graph.connections)}, {method} over {window}m)")
        conn_table.add_column("Source", style="cyan")
        conn_table.add_column("Target", style="cyan")
        conn_table.add_column("Strength", justify="right")
        for conn in graph.connections:
            style = _strength_style(conn.strength)
            conn_table.add_row(
                names[conn.source],
                names[conn.target],
                f"[{style}]{conn.strength:.4f}[/{style}]",
            )
        console.print(conn_table)

    if output:
        path = export_graph(data, output)
        print_success(f"Graph saved to {path}")


@main.command()
@window_option
@method_option
@click.pass_context
def metrics(ctx: click.Context, window: int, method: str) -> None:
    """Show topology metrics for the current probe graph."""
    from .topology.metrics import calculate_metrics

    config: Config = ctx.obj["config"]
    graph = _fetch_graph(config, window, method, snapshot=False)
    console.print(Panel(str(calculate_metrics(graph)), title="Radar Metrics"))


@main.command()
@click.pass_context
def rules(ctx: click.Context) -> None:
    """List the configured reshape rules."""
    config: Config = ctx.obj["config"]
    shapes = config.collector.shapes

    if not shapes:
        console.print("[yellow]No reshape rules configured.[/yellow]")
        return

    table = Table(title=f"Reshape Rules ({len(shapes)})")
    table.add_column("From", style="cyan")
    table.add_column("To", style="green")
    table.add_column("Attrs", style="yellow")
    table.add_column("Size", justify="right")
    for rule in shapes:
        table.add_row(
            rule.source,
            rule.to or rule.source,
            ", ".join(rule.attrs) or "-",
            str(rule.size) if rule.size is not None else "-",
        )
    console.print(table)


if __name__ == "__main__":
    main()
