"""
appcluster CLI.

Commands for composing a cluster spec into a CloudFormation template.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ._version import get_version
from .composer import compose
from .config import AppClusterSpec, load_cluster_spec
from .errors import AppClusterError
from .validation import find_configuration_issues

app = typer.Typer(
    help="Compose AWS infrastructure for a load-balanced ECS application",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)


class OutputFormat(str, Enum):
    JSON = "json"
    YAML = "yaml"


ConfigOption = Annotated[
    Path,
    typer.Option(
        "--config",
        "-c",
        help="TOML file with a [cluster] table",
    ),
]


def version_callback(value: bool) -> None:
    if value:
        console.print(f"appcluster {get_version()}")
        raise typer.Exit()


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load(config: Path) -> AppClusterSpec:
    try:
        return load_cluster_spec(config)
    except AppClusterError as e:
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e


@app.command(name="synth")
def synth(
    config: ConfigOption = Path("appcluster.toml"),
    fmt: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Template format"),
    ] = OutputFormat.JSON,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the template to this file"),
    ] = None,
) -> None:
    """
    Compose the cluster and print its CloudFormation template.

    Example:
        appcluster synth --config appcluster.toml --format yaml -o stack.yaml
    """
    spec = _load(config)

    try:
        app_cluster = compose(spec)
    except AppClusterError as e:
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e

    body = app_cluster.to_yaml() if fmt == OutputFormat.YAML else app_cluster.to_json()

    if output is None:
        # Plain stdout keeps the template pipeable
        typer.echo(body)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(body)
    summary = app_cluster.summary()
    console.print(
        Panel(
            f"[green]Wrote {summary['resources']} resources[/green]\n\n"
            f"Output: [cyan]{output}[/cyan]\n"
            f"Cluster: {summary['cluster']}",
            title="Success",
        )
    )


@app.command(name="plan")
def plan(config: ConfigOption = Path("appcluster.toml")) -> None:
    """Show the resources that would be declared, in creation order."""
    spec = _load(config)

    try:
        app_cluster = compose(spec)
    except AppClusterError as e:
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e

    console.print(f"\n[bold]Cluster Plan[/bold] - [cyan]{spec.name}[/cyan] ({spec.region.value})\n")

    table = Table(title="Resources")
    table.add_column("#", justify="right")
    table.add_column("Logical ID", style="cyan")
    table.add_column("Type")
    table.add_column("Name", style="green")
    table.add_column("Depends On")

    for index, row in enumerate(app_cluster.resources(), start=1):
        table.add_row(
            str(index),
            row["logical_id"],
            row["type"],
            row["name"] or "-",
            ", ".join(row["depends_on"]) or "-",
        )

    console.print(table)

    scaling = spec.scaling
    console.print(
        f"\n  Capacity: {scaling.min_size} - {scaling.max_size} instances "
        f"(cooldown {scaling.cooldown}s)"
    )
    if scaling.is_fixed:
        console.print("  [yellow]Autoscaling group is fixed-size and will not scale[/yellow]")


@app.command(name="check")
def check(config: ConfigOption = Path("appcluster.toml")) -> None:
    """Validate a cluster spec and list every issue."""
    spec = _load(config)
    issues = find_configuration_issues(spec)

    if not issues:
        console.print(f"[green]{spec.name}: configuration is valid[/green]")
        return

    table = Table(title=f"Configuration issues ({len(issues)})")
    table.add_column("Field", style="cyan")
    table.add_column("Reason", style="red")
    for issue in issues:
        table.add_row(issue.field, issue.reason)
    console.print(table)
    raise typer.Exit(1)


def main() -> None:
    app()


__all__ = ["app", "main"]
