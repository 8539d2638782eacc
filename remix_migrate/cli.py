"""
CLI entry point for remix-migrate.
"""

import json
import logging
from functools import partial, wraps
from pathlib import Path
from typing import Any

import typer
import yaml
from rich.console import Console
from rich.table import Table

from remix_migrate.classify import ClassifiedImports, classify_imports
from remix_migrate.exceptions import MigrateError, UnknownClientError, format_error_for_cli
from remix_migrate.packages import Client, is_client, package_specifier
from remix_migrate.project import Project, load_imports
from remix_migrate.resolve import (
    AmbiguousAdapter,
    Resolved,
    UserCancelled,
    prompt_for_runtime,
    resolve,
)
from remix_migrate.util.files import write_text
from remix_migrate.util.log import configure_logging

app = typer.Typer(
    name="remix-migrate",
    help="Route imports from the legacy remix package to @remix-run/* packages",
    add_completion=False,
)
console = Console()
# Prompts, status lines and errors; stdout carries only command output
err_console = Console(stderr=True)
logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("table", "json", "yaml")


def handle_errors(func):
    """Decorator to handle exceptions in CLI commands with nice formatting."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except typer.Exit:
            raise
        except MigrateError as e:
            err_console.print(format_error_for_cli(e))
            raise typer.Exit(1)
        except Exception as e:
            err_console.print(f"[red]Unexpected error:[/red] {str(e)}")
            err_console.print("\n[yellow]This may be a bug. Please report it.[/yellow]")
            logger.exception("Unexpected error")
            raise typer.Exit(1)

    return wrapper


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging")):
    """Migrate Remix projects off the monolithic remix package."""
    configure_logging(verbose)


def resolve_target(project: Project) -> Resolved:
    """
    Resolve the migration target, exiting on conflicts or cancellation.

    Raises:
        MultipleAdaptersError: If more than one adapter is installed
        typer.Exit: With status 0 if the user cancels the runtime prompt
    """
    manifest = project.load_manifest()
    outcome = resolve(manifest, prompt=partial(prompt_for_runtime, console=err_console))

    if isinstance(outcome, AmbiguousAdapter):
        raise outcome.error()
    if isinstance(outcome, UserCancelled):
        err_console.print("[yellow]Migration cancelled.[/yellow]")
        raise typer.Exit(0)
    return outcome


def _serialize(target: Resolved, classified: ClassifiedImports) -> dict[str, Any]:
    return {
        "adapter": target.adapter.value if target.adapter else None,
        "runtime": target.runtime.value,
        "imports": classified.to_dict(),
    }


def _print_raw(text: str) -> None:
    # JSON/YAML output must stay byte-exact
    console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)


def _render_table(classified: ClassifiedImports) -> Table:
    table = Table(title="Import routing")
    table.add_column("Bucket", style="cyan")
    table.add_column("Import from", style="green")
    table.add_column("Names")

    for key, imports in classified.items():
        names = ", ".join(
            f"type {imp.name}" if imp.is_type_only else imp.name for imp in imports
        )
        table.add_row(key, package_specifier(key), names or "[dim]-[/dim]")
    return table


@app.command()
def init(
    project_dir: Path = typer.Argument(Path("."), help="Project directory"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing config file"),
):
    """Write a default remix-migrate.yaml."""
    project = Project(project_dir)

    if project.config_file.exists() and not force:
        console.print(f"[yellow]⚠ {project.config_file} already exists[/yellow]")
        console.print("[yellow]  Run with --force to overwrite[/yellow]")
        raise typer.Exit(1)

    project.write_default_config()
    console.print(f"[green]✓ Wrote configuration to {project.config_file}[/green]")


@app.command(name="resolve")
@handle_errors
def resolve_cmd(
    project_dir: Path = typer.Option(Path("."), "--project", help="Project directory"),
):
    """Show the runtime and server adapter the project targets."""
    target = resolve_target(Project(project_dir))

    console.print(f"[bold]Runtime:[/bold] {package_specifier(target.runtime.value)}")
    if target.adapter:
        console.print(f"[bold]Adapter:[/bold] {package_specifier(target.adapter.value)}")
    else:
        console.print("[bold]Adapter:[/bold] [dim]none[/dim]")


@app.command(name="classify")
@handle_errors
def classify_cmd(
    imports_file: Path = typer.Option(..., "--imports", help="JSON/YAML list of imports"),
    project_dir: Path = typer.Option(Path("."), "--project", help="Project directory"),
    client: str | None = typer.Option(None, "--client", help="Client package (default: config)"),
    output_format: str | None = typer.Option(
        None, "--format", help="Output format: table, json, yaml"
    ),
    out: Path | None = typer.Option(None, "--out", help="Write the routing to a JSON/YAML file"),
):
    """Route legacy remix imports to the packages they now live in."""
    project = Project(project_dir)
    config = project.load_config()

    client_name = client or config["client"]
    if not is_client(client_name):
        raise UnknownClientError(client_name, [c.value for c in Client])

    output_format = output_format or config["output"]["format"]
    if output_format not in OUTPUT_FORMATS:
        err_console.print(
            f"[red]Error: Unsupported format '{output_format}'. "
            f"Use one of: {', '.join(OUTPUT_FORMATS)}[/red]"
        )
        raise typer.Exit(1)

    imports = load_imports(imports_file)
    target = resolve_target(project)

    classified = classify_imports(
        imports,
        client=Client(client_name),
        runtime=target.runtime,
        adapter=target.adapter,
    )
    logger.debug(f"Classified {len(imports)} import(s) into {len(classified)} bucket(s)")
    data = _serialize(target, classified)

    if output_format == "json":
        _print_raw(json.dumps(data, indent=2))
    elif output_format == "yaml":
        _print_raw(yaml.safe_dump(data, sort_keys=False))
    else:
        console.print(_render_table(classified))

    if out is not None:
        if out.suffix in (".yaml", ".yml"):
            write_text(out, yaml.safe_dump(data, sort_keys=False))
        else:
            write_text(out, json.dumps(data, indent=2) + "\n")
        err_console.print(f"[green]✓ Routing written to {out}[/green]", highlight=False)


if __name__ == "__main__":
    app()
