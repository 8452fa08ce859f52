"""WordStats command line entry point."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from .commands import process_command, info_command, config_command


app = typer.Typer(
    name="wordstats",
    help="Concurrent word statistics for directories of text files.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


@app.command()
def process(
    path: Path = typer.Argument(..., help="Directory containing text files"),
    recursive: Optional[bool] = typer.Option(
        None, "--recursive/--no-recursive", help="Include subdirectories"
    ),
    workers: Optional[int] = typer.Option(
        None, "--workers", "-w", min=1, help="Number of parallel workers"
    ),
    output_format: Optional[str] = typer.Option(
        None, "--format", "-f", help="Output format: table, json, summary"
    ),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Config file path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """Compute word statistics for every text file in a directory."""
    process_command(
        path=path,
        recursive=recursive,
        workers=workers,
        output_format=output_format,
        config_path=config,
        verbose=verbose,
        console=console,
    )


@app.command()
def info(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Config file path"),
):
    """Show version and effective settings."""
    info_command(config_path=config, console=console)


@app.command(name="config")
def config_cmd(
    init: bool = typer.Option(False, "--init", help="Create a default config file"),
    path: Optional[str] = typer.Option(None, "--path", help="Config file path"),
    show: bool = typer.Option(False, "--show", help="Show the current configuration"),
):
    """Manage configuration files."""
    config_command(init=init, path=path, show=show, console=console)


if __name__ == "__main__":
    app()
