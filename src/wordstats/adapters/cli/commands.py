"""CLI command implementations."""

import asyncio
import json
from pathlib import Path
from typing import Optional
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn, TimeElapsedColumn
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ... import __version__
from ...domain.exceptions import ConfigurationError
from ...domain.models.statistics import AggregateStats, FileRecord, TARGET_WORDS
from ...infrastructure.config.config_loader import ConfigLoader
from ...infrastructure.di.container import DIContainer
from ...infrastructure.logging import WordStatsLogger
from ...infrastructure.parallel import default_pool_size
from ...infrastructure.streaming import ResultStreamer


def process_command(
    path: Path,
    recursive: Optional[bool],
    workers: Optional[int],
    output_format: Optional[str],
    config_path: Optional[str],
    verbose: bool,
    console: Console,
) -> Optional[AggregateStats]:
    """
    Execute process command.

    Args:
        path: Directory to process
        recursive: Include subdirectories (config default if None)
        workers: Worker pool size (config default if None)
        output_format: Output format (table, json, summary)
        config_path: Config file path
        verbose: Verbose output
        console: Rich console

    Returns:
        Final aggregate, or None if cancelled
    """
    try:
        config = ConfigLoader.load(config_path)
        if workers is not None:
            config.parallel.pool_size = workers
        if output_format is not None:
            config.output.default_format = output_format
        if verbose:
            config.output.verbose = True
            config.logging.level = "DEBUG"
    except (ConfigurationError, ValueError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1)

    output_format = config.output.default_format
    if recursive is None:
        recursive = config.discovery.recursive

    # Keep stdout clean for machine-readable output
    status_console = Console(stderr=True) if output_format == "json" else console

    WordStatsLogger.configure(config.logging, console=Console(stderr=True))
    container = DIContainer.create(config=config)

    status_console.print(Panel.fit(
        "[bold]WordStats Directory Analysis[/bold]",
        border_style="blue"
    ))
    status_console.print(
        f"[cyan]Directory: {path} "
        f"({'recursive' if recursive else 'top level only'}, "
        f"workers: {container.worker_pool.pool_size})[/cyan]"
    )

    streamer = ResultStreamer()

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=status_console,
    ) as progress:
        main_task = progress.add_task("[cyan]Discovering files...", total=None)

        def on_file(record: FileRecord, files_processed: int, total_files: int):
            progress.update(
                main_task,
                total=total_files,
                completed=files_processed,
                description=f"[cyan]Processing: {record.file_name[:30]}"
            )

        streamer.add_callback(on_file)
        session = container.create_session(streamer)

        try:
            aggregate = asyncio.run(session.start(path, recursive))

        except KeyboardInterrupt:
            progress.update(main_task, description="[yellow]Processing cancelled")
            status_console.print("\n[yellow]Processing cancelled by user[/yellow]")
            partial = container.aggregator.snapshot()
            _print_results(partial, output_format, console, partial=True)
            return None

        if aggregate is None:
            progress.update(main_task, total=1, completed=0, description="[yellow]Nothing processed")
        else:
            progress.update(
                main_task,
                description=f"[green]Processing complete! ({aggregate.files_processed} files)"
            )

    if aggregate is None:
        message = streamer.error or "Processing did not complete"
        status_console.print(f"\n[yellow]{message}[/yellow]")
        raise SystemExit(1)

    _print_results(aggregate, output_format, console)
    return aggregate


def _print_results(
    aggregate: AggregateStats,
    output_format: str,
    console: Console,
    partial: bool = False,
):
    """Render an aggregate in the requested format."""
    if output_format == "json":
        data = aggregate.to_dict()
        data["partial"] = partial
        console.print_json(json.dumps(data))
        return

    if output_format == "table":
        console.print(_records_table(aggregate))

    console.print(_summary_panel(aggregate, partial))


def _records_table(aggregate: AggregateStats) -> Table:
    table = Table(title="File Statistics")
    table.add_column("File", style="cyan")
    table.add_column("Words", justify="right")
    for word in TARGET_WORDS:
        table.add_column(f"'{word}'", justify="right")
    table.add_column("Longest")
    table.add_column("Shortest")

    for record in aggregate.records:
        style = "red" if record.failed else None
        table.add_row(*(str(value) for value in record.to_table_row()), style=style)

    return table


def _summary_panel(aggregate: AggregateStats, partial: bool) -> Panel:
    title = "Partial Results" if partial else "Analysis Complete"
    border = "yellow" if partial else "green"

    return Panel.fit(
        f"[bold {border}]{title}[/bold {border}]\n\n"
        f"{escape(aggregate.summary())}",
        border_style=border
    )


def info_command(config_path: Optional[str], console: Console):
    """
    Execute info command.

    Args:
        config_path: Config file path
        console: Rich console
    """
    console.print(Panel.fit(
        "[bold]WordStats System Information[/bold]",
        border_style="blue"
    ))

    try:
        config = ConfigLoader.load(config_path)
    except ConfigurationError as e:
        console.print(f"\n[red]Error:[/red] {e}")
        raise SystemExit(1)

    # Version info
    console.print("\n[bold]Version:[/bold]")
    console.print(f"  WordStats: {__version__}")
    console.print(f"  Target words: {', '.join(TARGET_WORDS)}")

    # Processing info
    console.print("\n[bold]Processing:[/bold]")
    pool_size = config.parallel.pool_size or default_pool_size()
    source = "configured" if config.parallel.pool_size else "CPU count"
    console.print(f"  Workers: {pool_size} ({source})")
    console.print(f"  Encoding: {config.processing.encoding} (errors: {config.processing.errors})")
    console.print(f"  Recursive by default: {config.discovery.recursive}")
    console.print(f"  Extensions: {' '.join(config.discovery.extensions)}")

    # Configuration info
    console.print("\n[bold]Configuration:[/bold]")
    config_info = ConfigLoader.get_config_info()
    if config_path:
        console.print(f"  Active config: {config_path}")
    elif config_info["existing_configs"]:
        console.print("  Active configs:")
        for cfg in config_info["existing_configs"]:
            console.print(f"    - {cfg}")
    else:
        console.print("  Using default configuration")


def config_command(
    init: bool,
    path: Optional[str],
    show: bool,
    console: Console,
):
    """
    Execute config command.

    Args:
        init: Create default config
        path: Config file path
        show: Show current config
        console: Rich console
    """
    console.print(Panel.fit(
        "[bold]WordStats Configuration[/bold]",
        border_style="blue"
    ))

    try:
        if init:
            config_path = ConfigLoader.create_default_config(path)
            console.print(f"\n[green]Configuration file created: {config_path}[/green]")
        elif show:
            config = ConfigLoader.load(path)
            console.print("\n[bold]Current Configuration:[/bold]")
            console.print(config.to_yaml(), markup=False)
        else:
            console.print(_sources_table())
    except ConfigurationError as e:
        console.print(f"\n[red]Error:[/red] {escape(str(e))}")
        raise SystemExit(1)


def _sources_table() -> Table:
    """Where settings can come from, in the order they are applied."""
    config_info = ConfigLoader.get_config_info()
    existing = config_info["existing_configs"]
    env_values = dict(item.split("=", 1) for item in config_info["env_overrides"])

    table = Table(title="Configuration Sources")
    table.add_column("Source", overflow="fold")
    table.add_column("Kind", no_wrap=True)
    table.add_column("Status", no_wrap=True)

    # Only the first existing file is loaded
    active_file = existing[0] if existing else None
    for default_path in config_info["default_paths"]:
        if default_path == active_file:
            status = "[green]active[/green]"
        elif default_path in existing:
            status = "shadowed"
        else:
            status = "[dim]missing[/dim]"
        table.add_row(escape(default_path), "file", status)

    for name in ConfigLoader.ENV_OVERRIDES:
        if name in env_values:
            table.add_row(escape(f"{name}={env_values[name]}"), "env", "[green]set[/green]")
        else:
            table.add_row(name, "env", "[dim]unset[/dim]")

    return table
