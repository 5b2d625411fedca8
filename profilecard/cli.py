"""Command-line interface for profilecard."""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from profilecard import CardConfig, StatsRecord, collect, save_json, save_outputs, __version__
from profilecard.config import LogFormat
from profilecard.exceptions import ConfigError, ProfileCardError
from profilecard.logging import clear_context, configure_logging

app = typer.Typer(
    name="profilecard",
    help="GitHub profile statistics card generator",
    add_completion=False,
)
console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"profilecard version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """profilecard - GitHub profile statistics card generator."""
    pass


def _load_config(handle: Optional[str], token: Optional[str], **overrides) -> CardConfig:
    config = CardConfig(**overrides)
    if handle:
        config.handle = handle
    if token:
        config.github_token = token
    if not config.github_token:
        raise ConfigError(
            "GITHUB_TOKEN environment variable is required "
            "(export GITHUB_TOKEN=your_token_here or pass --token)"
        )
    return config


def _collect(config: CardConfig) -> StatsRecord:
    configure_logging(config)
    try:
        return asyncio.run(collect(config.github_token, config.handle, config))
    finally:
        clear_context()


@app.command()
def generate(
    handle: Optional[str] = typer.Option(
        None, "--handle", "-u", help="GitHub login (defaults to GITHUB_USERNAME)"
    ),
    token: Optional[str] = typer.Option(
        None, "--token", help="GitHub token (defaults to GITHUB_TOKEN)"
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Directory for profile.svg and README.md"
    ),
    json_path: Optional[Path] = typer.Option(
        None, "--json", help="Also save the collected stats as JSON"
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress output, only show errors"
    ),
):
    """Collect stats and write the profile card and README."""
    try:
        config = _load_config(
            handle,
            token,
            log_format=LogFormat.JSON if quiet else LogFormat.CONSOLE,
            log_level="WARNING" if quiet else "INFO",
        )
        if output:
            config.output_dir = str(output)

        stats = _collect(config)
        paths = save_outputs(
            stats,
            config.output_dir,
            svg_filename=config.svg_filename,
            readme_filename=config.readme_filename,
        )
        if json_path:
            paths.append(save_json(stats, json_path))
    except ProfileCardError as e:
        console.print(f"[red]✗[/red] Error generating profile: {e}")
        raise typer.Exit(1)

    if not quiet:
        for path in paths:
            console.print(f"[green]✓[/green] Wrote {path}")
        _print_summary(stats)


@app.command()
def show(
    handle: str = typer.Argument(..., help="GitHub login"),
    token: Optional[str] = typer.Option(
        None, "--token", help="GitHub token (defaults to GITHUB_TOKEN)"
    ),
):
    """Show all collected stats for a user without writing files."""
    try:
        config = _load_config(handle, token)
        stats = _collect(config)
    except ProfileCardError as e:
        console.print(f"[red]Failed to collect stats: {e}[/red]")
        raise typer.Exit(1)

    _print_stats_table(stats)


def _print_summary(stats: StatsRecord):
    """Print the short stats summary shown after generating."""
    console.print("\n[bold]Stats Summary[/bold]")
    console.print(f"  Repositories: {stats.repository_count}")
    console.print(f"  Followers: {stats.followers:,}")
    console.print(f"  Stars: {stats.star_total:,}")
    console.print(f"  Commits (est.): {stats.commit_estimate:,}")


def _print_stats_table(stats: StatsRecord):
    """Print every field of a record as a table."""
    table = Table(title=f"@{stats.handle}", show_header=False)
    table.add_column("Field", style="dim")
    table.add_column("Value")

    table.add_row("Name", stats.name)
    table.add_row("Location", stats.location)
    table.add_row("Bio", stats.bio)
    table.add_row("Organization", stats.organization)
    table.add_row("Link", stats.link)
    table.add_row("Repositories", f"{stats.repository_count:,}")
    table.add_row("Followers", f"{stats.followers:,}")
    table.add_row("Following", f"{stats.following:,}")
    table.add_row("Commits (est.)", f"{stats.commit_estimate:,}")
    table.add_row("Merged PRs", str(stats.pull_request_count))
    table.add_row("Issues", str(stats.issue_count))
    table.add_row("Stars", f"{stats.star_total:,}")
    table.add_row("Streak", f"{stats.streak_days} days")
    table.add_row("Lines (est.)", f"{stats.estimated_line_count:,}")

    console.print(table)


if __name__ == "__main__":
    app()
