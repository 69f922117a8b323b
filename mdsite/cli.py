"""CLI entry point for mdsite."""

from __future__ import annotations

import logging
import signal
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.logging import RichHandler
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table
from typer.core import TyperGroup

from mdsite.config import ConfigError, SiteConfig, load_config
from mdsite.config.loader import DEFAULT_CONFIG_TEMPLATE
from mdsite.site import BuildReport, SiteBuildError, SiteBuilder

DEFAULT_COMMAND = "serve"


class DefaultCommandGroup(TyperGroup):
    """Treats a first argument that is not a command name as ``serve ARG``.

    ``mdsite DOCS`` builds and serves DOCS; the named commands still work.
    """

    def resolve_command(self, ctx, args):
        if args and args[0] not in self.commands and not args[0].startswith("-"):
            args = [DEFAULT_COMMAND, *args]
        return super().resolve_command(ctx, args)


app = typer.Typer(
    name="mdsite",
    cls=DefaultCommandGroup,
    help=(
        "Turn a directory of markdown notes into a browsable static HTML site.\n\n"
        "`mdsite SOURCE_DIR` is short for `mdsite serve SOURCE_DIR`."
    ),
)

config_app = typer.Typer(help="Manage mdsite configuration.")
app.add_typer(config_app, name="config")

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

# Global state
_config: SiteConfig | None = None


def _get_config() -> SiteConfig:
    if _config is None:
        return load_config()
    return _config


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=_LOG_LEVELS.get(level, logging.INFO),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to mdsite.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ConfigError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    _setup_logging(_config.log_level)


def _run_build(source_dir: Path, cfg: SiteConfig, clean: bool) -> tuple[SiteBuilder, BuildReport]:
    builder = SiteBuilder(source_dir, cfg)
    try:
        report = builder.build(clean=clean)
    except SiteBuildError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    return builder, report


def _display_report(report: BuildReport) -> None:
    table = Table(title="Site Build")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right", style="green")
    table.add_row("Pages", str(len(report.documents)))
    table.add_row("Output", str(report.output_dir))
    table.add_row("Index", str(report.index_path))
    table.add_row("Duration", f"{report.duration:.2f}s")
    rprint(table)


@app.command()
def build(
    source_dir: Annotated[Path, typer.Argument(help="Directory of markdown files")],
    clean: Annotated[bool, typer.Option("--clean", help="Remove the output directory first")] = False,
) -> None:
    """Convert every .md file under SOURCE_DIR into html_output/."""
    cfg = _get_config()
    _, report = _run_build(source_dir, cfg, clean)
    _display_report(report)


@app.command()
def serve(
    source_dir: Annotated[Path, typer.Argument(help="Directory of markdown files")],
    host: Annotated[str | None, typer.Option("--host", help="Bind address")] = None,
    port: Annotated[int | None, typer.Option("--port", "-p", help="Port to listen on")] = None,
    watch: Annotated[bool, typer.Option("--watch", "-w", help="Rebuild when sources change")] = False,
) -> None:
    """Build the site, then serve it over HTTP."""
    from mdsite.server import create_server

    cfg = _get_config()
    builder, report = _run_build(source_dir, cfg, clean=False)
    _display_report(report)

    bind_host = host or cfg.server.host
    bind_port = cfg.server.port if port is None else port
    try:
        server = create_server(builder.output_dir, bind_host, bind_port)
    except OSError as e:
        rprint(f"[red]Error:[/red] could not bind {bind_host}:{bind_port}: {e}")
        raise typer.Exit(1)

    watcher = None
    if watch:
        from mdsite.site.watcher import SiteWatcher

        watcher = SiteWatcher(builder)
        watcher.start()

    rprint(f"[bold]Serving[/bold] {builder.root} at http://{bind_host}:{server.server_address[1]}")

    def _signal_handler(sig, frame):
        raise KeyboardInterrupt

    signal.signal(signal.SIGTERM, _signal_handler)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        rprint("\n[dim]Server stopped.[/dim]")
    finally:
        server.server_close()
        if watcher is not None:
            watcher.stop()


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(mode="json"), default_flow_style=False, allow_unicode=True), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default mdsite.yaml in current directory."""
    target = Path("mdsite.yaml")
    if target.exists() and not force:
        rprint("[yellow]mdsite.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE, encoding="utf-8")
    rprint(f"[green]Created[/green] {target}")
