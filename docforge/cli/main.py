"""DocForge CLI - Main application entry point.

Commands
--------
    docforge publish doclets.json [--config conf.json] [--tutorials t.json] [--json]
    docforge expand "See T123 and {@link #size}" --longname mw.Map#get
    docforge nav doclets.json mw.Map.html
    docforge --version
"""

from __future__ import annotations

import json
from functools import wraps
from pathlib import Path
from typing import Any, Callable, Optional

import typer
from rich.table import Table

from docforge.cli.console import ErrorRenderer, get_console, set_verbose_mode
from docforge.core.config import Config, load_config
from docforge.core.exceptions import DocForgeError
from docforge.core.logging import configure_logging, get_logger
from docforge.doclets.loader import load_tutorials
from docforge.linking.expander import LinkExpander
from docforge.publish.pipeline import PublishPipeline
from docforge.publish.result import PublishResult

logger = get_logger(__name__)


def safe_cli_command(
    operation_name: str,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    Decorator rendering DocForgeError as an error panel with exit code 1.

    Args:
        operation_name: Human-readable operation name for error context
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except DocForgeError as e:
                ErrorRenderer.render(e, context=f"While running {operation_name}")
                logger.debug("Command failed", command=operation_name, error=e.error_code)
                raise typer.Exit(code=1)

        return wrapper

    return decorator


# Create main Typer application
app = typer.Typer(
    name="docforge",
    help="Cross-reference and navigation engine for jsdoc API documentation",
    add_completion=False,
    no_args_is_help=True,
)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", "-V", help="Show version and exit"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Log level"),
    verbose: bool = typer.Option(False, "--verbose", help="Show tracebacks on errors"),
) -> None:
    """DocForge - resolve cross-references and build navigation for API docs."""
    if version:
        from docforge import __version__

        typer.echo(f"DocForge {__version__}")
        raise typer.Exit()

    configure_logging(level=log_level)
    set_verbose_mode(verbose)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _load(config_path: Optional[Path]) -> Config:
    return load_config(config_path) if config_path else load_config()


def _run(doclets: Path, config_path: Optional[Path], tutorials: Optional[Path]) -> PublishResult:
    config = _load(config_path)
    return PublishPipeline(config, run_name=doclets.stem).run(doclets, load_tutorials(tutorials))


def _print_summary(result: PublishResult) -> None:
    console = get_console()
    table = Table(title="Publish Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    for key, value in result.summary().items():
        table.add_row(key.replace("_", " "), str(value))
    console.print(table)

    if result.warnings:
        warnings = Table(title="Warnings")
        warnings.add_column("Kind", style="yellow")
        warnings.add_column("Message")
        for warning in result.warnings:
            warnings.add_row(warning.kind, warning.message)
        console.print(warnings)


@app.command("publish")
@safe_cli_command("publish")
def publish_command(
    doclets: Path = typer.Argument(..., help="jsdoc -X JSON dump"),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="docforge.yaml or jsdoc conf.json"
    ),
    tutorials: Optional[Path] = typer.Option(None, "--tutorials", "-t", help="Tutorial tree JSON"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Run the full pipeline and report pages, aliases and warnings."""
    result = _run(doclets, config_path, tutorials)

    if json_output:
        output = {
            "summary": result.summary(),
            "pages": [{"title": p.title, "filename": p.filename} for p in result.pages],
            "warnings": [
                {"kind": w.kind, "message": w.message, "subject": w.subject}
                for w in result.warnings
            ],
        }
        typer.echo(json.dumps(output, indent=2))
        return

    _print_summary(result)


@app.command("expand")
@safe_cli_command("expand")
def expand_command(
    text: str = typer.Argument(..., help="Documentation text"),
    longname: str = typer.Option("", "--longname", "-l", help="Long name of the owning doclet"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file"),
) -> None:
    """Print text with shorthand, URL and ticket references made explicit."""
    config = _load(config_path)
    expander = LinkExpander(config.links.phabricator_base_url)
    typer.echo(expander.expand_text(text, longname))


@app.command("nav")
@safe_cli_command("nav")
def nav_command(
    doclets: Path = typer.Argument(..., help="jsdoc -X JSON dump"),
    page: str = typer.Argument(..., help="Output filename to highlight, e.g. Foo.html"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Configuration file"),
    tutorials: Optional[Path] = typer.Option(None, "--tutorials", "-t", help="Tutorial tree JSON"),
) -> None:
    """Print the navigation markup as seen from one page."""
    result = _run(doclets, config_path, tutorials)
    typer.echo(result.nav_function(page))


def cli_main() -> None:
    """Console script entry point."""
    app()
