"""
CLI entry point for ctxgen.

Generates AGENTS.md and CLAUDE.md from a .context folder.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from . import __version__
from .config_loader import load_config, merge_cli_with_config
from .errors import CtxgenError, describe_error
from .generator import run
from .utils import lossy_path

# Initialize CLI app
app = typer.Typer(
    name="ctxgen",
    help="Generate AGENTS.md and CLAUDE.md from a .context folder.",
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"ctxgen {__version__}")
        raise typer.Exit()


@app.command()
def generate(
    context_dir: Optional[Path] = typer.Option(
        None,
        "--context-dir", "-c",
        help="Path to the .context folder (default: .context).",
    ),
    output_dir: Optional[Path] = typer.Option(
        None,
        "--output-dir", "-o",
        help="Output directory for generated files (default: current directory).",
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Path to a ctxgen.toml config file (default: ./ctxgen.toml if present).",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Show statistics, and tracebacks on failure.",
    ),
    version: bool = typer.Option(
        False,
        "--version", "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """
    Fold and concatenate every file in the context folder into AGENTS.md and CLAUDE.md.

    Examples:

        # Use ./.context and write to the current directory
        ctxgen

        # Custom locations
        ctxgen -c docs/context -o build
    """
    try:
        project_config = load_config(Path.cwd(), config_file)
        config = merge_cli_with_config(
            project_config,
            context_dir=context_dir,
            output_dir=output_dir,
        )

        if verbose and project_config.config_file is not None:
            err_console.print(
                f"[dim]Loaded config from {escape(str(project_config.config_file))}[/dim]",
                soft_wrap=True,
            )

        output_files, stats = run(config)

    except CtxgenError as e:
        err_console.print(f"[red]Error: {escape(describe_error(e))}[/red]", soft_wrap=True)
        if verbose:
            err_console.print_exception()
        raise typer.Exit(1)
    except Exception as e:
        err_console.print(
            f"[red]Unexpected error: {escape(describe_error(e))}[/red]", soft_wrap=True
        )
        if verbose:
            err_console.print_exception()
        raise typer.Exit(1)

    console.print(
        f"✓ Generated AGENTS.md and CLAUDE.md in {escape(lossy_path(config.output_dir))}",
        soft_wrap=True,
        highlight=False,
    )

    if verbose:
        err_console.print()
        err_console.print("[cyan]Statistics:[/cyan]")
        for name, value in stats.to_dict().items():
            err_console.print(f"  {name.replace('_', ' ').capitalize()}: {value:,}")
        err_console.print()
        err_console.print("[cyan]Output files:[/cyan]")
        for f in output_files:
            err_console.print(f"  {escape(lossy_path(f))}", soft_wrap=True)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
