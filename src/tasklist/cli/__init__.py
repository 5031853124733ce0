"""
Tasklist CLI - Main application entry point.

This module sets up the Typer CLI application with all subcommands.
"""

import json

import typer
from rich.console import Console

from tasklist import __version__
from tasklist.cli import serve
from tasklist.core.config.env import load_layered_env
from tasklist.core.config.loader import load_config

app = typer.Typer(
    name="tasklist",
    help="Serve and manage a small JSON task API",
    no_args_is_help=True,
    context_settings={"help_option_names": ["--help", "-h"]},
)

console = Console()


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output with detailed logging",
    ),
) -> None:
    """
    Tasklist - a small task tracking service.

    Quick Start:
        tasklist serve               # Start the API on 127.0.0.1:5000
        tasklist config              # Show the effective configuration
    """
    # Precedence: OS env > project .env > user .env
    load_layered_env()

    ctx.obj = {"debug": debug}


app.command(name="serve")(serve.serve)


@app.command(name="config")
def show_config() -> None:
    """Print the effective configuration as JSON."""
    config = load_config(use_cache=False)
    console.print_json(json.dumps(config.model_dump(mode="json")))


@app.command()
def version() -> None:
    """Show tasklist version."""
    console.print(f"tasklist version {__version__}")
    raise typer.Exit(0)


def cli_main() -> None:
    """Main CLI entry point."""
    app()


__all__ = ["app", "cli_main"]
