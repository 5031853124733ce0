"""
Tasklist CLI - Serve command.

Run the task API under uvicorn.
"""

import logging
import sys

import typer
from rich.console import Console

from tasklist.core.config.loader import load_config
from tasklist.core.tasks.backend import is_backend_available, list_backends

console = Console()
logger = logging.getLogger(__name__)


def setup_logging(level: str, debug: bool = False) -> None:
    """
    Configure logging for the server process.

    Args:
        level: Log level name from configuration
        debug: If True, force DEBUG regardless of configuration
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def serve(
    ctx: typer.Context,
    host: str | None = typer.Option(
        None,
        "--host",
        help="Interface to bind (default from config: 127.0.0.1)",
    ),
    port: int | None = typer.Option(
        None,
        "--port",
        "-p",
        min=1,
        max=65535,
        help="Port to listen on (default from config: 5000)",
    ),
    reload: bool = typer.Option(
        False,
        "--reload/--no-reload",
        help="Restart the server when source files change",
    ),
) -> None:
    """
    Start the task API server.

    Examples:
        tasklist serve                  # Serve on the configured host/port
        tasklist serve --port 8080      # Serve on port 8080
        tasklist --debug serve          # Debug logging
    """
    debug = ctx.obj.get("debug", False) if ctx.obj else False

    config = load_config()
    setup_logging(config.logging.level, debug=debug)

    if not is_backend_available(config.storage.backend):
        console.print(
            f"[red]Error:[/red] Unknown storage backend '{config.storage.backend}'. "
            f"Available: {', '.join(list_backends())}"
        )
        raise typer.Exit(1)

    bind_host = host or config.server.host
    bind_port = port or config.server.port

    try:
        import uvicorn
    except ImportError as e:
        console.print(
            "[red]Error:[/red] Server dependencies not installed. "
            f"Missing module: {e.name}"
        )
        console.print("[dim]Install with: pip install uvicorn[/dim]")
        raise typer.Exit(1)

    console.print(
        f"[green]Serving tasks[/green] on http://{bind_host}:{bind_port} "
        f"[dim](backend: {config.storage.backend})[/dim]"
    )
    logger.debug("Effective config: %s", config.model_dump())

    uvicorn.run(
        "tasklist.core.api.app:create_app",
        factory=True,
        host=bind_host,
        port=bind_port,
        reload=reload,
        log_level="debug" if debug else config.logging.level.lower(),
    )
