"""CLI entry point for runpod-chat-proxy."""

import sys
from datetime import datetime

from rich.console import Console

from app import create_app
from auth import missing_credentials, print_auth_status
from core.config import CONFIG_FILE, load_config
from ui.dashboard import Dashboard
from ui.log_utils import FileLogger, clear_logs, write_cli_log

console = Console()


def main():
    """Main CLI entry point."""
    config = load_config()
    headless = False

    # Handle CLI arguments
    if len(sys.argv) > 1:
        arg = sys.argv[1]

        if arg == "--check":
            if not print_auth_status(config):
                sys.exit(1)
            return

        if arg == "--config":
            console.print(f"[bold]Config:[/bold] {CONFIG_FILE}")
            return

        if arg in ("--help", "-h"):
            _print_help()
            return

        if arg == "--headless":
            headless = True
        else:
            console.print(f"[red][ERROR][/red] Unknown argument: {arg}")
            _print_help()
            sys.exit(2)

    # Requests get a 500 envelope until the secrets are set
    missing = missing_credentials(config)
    if missing:
        console.print(f"[yellow]Warning:[/yellow] {', '.join(missing)} not set; POST requests will fail")
        console.print(f"[dim]Edit {CONFIG_FILE} or export the variables[/dim]")

    clear_logs()

    import uvicorn

    dashboard = None
    if headless:
        app = create_app(config, FileLogger())
    else:
        dashboard = Dashboard(config)
        app = create_app(config, dashboard)

    uvicorn_config = uvicorn.Config(
        app,
        host=config.proxy.host,
        port=config.proxy.port,
        log_level="info" if headless and config.proxy.debug else "warning",
        timeout_keep_alive=config.limits.keep_alive_timeout,
    )
    server = uvicorn.Server(uvicorn_config)

    if dashboard:
        dashboard.start()
    start_time = datetime.now()
    write_cli_log("STARTUP", "Proxy started", port=config.proxy.port, cors=config.cors.mode)
    try:
        server.run()
    finally:
        duration = datetime.now() - start_time
        write_cli_log("SHUTDOWN", "Proxy stopped", duration=str(duration))
        if dashboard:
            dashboard.stop()


def _print_help():
    """Print help message."""
    help_text = """
[bold cyan]RunPod Chat Proxy[/bold cyan]

Forwards browser chat requests to an Ollama pod on RunPod with CORS handling.

[bold]Usage:[/bold]
    runpod-chat-proxy              Start with live dashboard
    runpod-chat-proxy --headless   Start without the dashboard
    runpod-chat-proxy --check      Check credential status
    runpod-chat-proxy --config     Show config location
    runpod-chat-proxy --help       Show this help

[bold]Credentials:[/bold]
    RUNPOD_POD_ID and RUNPOD_API_KEY override the values in the config file.
"""
    console.print(help_text)


if __name__ == "__main__":
    main()
