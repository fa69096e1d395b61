"""Credential status for the RunPod upstream."""

from rich.console import Console

from core.config import API_KEY_ENV, CONFIG_FILE, POD_ID_ENV, Config
from ui.log_utils import mask

console = Console()


def missing_credentials(config: Config) -> list[str]:
    """Names of the upstream secrets that are not configured."""
    missing = []
    if not config.upstream.pod_id:
        missing.append(POD_ID_ENV)
    if not config.upstream.api_key:
        missing.append(API_KEY_ENV)
    return missing


def print_auth_status(config: Config) -> bool:
    """Print credential status; the API key is only ever shown masked."""
    missing = missing_credentials(config)
    upstream = config.upstream
    if not missing:
        console.print(f"[green]Configured[/green] pod={upstream.pod_id} key={mask(upstream.api_key)}")
        console.print(f"[dim]Upstream:[/dim] {upstream.chat_url()}")
        return True

    console.print(f"[yellow]Not configured[/yellow] (missing {', '.join(missing)})")
    console.print("\n[dim]Set the environment variables or edit:[/dim]")
    console.print(f"  {CONFIG_FILE}")
    return False
