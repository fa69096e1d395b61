"""Real-time CLI dashboard for proxy monitoring."""

from datetime import datetime
from threading import Lock

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import Config
from ui.log_utils import write_cli_log, write_request_log

console = Console()


class RequestInfo:
    """Info about a single completed request."""

    def __init__(self, method: str, origin: str | None, status: int, timestamp: datetime):
        self.method = method
        self.origin = origin or "-"
        self.status = status
        self.timestamp = timestamp


class Dashboard:
    """Real-time dashboard showing recent requests and upstream errors."""

    def __init__(self, config: Config):
        self.config = config
        self._lock = Lock()
        self._recent: list[RequestInfo] = []
        self._max_recent = 8
        self._counts = {"ok": 0, "client": 0, "upstream": 0}
        self._errors: list[str] = []
        self._live: Live | None = None

    def start(self) -> "Dashboard":
        """Start the live dashboard."""
        self._live = Live(
            self._build_layout(),
            console=console,
            refresh_per_second=4,
            screen=False,
        )
        self._live.start()
        return self

    def stop(self) -> None:
        """Stop the live dashboard."""
        if self._live:
            self._live.stop()

    def log_request(self, method: str, path: str, origin: str | None, headers: dict[str, str]) -> None:
        """Record an inbound request."""
        write_request_log(method, path, origin, headers)
        write_cli_log("REQUEST", f"{method} {path}", origin=origin)

    def log_response(self, method: str, origin: str | None, status: int) -> None:
        """Record the status sent back for a request."""
        with self._lock:
            if status < 400:
                self._counts["ok"] += 1
            elif status < 500:
                self._counts["client"] += 1
            else:
                self._counts["upstream"] += 1
            self._recent.insert(0, RequestInfo(method, origin, status, datetime.now()))
            self._recent = self._recent[: self._max_recent]
            self._refresh()

    def log_error(self, route: str, status: int, message: str) -> None:
        """Log an error."""
        with self._lock:
            truncated = message[:50] + "..." if len(message) > 50 else message
            self._errors.insert(0, f"{route} {status}: {truncated}")
            self._errors = self._errors[:3]
            self._refresh()
            write_cli_log("ERROR", message[:200], route=route, status=status)

    def _refresh(self) -> None:
        """Refresh the display."""
        if self._live:
            self._live.update(self._build_layout())

    def _build_layout(self) -> Layout:
        """Build the dashboard layout."""
        layout = Layout()

        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="body"),
            Layout(name="footer", size=5),
        )

        layout["header"].update(self._build_header())
        layout["body"].update(self._build_requests_panel())
        layout["footer"].update(self._build_footer())

        return layout

    def _build_header(self) -> Panel:
        """Build header with stats."""
        stats = Text()
        stats.append("RunPod Chat Proxy", style="bold cyan")
        stats.append("  |  ")
        stats.append(f"OK: {self._counts['ok']}", style="green")
        stats.append("  |  ")
        stats.append(f"4xx: {self._counts['client']}", style="yellow")
        stats.append("  |  ")
        stats.append(f"5xx: {self._counts['upstream']}", style="red")
        stats.append("  |  ")
        stats.append(f"CORS: {self.config.cors.mode}", style="dim")
        stats.append("  |  ")
        stats.append(f"Port: {self.config.proxy.port}", style="dim")

        return Panel(stats, style="cyan")

    def _build_requests_panel(self) -> Panel:
        """Build recent requests panel."""
        if self._recent:
            table = Table(show_header=True, header_style="bold", expand=True, box=None)
            table.add_column("Time", style="dim", width=8)
            table.add_column("Method", width=8)
            table.add_column("Origin", ratio=2)
            table.add_column("Status", width=6)

            for info in self._recent:
                style = "green" if info.status < 400 else "yellow" if info.status < 500 else "red"
                table.add_row(
                    info.timestamp.strftime("%H:%M:%S"),
                    info.method,
                    info.origin[:60],
                    f"[{style}]{info.status}[/{style}]",
                )

            content = table
        else:
            content = Text("Waiting for requests...", style="dim")

        return Panel(content, title="[blue]Requests[/blue]", border_style="blue")

    def _build_footer(self) -> Panel:
        """Build footer with errors and target."""
        if self._errors:
            error_text = Text()
            for err in self._errors:
                error_text.append("! ", style="red bold")
                error_text.append(err + "\n", style="red")
            content = error_text
        else:
            upstream = self.config.upstream
            target = upstream.chat_url() if upstream.pod_id else "pod id not configured"
            content = Text(f"Forwarding POST http://{self.config.proxy.host}:{self.config.proxy.port} -> {target}", style="dim")

        return Panel(content, title="[dim]Status[/dim]", border_style="dim")
