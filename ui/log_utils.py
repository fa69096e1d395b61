"""Shared logging utilities."""

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any
from uuid import uuid4

LOG_ROOT = Path.cwd() / "logs"
CLI_LOG_FILE = LOG_ROOT / "proxy.log"


def write_request_log(
    method: str,
    path: str,
    origin: str | None,
    headers: dict[str, str],
    *,
    log_root: Path = LOG_ROOT,
) -> Path:
    """Write a single incoming request log entry."""
    payload = {
        "timestamp": _utc_now(),
        "method": method,
        "path": path,
        "origin": origin,
        "headers": redact_headers(headers),
    }
    return _write_json(log_root / "incoming", payload)


def write_cli_log(
    level: str,
    message: str,
    *,
    log_file: Path | None = None,
    **extra: Any,
) -> None:
    """Append a line to the rolling CLI log file."""
    log_file = log_file or CLI_LOG_FILE
    log_file.parent.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S")
    extra_str = " ".join(f"{k}={v}" for k, v in extra.items()) if extra else ""
    line = f"[{timestamp}] {level}: {message}"
    if extra_str:
        line += f" {extra_str}"
    line += "\n"
    with log_file.open("a") as f:
        f.write(line)


def clear_logs(log_root: Path = LOG_ROOT) -> None:
    """Remove request logs left over from a previous run."""
    incoming = log_root / "incoming"
    if not incoming.exists():
        return
    for old_file in incoming.glob("*.json"):
        try:
            old_file.unlink()
        except OSError:
            pass


def redact_headers(headers: dict[str, str]) -> dict[str, str]:
    """Redact sensitive headers."""
    redacted = {}
    for key, value in headers.items():
        if "key" in key.lower() or "authorization" in key.lower() or key.lower() == "cookie":
            redacted[key] = mask(value)
        else:
            redacted[key] = value
    return redacted


def mask(value: str) -> str:
    if len(value) <= 10:
        return "***"
    return value[:6] + "..." + value[-4:]


class FileLogger:
    """RequestLogger that only writes to the log directory (headless mode)."""

    def __init__(self, log_root: Path = LOG_ROOT):
        self._log_root = log_root
        self._cli_log = log_root / "proxy.log"

    def log_request(self, method: str, path: str, origin: str | None, headers: dict[str, str]) -> None:
        write_request_log(method, path, origin, headers, log_root=self._log_root)
        write_cli_log("REQUEST", f"{method} {path}", log_file=self._cli_log, origin=origin)

    def log_response(self, method: str, origin: str | None, status: int) -> None:
        write_cli_log("RESPONSE", method, log_file=self._cli_log, origin=origin, status=status)

    def log_error(self, route: str, status: int, message: str) -> None:
        write_cli_log("ERROR", message[:200], log_file=self._cli_log, route=route, status=status)


def _write_json(folder: Path, payload: dict[str, Any]) -> Path:
    """Write payload to a unique JSON file in the given folder."""
    folder.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S.%fZ")
    file_path = folder / f"{timestamp}_{uuid4().hex}.json"
    file_path.write_text(json.dumps(payload, indent=2, default=str))
    return file_path


def _utc_now() -> str:
    return datetime.now(UTC).isoformat()
